"""Builders and test doubles shared across the test suites."""

from random import Random

from hypothesis import strategies as st

from blackjack.cards import Card, Shoe, Rank, Suit
from blackjack.hand import Hand
from blackjack.game import MenuChoice, PlayerAction


class StackedRandom:
    """
    Random stand-in that makes a Shoe hand out a chosen sequence of cards.

    Shoe.draw asks for randrange(len(available)); this answers with the
    index of the next queued card among the shoe's undrawn cards. Once
    the queue is empty it falls back to a seeded generator.
    """

    def __init__(self, cards: list[Card]) -> None:
        self._queue = list(cards)
        self._fallback = Random(0)
        self.shoe: Shoe | None = None

    def randrange(self, n: int) -> int:
        if not self._queue:
            return self._fallback.randrange(n)
        target = self._queue.pop(0)
        return self.shoe.available_cards().index(target)


def stacked(*codes: str, num_decks: int = 1) -> Shoe:
    """A shoe that deals the given card codes first, in order."""
    rng = StackedRandom(cards_of(*codes))
    shoe = Shoe(num_decks=num_decks, rng=rng)
    rng.shoe = shoe
    return shoe


def cards_of(*codes: str) -> list[Card]:
    """Build cards from short codes like 'AS', '10H', 'KD'."""
    return [Card.from_string(code) for code in codes]


def hand_of(*codes: str, wager: int = 0) -> Hand:
    hand = Hand(wager=wager)
    for card in cards_of(*codes):
        hand.add_card(card)
    return hand


def dealer_hand_of(*codes: str) -> Hand:
    hand = Hand.dealer()
    for card in cards_of(*codes):
        hand.add_card(card)
    return hand


class ScriptedDecisions:
    """Decision provider that replays fixed answers; raises EOFError when one runs out."""

    def __init__(
        self,
        wagers: list[int] | None = None,
        actions: list[PlayerAction] | None = None,
        menu: list[MenuChoice] | None = None,
        name: str = "Tester",
    ) -> None:
        self.wagers = list(wagers or [])
        self.actions = list(actions or [])
        self.menu = list(menu or [])
        self.name = name

    @staticmethod
    def _next(queue: list):
        if not queue:
            raise EOFError("script exhausted")
        return queue.pop(0)

    def read_wager_amount(self) -> int:
        return self._next(self.wagers)

    def read_player_action(self) -> PlayerAction:
        return self._next(self.actions)

    def read_menu_choice(self) -> MenuChoice:
        return self._next(self.menu)

    def read_player_name(self) -> str:
        return self.name


NON_ACE_RANKS = [rank for rank in Rank if not rank.is_ace]


@st.composite
def card_strategy(draw, ranks=None):
    """Generate a random card."""
    rank = draw(st.sampled_from(ranks or list(Rank)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)
