"""Hand evaluation, hand actions, and settlement."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Callable, Iterable

from blackjack.cards import Card
from blackjack.errors import HandLocked, InvalidAction, InvalidWager

if TYPE_CHECKING:
    from blackjack.cards import Shoe

BLACKJACK = 21
DEALER_STANDS_AT = 17
MAX_HAND_CARDS = 5

DEALER_BUST_PAYOUT = Decimal("2")
HIGHER_HAND_PAYOUT = Decimal("1.5")


def hand_value(cards: Iterable[Card]) -> int:
    """
    Total a sequence of cards left to right.

    Each Ace counts 11 unless that would take the running total past 21,
    in which case it counts 1. The decision is made once, at the Ace's
    position, and never revisited for later cards.
    """
    total = 0
    for card in cards:
        if card.is_ace:
            total += 1 if total + 11 > BLACKJACK else 11
        else:
            total += card.value
    return total


def _player_value(value: int, card_count: int) -> int:
    return value


def _dealer_value(value: int, card_count: int) -> int:
    # Three cards totalling 6 is reported as a soft 17
    if value == 6 and card_count == 3:
        return 17
    return value


class HandKind(Enum):
    """Who a hand belongs to; selects the value rule."""

    PLAYER = "player"
    DEALER = "dealer"


VALUE_RULES: dict[HandKind, Callable[[int, int], int]] = {
    HandKind.PLAYER: _player_value,
    HandKind.DEALER: _dealer_value,
}


@dataclass(frozen=True)
class HandSnapshot:
    """Read-only view of a hand for rendering."""

    cards: tuple[Card, ...]
    value: int
    busted: bool
    locked: bool
    wager: int = 0
    partial: bool = False
    is_split_hand: bool = False


@dataclass
class Hand:
    """A blackjack hand with its wager and lock state."""

    cards: list[Card] = field(default_factory=list)
    wager: int = 0
    kind: HandKind = HandKind.PLAYER
    busted: bool = False
    locked: bool = False
    is_doubled: bool = False
    is_split_hand: bool = False
    split_refused: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.wager, bool) or not isinstance(self.wager, int) or self.wager < 0:
            raise InvalidWager(f"Hand wager must be a whole amount >= 0, got {self.wager!r}")
        if self.kind is HandKind.DEALER and self.wager != 0:
            raise InvalidWager("Dealer hand cannot carry a wager")
        self.busted = self.value > BLACKJACK
        self.locked = self.locked or self.busted

    @classmethod
    def dealer(cls) -> "Hand":
        """Create an empty dealer hand."""
        return cls(kind=HandKind.DEALER)

    @property
    def value(self) -> int:
        """Current value, recomputed from the cards."""
        return VALUE_RULES[self.kind](hand_value(self.cards), len(self.cards))

    @property
    def is_pair(self) -> bool:
        """Check if the hand is exactly two cards of the same rank."""
        return len(self.cards) == 2 and self.cards[0].rank == self.cards[1].rank

    @property
    def is_splittable(self) -> bool:
        """Check if the hand may be split in a round."""
        return (
            self.is_pair
            and not self.is_split_hand
            and not self.split_refused
            and not self.locked
        )

    @property
    def can_double(self) -> bool:
        """Check if the hand can be doubled down."""
        return len(self.cards) == 2 and not self.locked

    @property
    def can_hit(self) -> bool:
        return not self.locked and len(self.cards) < MAX_HAND_CARDS

    def add_card(self, card: Card) -> None:
        """Append a card and refresh the bust/lock flags."""
        self.cards.append(card)
        self.busted = self.value > BLACKJACK
        if not self.locked:
            self.locked = self.busted

    def hit(self, shoe: "Shoe") -> Card:
        """Draw one card from the shoe into the hand."""
        if len(self.cards) >= MAX_HAND_CARDS:
            raise HandLocked(f"Hand already holds {MAX_HAND_CARDS} cards")
        if self.locked:
            raise HandLocked("Hand is locked")
        card = shoe.draw()
        self.add_card(card)
        return card

    def stand(self) -> None:
        """Lock the hand."""
        self.locked = True

    def double_down(self, shoe: "Shoe") -> "Hand":
        """
        Double the wager and take exactly one more card.

        Only legal on a two-card hand. The hand is locked afterwards.
        """
        if len(self.cards) != 2:
            raise InvalidAction("Can only double down on a two-card hand")
        if self.locked:
            raise HandLocked("Hand is locked")
        self.locked = True
        self.wager *= 2
        self.is_doubled = True
        self.add_card(shoe.draw())
        return self

    def split(self, new_card: Card) -> tuple["Hand", "Hand"]:
        """
        Split a pair into two hands of half the wager each.

        The first hand gets this hand's first card. The second gets this
        hand's second card plus new_card. new_card must share the first
        card's rank. This hand is left as it was.
        """
        if not self.is_pair:
            raise InvalidAction("Can only split two cards of the same rank")
        if self.cards[0].rank != new_card.rank:
            raise InvalidAction("Drawn card does not match the pair")

        half = self.wager // 2
        first = Hand(cards=[self.cards[0]], wager=half, is_split_hand=True)
        second = Hand(cards=[self.cards[1], new_card], wager=half, is_split_hand=True)
        return first, second

    def take_hit(self, shoe: "Shoe") -> list[Card]:
        """Draw until the hand is worth at least 17. Returns the drawn cards."""
        drawn: list[Card] = []
        while self.value < DEALER_STANDS_AT:
            card = shoe.draw()
            self.add_card(card)
            drawn.append(card)
        return drawn

    def snapshot(self, hide_hole: bool = False) -> HandSnapshot:
        """
        Build a renderable view.

        With hide_hole, only the first card is shown and the value is
        partial (the true value is at least this much).
        """
        if hide_hole and len(self.cards) > 1:
            visible = tuple(self.cards[:1])
            return HandSnapshot(
                cards=visible,
                value=hand_value(visible),
                busted=False,
                locked=self.locked,
                wager=self.wager,
                partial=True,
                is_split_hand=self.is_split_hand,
            )
        return HandSnapshot(
            cards=tuple(self.cards),
            value=self.value,
            busted=self.busted,
            locked=self.locked,
            wager=self.wager,
            is_split_hand=self.is_split_hand,
        )

    def __len__(self) -> int:
        return len(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        if self.busted:
            return f"{cards_str} (BUST)"
        return f"{cards_str} ({self.value})"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value}, wager={self.wager})"


class Outcome(Enum):
    """Result of one hand against the dealer."""

    WIN = "win"
    LOSS = "loss"
    PUSH = "push"

    @property
    def label(self) -> str:
        return {
            Outcome.WIN: "You win",
            Outcome.LOSS: "You lose",
            Outcome.PUSH: "Push",
        }[self]


def settle(player_hand: Hand, dealer_hand: Hand) -> tuple[Outcome, Decimal]:
    """
    Compare a finished player hand with the dealer's.

    Returns the outcome and the winnings paid back to the player:
    the wager on a push, twice the wager when the dealer busts,
    one and a half times the wager for a higher hand, nothing on a loss.
    The push check runs first, so a double bust is a push.
    """
    wager = Decimal(player_hand.wager)
    player_value = player_hand.value
    dealer_value = dealer_hand.value

    if (player_hand.busted and dealer_hand.busted) or player_value == dealer_value:
        return Outcome.PUSH, wager
    if player_hand.busted:
        return Outcome.LOSS, Decimal("0")
    if dealer_hand.busted:
        return Outcome.WIN, wager * DEALER_BUST_PAYOUT
    if player_value > dealer_value:
        return Outcome.WIN, wager * HIGHER_HAND_PAYOUT
    return Outcome.LOSS, Decimal("0")
