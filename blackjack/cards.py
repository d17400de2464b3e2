"""Card and Shoe classes - immutable cards drawn without replacement."""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from random import Random

from blackjack.errors import InvalidCard, InvalidConfig, ShoeExhausted

logger = logging.getLogger(__name__)

CARDS_PER_DECK = 52


class Suit(Enum):
    """Card suits."""

    SPADES = auto()
    HEARTS = auto()
    DIAMONDS = auto()
    CLUBS = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.SPADES: "♠",
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
            Suit.CLUBS: "♣",
        }
        return symbols[self]


class Rank(Enum):
    """Card ranks."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        if 2 <= self.value <= 10:
            return str(self.value)
        return {
            Rank.ACE: "A",
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
        }[self]

    @property
    def blackjack_value(self) -> int:
        """Return the fixed point value (Ace = 11, face cards = 10)."""
        return RANK_VALUES[self]

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self is Rank.ACE


# Aces are listed at their high value; hand evaluation decides 11 vs 1.
RANK_VALUES: dict[Rank, int] = {
    Rank.ACE: 11,
    Rank.TWO: 2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 10,
    Rank.QUEEN: 10,
    Rank.KING: 10,
}


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __post_init__(self) -> None:
        if not isinstance(self.rank, Rank):
            raise InvalidCard(f"Invalid rank: {self.rank!r}")
        if not isinstance(self.suit, Suit):
            raise InvalidCard(f"Invalid suit: {self.suit!r}")

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        """Return the fixed point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise InvalidCard(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        rank_map = {
            "A": Rank.ACE,
            "2": Rank.TWO,
            "3": Rank.THREE,
            "4": Rank.FOUR,
            "5": Rank.FIVE,
            "6": Rank.SIX,
            "7": Rank.SEVEN,
            "8": Rank.EIGHT,
            "9": Rank.NINE,
            "10": Rank.TEN,
            "T": Rank.TEN,
            "J": Rank.JACK,
            "Q": Rank.QUEEN,
            "K": Rank.KING,
        }

        suit_map = {
            "S": Suit.SPADES,
            "♠": Suit.SPADES,
            "H": Suit.HEARTS,
            "♥": Suit.HEARTS,
            "D": Suit.DIAMONDS,
            "♦": Suit.DIAMONDS,
            "C": Suit.CLUBS,
            "♣": Suit.CLUBS,
        }

        if rank_str not in rank_map:
            raise InvalidCard(f"Invalid rank: {rank_str}")
        if suit_str not in suit_map:
            raise InvalidCard(f"Invalid suit: {suit_str}")

        return cls(rank_map[rank_str], suit_map[suit_str])


class Shoe:
    """
    A multi-deck shoe.

    Composition is fixed at construction. Each position carries a drawn
    marker; drawing picks uniformly among the undrawn positions.
    """

    def __init__(self, num_decks: int = 1, rng: Random | None = None) -> None:
        """
        Initialize a shoe with multiple decks.

        Args:
            num_decks: Number of 52-card decks in the shoe
            rng: Random source used to pick cards (seed it for reproducible rounds)
        """
        if isinstance(num_decks, bool) or not isinstance(num_decks, int) or num_decks < 1:
            raise InvalidConfig(f"Shoe must have at least 1 deck, got {num_decks!r}")

        self._num_decks = num_decks
        self._rng = rng or Random()
        self._cards: list[Card] = [
            Card(rank, suit)
            for suit in Suit
            for rank in Rank
            for _ in range(num_decks)
        ]
        self._drawn: list[bool] = [False] * len(self._cards)

    def draw(self) -> Card:
        """Draw a random undrawn card and mark it drawn."""
        available = [i for i, drawn in enumerate(self._drawn) if not drawn]
        if not available:
            raise ShoeExhausted("Cannot draw from an exhausted shoe")

        position = available[self._rng.randrange(len(available))]
        self._drawn[position] = True
        card = self._cards[position]
        logger.debug("Drew %r (%d left)", card, len(available) - 1)
        return card

    def reset(self) -> None:
        """Mark every card undrawn again. Composition is unchanged."""
        self._drawn = [False] * len(self._cards)

    def available_count(self) -> int:
        """Return the number of undrawn cards."""
        return self._drawn.count(False)

    def available_cards(self) -> list[Card]:
        """Return the undrawn cards in shoe order."""
        return [card for card, drawn in zip(self._cards, self._drawn) if not drawn]

    @property
    def cards_dealt(self) -> int:
        """Return the number of cards drawn so far."""
        return self.total_cards - self.available_count()

    @property
    def total_cards(self) -> int:
        """Return the number of cards in a full shoe."""
        return len(self._cards)

    @property
    def num_decks(self) -> int:
        """Return the number of decks in the shoe."""
        return self._num_decks

    def __len__(self) -> int:
        return self.available_count()
