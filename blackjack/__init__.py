"""Core blackjack engine - 100% UI-agnostic."""

from blackjack.cards import Card, Shoe, Rank, Suit
from blackjack.hand import Hand, HandKind, HandSnapshot, Outcome, hand_value, settle
from blackjack.player import Player, PlayerStats
from blackjack.errors import (
    BlackjackError,
    HandLocked,
    InvalidAction,
    InvalidCard,
    InvalidConfig,
    InvalidWager,
    ShoeExhausted,
)

__all__ = [
    "Card",
    "Shoe",
    "Rank",
    "Suit",
    "Hand",
    "HandKind",
    "HandSnapshot",
    "Outcome",
    "hand_value",
    "settle",
    "Player",
    "PlayerStats",
    "BlackjackError",
    "HandLocked",
    "InvalidAction",
    "InvalidCard",
    "InvalidConfig",
    "InvalidWager",
    "ShoeExhausted",
]
