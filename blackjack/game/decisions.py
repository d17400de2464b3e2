"""Choices the engine asks its caller to make."""

from enum import Enum, auto
from typing import Protocol


class PlayerAction(Enum):
    """Actions available during the player's turn."""

    HIT = auto()
    STAND = auto()
    DOUBLE_DOWN = auto()
    SPLIT = auto()
    INVALID = auto()


class MenuChoice(Enum):
    """Options on the between-rounds menu."""

    PLAY_ROUND = auto()
    VIEW_STATS = auto()
    EXIT = auto()


class DecisionProvider(Protocol):
    """
    Source of every player decision.

    The console implements this by prompting; tests implement it with
    scripted answers. Implementations may raise EOFError to signal that
    input was closed.
    """

    def read_wager_amount(self) -> int: ...

    def read_player_action(self) -> PlayerAction: ...

    def read_menu_choice(self) -> MenuChoice: ...

    def read_player_name(self) -> str: ...
