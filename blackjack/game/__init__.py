"""Round state machine, events, and session loop."""

from blackjack.game.events import GameEvent, EventType, EventEmitter
from blackjack.game.state import RoundState
from blackjack.game.decisions import DecisionProvider, MenuChoice, PlayerAction
from blackjack.game.round import Round, Settlement, TableView
from blackjack.game.session import Session, SessionSummary

__all__ = [
    "GameEvent",
    "EventType",
    "EventEmitter",
    "RoundState",
    "DecisionProvider",
    "MenuChoice",
    "PlayerAction",
    "Round",
    "Settlement",
    "TableView",
    "Session",
    "SessionSummary",
]
