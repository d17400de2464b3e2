"""A player's sitting: repeated rounds, each with a fresh shoe."""

import logging
from dataclasses import dataclass
from random import Random
from typing import TYPE_CHECKING

from blackjack.cards import Shoe
from blackjack.errors import InvalidConfig, ShoeExhausted
from blackjack.hand import Outcome
from blackjack.player import Player, PlayerStats
from blackjack.game.decisions import DecisionProvider, MenuChoice
from blackjack.game.events import EventEmitter, EventType
from blackjack.game.round import Round, Settlement

if TYPE_CHECKING:
    from config import AppConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionSummary:
    """Round and hand counts for the current process."""

    rounds_played: int
    rounds_aborted: int
    wins: int
    losses: int
    pushes: int


class Session:
    """Owns the player across rounds and runs the between-rounds menu."""

    def __init__(
        self,
        player: Player,
        num_decks: int = 6,
        rng: Random | None = None,
        events: EventEmitter | None = None,
    ) -> None:
        if isinstance(num_decks, bool) or not isinstance(num_decks, int) or num_decks < 1:
            raise InvalidConfig(f"Session needs at least 1 deck, got {num_decks!r}")
        self.player = player
        self.num_decks = num_decks
        self.rng = rng or Random()
        self.events = events or EventEmitter()

        self.rounds_played = 0
        self.rounds_aborted = 0
        self._outcomes: dict[Outcome, int] = {outcome: 0 for outcome in Outcome}

    @classmethod
    def from_config(cls, name: str, app_config: "AppConfig", events: EventEmitter | None = None) -> "Session":
        """Build a session from application configuration."""
        game = app_config.game
        return cls(
            Player(name),
            num_decks=game.num_decks,
            rng=Random(game.seed),
            events=events,
        )

    def new_round(self) -> Round:
        """Create a round with its own fresh shoe."""
        shoe = Shoe(num_decks=self.num_decks, rng=self.rng)
        return Round(self.player, shoe, events=self.events)

    def play_round(self, decisions: DecisionProvider) -> list[Settlement] | None:
        """
        Play one full round.

        Returns the settlements, or None if the shoe ran out and the
        round was abandoned.
        """
        round_ = self.new_round()
        try:
            settlements = round_.play(decisions)
        except ShoeExhausted as exc:
            round_.abort()
            self.rounds_aborted += 1
            logger.warning("Round aborted for %s: %s", self.player.name, exc)
            self.events.emit_new(EventType.ROUND_ABORTED, reason=str(exc))
            return None

        self.rounds_played += 1
        for settlement in settlements:
            self._outcomes[settlement.outcome] += 1
        return settlements

    def stats(self) -> PlayerStats:
        return self.player.stats

    def summary(self) -> SessionSummary:
        return SessionSummary(
            rounds_played=self.rounds_played,
            rounds_aborted=self.rounds_aborted,
            wins=self._outcomes[Outcome.WIN],
            losses=self._outcomes[Outcome.LOSS],
            pushes=self._outcomes[Outcome.PUSH],
        )

    def run(self, decisions: DecisionProvider) -> SessionSummary:
        """Show the menu until the player exits."""
        while True:
            choice = decisions.read_menu_choice()
            if choice == MenuChoice.EXIT:
                break
            if choice == MenuChoice.PLAY_ROUND:
                self.play_round(decisions)
            elif choice == MenuChoice.VIEW_STATS:
                self.events.emit_new(
                    EventType.STATS_REPORTED,
                    stats=self.stats(),
                    summary=self.summary(),
                )

        logger.info("Session ended for %s after %d rounds", self.player.name, self.rounds_played)
        return self.summary()
