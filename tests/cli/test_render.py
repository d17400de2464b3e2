"""Tests for text rendering and the terminal entry point."""

import io
from decimal import Decimal

from blackjack.player import PlayerStats
from blackjack.game import EventEmitter, EventType, SessionSummary
from config import AppConfig, GameConfig
from terminal.console import ConsoleDecisions
from terminal.main import run
from terminal.render import EventPrinter, format_hand, format_money, format_stats

from helpers import dealer_hand_of, hand_of


class TestFormatting:
    """Tests for the pure formatters."""

    def test_format_money(self):
        assert format_money(Decimal("12.5")) == "+12.50"
        assert format_money(-100) == "-100.00"
        assert format_money(0) == "+0.00"

    def test_format_player_hand(self):
        text = format_hand(hand_of("10S", "7H", wager=20).snapshot(), "You")
        assert text == "You: 10♠ 7♥ (17) [wager 20]"

    def test_format_bust(self):
        text = format_hand(hand_of("10S", "9H", "KC", wager=5).snapshot())
        assert "29, BUST" in text

    def test_format_hidden_dealer(self):
        text = format_hand(dealer_hand_of("AS", "9H").snapshot(hide_hole=True), "Dealer")
        assert text == "Dealer: A♠ ?? (≥ 11)"

    def test_format_standing_split_hand(self):
        hand = hand_of("8S", "3H", wager=50)
        hand.is_split_hand = True
        hand.stand()
        assert format_hand(hand.snapshot()).endswith("[wager 50, split, standing]")

    def test_format_stats(self):
        stats = PlayerStats("Ann", 300, Decimal("-150"))
        summary = SessionSummary(rounds_played=3, rounds_aborted=1, wins=1, losses=2, pushes=0)
        text = format_stats(stats, summary)
        assert "Player:       Ann" in text
        assert "Total wager:  300" in text
        assert "Profit/loss:  -150.00" in text
        assert "(W 1 / L 2 / P 0)" in text
        assert "Aborted:      1" in text


class TestEventPrinter:
    """Tests for event rendering."""

    def test_prints_known_events(self):
        output = io.StringIO()
        emitter = EventEmitter()
        emitter.subscribe(EventPrinter(output))

        emitter.emit_new(EventType.DEALER_HITS, card="5♦", hand_value=19)
        emitter.emit_new(EventType.INVALID_ACTION, message="Hand is locked")
        emitter.emit_new(
            EventType.PUSH, outcome="Push", player_value=18, dealer_value=18,
            winnings=Decimal("10"), net=Decimal("0"),
        )

        lines = output.getvalue().splitlines()
        assert lines == [
            "Dealer draws 5♦ (19).",
            "Not allowed: Hand is locked",
            "Push: 18 vs dealer 18 (net +0.00)",
        ]

    def test_ignores_silent_events(self):
        output = io.StringIO()
        printer = EventPrinter(output)
        printer(EventEmitter().emit_new(EventType.CARD_DEALT, card="??", hand="dealer", hand_value=None))
        assert output.getvalue() == ""


def scripted_input(*answers):
    remaining = list(answers)

    def fake_input(prompt=""):
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return fake_input


class TestRun:
    """Tests for the terminal entry point."""

    def _config(self, player_name=None):
        return AppConfig(
            debug=False,
            log_level="WARNING",
            player_name=player_name,
            game=GameConfig(num_decks=1, seed=7),
        )

    def test_full_session(self):
        output = io.StringIO()
        decisions = ConsoleDecisions(scripted_input("Ann", "1", "100", "s", "2", "3"), output)

        assert run(self._config(), decisions, output) == 0

        text = output.getvalue()
        assert "Welcome, Ann. Dealing from 1 deck(s)." in text
        assert "Ann bets 100." in text
        assert "Dealer: " in text
        assert "Total wager:  100" in text
        assert "Rounds:       1" in text

    def test_configured_name_skips_prompt(self):
        output = io.StringIO()
        decisions = ConsoleDecisions(scripted_input("3"), output)
        run(self._config(player_name="Sam"), decisions, output)
        assert "Welcome, Sam." in output.getvalue()

    def test_eof_mid_round_says_goodbye(self):
        output = io.StringIO()
        decisions = ConsoleDecisions(scripted_input("Ann", "1", "100"), output)
        assert run(self._config(), decisions, output) == 0
        assert output.getvalue().rstrip().endswith("Goodbye.")
