"""Main entry point for the terminal blackjack game."""

import logging
import sys

from config import AppConfig, config
from blackjack.game.decisions import DecisionProvider
from blackjack.game.events import EventEmitter
from blackjack.game.session import Session
from terminal.console import ConsoleDecisions
from terminal.render import EventPrinter, format_stats

LOG_FORMAT = "[%(asctime)s] %(levelname)-8s [%(name)s] %(message)s"

_logging_initialized = False


def setup_logging(level: str = "WARNING") -> None:
    """Send log records to stderr so they stay apart from the game text."""
    global _logging_initialized

    if _logging_initialized:
        return
    _logging_initialized = True

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))

    root_logger = logging.getLogger()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level, logging.WARNING))

    logging.getLogger("transitions").setLevel(logging.WARNING)


def run(app_config: AppConfig, decisions: DecisionProvider, output=None) -> int:
    """Play until the player exits. Returns the process exit code."""
    output = output or sys.stdout
    events = EventEmitter()
    events.subscribe(EventPrinter(output))

    try:
        name = app_config.player_name or decisions.read_player_name()
        session = Session.from_config(name, app_config, events=events)
        print(f"Welcome, {name}. Dealing from {session.num_decks} deck(s).", file=output)
        session.run(decisions)
    except (EOFError, KeyboardInterrupt):
        print("\nGoodbye.", file=output)
        return 0

    print(format_stats(session.stats(), session.summary()), file=output)
    return 0


def main() -> int:
    setup_logging(config.effective_log_level)
    return run(config, ConsoleDecisions())


if __name__ == "__main__":
    sys.exit(main())
