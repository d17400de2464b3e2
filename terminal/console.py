"""Console decision provider: prompts on a text stream and parses answers."""

import sys
from typing import Callable, TextIO

from blackjack.game.decisions import MenuChoice, PlayerAction

DEFAULT_PLAYER_NAME = "Player"

ACTION_ALIASES: dict[str, PlayerAction] = {
    "h": PlayerAction.HIT,
    "hit": PlayerAction.HIT,
    "s": PlayerAction.STAND,
    "stand": PlayerAction.STAND,
    "d": PlayerAction.DOUBLE_DOWN,
    "double": PlayerAction.DOUBLE_DOWN,
    "double down": PlayerAction.DOUBLE_DOWN,
    "p": PlayerAction.SPLIT,
    "split": PlayerAction.SPLIT,
}

MENU_ALIASES: dict[str, MenuChoice] = {
    "1": MenuChoice.PLAY_ROUND,
    "p": MenuChoice.PLAY_ROUND,
    "play": MenuChoice.PLAY_ROUND,
    "2": MenuChoice.VIEW_STATS,
    "v": MenuChoice.VIEW_STATS,
    "stats": MenuChoice.VIEW_STATS,
    "3": MenuChoice.EXIT,
    "q": MenuChoice.EXIT,
    "quit": MenuChoice.EXIT,
    "exit": MenuChoice.EXIT,
}

MENU_TEXT = "\n".join([
    "",
    "1) Play a round",
    "2) View stats",
    "3) Exit",
])


def parse_action(text: str) -> PlayerAction:
    """Map typed text to an action; unknown input is INVALID."""
    return ACTION_ALIASES.get(" ".join(text.lower().split()), PlayerAction.INVALID)


def parse_menu_choice(text: str) -> MenuChoice | None:
    return MENU_ALIASES.get(text.strip().lower())


class ConsoleDecisions:
    """Reads the player's decisions from a terminal."""

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        output: TextIO | None = None,
    ) -> None:
        self._input = input_func
        self._output = output or sys.stdout

    def _say(self, text: str) -> None:
        print(text, file=self._output)

    def read_player_name(self) -> str:
        name = self._input("What is your name? ").strip()
        return name or DEFAULT_PLAYER_NAME

    def read_wager_amount(self) -> int:
        """Ask until the answer is a whole number; the engine checks it is positive."""
        while True:
            text = self._input("Wager: ").strip()
            try:
                return int(text)
            except ValueError:
                self._say(f"'{text}' is not a whole number.")

    def read_player_action(self) -> PlayerAction:
        return parse_action(self._input("(h)it, (s)tand, (d)ouble down, s(p)lit? "))

    def read_menu_choice(self) -> MenuChoice:
        """Ask until a menu option is chosen. Closed input means exit."""
        self._say(MENU_TEXT)
        while True:
            try:
                text = self._input("> ")
            except EOFError:
                return MenuChoice.EXIT
            choice = parse_menu_choice(text)
            if choice is not None:
                return choice
            self._say("Choose 1, 2, or 3.")
