"""Plain-text rendering of cards, hands, and game events."""

from decimal import Decimal
from typing import Callable, TextIO

from blackjack.cards import Card
from blackjack.hand import HandSnapshot
from blackjack.player import PlayerStats
from blackjack.game.events import EventType, GameEvent
from blackjack.game.session import SessionSummary


def format_card(card: Card) -> str:
    return str(card)


def format_money(amount: Decimal | int) -> str:
    """Signed amount with two decimals, e.g. '+12.50' or '-100.00'."""
    return f"{Decimal(amount):+.2f}"


def format_hand(hand: HandSnapshot, label: str = "") -> str:
    """
    One-line hand display.

    A partial dealer hand shows the hole card as '??' and its value as '≥ n'.
    """
    cards = " ".join(format_card(c) for c in hand.cards)
    if hand.partial:
        cards += " ??"
        value = f"≥ {hand.value}"
    elif hand.busted:
        value = f"{hand.value}, BUST"
    else:
        value = str(hand.value)

    flags = []
    if hand.wager:
        flags.append(f"wager {hand.wager}")
    if hand.is_split_hand:
        flags.append("split")
    if hand.locked and not hand.busted and not hand.partial:
        flags.append("standing")

    text = f"{cards} ({value})"
    if flags:
        text += " [" + ", ".join(flags) + "]"
    return f"{label}: {text}" if label else text


def format_stats(stats: PlayerStats, summary: SessionSummary | None = None) -> str:
    lines = [
        f"Player:       {stats.name}",
        f"Total wager:  {stats.total_wager}",
        f"Profit/loss:  {format_money(stats.profit_loss)}",
    ]
    if summary is not None:
        lines.append(
            f"Rounds:       {summary.rounds_played}"
            f" (W {summary.wins} / L {summary.losses} / P {summary.pushes})"
        )
        if summary.rounds_aborted:
            lines.append(f"Aborted:      {summary.rounds_aborted}")
    return "\n".join(lines)


class EventPrinter:
    """Writes game events to a text stream as they happen."""

    def __init__(self, output: TextIO) -> None:
        self._output = output
        self._renderers: dict[EventType, Callable[[dict], str | None]] = {
            EventType.WAGER_PLACED: lambda d: f"{d['player']} bets {d['amount']}.",
            EventType.ROUND_STARTED: lambda d: "Cards are dealt.",
            EventType.AWAITING_ACTION: self._prompt,
            EventType.PLAYER_HIT: lambda d: f"You draw {d['card']} ({d['hand_value']}).",
            EventType.PLAYER_STAND: lambda d: f"You stand on {d['hand_value']}.",
            EventType.PLAYER_DOUBLE: lambda d: (
                f"Double down to {d['new_wager']}: you draw {d['card']} ({d['hand_value']})."
            ),
            EventType.PLAYER_SPLIT: lambda d: (
                f"Split with {d['card']}: [{d['first']}] and [{d['second']}], {d['wager']} each."
            ),
            EventType.PLAYER_BUSTS: lambda d: f"Bust with {d['hand_value']}!",
            EventType.DEALER_REVEALS: lambda d: f"Dealer reveals {d['card']} ({d['hand_value']}).",
            EventType.DEALER_HITS: lambda d: f"Dealer draws {d['card']} ({d['hand_value']}).",
            EventType.DEALER_STANDS: lambda d: f"Dealer stands on {d['hand_value']}.",
            EventType.DEALER_BUSTS: lambda d: f"Dealer busts with {d['hand_value']}!",
            EventType.PLAYER_WINS: self._outcome,
            EventType.PLAYER_LOSES: self._outcome,
            EventType.PUSH: self._outcome,
            EventType.ROUND_ENDED: lambda d: f"Running profit/loss: {format_money(d['profit_loss'])}",
            EventType.ROUND_ABORTED: lambda d: f"Round abandoned: {d['reason']}",
            EventType.STATS_REPORTED: lambda d: format_stats(d["stats"], d.get("summary")),
            EventType.INVALID_ACTION: lambda d: f"Not allowed: {d['message']}",
        }

    def __call__(self, event: GameEvent) -> None:
        renderer = self._renderers.get(event.event_type)
        if renderer is None:
            return
        text = renderer(event.data)
        if text:
            print(text, file=self._output)

    @staticmethod
    def _prompt(data: dict) -> str:
        lines = [
            format_hand(data["dealer_hand"], "Dealer"),
            format_hand(data["player_hand"], "You"),
            f"Chance the next card busts you: {data['bust_probability']:.0%}",
        ]
        if data["pending_hands"]:
            lines.append(f"Split hands waiting: {data['pending_hands']}")
        return "\n".join(lines)

    @staticmethod
    def _outcome(data: dict) -> str:
        return (
            f"{data['outcome']}: {data['player_value']} vs dealer {data['dealer_value']}"
            f" (net {format_money(data['net'])})"
        )
