"""A single round of blackjack driven by a state machine."""

import logging
from collections import deque
from dataclasses import dataclass
from decimal import Decimal

from transitions import Machine

from blackjack.cards import Card, Shoe
from blackjack.errors import InvalidAction, InvalidWager
from blackjack.hand import Hand, HandSnapshot, Outcome, settle
from blackjack.player import Player
from blackjack.probability import bust_probability
from blackjack.game.decisions import DecisionProvider, PlayerAction
from blackjack.game.events import EventEmitter, EventType
from blackjack.game.state import RoundState

logger = logging.getLogger(__name__)

_OUTCOME_EVENTS = {
    Outcome.WIN: EventType.PLAYER_WINS,
    Outcome.LOSS: EventType.PLAYER_LOSES,
    Outcome.PUSH: EventType.PUSH,
}


@dataclass(frozen=True)
class Settlement:
    """How one player hand was paid out."""

    player_hand: HandSnapshot
    dealer_hand: HandSnapshot
    outcome: Outcome
    winnings: Decimal
    net: Decimal


@dataclass(frozen=True)
class TableView:
    """What the player can see while deciding."""

    player_hand: HandSnapshot
    dealer_hand: HandSnapshot
    bust_probability: float
    pending_hands: int


class Round:
    """
    One hand of play: wager, deal, player turn, dealer turn, settlement.

    The round owns its shoe and both hands. A split replaces the current
    hand with two split hands, which are played and settled one after
    another from a worklist against the same dealer hand and shoe.
    """

    _machine_state: str

    STATES = [s.name.lower() for s in RoundState]

    TRANSITIONS = [
        {"trigger": "deal", "source": "awaiting_wager", "dest": "dealt"},
        {"trigger": "begin_turn", "source": "dealt", "dest": "player_turn"},
        {"trigger": "player_action", "source": "player_turn", "dest": "player_turn"},
        {"trigger": "player_done", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "dealer_done", "source": "dealer_turn", "dest": "settled"},
        {"trigger": "next_hand", "source": "settled", "dest": "player_turn"},
        {"trigger": "abort", "source": "*", "dest": "aborted"},
    ]

    def __init__(
        self,
        player: Player,
        shoe: Shoe,
        events: EventEmitter | None = None,
    ) -> None:
        self.player = player
        self.shoe = shoe
        self.events = events or EventEmitter()

        self.hand: Hand | None = None
        self.dealer_hand = Hand.dealer()
        self.current_hand: Hand | None = None
        self.pending: deque[Hand] = deque()
        self.settlements: list[Settlement] = []
        self._dealer_revealed = False

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="awaiting_wager",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> RoundState:
        """Get current round state as enum."""
        return RoundState[self._machine_state.upper()]

    @property
    def is_complete(self) -> bool:
        """True once every hand is settled, or the round was aborted."""
        if self.state == RoundState.ABORTED:
            return True
        return self.state == RoundState.SETTLED and not self.pending

    def start(self, wager: int) -> None:
        """Take the wager and deal two cards to the player, then two to the dealer."""
        if self.state != RoundState.AWAITING_WAGER:
            raise InvalidAction(f"Cannot wager while round is {self.state}")

        self.player.place_wager(wager)
        self.hand = Hand(wager=wager)
        self.current_hand = self.hand
        self.events.emit_new(EventType.WAGER_PLACED, amount=wager, player=self.player.name)
        logger.info("Round started for %s with wager %d", self.player.name, wager)

        self.deal()
        self._deal_card_to_hand(self.hand)
        self._deal_card_to_hand(self.hand)
        self._deal_card_to_hand(self.dealer_hand)
        self._deal_card_to_hand(self.dealer_hand, face_up=False)
        self.events.emit_new(EventType.ROUND_STARTED, **self._table_data())

        self.begin_turn()
        self._advance_if_done()

    def _deal_card_to_hand(self, hand: Hand, face_up: bool = True) -> Card:
        card = self.shoe.draw()
        hand.add_card(card)
        is_dealer = hand is self.dealer_hand
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card) if face_up else "??",
            hand="dealer" if is_dealer else "player",
            hand_value=hand.value if face_up or not is_dealer else None,
        )
        return card

    def _require_turn(self) -> Hand:
        if self.state != RoundState.PLAYER_TURN or self.current_hand is None:
            raise InvalidAction(f"No player action allowed while round is {self.state}")
        return self.current_hand

    def hit(self) -> Card:
        """Current hand takes a card."""
        hand = self._require_turn()
        card = hand.hit(self.shoe)
        self.events.emit_new(EventType.PLAYER_HIT, card=str(card), hand_value=hand.value)
        if hand.busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_value=hand.value)
        self.player_action()
        self._advance_if_done()
        return card

    def stand(self) -> None:
        """Current hand stands."""
        hand = self._require_turn()
        hand.stand()
        self.events.emit_new(EventType.PLAYER_STAND, hand_value=hand.value)
        self.player_action()
        self._advance_if_done()

    def double_down(self) -> Hand:
        """Current hand doubles its wager and takes one final card."""
        hand = self._require_turn()
        if not hand.can_double:
            raise InvalidAction("Can only double down on an unlocked two-card hand")
        hand.double_down(self.shoe)
        self.events.emit_new(
            EventType.PLAYER_DOUBLE,
            card=str(hand.cards[-1]),
            hand_value=hand.value,
            new_wager=hand.wager,
        )
        if hand.busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_value=hand.value)
        self.player_action()
        self._advance_if_done()
        return hand

    def split(self) -> tuple[Hand, Hand]:
        """
        Split the current pair.

        A card is drawn and handed to Hand.split. If it does not match the
        pair the split is refused, that card stays drawn, and the hand may
        not attempt another split.
        """
        hand = self._require_turn()
        if not hand.is_splittable:
            raise InvalidAction("This hand cannot be split")

        new_card = self.shoe.draw()
        try:
            first, second = hand.split(new_card)
        except InvalidAction:
            hand.split_refused = True
            logger.debug("Split refused: drew %r against %r", new_card, hand.cards[0])
            raise

        self.current_hand = first
        self.pending.appendleft(second)
        self.events.emit_new(
            EventType.PLAYER_SPLIT,
            card=str(new_card),
            first=str(first),
            second=str(second),
            wager=first.wager,
        )
        self.player_action()
        self._advance_if_done()
        return first, second

    def apply(self, action: PlayerAction) -> None:
        """Dispatch one player action."""
        if action == PlayerAction.HIT:
            self.hit()
        elif action == PlayerAction.STAND:
            self.stand()
        elif action == PlayerAction.DOUBLE_DOWN:
            self.double_down()
        elif action == PlayerAction.SPLIT:
            self.split()
        else:
            raise InvalidAction("Unrecognized action")

    def _advance_if_done(self) -> None:
        """Play the dealer and settle once the current hand can take no more actions."""
        hand = self.current_hand
        if hand is None or hand.can_hit:
            return

        self.player_done()
        self._play_dealer()
        self._settle(hand)

        if self.pending:
            self.current_hand = self.pending.popleft()
            self.next_hand()
            self._advance_if_done()
            return

        self.events.emit_new(
            EventType.ROUND_ENDED,
            net=sum((s.net for s in self.settlements), Decimal("0")),
            profit_loss=self.player.profit_loss,
        )
        logger.info("Round ended for %s: %s", self.player.name, [s.outcome.value for s in self.settlements])

    def _play_dealer(self) -> None:
        """Dealer draws to 17."""
        if not self._dealer_revealed:
            self._dealer_revealed = True
            self.events.emit_new(
                EventType.DEALER_REVEALS,
                card=str(self.dealer_hand.cards[1]),
                hand_value=self.dealer_hand.value,
            )

        for card in self.dealer_hand.take_hit(self.shoe):
            self.events.emit_new(EventType.DEALER_HITS, card=str(card), hand_value=self.dealer_hand.value)

        if self.dealer_hand.busted:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=self.dealer_hand.value)
        else:
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=self.dealer_hand.value)
        logger.debug("Dealer finished on %s", self.dealer_hand)

        self.dealer_done()

    def _settle(self, hand: Hand) -> Settlement:
        outcome, winnings = settle(hand, self.dealer_hand)
        net = self.player.update_profit_loss(winnings)
        settlement = Settlement(
            player_hand=hand.snapshot(),
            dealer_hand=self.dealer_hand.snapshot(),
            outcome=outcome,
            winnings=winnings,
            net=net,
        )
        self.settlements.append(settlement)
        self.events.emit_new(
            _OUTCOME_EVENTS[outcome],
            outcome=outcome.label,
            player_value=hand.value,
            dealer_value=self.dealer_hand.value,
            winnings=winnings,
            net=net,
        )
        logger.debug("Settled %r vs %r: %s, winnings %s", hand, self.dealer_hand, outcome.value, winnings)
        return settlement

    def table_view(self) -> TableView:
        """Snapshots of both hands; the hole card stays hidden until the dealer plays."""
        if self.current_hand is None:
            raise InvalidAction("No cards have been dealt")
        return TableView(
            player_hand=self.current_hand.snapshot(),
            dealer_hand=self.dealer_hand.snapshot(hide_hole=not self._dealer_revealed),
            bust_probability=bust_probability(self.current_hand, self.shoe),
            pending_hands=len(self.pending),
        )

    def _table_data(self) -> dict:
        view = self.table_view()
        return {
            "player_hand": view.player_hand,
            "dealer_hand": view.dealer_hand,
            "bust_probability": view.bust_probability,
            "pending_hands": view.pending_hands,
        }

    def play(self, decisions: DecisionProvider) -> list[Settlement]:
        """
        Run the whole round against a decision provider.

        Illegal wagers and actions are reported as INVALID_ACTION events and
        the player is asked again.
        """
        while self.state == RoundState.AWAITING_WAGER:
            try:
                self.start(decisions.read_wager_amount())
            except InvalidWager as exc:
                self.events.emit_new(EventType.INVALID_ACTION, message=str(exc))

        while not self.is_complete:
            self.events.emit_new(EventType.AWAITING_ACTION, **self._table_data())
            action = decisions.read_player_action()
            try:
                self.apply(action)
            except InvalidAction as exc:
                self.events.emit_new(EventType.INVALID_ACTION, message=str(exc))

        return list(self.settlements)
