"""Round state enumeration."""

from enum import Enum, auto


class RoundState(Enum):
    """
    Round state machine states.

    Flow: AWAITING_WAGER → DEALT → PLAYER_TURN → DEALER_TURN → SETTLED
    A split sends SETTLED back to PLAYER_TURN for each pending hand.
    """

    # Waiting for the player's stake
    AWAITING_WAGER = auto()

    # Two cards each, player first
    DEALT = auto()

    # Player actions
    PLAYER_TURN = auto()

    # Dealer draws to 17
    DEALER_TURN = auto()

    # Current hand paid out
    SETTLED = auto()

    # Shoe ran out mid-round
    ABORTED = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


# Valid state transitions
VALID_TRANSITIONS: dict[RoundState, list[RoundState]] = {
    RoundState.AWAITING_WAGER: [RoundState.DEALT, RoundState.ABORTED],
    RoundState.DEALT: [RoundState.PLAYER_TURN, RoundState.ABORTED],
    RoundState.PLAYER_TURN: [RoundState.PLAYER_TURN, RoundState.DEALER_TURN, RoundState.ABORTED],
    RoundState.DEALER_TURN: [RoundState.SETTLED, RoundState.ABORTED],
    RoundState.SETTLED: [RoundState.PLAYER_TURN, RoundState.ABORTED],
    RoundState.ABORTED: [],  # Terminal state
}


def is_valid_transition(from_state: RoundState, to_state: RoundState) -> bool:
    """
    Check if a state transition is valid.

    Args:
        from_state: Current state
        to_state: Desired state

    Returns:
        True if the transition is allowed
    """
    return to_state in VALID_TRANSITIONS.get(from_state, [])
