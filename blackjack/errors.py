"""Exception hierarchy for the blackjack engine."""


class BlackjackError(Exception):
    """Base class for all engine errors."""


class InvalidCard(BlackjackError, ValueError):
    """A card was built from something outside the suit/rank enumerations."""


class InvalidConfig(BlackjackError, ValueError):
    """Configuration value out of range (e.g. a non-positive deck count)."""


class InvalidWager(BlackjackError, ValueError):
    """Wager is not a positive whole amount."""


class InvalidAction(BlackjackError):
    """The requested play is not legal for the hand in its current state."""


class HandLocked(InvalidAction):
    """The hand is locked or full and cannot take another card."""


class ShoeExhausted(BlackjackError, IndexError):
    """Every card in the shoe has already been drawn."""
