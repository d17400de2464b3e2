"""Player identity and lifetime wager/profit bookkeeping."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from blackjack.errors import InvalidWager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayerStats:
    """Statistics shown on the stats screen."""

    name: str
    total_wager: int
    profit_loss: Decimal


@dataclass
class Player:
    """
    A named player whose counters live for the whole session.

    total_wager is the sum of every wager placed, never reset between rounds.
    profit_loss is the running net.
    """

    name: str
    total_wager: int = 0
    profit_loss: Decimal = field(default_factory=lambda: Decimal("0"))

    def place_wager(self, amount: int) -> None:
        """Record a new round's wager."""
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise InvalidWager(f"Wager must be a positive whole amount, got {amount!r}")
        self.total_wager += amount
        logger.debug("%s wagered %d (lifetime %d)", self.name, amount, self.total_wager)

    def update_profit_loss(self, winnings: Decimal | int) -> Decimal:
        """
        Apply a settlement and return the net change.

        Net is winnings minus the lifetime wager total, not the current
        round's wager.
        """
        net = Decimal(winnings) - self.total_wager
        self.profit_loss += net
        logger.debug("%s settled %s (net %s, running %s)", self.name, winnings, net, self.profit_loss)
        return net

    @property
    def stats(self) -> PlayerStats:
        return PlayerStats(
            name=self.name,
            total_wager=self.total_wager,
            profit_loss=self.profit_loss,
        )
