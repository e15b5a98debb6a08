"""Stock balance — available stock derived from the entry and withdrawal ledgers.

Nothing here is cached: every call reads the ledgers as they are at that
moment.
"""

from protean.utils.globals import current_domain

from warehouse.entry.entry import Entry
from warehouse.utils.logging import get_logger
from warehouse.withdrawal.withdrawal import Withdrawal

logger = get_logger(__name__)


def available_stock(product_id) -> float:
    """Σ entry quantities − Σ withdrawal quantities for one product."""
    received = current_domain.repository_for(Entry).sum_quantity(product_id)
    withdrawn = current_domain.repository_for(Withdrawal).sum_quantity(product_id)
    return received - withdrawn


class StockLedger:
    """Tracked balances for the products touched by one batch run.

    Seeded once from the ledgers, then mutated in memory as withdrawals in the
    batch commit. A ledger belongs to a single run and is discarded with it.
    """

    def __init__(self, balances=None):
        self._balances = {str(key): value for key, value in (balances or {}).items()}

    @classmethod
    def snapshot(cls, product_ids):
        """Read the balance of each distinct product id once."""
        balances = {}
        for product_id in product_ids:
            if not product_id or str(product_id) in balances:
                continue
            balances[str(product_id)] = available_stock(product_id)

        logger.debug("Stock snapshot taken", products=len(balances))
        return cls(balances)

    def available(self, product_id) -> float:
        return self._balances.get(str(product_id), 0.0)

    def covers(self, product_id, quantity) -> bool:
        return quantity <= self.available(product_id)

    def withdraw(self, product_id, quantity):
        """Decrement the tracked balance after a committed withdrawal."""
        self._balances[str(product_id)] = self.available(product_id) - quantity

    def as_dict(self) -> dict[str, float]:
        return dict(self._balances)
