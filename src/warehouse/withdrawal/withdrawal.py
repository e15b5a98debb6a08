"""Withdrawal aggregate — one stock-out event for a product.

Withdrawals form the negative side of the stock balance. Whether enough stock
exists is decided by the caller before a withdrawal is persisted; the
aggregate itself only guards its own fields.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, Identifier, String

from warehouse.domain import warehouse
from warehouse.shared.quantity import require_positive
from warehouse.shared.records import fetch_all, same_instant
from warehouse.withdrawal.events import WithdrawalRecorded, WithdrawalUpdated


def _clean(title):
    return title.strip() if isinstance(title, str) else title


@warehouse.aggregate
class Withdrawal:
    product_id = Identifier(required=True)
    title = String(required=True, max_length=255)
    quantity = Float(required=True)
    end_time = DateTime(required=True)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def record(cls, product_id, title, quantity, end_time):
        """Build a new, unsaved withdrawal.

        Raises ValidationError when a field is missing or malformed, or when
        the quantity is not positive.
        """
        now = datetime.now(UTC)
        withdrawal = cls(
            product_id=product_id,
            title=_clean(title),
            quantity=quantity,
            end_time=end_time,
            created_at=now,
            updated_at=now,
        )
        require_positive(withdrawal.quantity)

        withdrawal.raise_(
            WithdrawalRecorded(
                withdrawal_id=str(withdrawal.id),
                product_id=str(withdrawal.product_id),
                title=withdrawal.title,
                quantity=withdrawal.quantity,
                end_time=withdrawal.end_time,
            )
        )
        return withdrawal

    def update(self, title, quantity, end_time):
        require_positive(quantity)

        previous_quantity = self.quantity
        self.title = _clean(title)
        self.quantity = quantity
        self.end_time = end_time
        self.updated_at = datetime.now(UTC)

        self.raise_(
            WithdrawalUpdated(
                withdrawal_id=str(self.id),
                product_id=str(self.product_id),
                title=self.title,
                previous_quantity=previous_quantity,
                quantity=self.quantity,
                end_time=self.end_time,
                updated_at=self.updated_at,
            )
        )


@warehouse.repository(part_of=Withdrawal)
class WithdrawalRepository:
    def for_product(self, product_id) -> list[Withdrawal]:
        return fetch_all(self._dao, product_id=str(product_id))

    def sum_quantity(self, product_id) -> float:
        """Total quantity ever withdrawn for a product; 0 when there are none."""
        return sum((withdrawal.quantity or 0.0) for withdrawal in self.for_product(product_id))

    def exists_identical(self, product_id, title, quantity, end_time) -> bool:
        """Whether a persisted withdrawal matches the full (product, title, quantity, end time) tuple."""
        title = _clean(title)
        return any(
            withdrawal.title == title and withdrawal.quantity == quantity and same_instant(withdrawal.end_time, end_time)
            for withdrawal in self.for_product(product_id)
        )

    def list_recent(self) -> list[Withdrawal]:
        """All withdrawals, newest first."""
        return sorted(fetch_all(self._dao), key=lambda withdrawal: withdrawal.created_at, reverse=True)
