"""Entry aggregate — one stock-in event for a product from a supplier.

Entries form an append-only ledger. Summed per product they are the positive
side of the stock balance.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, Identifier

from warehouse.domain import warehouse
from warehouse.entry.events import EntryRecorded, EntryUpdated
from warehouse.shared.quantity import require_positive
from warehouse.shared.records import fetch_all, same_instant


@warehouse.aggregate
class Entry:
    product_id = Identifier(required=True)
    supplier_id = Identifier(required=True)
    quantity = Float(required=True)
    price = Float(required=True, min_value=0.0)
    start_time = DateTime(required=True)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def record(cls, product_id, supplier_id, quantity, price, start_time):
        """Build a new, unsaved entry."""
        now = datetime.now(UTC)
        entry = cls(
            product_id=product_id,
            supplier_id=supplier_id,
            quantity=quantity,
            price=price,
            start_time=start_time,
            created_at=now,
            updated_at=now,
        )
        require_positive(entry.quantity)

        entry.raise_(
            EntryRecorded(
                entry_id=str(entry.id),
                product_id=str(entry.product_id),
                supplier_id=str(entry.supplier_id),
                quantity=entry.quantity,
                price=entry.price,
                start_time=entry.start_time,
            )
        )
        return entry

    def update(self, quantity, price, start_time):
        """Correct the received quantity, unit price and reception time."""
        require_positive(quantity)

        previous_quantity = self.quantity
        self.quantity = quantity
        self.price = price
        self.start_time = start_time
        self.updated_at = datetime.now(UTC)

        self.raise_(
            EntryUpdated(
                entry_id=str(self.id),
                product_id=str(self.product_id),
                previous_quantity=previous_quantity,
                quantity=self.quantity,
                price=self.price,
                start_time=self.start_time,
                updated_at=self.updated_at,
            )
        )


@warehouse.repository(part_of=Entry)
class EntryRepository:
    def for_product(self, product_id) -> list[Entry]:
        return fetch_all(self._dao, product_id=str(product_id))

    def sum_quantity(self, product_id) -> float:
        """Total quantity ever received for a product; 0 when there are no entries."""
        return sum((entry.quantity or 0.0) for entry in self.for_product(product_id))

    def exists_identical(self, product_id, supplier_id, quantity, price, start_time) -> bool:
        """Whether a persisted entry matches every field of the given tuple."""
        return any(
            str(entry.supplier_id) == str(supplier_id)
            and entry.quantity == quantity
            and entry.price == price
            and same_instant(entry.start_time, start_time)
            for entry in self.for_product(product_id)
        )

    def list_recent(self) -> list[Entry]:
        """All entries, newest first."""
        return sorted(fetch_all(self._dao), key=lambda entry: entry.created_at, reverse=True)
