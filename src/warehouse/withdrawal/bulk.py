"""Bulk withdrawals — draw down stock for many products in one call.

A batch is processed strictly in input order. Stock for every distinct
product in the batch is read once up front into a StockLedger; each item is
then checked against the ledger as it stands after the items before it, so
the running balance of a product can never go below zero.

Each item passes through five stages and stops at the first one that fails:

1. field validation (title, quantity, end time)
2. the product must exist
3. the quantity must be covered by the tracked balance
4. no persisted withdrawal may match the full
   (product, title, quantity, end time) tuple
5. commit: persist, then decrement the tracked balance

Items are independent. A failed item leaves the ledger untouched and does not
stop the batch, and items that committed stay committed.

Known gaps:

- Stock is checked before duplicates, so a repeated item in the same batch
  that the remaining stock cannot cover is reported as insufficient stock
  rather than as a duplicate.
- Balances are read once per batch without any lock, so two batches running
  at the same time against the same product can both spend the same stock.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import uuid4

import structlog
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from warehouse.product.product import Product
from warehouse.shared.bulk import GENERAL_FIELD, BulkOutcome, ItemError, field_messages
from warehouse.stock.balance import StockLedger
from warehouse.utils.logging import add_context, clear_context
from warehouse.withdrawal.withdrawal import Withdrawal

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class WithdrawalLine:
    """One requested withdrawal, exactly as submitted."""

    product_id: str | None = None
    title: str | None = None
    quantity: float | None = None
    end_time: datetime | None = None


def format_quantity(value) -> str:
    """Render a quantity in full, dropping the fraction of whole numbers."""
    value = float(value)
    return str(int(value)) if value.is_integer() else repr(value)


def insufficient_stock_message(available, requested) -> str:
    return f"Insufficient stock. Available: {format_quantity(available)}, requested: {format_quantity(requested)}"


class BulkWithdrawalProcessor:
    def __init__(self):
        self.products = current_domain.repository_for(Product)
        self.withdrawals = current_domain.repository_for(Withdrawal)

    def process(self, lines, ledger: StockLedger | None = None) -> BulkOutcome:
        """Run every line through the pipeline and report one result per line.

        ``ledger`` defaults to a fresh snapshot of the products in ``lines``.
        """
        lines = list(lines)
        if ledger is None:
            ledger = StockLedger.snapshot(line.product_id for line in lines)

        outcome = BulkOutcome()
        add_context(batch_id=str(uuid4()))
        try:
            logger.info("Bulk withdrawal started", items=len(lines))
            for index, line in enumerate(lines):
                self._process_line(index, line, ledger, outcome)
            logger.info(
                "Bulk withdrawal finished",
                total=outcome.total,
                succeeded=outcome.success_count,
                failed=outcome.error_count,
            )
        finally:
            clear_context("batch_id")

        return outcome

    def _process_line(self, index, line, ledger, outcome):
        product_id = str(line.product_id) if line.product_id else None

        def reject(*errors):
            for error in errors:
                logger.warning("Withdrawal rejected", index=index, field=error.field, reason=error.message)
            outcome.fail(index, *errors)

        try:
            withdrawal = Withdrawal.record(
                product_id=line.product_id,
                title=line.title,
                quantity=line.quantity,
                end_time=line.end_time,
            )
        except ValidationError as exc:
            reject(
                *(
                    ItemError(index=index, field=field_name, message=message, product_id=product_id)
                    for field_name, message in field_messages(exc)
                )
            )
            return

        if self.products.find_by_id(product_id) is None:
            reject(ItemError(index=index, field="product_id", message="Product does not exist", product_id=product_id))
            return

        requested = withdrawal.quantity
        available = ledger.available(product_id)
        if not ledger.covers(product_id, requested):
            reject(
                ItemError(
                    index=index,
                    field="quantity",
                    message=insufficient_stock_message(available, requested),
                    product_id=product_id,
                    available=available,
                    requested=requested,
                )
            )
            return

        if self.withdrawals.exists_identical(product_id, withdrawal.title, requested, withdrawal.end_time):
            reject(
                ItemError(
                    index=index,
                    field=GENERAL_FIELD,
                    message="This withdrawal was already recorded",
                    product_id=product_id,
                )
            )
            return

        try:
            self.withdrawals.add(withdrawal)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Withdrawal could not be saved", index=index, product_id=product_id)
            outcome.fail(
                index,
                ItemError(
                    index=index,
                    field=GENERAL_FIELD,
                    message=f"Failed to record withdrawal: {exc}",
                    product_id=product_id,
                ),
            )
            return

        ledger.withdraw(product_id, requested)
        outcome.succeed(index, withdrawal)
