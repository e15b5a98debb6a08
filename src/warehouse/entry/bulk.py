"""Bulk entries — receive stock for many products in one call.

Items are processed in input order and independently of each other:
fields, then supplier (by RUC), then product, then the duplicate check, then
commit. Entries only add stock, so there is no balance to track.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import uuid4

import structlog
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from warehouse.entry.entry import Entry
from warehouse.entry.receiving import RecordEntry
from warehouse.product.product import Product
from warehouse.shared.bulk import GENERAL_FIELD, BulkOutcome, ItemError, field_messages
from warehouse.shared.quantity import require_positive
from warehouse.supplier.supplier import Supplier
from warehouse.utils.logging import add_context, clear_context

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class EntryLine:
    product_id: str | None = None
    ruc: str | None = None
    quantity: float | None = None
    price: float | None = None
    start_time: datetime | None = None


def record_entries(lines) -> BulkOutcome:
    outcome = BulkOutcome()
    lines = list(lines)

    add_context(batch_id=str(uuid4()))
    try:
        logger.info("Bulk entry started", items=len(lines))
        for index, line in enumerate(lines):
            _record_line(index, line, outcome)
        logger.info(
            "Bulk entry finished",
            total=outcome.total,
            succeeded=outcome.success_count,
            failed=outcome.error_count,
        )
    finally:
        clear_context("batch_id")

    return outcome


def _record_line(index, line, outcome):
    product_id = str(line.product_id) if line.product_id else None

    def error(field_name, message):
        return ItemError(index=index, field=field_name, message=message, ruc=line.ruc, product_id=product_id)

    try:
        command = RecordEntry(
            product_id=line.product_id,
            ruc=line.ruc,
            quantity=line.quantity,
            price=line.price,
            start_time=line.start_time,
        )
        require_positive(command.quantity)
    except ValidationError as exc:
        outcome.fail(index, *(error(field_name, message) for field_name, message in field_messages(exc)))
        return

    supplier = current_domain.repository_for(Supplier).find_by_ruc(command.ruc)
    if supplier is None:
        outcome.fail(index, error("ruc", f"No supplier registered with RUC {command.ruc}"))
        return

    if current_domain.repository_for(Product).find_by_id(product_id) is None:
        outcome.fail(index, error("product_id", "Product does not exist"))
        return

    repo = current_domain.repository_for(Entry)
    if repo.exists_identical(product_id, supplier.id, command.quantity, command.price, command.start_time):
        outcome.fail(index, error(GENERAL_FIELD, "This stock entry was already recorded"))
        return

    try:
        entry = Entry.record(
            product_id=product_id,
            supplier_id=supplier.id,
            quantity=command.quantity,
            price=command.price,
            start_time=command.start_time,
        )
        repo.add(entry)
    except ValidationError as exc:
        outcome.fail(index, *(error(field_name, message) for field_name, message in field_messages(exc)))
        return
    except Exception as exc:  # noqa: BLE001
        logger.exception("Entry could not be saved", index=index, product_id=product_id)
        outcome.fail(index, error(GENERAL_FIELD, f"Failed to record entry: {exc}"))
        return

    outcome.succeed(index, entry)
