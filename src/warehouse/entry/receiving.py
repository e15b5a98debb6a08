"""Stock receiving — record, correct and delete stock entries."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, Identifier, String
from protean.utils.globals import current_domain

from warehouse.domain import warehouse
from warehouse.entry.entry import Entry
from warehouse.product.product import Product
from warehouse.supplier.supplier import Supplier

logger = structlog.get_logger(__name__)


@warehouse.command(part_of="Entry")
class RecordEntry:
    """Receive stock of a product from the supplier with the given RUC."""

    product_id = Identifier(required=True)
    ruc = String(required=True, max_length=20)
    quantity = Float(required=True)
    price = Float(required=True)
    start_time = DateTime(required=True)


@warehouse.command(part_of="Entry")
class UpdateEntry:
    entry_id = Identifier(required=True)
    quantity = Float(required=True)
    price = Float(required=True)
    start_time = DateTime(required=True)


@warehouse.command(part_of="Entry")
class DeleteEntry:
    entry_id = Identifier(required=True)


@warehouse.command_handler(part_of=Entry)
class StockReceivingHandler:
    @handle(RecordEntry)
    def record_entry(self, command):
        supplier = current_domain.repository_for(Supplier).find_by_ruc(command.ruc)
        if supplier is None:
            raise ValidationError({"ruc": [f"No supplier registered with RUC {command.ruc}"]})

        if current_domain.repository_for(Product).find_by_id(command.product_id) is None:
            raise ValidationError({"product_id": ["Product does not exist"]})

        repo = current_domain.repository_for(Entry)
        entry = Entry.record(
            product_id=command.product_id,
            supplier_id=supplier.id,
            quantity=command.quantity,
            price=command.price,
            start_time=command.start_time,
        )
        if repo.exists_identical(entry.product_id, supplier.id, entry.quantity, entry.price, entry.start_time):
            raise ValidationError({"ruc": ["This stock entry was already recorded"]})

        repo.add(entry)
        logger.info(
            "Entry recorded",
            entry_id=str(entry.id),
            product_id=str(entry.product_id),
            quantity=entry.quantity,
        )
        return str(entry.id)

    @handle(UpdateEntry)
    def update_entry(self, command):
        repo = current_domain.repository_for(Entry)
        entry = repo.get(command.entry_id)
        entry.update(
            quantity=command.quantity,
            price=command.price,
            start_time=command.start_time,
        )
        repo.add(entry)

    @handle(DeleteEntry)
    def delete_entry(self, command):
        repo = current_domain.repository_for(Entry)
        try:
            entry = repo.get(command.entry_id)
        except ObjectNotFoundError:
            return False

        repo._dao.delete(entry)
        logger.info("Entry deleted", entry_id=str(entry.id), product_id=str(entry.product_id))
        return True
