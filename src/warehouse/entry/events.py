"""Domain events for the Entry aggregate."""

from protean.fields import DateTime, Float, Identifier

from warehouse.domain import warehouse


@warehouse.event(part_of="Entry")
class EntryRecorded:
    """Stock was received from a supplier."""

    __version__ = 1

    entry_id = Identifier(required=True)
    product_id = Identifier(required=True)
    supplier_id = Identifier(required=True)
    quantity = Float(required=True)
    price = Float()
    start_time = DateTime(required=True)


@warehouse.event(part_of="Entry")
class EntryUpdated:
    """Quantity, price or date of a stock entry was corrected."""

    __version__ = 1

    entry_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Float(required=True)
    quantity = Float(required=True)
    price = Float()
    start_time = DateTime(required=True)
    updated_at = DateTime(required=True)
