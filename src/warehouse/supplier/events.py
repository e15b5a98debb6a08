"""Domain events for the Supplier aggregate."""

from protean.fields import DateTime, Identifier, String

from warehouse.domain import warehouse


@warehouse.event(part_of="Supplier")
class SupplierRegistered:
    """A supplier was registered and can now deliver stock."""

    __version__ = 1

    supplier_id = Identifier(required=True)
    name = String(required=True)
    ruc = String(required=True)
    registered_at = DateTime(required=True)
