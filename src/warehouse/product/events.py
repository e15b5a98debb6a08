"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Identifier, String

from warehouse.domain import warehouse


@warehouse.event(part_of="Product")
class ProductCreated:
    """A product was added to the catalog."""

    __version__ = 1

    product_id = Identifier(required=True)
    title = String(required=True)
    unit_of_measurement = String(required=True)
    material_type = String(required=True)
    created_at = DateTime(required=True)


@warehouse.event(part_of="Product")
class ProductDetailsUpdated:
    """A product's descriptive fields were changed."""

    __version__ = 1

    product_id = Identifier(required=True)
    title = String(required=True)
    description = String()
    unit_of_measurement = String(required=True)
    material_type = String(required=True)
    updated_at = DateTime(required=True)
