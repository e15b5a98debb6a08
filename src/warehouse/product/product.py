"""Product aggregate — a catalog item whose stock is tracked by the ledgers."""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, String

from warehouse.domain import warehouse
from warehouse.product.events import ProductCreated, ProductDetailsUpdated
from warehouse.shared.records import fetch_all


def _clean(value):
    return value.strip() if isinstance(value, str) else value


@warehouse.aggregate
class Product:
    """Product aggregate root."""

    title = String(required=True, min_length=4, max_length=255)
    description = String(min_length=4, max_length=255)
    unit_of_measurement = String(required=True, min_length=2, max_length=255)
    material_type = String(required=True, min_length=2, max_length=255)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, title, unit_of_measurement, material_type, description=None):
        now = datetime.now(UTC)
        product = cls(
            title=_clean(title),
            description=_clean(description) or None,
            unit_of_measurement=_clean(unit_of_measurement),
            material_type=_clean(material_type),
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                title=product.title,
                unit_of_measurement=product.unit_of_measurement,
                material_type=product.material_type,
                created_at=now,
            )
        )
        return product

    def update_details(self, title=None, description=None, unit_of_measurement=None, material_type=None):
        """Change descriptive fields. Omitted values are left as they are."""
        if title is not None:
            self.title = _clean(title)
        if description is not None:
            self.description = _clean(description) or None
        if unit_of_measurement is not None:
            self.unit_of_measurement = _clean(unit_of_measurement)
        if material_type is not None:
            self.material_type = _clean(material_type)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductDetailsUpdated(
                product_id=str(self.id),
                title=self.title,
                description=self.description,
                unit_of_measurement=self.unit_of_measurement,
                material_type=self.material_type,
                updated_at=self.updated_at,
            )
        )


@warehouse.repository(part_of=Product)
class ProductRepository:
    def find_by_id(self, product_id) -> Product | None:
        """Return the product, or None when the id is unknown."""
        if not product_id:
            return None
        try:
            return self.get(str(product_id))
        except ObjectNotFoundError:
            return None

    def list_all(self) -> list[Product]:
        return sorted(fetch_all(self._dao), key=lambda product: product.title.lower())

    def find_by_title(self, title) -> Product | None:
        """Case-insensitive title lookup."""
        if not title:
            return None
        wanted = title.strip().lower()
        return next((product for product in fetch_all(self._dao) if product.title.lower() == wanted), None)
