"""Bulk product creation — create many catalog items in one call.

Every item is validated and saved on its own; a bad item is reported and
skipped without affecting the others.
"""

from dataclasses import dataclass, field

import structlog
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from warehouse.product.product import Product
from warehouse.shared.bulk import GENERAL_FIELD, ItemError, field_messages

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ProductLine:
    title: str | None = None
    unit_of_measurement: str | None = None
    material_type: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class ProductItemResult:
    index: int
    product: Product | None = None
    error: ItemError | None = None


@dataclass
class BulkProductResult:
    results: list[ProductItemResult] = field(default_factory=list)
    errors: list[ItemError] = field(default_factory=list)
    total_created: int = 0
    total_failed: int = 0


def create_products(lines) -> BulkProductResult:
    """Create each product line, in order."""
    outcome = BulkProductResult()
    if not lines:
        outcome.errors.append(ItemError(index=-1, field="products", message="The product list cannot be empty"))
        return outcome

    repo = current_domain.repository_for(Product)
    for index, line in enumerate(lines):
        try:
            product = Product.create(
                title=line.title,
                unit_of_measurement=line.unit_of_measurement,
                material_type=line.material_type,
                description=line.description,
            )
        except ValidationError as exc:
            field_name, message = field_messages(exc)[0]
            _fail(outcome, ItemError(index=index, field=field_name, message=message))
            continue

        if repo.find_by_title(product.title) is not None:
            _fail(outcome, ItemError(index=index, field="title", message=f"Product '{product.title}' already exists"))
            continue

        try:
            repo.add(product)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Product could not be saved", index=index, title=product.title)
            _fail(outcome, ItemError(index=index, field=GENERAL_FIELD, message=f"Failed to create product: {exc}"))
            continue

        outcome.results.append(ProductItemResult(index=index, product=product))
        outcome.total_created += 1

    logger.info("Bulk product creation finished", created=outcome.total_created, failed=outcome.total_failed)
    return outcome


def _fail(outcome, error):
    outcome.results.append(ProductItemResult(index=error.index, error=error))
    outcome.errors.append(error)
    outcome.total_failed += 1
