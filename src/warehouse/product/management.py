"""Product management — commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from warehouse.domain import warehouse
from warehouse.entry.entry import Entry
from warehouse.product.product import Product
from warehouse.withdrawal.withdrawal import Withdrawal

logger = structlog.get_logger(__name__)


@warehouse.command(part_of="Product")
class CreateProduct:
    title = String(required=True, max_length=255)
    description = String(max_length=255)
    unit_of_measurement = String(required=True, max_length=255)
    material_type = String(required=True, max_length=255)


@warehouse.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    title = String(max_length=255)
    description = String(max_length=255)
    unit_of_measurement = String(max_length=255)
    material_type = String(max_length=255)


@warehouse.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)


def is_referenced(product_id) -> bool:
    """Whether any ledger row points at the product."""
    return bool(
        current_domain.repository_for(Entry).for_product(product_id)
        or current_domain.repository_for(Withdrawal).for_product(product_id)
    )


def ensure_unique_title(title, exclude_id=None):
    existing = current_domain.repository_for(Product).find_by_title(title)
    if existing is not None and str(existing.id) != str(exclude_id):
        raise ValidationError({"title": [f"A product titled '{existing.title}' already exists"]})


@warehouse.command_handler(part_of=Product)
class ProductManagementHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            title=command.title,
            description=command.description,
            unit_of_measurement=command.unit_of_measurement,
            material_type=command.material_type,
        )
        ensure_unique_title(product.title)

        current_domain.repository_for(Product).add(product)
        logger.info("Product created", product_id=str(product.id), title=product.title)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        if is_referenced(product.id):
            raise ValidationError({"product_id": ["Product is referenced by stock records and cannot be changed"]})
        if command.title is not None:
            ensure_unique_title(command.title, exclude_id=product.id)

        product.update_details(
            title=command.title,
            description=command.description,
            unit_of_measurement=command.unit_of_measurement,
            material_type=command.material_type,
        )
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        try:
            product = repo.get(command.product_id)
        except ObjectNotFoundError:
            return False

        if is_referenced(product.id):
            raise ValidationError({"product_id": ["Product is referenced by stock records and cannot be deleted"]})

        repo._dao.delete(product)
        logger.info("Product deleted", product_id=str(product.id))
        return True
