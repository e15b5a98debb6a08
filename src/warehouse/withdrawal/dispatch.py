"""Stock dispatch — record, correct and delete single withdrawals."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, Identifier, String
from protean.utils.globals import current_domain

from warehouse.domain import warehouse
from warehouse.product.product import Product
from warehouse.stock.balance import available_stock
from warehouse.withdrawal.bulk import insufficient_stock_message
from warehouse.withdrawal.withdrawal import Withdrawal

logger = structlog.get_logger(__name__)


@warehouse.command(part_of="Withdrawal")
class RecordWithdrawal:
    product_id = Identifier(required=True)
    title = String(required=True, max_length=255)
    quantity = Float(required=True)
    end_time = DateTime(required=True)


@warehouse.command(part_of="Withdrawal")
class UpdateWithdrawal:
    withdrawal_id = Identifier(required=True)
    title = String(required=True, max_length=255)
    quantity = Float(required=True)
    end_time = DateTime(required=True)


@warehouse.command(part_of="Withdrawal")
class DeleteWithdrawal:
    withdrawal_id = Identifier(required=True)


@warehouse.command_handler(part_of=Withdrawal)
class StockDispatchHandler:
    @handle(RecordWithdrawal)
    def record_withdrawal(self, command):
        withdrawal = Withdrawal.record(
            product_id=command.product_id,
            title=command.title,
            quantity=command.quantity,
            end_time=command.end_time,
        )
        if current_domain.repository_for(Product).find_by_id(withdrawal.product_id) is None:
            raise ValidationError({"product_id": ["Product does not exist"]})

        available = available_stock(withdrawal.product_id)
        if withdrawal.quantity > available:
            raise ValidationError({"quantity": [insufficient_stock_message(available, withdrawal.quantity)]})

        repo = current_domain.repository_for(Withdrawal)
        if repo.exists_identical(withdrawal.product_id, withdrawal.title, withdrawal.quantity, withdrawal.end_time):
            raise ValidationError({"title": ["This withdrawal was already recorded"]})

        repo.add(withdrawal)
        logger.info(
            "Withdrawal recorded",
            withdrawal_id=str(withdrawal.id),
            product_id=str(withdrawal.product_id),
            quantity=withdrawal.quantity,
        )
        return str(withdrawal.id)

    @handle(UpdateWithdrawal)
    def update_withdrawal(self, command):
        repo = current_domain.repository_for(Withdrawal)
        withdrawal = repo.get(command.withdrawal_id)

        # The row's current quantity is already counted in the balance
        available = available_stock(withdrawal.product_id) + withdrawal.quantity
        if command.quantity > available:
            raise ValidationError({"quantity": [insufficient_stock_message(available, command.quantity)]})

        withdrawal.update(
            title=command.title,
            quantity=command.quantity,
            end_time=command.end_time,
        )
        repo.add(withdrawal)

    @handle(DeleteWithdrawal)
    def delete_withdrawal(self, command):
        repo = current_domain.repository_for(Withdrawal)
        try:
            withdrawal = repo.get(command.withdrawal_id)
        except ObjectNotFoundError:
            return False

        repo._dao.delete(withdrawal)
        logger.info("Withdrawal deleted", withdrawal_id=str(withdrawal.id), product_id=str(withdrawal.product_id))
        return True
