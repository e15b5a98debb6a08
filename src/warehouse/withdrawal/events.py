"""Domain events for the Withdrawal aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from warehouse.domain import warehouse


@warehouse.event(part_of="Withdrawal")
class WithdrawalRecorded:
    """Stock was drawn down from the warehouse."""

    __version__ = 1

    withdrawal_id = Identifier(required=True)
    product_id = Identifier(required=True)
    title = String(required=True)
    quantity = Float(required=True)
    end_time = DateTime(required=True)


@warehouse.event(part_of="Withdrawal")
class WithdrawalUpdated:
    """Title, quantity or date of a withdrawal was corrected."""

    __version__ = 1

    withdrawal_id = Identifier(required=True)
    product_id = Identifier(required=True)
    title = String(required=True)
    previous_quantity = Float(required=True)
    quantity = Float(required=True)
    end_time = DateTime(required=True)
    updated_at = DateTime(required=True)
