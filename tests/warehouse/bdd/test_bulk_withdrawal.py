"""BDD tests for bulk withdrawals."""

from datetime import UTC, datetime

from pytest_bdd import given, parsers, scenarios, when
from warehouse.withdrawal.bulk import BulkWithdrawalProcessor, WithdrawalLine

END = datetime(2026, 3, 2, 17, 30, tzinfo=UTC)

scenarios("features/bulk_withdrawal.feature")


def withdrawal_lines(product_id, quantities):
    return [
        WithdrawalLine(product_id=product_id, title=f"Line {index}", quantity=quantity, end_time=END)
        for index, quantity in enumerate(quantities)
    ]


def _quantities(text):
    return [float(q) for q in text.replace(" and ", ", ").split(", ")]


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.parse("withdrawals of {quantities} units were already recorded"), target_fixture="submitted")
def _(product_id, quantities):
    lines = withdrawal_lines(product_id, _quantities(quantities))
    assert BulkWithdrawalProcessor().process(lines).success_count == len(lines)
    return lines


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.parse("withdrawals of {quantities} units are submitted in one batch"), target_fixture="outcome")
def _(product_id, quantities):
    return BulkWithdrawalProcessor().process(withdrawal_lines(product_id, _quantities(quantities)))


@when(parsers.parse("two identical withdrawals of {quantity:d} units are submitted in one batch"), target_fixture="outcome")
def _(product_id, quantity):
    line = WithdrawalLine(product_id=product_id, title="Line 0", quantity=quantity, end_time=END)
    return BulkWithdrawalProcessor().process([line, line])


@when(parsers.parse("a withdrawal of {quantity:d} units for an unknown product is submitted"), target_fixture="outcome")
def _(quantity):
    line = WithdrawalLine(product_id="prod-missing", title="Line 0", quantity=quantity, end_time=END)
    return BulkWithdrawalProcessor().process([line])


@when("the same withdrawals are submitted again", target_fixture="outcome")
def _(submitted):
    return BulkWithdrawalProcessor().process(submitted)
