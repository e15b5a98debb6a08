"""Shared BDD fixtures and step definitions for the Warehouse domain."""

from pytest_bdd import given, parsers, then
from warehouse.stock.balance import available_stock


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.parse('a product "{title}" with {quantity:d} units received'), target_fixture="product_id")
def _(title, quantity, make_product, receive):
    product_id = make_product(title=title)
    receive(product_id, quantity)
    return product_id


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.parse("item {index:d} is recorded"))
def _(outcome, index):
    assert outcome.results[index].succeeded


@then(parsers.parse('item {index:d} is rejected on "{field}"'))
def _(outcome, index, field):
    result = outcome.results[index]
    assert not result.succeeded
    assert result.errors[0].field == field


@then(parsers.parse("item {index:d} reports {available:d} available and {requested:d} requested"))
def _(outcome, index, available, requested):
    error = outcome.results[index].errors[0]
    assert error.available == available
    assert error.requested == requested


@then(parsers.parse('every item is rejected on "{field}"'))
def _(outcome, field):
    assert outcome.success_count == 0
    assert all(result.errors[0].field == field for result in outcome.results)


@then(parsers.parse("the product has {quantity:d} units available"))
def _(product_id, quantity):
    assert available_stock(product_id) == quantity


@then(parsers.parse("the batch reports {total:d} items, {succeeded:d} succeeded and {failed:d} failed"))
def _(outcome, total, succeeded, failed):
    assert outcome.total == total
    assert outcome.success_count == succeeded
    assert outcome.error_count == failed
