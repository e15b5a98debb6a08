"""Application tests for single stock entry commands."""

import math
from datetime import UTC, datetime

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from warehouse.entry.entry import Entry
from warehouse.entry.receiving import DeleteEntry, RecordEntry, UpdateEntry
from warehouse.stock.balance import available_stock

START = datetime(2026, 3, 1, 8, 0, tzinfo=UTC)


@pytest.fixture()
def product_id(make_product, make_supplier):
    make_supplier()
    return make_product()


def _record(product_id, **overrides):
    defaults = {"product_id": product_id, "ruc": "20123456789", "quantity": 100, "price": 0.35, "start_time": START}
    defaults.update(overrides)
    return current_domain.process(RecordEntry(**defaults), asynchronous=False)


class TestRecordEntry:
    def test_record_resolves_supplier_by_ruc(self, product_id):
        entry_id = _record(product_id)

        entry = current_domain.repository_for(Entry).get(entry_id)
        assert entry.quantity == 100.0
        assert entry.supplier_id is not None
        assert available_stock(product_id) == 100

    def test_unknown_ruc(self, product_id):
        with pytest.raises(ValidationError) as exc:
            _record(product_id, ruc="20999999999")
        assert "ruc" in exc.value.messages

    def test_unknown_product(self, product_id):
        with pytest.raises(ValidationError) as exc:
            _record("prod-missing")
        assert exc.value.messages == {"product_id": ["Product does not exist"]}

    def test_duplicate(self, product_id):
        _record(product_id)
        with pytest.raises(ValidationError) as exc:
            _record(product_id)
        assert exc.value.messages == {"ruc": ["This stock entry was already recorded"]}

    def test_different_price_is_not_a_duplicate(self, product_id):
        _record(product_id)
        _record(product_id, price=0.4)
        assert available_stock(product_id) == 200

    @pytest.mark.parametrize("quantity", [math.nan, math.inf])
    def test_non_finite_quantity_is_rejected(self, product_id, quantity):
        with pytest.raises(ValidationError) as exc:
            _record(product_id, quantity=quantity)
        assert exc.value.messages == {"quantity": ["Quantity must be a finite number"]}
        assert available_stock(product_id) == 0


class TestUpdateAndDeleteEntry:
    def test_update(self, product_id):
        entry_id = _record(product_id)
        current_domain.process(UpdateEntry(entry_id=entry_id, quantity=80, price=0.5, start_time=START), asynchronous=False)

        entry = current_domain.repository_for(Entry).get(entry_id)
        assert entry.quantity == 80.0
        assert entry.price == 0.5

    def test_delete(self, product_id):
        entry_id = _record(product_id)
        assert current_domain.process(DeleteEntry(entry_id=entry_id), asynchronous=False) is True
        assert available_stock(product_id) == 0

    def test_delete_missing_returns_false(self):
        assert current_domain.process(DeleteEntry(entry_id="entry-missing"), asynchronous=False) is False

    def test_entries_are_listed_newest_first(self, product_id):
        first = _record(product_id)
        second = _record(product_id, quantity=5)

        listed = [str(e.id) for e in current_domain.repository_for(Entry).list_recent()]
        assert listed == [second, first]
