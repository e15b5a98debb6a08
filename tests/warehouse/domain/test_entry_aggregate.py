"""Tests for the Entry aggregate."""

from datetime import UTC, datetime

import pytest
from protean.exceptions import ValidationError
from warehouse.entry.entry import Entry
from warehouse.entry.events import EntryRecorded, EntryUpdated

START = datetime(2026, 3, 1, 8, 0, tzinfo=UTC)


def _record(**overrides):
    defaults = {"product_id": "prod-001", "supplier_id": "sup-001", "quantity": 100, "price": 0.35, "start_time": START}
    defaults.update(overrides)
    return Entry.record(**defaults)


class TestRecordEntry:
    def test_fields_are_set(self):
        entry = _record()
        assert entry.quantity == 100.0
        assert entry.price == 0.35
        assert entry.start_time == START

    def test_raises_recorded_event(self):
        entry = _record()
        assert isinstance(entry._events[0], EntryRecorded)
        assert entry._events[0].supplier_id == "sup-001"

    def test_zero_quantity_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _record(quantity=0)
        assert exc.value.messages == {"quantity": ["Quantity must be positive"]}

    def test_negative_price_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _record(price=-1)
        assert "price" in exc.value.messages

    def test_free_entry_is_allowed(self):
        assert _record(price=0).price == 0.0


class TestUpdateEntry:
    def test_update_raises_event_with_previous_quantity(self):
        entry = _record()
        entry.update(quantity=80, price=0.4, start_time=START)

        assert entry.quantity == 80.0
        event = entry._events[-1]
        assert isinstance(event, EntryUpdated)
        assert event.previous_quantity == 100.0
