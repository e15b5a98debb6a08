"""Tests for quantity validation and timestamp comparison helpers."""

import math
from datetime import UTC, datetime, timedelta, timezone

import pytest
from protean.exceptions import ValidationError
from warehouse.shared.quantity import require_positive
from warehouse.shared.records import same_instant


class TestRequirePositive:
    @pytest.mark.parametrize("quantity", [1, 0.5, 1e6])
    def test_accepts_positive_numbers(self, quantity):
        require_positive(quantity)

    @pytest.mark.parametrize("quantity", [0, -1, -0.01])
    def test_rejects_non_positive(self, quantity):
        with pytest.raises(ValidationError) as exc:
            require_positive(quantity)
        assert exc.value.messages == {"quantity": ["Quantity must be positive"]}

    @pytest.mark.parametrize("quantity", [None, "10", True])
    def test_rejects_non_numbers(self, quantity):
        with pytest.raises(ValidationError) as exc:
            require_positive(quantity)
        assert exc.value.messages == {"quantity": ["Quantity must be a number"]}

    @pytest.mark.parametrize("quantity", [math.nan, math.inf, -math.inf])
    def test_rejects_non_finite(self, quantity):
        with pytest.raises(ValidationError) as exc:
            require_positive(quantity)
        assert exc.value.messages == {"quantity": ["Quantity must be a finite number"]}

    def test_custom_field_name(self):
        with pytest.raises(ValidationError) as exc:
            require_positive(0, field="amount")
        assert "amount" in exc.value.messages


class TestSameInstant:
    def test_naive_is_treated_as_utc(self):
        assert same_instant(datetime(2026, 3, 2, 17, 30), datetime(2026, 3, 2, 17, 30, tzinfo=UTC))

    def test_offsets_are_normalized(self):
        lima = timezone(timedelta(hours=-5))
        assert same_instant(datetime(2026, 3, 2, 12, 30, tzinfo=lima), datetime(2026, 3, 2, 17, 30, tzinfo=UTC))

    def test_different_instants(self):
        assert not same_instant(datetime(2026, 3, 2, 17, 30, tzinfo=UTC), datetime(2026, 3, 2, 17, 31, tzinfo=UTC))

    def test_none_only_matches_none(self):
        assert same_instant(None, None)
        assert not same_instant(None, datetime(2026, 3, 2, tzinfo=UTC))
