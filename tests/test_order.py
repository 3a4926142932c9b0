"""Tests for the Order model and its matched-units invariant."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from viop_match.models import Order, OrderSide


class TestMatchedUnitsInvariant:
    def test_construction_rejects_overfilled_order(self):
        with pytest.raises(PydanticValidationError):
            Order(
                order_id="X",
                trade_date="2025-05-02",
                contract="F_TCELL0525",
                side=OrderSide.LONG,
                units=2,
                price="10",
                matched_units=3,
            )

    def test_rejected_assignment_leaves_order_unchanged(self, make_order):
        order = make_order("LONG", 2, "10")

        with pytest.raises(PydanticValidationError):
            order.matched_units = 3

        assert order.matched_units == 0
        assert order.remaining == 2

    def test_assignment_up_to_units_is_allowed(self, make_order):
        order = make_order("LONG", 2, "10")

        order.matched_units = 2

        assert order.remaining == 0

    def test_matched_units_never_decrease(self, make_order):
        order = make_order("SHORT", 5, "10.15")
        order.apply_fill(3)

        with pytest.raises(ValueError):
            order.matched_units = 1

        assert order.matched_units == 3

    def test_units_cannot_drop_below_matched(self, make_order):
        order = make_order("LONG", 5, "10")
        order.apply_fill(4)

        with pytest.raises(PydanticValidationError):
            order.units = 3

        assert order.units == 5
        assert order.remaining == 1


class TestApplyFill:
    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_quantity(self, make_order, quantity):
        order = make_order("LONG", 2, "10")

        with pytest.raises(ValueError):
            order.apply_fill(quantity)

        assert order.matched_units == 0

    def test_quantity_above_remaining(self, make_order):
        order = make_order("LONG", 2, "10")

        with pytest.raises(ValueError):
            order.apply_fill(3)

        assert order.matched_units == 0

    def test_exhausted_order_rejects_more(self, make_order):
        order = make_order("SHORT", 2, "10.15")
        order.apply_fill(1)
        order.apply_fill(1)

        with pytest.raises(ValueError):
            order.apply_fill(1)

        assert order.matched_units == 2
        assert order.remaining == 0
