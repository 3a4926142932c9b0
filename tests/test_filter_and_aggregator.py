"""Tests for order filtering and aggregation."""

from decimal import Decimal

from viop_match.core import aggregate_orders, filter_orders
from viop_match.models import OrderSide


class TestFilterOrders:
    def test_empty_filters_keep_everything(self, make_order):
        orders = [make_order("LONG", 1, "10"), make_order("SHORT", 1, "10.15", contract="F_B")]

        assert filter_orders(orders) == orders
        assert filter_orders(orders, set(), set()) == orders

    def test_contract_filter_preserves_order(self, make_order):
        orders = [
            make_order("LONG", 1, "10", contract="F_A"),
            make_order("LONG", 2, "10", contract="F_B"),
            make_order("SHORT", 3, "10", contract="F_A"),
        ]

        kept = filter_orders(orders, allowed_contracts={"F_A"})

        assert [order.units for order in kept] == [1, 3]

    def test_date_filter(self, make_order):
        orders = [
            make_order("LONG", 1, "10", trade_date="2025-04-30"),
            make_order("LONG", 2, "10", trade_date="2025-05-02"),
        ]

        kept = filter_orders(orders, allowed_dates=["2025-05-02"])

        assert [order.trade_date for order in kept] == ["2025-05-02"]

    def test_both_filters_must_pass(self, make_order):
        orders = [
            make_order("LONG", 1, "10", contract="F_A", trade_date="2025-04-30"),
            make_order("LONG", 2, "10", contract="F_A", trade_date="2025-05-02"),
            make_order("LONG", 3, "10", contract="F_B", trade_date="2025-05-02"),
        ]

        kept = filter_orders(orders, {"F_A"}, {"2025-05-02"})

        assert [order.units for order in kept] == [2]


class TestAggregateOrders:
    def test_same_contract_side_price_are_merged(self, make_order):
        orders = [
            make_order("LONG", 5, "98.35", trade_date="2025-04-30"),
            make_order("SHORT", 6, "98.50"),
            make_order("LONG", 3, "98.35", trade_date="2025-05-02"),
            make_order("LONG", 4, "97.90"),
        ]

        aggregated = aggregate_orders(orders)

        assert [(o.side, o.units, o.price) for o in aggregated] == [
            (OrderSide.LONG, 8, Decimal("98.35")),
            (OrderSide.SHORT, 6, Decimal("98.50")),
            (OrderSide.LONG, 4, Decimal("97.90")),
        ]
        assert aggregated[0].trade_date == "2025-04-30"
        assert [o.order_id for o in aggregated] == ["A_0", "A_1", "A_2"]
        assert all(o.matched_units == 0 for o in aggregated)

    def test_sides_and_contracts_stay_apart(self, make_order):
        orders = [
            make_order("LONG", 1, "10"),
            make_order("SHORT", 1, "10"),
            make_order("LONG", 1, "10", contract="F_OTHER"),
        ]

        assert len(aggregate_orders(orders)) == 3

    def test_equal_decimal_prices_merge(self, make_order):
        orders = [make_order("LONG", 1, "97.9"), make_order("LONG", 2, "97.90")]

        aggregated = aggregate_orders(orders)

        assert len(aggregated) == 1
        assert aggregated[0].units == 3

    def test_aggregation_is_idempotent(self, make_order):
        orders = [
            make_order("LONG", 5, "10"),
            make_order("LONG", 3, "10"),
            make_order("SHORT", 2, "10.15"),
        ]

        once = aggregate_orders(orders)
        twice = aggregate_orders(once)

        assert [(o.aggregation_key, o.units) for o in twice] == [
            (o.aggregation_key, o.units) for o in once
        ]

    def test_units_are_conserved_and_inputs_untouched(self, make_order):
        orders = [make_order("LONG", 5, "10"), make_order("LONG", 3, "10")]

        aggregated = aggregate_orders(orders)

        assert sum(o.units for o in aggregated) == sum(o.units for o in orders)
        assert [o.units for o in orders] == [5, 3]
        assert [o.order_id for o in orders] == ["T_0", "T_1"]

    def test_empty_input(self):
        assert aggregate_orders([]) == []
