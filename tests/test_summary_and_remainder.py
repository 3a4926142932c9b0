"""Tests for summary building and remainder statistics."""

from decimal import Decimal

import pytest

from common.validation import ZeroRemainderError
from viop_match.core import build_summaries, compute_remainder
from viop_match.models import OrderSide

COMMISSION_RATE = Decimal("1.478") / Decimal("10000")


class TestBuildSummaries:
    def test_volume_and_commission(self, make_order):
        report = build_summaries([make_order("SHORT", 5, "16")], COMMISSION_RATE)

        total = report.total
        assert total.total_volume == Decimal("8000")
        assert total.total_commission == Decimal("1.1824")
        assert total.total_units == 5
        assert total.total_short == 5
        assert total.total_long == 0

    def test_daily_keys_are_sorted(self, make_order):
        orders = [
            make_order("LONG", 1, "10", contract="F_B", trade_date="2025-05-02"),
            make_order("LONG", 1, "10", contract="F_A", trade_date="2025-05-02"),
            make_order("SHORT", 1, "10", contract="F_B", trade_date="2025-04-30"),
        ]

        report = build_summaries(orders, COMMISSION_RATE)

        assert list(report.daily) == [
            ("2025-04-30", "F_B"),
            ("2025-05-02", "F_A"),
            ("2025-05-02", "F_B"),
        ]
        assert [key for key, _ in report.iter_daily()] == list(report.daily)
        assert report.trading_days == ["2025-04-30", "2025-05-02"]

    def test_daily_totals_add_up_to_total(self, make_order):
        orders = [
            make_order("LONG", 5, "98.35", trade_date="2025-04-30"),
            make_order("LONG", 3, "98.35", trade_date="2025-04-30"),
            make_order("SHORT", 6, "98.50", trade_date="2025-04-30"),
            make_order("SHORT", 2, "98.70", trade_date="2025-05-02"),
        ]

        report = build_summaries(orders, COMMISSION_RATE)
        day = report.daily[("2025-04-30", "F_TCELL0525")]

        assert day.total_long == 8
        assert day.total_short == 6
        assert day.net_long_units == 2
        assert day.total_volume == Decimal("137780")
        assert report.total.total_volume == sum(
            (summary.total_volume for summary in report.daily.values()), Decimal("0")
        )
        assert report.total.total_units == 16

    def test_multiplier(self, make_order):
        report = build_summaries([make_order("LONG", 2, "10")], Decimal("0"), contract_multiplier=10)

        assert report.total.total_volume == Decimal("200")
        assert report.total.total_commission == Decimal("0")

    def test_no_orders(self):
        report = build_summaries([], COMMISSION_RATE)

        assert report.daily == {}
        assert report.total.total_volume == Decimal("0")


class TestComputeRemainder:
    def test_weighted_average(self, make_order):
        first = make_order("LONG", 10, "10")
        second = make_order("LONG", 10, "20")
        first.apply_fill(5)
        # Remaining: 5 @ 10 and 10 @ 20

        stats = compute_remainder("F_TCELL0525", OrderSide.LONG, [first, second])

        assert stats.total_units == 15
        assert stats.total_amount == Decimal("250")
        assert stats.average_price == Decimal("250") / 15
        assert stats.has_remainder

    def test_average_of_fourteen(self, make_order):
        orders = [make_order("SHORT", 2, "10"), make_order("SHORT", 3, "18")]
        orders[1].apply_fill(1)

        stats = compute_remainder("F_TCELL0525", OrderSide.SHORT, orders)

        assert stats.total_units == 4
        assert stats.total_amount == Decimal("56")
        assert stats.average_price == Decimal("14")

    def test_fully_matched_side_has_no_average(self, make_order):
        order = make_order("LONG", 2, "10")
        order.apply_fill(2)

        stats = compute_remainder("F_TCELL0525", OrderSide.LONG, [order])

        assert stats.total_units == 0
        assert stats.average_price is None
        assert stats.orders == []
        assert not stats.has_remainder

    def test_empty_side_has_no_average(self):
        stats = compute_remainder("F_TCELL0525", OrderSide.SHORT, [])

        assert stats.average_price is None

    def test_strict_mode_raises(self):
        with pytest.raises(ZeroRemainderError) as exc_info:
            compute_remainder("F_TCELL0525", OrderSide.SHORT, [], strict=True)

        assert exc_info.value.contract == "F_TCELL0525"
        assert exc_info.value.side == "SHORT"
