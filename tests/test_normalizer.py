"""Tests for OrderNormalizer."""

from datetime import date, datetime
from decimal import Decimal

import pandas as pd
import pytest

from common.validation import InputParseError
from viop_match.models import OrderSide
from viop_match.normalizers import OrderNormalizer, fold_indicator


@pytest.fixture(name="normalizer")
def normalizer_fixture(config_manager):
    return OrderNormalizer(config_manager)


class TestDateNormalization:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("2025-04-30", "2025-04-30"),
            ("2025-04-30T10:02:11", "2025-04-30"),
            ("2025-04-30 10:02:11", "2025-04-30"),
            ("02.05.2025", "2025-05-02"),
            ("02.05.2025 14:12:45", "2025-05-02"),
            (" 05.05.2025 ", "2025-05-05"),
        ],
    )
    def test_text_dates(self, normalizer, raw, expected):
        assert normalizer.normalize_date(raw) == expected

    def test_date_objects(self, normalizer):
        assert normalizer.normalize_date(date(2025, 5, 2)) == "2025-05-02"
        assert normalizer.normalize_date(datetime(2025, 5, 2, 14, 12)) == "2025-05-02"
        assert normalizer.normalize_date(pd.Timestamp("2025-05-02 09:31")) == "2025-05-02"

    def test_explicit_format(self, normalizer):
        assert normalizer.normalize_date("05/02/2025", date_format="%m/%d/%Y") == "2025-05-02"

    @pytest.mark.parametrize("raw", [None, "", "   ", "yesterday", "31.02.2025"])
    def test_unparseable_dates(self, normalizer, raw):
        with pytest.raises(InputParseError) as exc_info:
            normalizer.normalize_date(raw)
        assert exc_info.value.field == "date"


class TestSideNormalization:
    @pytest.mark.parametrize("raw", ["UZUN", "uzun", " Uzun ", "Alış", "ALIŞ", "alis", "LONG", "Buy", "B"])
    def test_long_indicators(self, normalizer, raw):
        assert normalizer.normalize_side(raw) == OrderSide.LONG

    @pytest.mark.parametrize("raw", ["KISA", "kısa", "Satış", "SHORT", "sell", "X"])
    def test_everything_else_is_short(self, normalizer, raw):
        assert normalizer.normalize_side(raw) == OrderSide.SHORT

    @pytest.mark.parametrize("raw", [None, "", "  "])
    def test_blank_side_is_rejected(self, normalizer, raw):
        with pytest.raises(InputParseError):
            normalizer.normalize_side(raw)

    def test_fold_indicator_handles_turkish_i(self):
        assert fold_indicator("ALIŞ") == fold_indicator("alış")
        assert fold_indicator("İŞLEM") == "işlem"


class TestNumericNormalization:
    @pytest.mark.parametrize(
        "raw, expected",
        [(5, 5), (5.0, 5), ("4", 4), ("12,9", 12), (7.99, 7), ("  3 ", 3)],
    )
    def test_units_truncate(self, normalizer, raw, expected):
        assert normalizer.normalize_units(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "abc", 0, 0.5, -2, float("nan")])
    def test_invalid_units(self, normalizer, raw):
        with pytest.raises(InputParseError) as exc_info:
            normalizer.normalize_units(raw)
        assert exc_info.value.field == "units"

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("97,90", Decimal("97.90")),
            ("98.05", Decimal("98.05")),
            (98.35, Decimal("98.35")),
            (301, Decimal("301")),
            (0, Decimal("0")),
        ],
    )
    def test_prices(self, normalizer, raw, expected):
        assert normalizer.normalize_price(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "n/a", "-1.5", "nan", float("inf")])
    def test_invalid_prices(self, normalizer, raw):
        with pytest.raises(InputParseError):
            normalizer.normalize_price(raw)


class TestRecordNormalization:
    def test_sample_records(self, normalizer, sample_records):
        result = normalizer.normalize_records(sample_records)

        assert not result.has_errors
        assert result.record_count == 8
        assert [order.order_id for order in result.orders][:3] == ["R_0", "R_1", "R_2"]

        fourth = result.orders[3]
        assert fourth.trade_date == "2025-05-02"
        assert fourth.side == OrderSide.LONG
        assert fourth.units == 4
        assert fourth.price == Decimal("97.90")
        assert fourth.matched_units == 0

    def test_bad_records_are_collected(self, normalizer, sample_records):
        records = list(sample_records)
        records.insert(2, {"date": "2025-04-30", "contract": "F_TCELL0525", "side": "UZUN", "units": "x", "price": 1})
        records.append({"date": "2025-05-05", "contract": " ", "side": "KISA", "units": 1, "price": 1})

        result = normalizer.normalize_records(records)

        assert len(result.orders) == 8
        assert result.record_count == 10
        assert [error.record_index for error in result.errors] == [2, 9]
        assert result.errors[0].field == "units"
        assert result.errors[1].field == "contract"
        # Ids keep the position of the source record
        assert "R_2" not in {order.order_id for order in result.orders}

    def test_fail_fast_raises_first_error(self, normalizer, sample_records):
        records = [{"date": "garbage"}] + list(sample_records)

        with pytest.raises(InputParseError) as exc_info:
            normalizer.normalize_records(records, fail_fast=True)

        assert exc_info.value.record_index == 0
        assert "Record: 0" in str(exc_info.value)

    def test_non_mapping_record_is_rejected_alone(self, normalizer, sample_records):
        records = [["2025-05-05", "F_A", "UZUN", 1, 10]] + list(sample_records)

        result = normalizer.normalize_records(records)

        assert len(result.orders) == 8
        assert len(result.errors) == 1
        assert result.errors[0].record_index == 0
        assert "mapping" in result.errors[0].message

    def test_non_mapping_record_with_fail_fast(self, normalizer):
        with pytest.raises(InputParseError) as exc_info:
            normalizer.normalize_records([None], fail_fast=True)

        assert exc_info.value.record_index == 0
