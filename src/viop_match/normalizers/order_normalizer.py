"""Raw trade record normalizer for VIOP orders."""

import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional
import logging
import pandas as pd

from common.utils import clean_text, to_decimal, to_units
from common.validation import InputParseError

from ..config import ConfigManager
from ..models import Order, OrderSide, NormalizationResult

logger = logging.getLogger(__name__)

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def fold_indicator(value: str) -> str:
    """Case-fold a side indicator, treating Turkish dotted and dotless i alike."""
    return value.strip().casefold().replace("i̇", "i").replace("ı", "i")


class OrderNormalizer:
    """Normalizes raw trade records from any source into canonical orders.

    A raw record is a mapping with ``date``, ``contract``, ``side``,
    ``units`` and ``price`` keys; loaders are responsible for mapping their
    source columns onto these names.
    """

    def __init__(self, config_manager: ConfigManager):
        """Initialize normalizer with configuration.

        Args:
            config_manager: Configuration manager with normalization rules
        """
        self.config_manager = config_manager
        self._long_indicators = {
            fold_indicator(indicator)
            for indicator in config_manager.get_long_side_indicators()
        }
        self._date_format = config_manager.get_date_format()
        self._fail_fast = config_manager.matching_config.fail_fast

        logger.info("Initialized VIOP order normalizer")

    def normalize_date(self, value: Any, date_format: Optional[str] = None) -> str:
        """Normalize a trade date to YYYY-MM-DD.

        Args:
            value: Raw date (ISO string with optional time part, source-format
                string, or a date/datetime/Timestamp object)
            date_format: strptime format for non-ISO strings; defaults to config

        Returns:
            Date string in YYYY-MM-DD form

        Raises:
            InputParseError: If the date cannot be parsed
        """
        if isinstance(value, (datetime, date, pd.Timestamp)):
            if pd.isna(value):
                raise InputParseError("Missing trade date", field="date", value=value)
            return value.strftime("%Y-%m-%d")

        text = clean_text(value)
        if not text:
            raise InputParseError("Missing trade date", field="date", value=value)

        # ISO-shaped prefix (e.g., "2025-04-30T10:15:00") is taken verbatim
        if ISO_DATE_PATTERN.match(text[:10]):
            return text[:10]

        fmt = date_format or self._date_format
        candidates = [text]
        if " " in text:
            candidates.append(text.split()[0])

        for candidate in candidates:
            try:
                normalized = datetime.strptime(candidate, fmt).strftime("%Y-%m-%d")
                logger.debug(f"Normalized date: '{value}' -> '{normalized}'")
                return normalized
            except ValueError:
                continue

        raise InputParseError(
            f"Unable to parse date with format '{fmt}'", field="date", value=value
        )

    def normalize_side(self, value: Any) -> OrderSide:
        """Normalize a side indicator using case-insensitive mapping.

        Any indicator found in the configured long set is LONG; every other
        non-blank indicator is SHORT.

        Args:
            value: Raw side text (e.g., "UZUN", "Alış", "Satış", "SHORT")

        Returns:
            OrderSide.LONG or OrderSide.SHORT

        Raises:
            InputParseError: If the indicator is blank
        """
        text = clean_text(value)
        if not text:
            raise InputParseError("Missing side indicator", field="side", value=value)

        side = OrderSide.LONG if fold_indicator(text) in self._long_indicators else OrderSide.SHORT
        logger.debug(f"Normalized side: '{value}' -> '{side.value}'")
        return side

    def normalize_units(self, value: Any) -> int:
        """Normalize a unit count, truncating fractions toward zero.

        Raises:
            InputParseError: If the value is not numeric or truncates below one unit
        """
        if _is_missing(value):
            raise InputParseError("Missing unit count", field="units", value=value)

        units = to_units(value)
        if units is None:
            raise InputParseError("Unable to parse unit count", field="units", value=value)
        if units < 1:
            raise InputParseError(
                "Unit count must be at least 1 after truncation", field="units", value=value
            )
        return units

    def normalize_price(self, value: Any) -> Decimal:
        """Normalize a price to Decimal, accepting a decimal comma.

        Raises:
            InputParseError: If the price is missing, not numeric or negative
        """
        if _is_missing(value):
            raise InputParseError("Missing price", field="price", value=value)

        price = to_decimal(value)
        if price is None or not price.is_finite():
            raise InputParseError("Unable to parse price", field="price", value=value)
        if price < 0:
            raise InputParseError("Price must not be negative", field="price", value=value)

        logger.debug(f"Normalized price: '{value}' -> '{price}'")
        return price

    def normalize_contract(self, value: Any) -> str:
        contract = clean_text(value)
        if not contract:
            raise InputParseError("Missing contract", field="contract", value=value)
        return contract

    def normalize_record(
        self,
        record: Mapping[str, Any],
        index: int,
        date_format: Optional[str] = None,
    ) -> Order:
        """Normalize one raw record into an Order with id ``R_<index>``.

        Raises:
            InputParseError: If the record is not a mapping or any field cannot be normalized
        """
        if not isinstance(record, Mapping):
            raise InputParseError(
                f"Record must be a mapping, got {type(record).__name__}",
                record_index=index,
                value=record,
            )

        try:
            return Order(
                order_id=f"R_{index}",
                trade_date=self.normalize_date(record.get("date"), date_format),
                contract=self.normalize_contract(record.get("contract")),
                side=self.normalize_side(record.get("side")),
                units=self.normalize_units(record.get("units")),
                price=self.normalize_price(record.get("price")),
            )
        except InputParseError as e:
            e.record_index = index
            raise

    def normalize_records(
        self,
        records: Iterable[Mapping[str, Any]],
        date_format: Optional[str] = None,
        fail_fast: Optional[bool] = None,
    ) -> NormalizationResult:
        """Normalize a batch of raw records.

        Rejected records are collected as errors alongside the parsed orders
        unless fail-fast is enabled.

        Args:
            records: Raw records in source order
            date_format: strptime format for non-ISO dates; defaults to config
            fail_fast: Override the configured fail-fast behaviour

        Returns:
            NormalizationResult with orders and per-record errors

        Raises:
            InputParseError: On the first bad record when fail-fast is enabled
        """
        stop_on_error = self._fail_fast if fail_fast is None else fail_fast
        result = NormalizationResult()

        for index, record in enumerate(records):
            try:
                result.orders.append(self.normalize_record(record, index, date_format))
            except InputParseError as e:
                if stop_on_error:
                    logger.error(f"Aborting normalization at record {index}: {e}")
                    raise
                logger.warning(f"Skipping record {index}: {e}")
                result.errors.append(e)

        logger.info(
            f"Normalized {len(result.orders)} orders from {result.record_count} records "
            f"({len(result.errors)} rejected)"
        )
        return result


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False
