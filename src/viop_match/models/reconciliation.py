"""Containers passed between pipeline stages and returned by the engine."""

from dataclasses import dataclass, field
from typing import List, Optional

from common.validation import InputParseError

from .order import Order
from .summary import SummaryReport
from .match_result import MatchReport


@dataclass
class NormalizationResult:
    """
    Orders parsed from a batch of raw records, together with the records
    that were rejected.

    Attributes:
        orders: Successfully normalized orders, in input order
        errors: One InputParseError per rejected record
    """

    orders: List[Order] = field(default_factory=list)
    errors: List[InputParseError] = field(default_factory=list)

    @property
    def record_count(self) -> int:
        """Number of raw records seen."""
        return len(self.orders) + len(self.errors)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


@dataclass
class ReconciliationResult:
    """
    Everything a full engine run produces.

    Attributes:
        raw_orders: Normalized orders after contract/date filtering
        matched_orders: Orders the matcher ran on (aggregated or raw)
        summary: Daily and cumulative trading summaries
        match_report: Spread matching results per contract
        parse_errors: Records the normalizer rejected
    """

    raw_orders: List[Order]
    matched_orders: List[Order]
    summary: SummaryReport
    match_report: MatchReport
    parse_errors: List[InputParseError] = field(default_factory=list)
    metadata: Optional[dict] = None
