"""VIOP spread matching data models."""

from .order import Order, OrderSide
from .summary import Summary, SummaryReport
from .match_result import (
    VIOPMatchType,
    MatchFill,
    RemainderStats,
    ContractMatchResult,
    MatchReport,
)
from .reconciliation import NormalizationResult, ReconciliationResult

__all__ = [
    "Order",
    "OrderSide",
    "Summary",
    "SummaryReport",
    "VIOPMatchType",
    "MatchFill",
    "RemainderStats",
    "ContractMatchResult",
    "MatchReport",
    "NormalizationResult",
    "ReconciliationResult",
]
