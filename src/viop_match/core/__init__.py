"""Core components for VIOP spread matching."""

from .order_filter import filter_orders
from .aggregator import aggregate_orders
from .summary_builder import build_summaries
from .order_pool import OrderPool
from .remainder_reporter import compute_remainder

__all__ = [
    "filter_orders",
    "aggregate_orders",
    "build_summaries",
    "OrderPool",
    "compute_remainder",
]
