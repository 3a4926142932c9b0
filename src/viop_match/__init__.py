"""VIOP Match Module - Futures Spread Matching System

This module reconciles long and short futures executions (VIOP contracts
such as F_TCELL0525) against each other inside a price-spread window,
reporting realized profit, unmatched remainders and daily trading summaries.

Features:
- Normalization of JSON and spreadsheet trade records
- Aggregation of split executions into net positions
- Greedy spread matching in (price, units) order
- Daily and cumulative volume/commission summaries
- Rich CLI interface with remainder reporting

Architecture:
- config/: Configuration management and normalizer settings
- core/: Filter, aggregator, summary builder, order pool, remainder reporter
- loaders/: JSON and spreadsheet record loading
- matchers/: Matching rule implementations
- models/: Pydantic data models for orders, summaries and results
- normalizers/: Raw record normalization
- exporters/: CSV export
- cli/: Rich terminal interface and display
"""

__version__ = "0.1.0"

# Module level imports for convenience
from .models.order import Order, OrderSide
from .models.match_result import MatchReport, ContractMatchResult

__all__ = [
    "Order",
    "OrderSide",
    "MatchReport",
    "ContractMatchResult",
]
