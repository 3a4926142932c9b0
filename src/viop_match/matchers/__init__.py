"""VIOP matching rule implementations."""

from .base_matcher import BaseMatcher
from .spread_matcher import SpreadMatcher, match_orders

__all__ = [
    "BaseMatcher",
    "SpreadMatcher",
    "match_orders",
]
