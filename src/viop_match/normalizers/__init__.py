"""Normalization of raw trade records."""

from .order_normalizer import OrderNormalizer, fold_indicator

__all__ = ["OrderNormalizer", "fold_indicator"]
