"""Common parsing helpers."""

from .parsing import clean_text, to_decimal, to_units

__all__ = ["clean_text", "to_decimal", "to_units"]
