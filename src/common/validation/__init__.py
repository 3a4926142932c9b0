"""Validation error types shared by the matching modules."""

from .exceptions import (
    ValidationError,
    InputParseError,
    ConfigurationError,
    ZeroRemainderError
)

__all__ = [
    "ValidationError",
    "InputParseError",
    "ConfigurationError",
    "ZeroRemainderError"
]
