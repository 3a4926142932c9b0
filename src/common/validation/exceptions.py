"""Errors raised while reading trade records and configuring a run."""

from typing import Any, List, Optional, Tuple


class ValidationError(Exception):
    """
    Base class for input and configuration problems.

    ``field`` and ``value`` locate the offending datum; subclasses add their
    own context through ``_context`` and it is appended to the message as
    ``Name: value`` parts joined by `` | ``.
    """

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value

    def _context(self) -> List[Tuple[str, Any]]:
        return [("Field", self.field), ("Value", None if self.value is None else repr(self.value))]

    def __str__(self) -> str:
        parts = [self.message or "Validation error"]
        parts.extend(f"{name}: {item}" for name, item in self._context() if item not in (None, ""))
        return " | ".join(parts)


class InputParseError(ValidationError):
    """A raw trade record whose date, contract, side, units or price cannot be read.

    ``record_index`` is the zero-based position of the record in its batch;
    the normalizer fills it in once the record is known.
    """

    def __init__(self, message: str, record_index: Optional[int] = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.record_index = record_index

    def _context(self) -> List[Tuple[str, Any]]:
        return super()._context() + [("Record", self.record_index)]


class ConfigurationError(ValidationError):
    """Settings that make a run meaningless. Raised before any matching starts."""

    def __init__(self, message: str, setting: Optional[str] = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.setting = setting

    def _context(self) -> List[Tuple[str, Any]]:
        return super()._context() + [("Setting", self.setting)]


class ZeroRemainderError(ValidationError):
    """An average price was requested over a contract side with nothing left unmatched."""

    def __init__(
        self,
        message: str,
        contract: Optional[str] = None,
        side: Optional[str] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.contract = contract
        self.side = side

    def _context(self) -> List[Tuple[str, Any]]:
        return super()._context() + [("Contract", self.contract), ("Side", self.side)]
