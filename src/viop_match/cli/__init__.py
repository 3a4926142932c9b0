"""Rich terminal output for VIOP spread matching."""

from .viop_display import VIOPDisplay, format_amount

__all__ = ["VIOPDisplay", "format_amount"]
