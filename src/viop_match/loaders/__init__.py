"""Raw trade record loaders."""

from pathlib import Path
from typing import Dict, Optional

from .base_loader import BaseRecordLoader, RAW_RECORD_FIELDS
from .json_loader import VIOPJSONLoader
from .spreadsheet_loader import VIOPSpreadsheetLoader, EXCEL_SUFFIXES


def get_loader_for_path(
    path: Path, field_mappings: Optional[Dict[str, str]] = None
) -> BaseRecordLoader:
    """Pick the loader matching a file's extension."""
    suffix = Path(path).suffix.lower()
    if suffix == ".json":
        return VIOPJSONLoader(field_mappings)
    if suffix in EXCEL_SUFFIXES or suffix == ".csv":
        return VIOPSpreadsheetLoader(field_mappings)
    raise ValueError(f"Unsupported input file type: {suffix or path}")


__all__ = [
    "BaseRecordLoader",
    "RAW_RECORD_FIELDS",
    "VIOPJSONLoader",
    "VIOPSpreadsheetLoader",
    "get_loader_for_path",
]
