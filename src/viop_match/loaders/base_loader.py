"""Base class for raw trade record loaders."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

RAW_RECORD_FIELDS = ("date", "contract", "side", "units", "price")


class BaseRecordLoader(ABC):
    """
    Abstract base class for raw trade record loaders.

    Every loader hands the normalizer the same flat record shape
    (``date``, ``contract``, ``side``, ``units``, ``price``) regardless of
    whether the source is a JSON document or a spreadsheet.
    """

    def __init__(self, field_mappings: Optional[Dict[str, str]] = None):
        """
        Initialize loader with source-to-record field mappings.

        Args:
            field_mappings: Mapping of source column names to raw record keys
        """
        self.field_mappings = field_mappings or {}

    @abstractmethod
    def load_records(self, path: Path) -> List[Dict[str, Any]]:
        """
        Load raw trade records from a file.

        Args:
            path: Source file

        Returns:
            List of raw records keyed by RAW_RECORD_FIELDS

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file cannot be read as trade records
        """
        pass

    def apply_field_mappings(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply field mappings to standardize column names.

        Keys that are already raw record names are kept as-is; unmapped
        keys are dropped.

        Args:
            record: Input record with original field names

        Returns:
            Record with exactly the RAW_RECORD_FIELDS keys (missing ones as None)
        """
        mapped_record: Dict[str, Any] = {name: None for name in RAW_RECORD_FIELDS}

        for original_name, value in record.items():
            key = str(original_name).strip()
            standard_name = self.field_mappings.get(key)
            if standard_name is None and key.lower() in RAW_RECORD_FIELDS:
                standard_name = key.lower()
            if standard_name in mapped_record and mapped_record[standard_name] is None:
                mapped_record[standard_name] = value

        return mapped_record
