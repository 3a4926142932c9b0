"""JSON loader for broker trade history documents."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

from .base_loader import BaseRecordLoader

logger = logging.getLogger(__name__)

DEFAULT_RECORD_PATH = ("RESULT", "HistoricOrderLists")


class VIOPJSONLoader(BaseRecordLoader):
    """Loads raw trade records from a broker order-history JSON document.

    The document keeps its executions under ``RESULT.HistoricOrderLists``
    with ``TRANSACTION_DATE``, ``CONTRACT``, ``SHORT_LONG``, ``UNITS`` and
    ``PRICE`` fields. A bare top-level list of records is accepted too.
    """

    def __init__(
        self,
        field_mappings: Optional[Dict[str, str]] = None,
        record_path: tuple[str, ...] = DEFAULT_RECORD_PATH,
    ):
        super().__init__(field_mappings)
        self.record_path = record_path

    def load_records(self, path: Path) -> List[Dict[str, Any]]:
        """Load JSON file and return raw trade records.

        Args:
            path: Path to the JSON file

        Returns:
            List of raw records with date/contract/side/units/price keys

        Raises:
            FileNotFoundError: If JSON file doesn't exist
            ValueError: If JSON structure is invalid
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"JSON file not found: {path}")

        logger.info(f"Loading JSON trade history from {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Error parsing JSON from {path}: {e}")
            raise ValueError(f"Invalid JSON format: {e}") from e

        orders = self._extract_order_list(data)
        records = [self.apply_field_mappings(order) for order in orders]

        logger.info(f"Loaded {len(records)} trade records from {path}")
        return records

    def _extract_order_list(self, data: Any) -> List[Dict[str, Any]]:
        """Walk the record path down to the list of executions."""
        if isinstance(data, list):
            node: Any = data
        else:
            node = data
            for key in self.record_path:
                if not isinstance(node, dict) or key not in node:
                    raise ValueError(
                        f"JSON must contain a '{'.'.join(self.record_path)}' array"
                    )
                node = node[key]

        if node is None:
            return []
        if not isinstance(node, list):
            raise ValueError(f"'{'.'.join(self.record_path)}' must be an array")
        if not all(isinstance(item, dict) for item in node):
            raise ValueError("Every trade record must be a JSON object")
        return node
