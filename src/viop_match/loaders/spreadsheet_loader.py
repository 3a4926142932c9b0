"""Spreadsheet loader for trade exports (.xlsx and .csv)."""

import pandas as pd
from pathlib import Path
from typing import Any, Dict, List
import logging

from .base_loader import BaseRecordLoader

logger = logging.getLogger(__name__)

EXCEL_SUFFIXES = {".xlsx", ".xlsm"}


class VIOPSpreadsheetLoader(BaseRecordLoader):
    """Loads raw trade records from a spreadsheet with one execution per row."""

    def load_records(self, path: Path) -> List[Dict[str, Any]]:
        """Load a spreadsheet and return raw trade records.

        Args:
            path: Path to an .xlsx or .csv file

        Returns:
            List of raw records with date/contract/side/units/price keys

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file has an invalid format
        """
        path = Path(path)
        try:
            logger.info(f"Loading spreadsheet from: {path}")
            df = self._read_frame(path)

            # Normalize column names; keep the original case for field mappings
            df.columns = [str(column).strip() for column in df.columns]
            df = df.replace(r"^\s*$", pd.NA, regex=True)
            df = df.dropna(how="all").reset_index(drop=True)

            logger.info(f"Successfully loaded {len(df)} rows from {path.name}")

            records = [
                self.apply_field_mappings(self._clean_row(row))
                for row in df.to_dict(orient="records")
            ]
            return records

        except FileNotFoundError:
            logger.error(f"Spreadsheet not found: {path}")
            raise
        except Exception as e:
            logger.error(f"Failed to load trades from {path}: {e}")
            raise ValueError(f"Invalid spreadsheet format: {e}") from e

    def _read_frame(self, path: Path) -> pd.DataFrame:
        if not path.exists():
            raise FileNotFoundError(f"Spreadsheet not found: {path}")

        suffix = path.suffix.lower()
        if suffix in EXCEL_SUFFIXES:
            # Keep prices/dates as written so decimal commas reach the normalizer intact
            return pd.read_excel(path, engine="openpyxl", dtype=object)
        if suffix == ".csv":
            return pd.read_csv(path, encoding="utf-8-sig", dtype=str, keep_default_na=False)

        raise ValueError(f"Unsupported spreadsheet type: {path.suffix}")

    def _clean_row(self, row: Dict[str, Any]) -> Dict[str, Any]:
        """Replace pandas missing markers with None."""
        return {key: (None if _is_blank(value) else value) for key, value in row.items()}


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False
