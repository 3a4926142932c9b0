"""Export of normalized orders."""

from .csv_exporter import create_orders_dataframe, export_orders_csv, EXPORT_COLUMNS

__all__ = ["create_orders_dataframe", "export_orders_csv", "EXPORT_COLUMNS"]
