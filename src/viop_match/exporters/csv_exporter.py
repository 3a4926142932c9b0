"""CSV export of normalized orders."""

from pathlib import Path
from typing import Iterable, List
import logging
import pandas as pd

from ..models import Order

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ["date", "contract", "side", "units", "price"]


def create_orders_dataframe(orders: Iterable[Order]) -> pd.DataFrame:
    """
    Create the export DataFrame for a list of orders.

    Args:
        orders: Orders to export, in the order they should appear

    Returns:
        DataFrame with columns: date, contract, side, units, price
    """
    records: List[dict] = [
        {
            "date": order.trade_date,
            "contract": order.contract,
            "side": order.side.value,
            "units": order.units,
            "price": float(order.price),
        }
        for order in orders
    ]
    return pd.DataFrame(records, columns=EXPORT_COLUMNS)


def export_orders_csv(orders: Iterable[Order], output_path: Path) -> Path:
    """
    Write orders to a CSV file with prices rounded to two decimals.

    Args:
        orders: Orders to export
        output_path: Destination file; parent directories are created

    Returns:
        The path written
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    df = create_orders_dataframe(orders)
    df.to_csv(output_path, index=False, float_format="%.2f")

    logger.info(f"Exported {len(df)} orders to {output_path}")
    return output_path
