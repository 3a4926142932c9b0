"""Contract and trade-date filtering of orders."""

from typing import Collection, Iterable, List, Optional
import logging

from ..models import Order

logger = logging.getLogger(__name__)


def filter_orders(
    orders: Iterable[Order],
    allowed_contracts: Optional[Collection[str]] = None,
    allowed_dates: Optional[Collection[str]] = None,
) -> List[Order]:
    """Keep orders whose contract and trade date are allowed.

    An empty (or missing) collection allows everything for that field.
    Relative order is preserved and the input is not modified.

    Args:
        orders: Orders to filter
        allowed_contracts: Contract codes to keep
        allowed_dates: Trade dates (YYYY-MM-DD) to keep

    Returns:
        Filtered list of the same Order instances
    """
    contracts = frozenset(allowed_contracts or ())
    dates = frozenset(allowed_dates or ())

    kept = [
        order
        for order in orders
        if (not contracts or order.contract in contracts)
        and (not dates or order.trade_date in dates)
    ]

    logger.debug(
        f"Filter kept {len(kept)} orders (contracts={sorted(contracts) or 'all'}, "
        f"dates={sorted(dates) or 'all'})"
    )
    return kept
