"""Aggregation of split executions into net positions."""

from typing import Dict, Iterable, List, Tuple
from decimal import Decimal
import logging

from ..models import Order, OrderSide

logger = logging.getLogger(__name__)


def aggregate_orders(orders: Iterable[Order]) -> List[Order]:
    """Merge orders sharing (contract, side, price) into one order each.

    Many raw executions are the same position filled in pieces at an
    identical price. The merged order keeps the date of its first
    occurrence, sums the units and starts unmatched. Results come out in
    first-seen order with fresh ids ``A_<n>``; input orders are untouched.

    Args:
        orders: Orders in source order

    Returns:
        One new Order per distinct (contract, side, price)
    """
    units_by_key: Dict[Tuple[str, OrderSide, Decimal], int] = {}
    first_seen: Dict[Tuple[str, OrderSide, Decimal], Order] = {}
    source_count = 0

    for order in orders:
        source_count += 1
        key = order.aggregation_key
        if key in units_by_key:
            units_by_key[key] += order.units
        else:
            units_by_key[key] = order.units
            first_seen[key] = order

    aggregated = [
        Order(
            order_id=f"A_{index}",
            trade_date=first.trade_date,
            contract=first.contract,
            side=first.side,
            units=units_by_key[key],
            price=first.price,
        )
        for index, (key, first) in enumerate(first_seen.items())
    ]

    logger.info(f"Aggregated {source_count} orders into {len(aggregated)} positions")
    return aggregated
