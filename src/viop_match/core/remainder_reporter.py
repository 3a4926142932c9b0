"""Unmatched remainder statistics per contract side."""

from decimal import Decimal
from typing import Iterable
import logging

from common.validation import ZeroRemainderError

from ..models import Order, OrderSide, RemainderStats

logger = logging.getLogger(__name__)


def compute_remainder(
    contract: str,
    side: OrderSide,
    orders: Iterable[Order],
    strict: bool = False,
) -> RemainderStats:
    """Sum the unmatched units of one contract side and their average price.

    The average is ``Σ(remaining * price) / Σ(remaining)`` over orders that
    still have units left. With nothing left, ``average_price`` is None
    ("no remainder") unless ``strict`` asks for an error instead.

    Args:
        contract: Contract code the orders belong to
        side: Side the orders belong to
        orders: Orders after matching
        strict: Raise ZeroRemainderError when no units remain

    Returns:
        RemainderStats for the contract side

    Raises:
        ZeroRemainderError: If strict and no units remain
    """
    leftovers = [order for order in orders if order.remaining > 0]
    total_units = sum(order.remaining for order in leftovers)
    total_amount = sum((order.remaining * order.price for order in leftovers), Decimal("0"))

    if total_units == 0:
        if strict:
            raise ZeroRemainderError(
                "Cannot average the price of zero remaining units",
                contract=contract,
                side=side.value,
            )
        average_price = None
    else:
        average_price = total_amount / total_units

    logger.debug(
        f"{contract} {side.value} remainder: {total_units} units, average {average_price}"
    )

    return RemainderStats(
        contract=contract,
        side=side,
        total_units=total_units,
        total_amount=total_amount,
        average_price=average_price,
        orders=leftovers,
    )
