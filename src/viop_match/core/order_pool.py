"""Order pool owning the mutable orders shared by the long and short views."""

from collections import defaultdict
from typing import Any, Iterable, TYPE_CHECKING
import logging

from ..models import Order, OrderSide

if TYPE_CHECKING:
    from ..models import MatchFill

logger = logging.getLogger(__name__)


class OrderPool:
    """Arena of orders indexed by id, with per-contract long and short views.

    The long and short pools are lists of ids into the same arena, so a fill
    recorded through either view is visible through the other. Orders given
    to the pool are copied; callers' orders are never mutated.
    """

    def __init__(self, orders: Iterable[Order]):
        """Initialize the pool with the orders to match.

        Args:
            orders: Orders to own; ids must be unique

        Raises:
            ValueError: If two orders share an id
        """
        self._orders: dict[str, Order] = {}
        self._long_ids: defaultdict[str, list[str]] = defaultdict(list)
        self._short_ids: defaultdict[str, list[str]] = defaultdict(list)

        for order in orders:
            if order.order_id in self._orders:
                raise ValueError(f"Duplicate order id in pool: {order.order_id}")
            owned = order.model_copy()
            self._orders[owned.order_id] = owned
            if owned.side == OrderSide.LONG:
                self._long_ids[owned.contract].append(owned.order_id)
            else:
                self._short_ids[owned.contract].append(owned.order_id)

        # Fill history for audit trail: (long_id, short_id, quantity)
        self._fill_history: list[tuple[str, str, int]] = []

        logger.info(
            f"Initialized order pool with {len(self._orders)} orders "
            f"across {len(self.get_contracts())} contracts"
        )

    def __len__(self) -> int:
        return len(self._orders)

    def get_contracts(self) -> list[str]:
        """Get every contract with at least one long or short order, sorted."""
        return sorted(set(self._long_ids) | set(self._short_ids))

    def get_order(self, order_id: str) -> Order:
        """Get the owning instance of an order.

        Raises:
            KeyError: If the id is not in the pool
        """
        return self._orders[order_id]

    def get_orders(self, contract: str, side: OrderSide) -> list[Order]:
        """Get the orders of one contract side, in insertion order.

        Args:
            contract: Contract code
            side: OrderSide.LONG or OrderSide.SHORT

        Returns:
            List of pool-owned orders (empty if the contract has none on that side)
        """
        if side == OrderSide.LONG:
            ids = self._long_ids.get(contract, [])
        elif side == OrderSide.SHORT:
            ids = self._short_ids.get(contract, [])
        else:
            raise ValueError(f"Unknown order side: {side}")
        return [self._orders[order_id] for order_id in ids]

    def get_all_orders(self) -> list[Order]:
        return list(self._orders.values())

    def record_fill(self, fill: "MatchFill") -> bool:
        """Atomically apply a fill to both of its orders.

        Both orders are verified before either is touched, so a rejected fill
        leaves no partial state.

        Args:
            fill: Fill naming a long order, a short order and a quantity

        Returns:
            True if the fill was applied, False otherwise
        """
        long_order = self._orders.get(fill.long_order_id)
        short_order = self._orders.get(fill.short_order_id)

        if long_order is None or short_order is None:
            logger.warning(f"Fill {fill.match_id} references an order outside the pool")
            return False
        if long_order.side != OrderSide.LONG or short_order.side != OrderSide.SHORT:
            logger.warning(f"Fill {fill.match_id} does not pair a long with a short")
            return False
        if long_order.contract != short_order.contract:
            logger.warning(f"Fill {fill.match_id} crosses contracts")
            return False
        if fill.quantity > min(long_order.remaining, short_order.remaining):
            logger.warning(
                f"Fill {fill.match_id} of {fill.quantity} exceeds remaining units "
                f"({long_order.remaining} long, {short_order.remaining} short)"
            )
            return False

        long_order.apply_fill(fill.quantity)
        short_order.apply_fill(fill.quantity)
        self._fill_history.append((long_order.order_id, short_order.order_id, fill.quantity))

        logger.debug(f"Recorded fill {fill.summary_line}")
        return True

    def get_match_statistics(self) -> dict[str, Any]:
        """Get matching statistics.

        Returns:
            Dictionary with matching statistics
        """
        long_orders = [o for o in self._orders.values() if o.side == OrderSide.LONG]
        short_orders = [o for o in self._orders.values() if o.side == OrderSide.SHORT]

        long_units = sum(o.units for o in long_orders)
        short_units = sum(o.units for o in short_orders)
        matched_long = sum(o.matched_units for o in long_orders)
        matched_short = sum(o.matched_units for o in short_orders)

        return {
            "order_count": len(self._orders),
            "long_order_count": len(long_orders),
            "short_order_count": len(short_orders),
            "long_units": long_units,
            "short_units": short_units,
            "matched_long_units": matched_long,
            "matched_short_units": matched_short,
            "unmatched_long_units": long_units - matched_long,
            "unmatched_short_units": short_units - matched_short,
            "long_match_rate": (matched_long / max(long_units, 1)) * 100,
            "short_match_rate": (matched_short / max(short_units, 1)) * 100,
            "total_fills": len(self._fill_history),
            "fill_history": self._fill_history.copy(),
        }
