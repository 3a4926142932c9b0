"""Spread matching rule for VIOP orders (Rule 1)."""

from decimal import Decimal
from typing import Iterable, List, Optional, Union
import logging

from common.utils import to_decimal
from common.validation import ConfigurationError

from ..config import ConfigManager
from ..core import OrderPool, compute_remainder
from ..models import (
    ContractMatchResult,
    MatchFill,
    MatchReport,
    Order,
    OrderSide,
    VIOPMatchType,
)
from .base_matcher import BaseMatcher

logger = logging.getLogger(__name__)


class SpreadMatcher(BaseMatcher):
    """Rule 1: close long orders against short orders inside a spread window.

    Per contract, longs and shorts are sorted ascending by (price, units).
    Each long, in order, scans the shorts in order and takes from every
    short whose spread ``short.price - long.price`` lies strictly inside
    (margin_min, margin_max), until the long is exhausted. The scan is
    greedy: it never backtracks and does not search for the assignment with
    the most matched units or the highest profit.
    """

    def __init__(
        self,
        config_manager: ConfigManager,
        margin_min: Optional[Decimal] = None,
        margin_max: Optional[Decimal] = None,
    ):
        """Initialize spread matcher.

        Args:
            config_manager: Configuration manager
            margin_min: Override of the configured exclusive lower bound
            margin_max: Override of the configured exclusive upper bound

        Raises:
            ConfigurationError: If margin_min is not below margin_max
        """
        super().__init__(config_manager)
        self.rule_number = 1

        config_min, config_max = config_manager.get_margin_window()
        self.margin_min = config_min if margin_min is None else to_decimal(margin_min)
        self.margin_max = config_max if margin_max is None else to_decimal(margin_max)
        if self.margin_min is None or self.margin_max is None:
            raise ConfigurationError(
                "Spread window bounds must be numeric",
                setting="margin_min" if self.margin_min is None else "margin_max",
            )
        if self.margin_min >= self.margin_max:
            raise ConfigurationError(
                f"margin_min ({self.margin_min}) must be lower than margin_max ({self.margin_max})",
                setting="margin_min",
            )

        self.strict_remainder = config_manager.matching_config.strict_remainder_average

        logger.info(
            f"Initialized SpreadMatcher with window ({self.margin_min}, {self.margin_max})"
        )

    def is_eligible(self, spread: Decimal) -> bool:
        """Open interval test; spreads equal to either bound do not match."""
        return self.margin_min < spread < self.margin_max

    def find_matches(self, pool: OrderPool) -> MatchReport:
        """Match every contract in the pool.

        Args:
            pool: Order pool whose orders are filled in place

        Returns:
            MatchReport with one result per contract, in contract order
        """
        contracts = pool.get_contracts()
        logger.info(f"Spread matching {len(pool)} orders across {len(contracts)} contracts")

        results = [self.match_contract(contract, pool) for contract in contracts]
        report = MatchReport(contracts=results, statistics=pool.get_match_statistics())

        logger.info(
            f"Matched {report.total_matched_units} units for a profit of {report.total_profit}"
        )
        return report

    def match_contract(self, contract: str, pool: OrderPool) -> ContractMatchResult:
        """Run the greedy scan for one contract and report its remainders.

        Args:
            contract: Contract code
            pool: Order pool holding the contract's orders

        Returns:
            ContractMatchResult with fills, final order states and remainders
        """
        longs = sorted(pool.get_orders(contract, OrderSide.LONG), key=lambda o: o.sort_key)
        shorts = sorted(pool.get_orders(contract, OrderSide.SHORT), key=lambda o: o.sort_key)

        fills: List[MatchFill] = []
        matched_units = 0
        profit = Decimal("0")

        for long_order in longs:
            if long_order.remaining == 0:
                continue

            for short_order in shorts:
                if short_order.remaining == 0:
                    continue

                spread = short_order.price - long_order.price
                if not self.is_eligible(spread):
                    continue

                quantity = min(long_order.remaining, short_order.remaining)
                fill = self._create_fill(contract, long_order, short_order, quantity)

                if not pool.record_fill(fill):
                    logger.warning(f"Failed to record fill {fill.summary_line}")
                    continue

                fills.append(fill)
                matched_units += quantity
                profit += fill.profit

                if long_order.remaining == 0:
                    break

        logger.info(f"{contract}: matched {matched_units} units, profit {profit}")

        return ContractMatchResult(
            contract=contract,
            matched_units=matched_units,
            profit=profit,
            fills=fills,
            long_orders=longs,
            short_orders=shorts,
            long_remainder=compute_remainder(
                contract, OrderSide.LONG, longs, strict=self.strict_remainder
            ),
            short_remainder=compute_remainder(
                contract, OrderSide.SHORT, shorts, strict=self.strict_remainder
            ),
        )

    def _create_fill(
        self, contract: str, long_order: Order, short_order: Order, quantity: int
    ) -> MatchFill:
        """Create a fill for a long/short pair.

        Args:
            contract: Contract both orders trade
            long_order: Long side of the fill
            short_order: Short side of the fill
            quantity: Units closed

        Returns:
            MatchFill object
        """
        spread = short_order.price - long_order.price
        return MatchFill(
            match_id=self.generate_match_id(self.rule_number),
            match_type=VIOPMatchType.SPREAD,
            contract=contract,
            long_order_id=long_order.order_id,
            short_order_id=short_order.order_id,
            quantity=quantity,
            long_price=long_order.price,
            short_price=short_order.price,
            profit=quantity * spread * self.contract_multiplier,
        )

    def get_rule_info(self) -> dict[str, Union[str, int, float, list[str]]]:
        """Get information about the spread matching rule.

        Returns:
            Dictionary with rule metadata
        """
        return {
            "rule_number": self.rule_number,
            "name": "Spread Match",
            "description": "Closes longs against shorts priced strictly inside the spread window",
            "margin_min": float(self.margin_min),
            "margin_max": float(self.margin_max),
            "matched_fields": [
                "contract",
                "side (long against short)",
                "spread (open interval)",
            ],
            "notes": "Greedy in (price, units) order; first eligible short wins, no backtracking",
        }


def match_orders(
    orders: Iterable[Order],
    margin_min: Decimal,
    margin_max: Decimal,
    contract_multiplier: Optional[int] = None,
    config_manager: Optional[ConfigManager] = None,
) -> MatchReport:
    """Match a flat list of orders with an explicit spread window.

    The orders are copied into a fresh OrderPool; final order states are
    returned in the report.

    Args:
        orders: Orders to match (usually aggregated)
        margin_min: Exclusive lower bound of the spread window
        margin_max: Exclusive upper bound of the spread window
        contract_multiplier: Value of one price point per unit; defaults to the
            configured multiplier (100)
        config_manager: Source of the remaining settings; defaults to a fresh one

    Returns:
        MatchReport for every contract present in the orders
    """
    matcher = SpreadMatcher(
        config_manager or ConfigManager(),
        margin_min=margin_min,
        margin_max=margin_max,
    )
    if contract_multiplier is not None:
        matcher.contract_multiplier = contract_multiplier
    return matcher.find_matches(OrderPool(orders))
