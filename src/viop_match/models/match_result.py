"""Match result data models for VIOP spread matching."""

from decimal import Decimal
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional
from pydantic import BaseModel, Field, ConfigDict

from .order import Order, OrderSide


class VIOPMatchType(str, Enum):
    """Type of matching rule that produced a fill."""

    SPREAD = "spread"  # Rule 1 - long closed against short inside the margin window


class MatchFill(BaseModel):
    """One greedy step: part of a long order closed against part of a short order."""

    model_config = ConfigDict(frozen=True)

    match_id: str = Field(..., description="Unique identifier for this fill")
    match_type: VIOPMatchType = Field(default=VIOPMatchType.SPREAD)
    contract: str = Field(..., description="Contract both orders trade")
    long_order_id: str = Field(..., description="Id of the long order")
    short_order_id: str = Field(..., description="Id of the short order")
    quantity: int = Field(..., gt=0, description="Units closed by this fill")
    long_price: Decimal = Field(..., description="Price of the long order")
    short_price: Decimal = Field(..., description="Price of the short order")
    profit: Decimal = Field(..., description="quantity * spread * contract multiplier")
    match_timestamp: datetime = Field(
        default_factory=datetime.now, description="When this fill was created"
    )

    @property
    def spread(self) -> Decimal:
        """Short price minus long price."""
        return self.short_price - self.long_price

    @property
    def summary_line(self) -> str:
        """Get a one-line summary of this fill for display."""
        return (
            f"Fill #{self.match_id}: {self.long_order_id} ↔ {self.short_order_id} | "
            f"{self.contract} | Qty: {self.quantity} | "
            f"Price: {self.long_price} ↔ {self.short_price} | Spread: {self.spread} | "
            f"Profit: {self.profit}"
        )

    def __str__(self) -> str:
        return f"MatchFill({self.match_id}: {self.contract} x{self.quantity})"


class RemainderStats(BaseModel):
    """Unmatched units of one contract side and their weighted average price."""

    contract: str
    side: OrderSide
    total_units: int = Field(default=0, ge=0, description="Sum of remaining units")
    total_amount: Decimal = Field(
        default=Decimal("0"), description="Sum of remaining * price"
    )
    average_price: Optional[Decimal] = Field(
        default=None, description="Weighted average remaining price; None when nothing remains"
    )
    orders: List[Order] = Field(
        default_factory=list, description="Orders still carrying a remainder"
    )

    @property
    def has_remainder(self) -> bool:
        return self.total_units > 0


class ContractMatchResult(BaseModel):
    """Outcome of greedy matching for a single contract."""

    contract: str
    matched_units: int = Field(default=0, ge=0, description="Units closed on each side")
    profit: Decimal = Field(default=Decimal("0"), description="Realized profit")
    fills: List[MatchFill] = Field(default_factory=list)
    long_orders: List[Order] = Field(
        default_factory=list, description="Long pool in matching order, final state"
    )
    short_orders: List[Order] = Field(
        default_factory=list, description="Short pool in matching order, final state"
    )
    long_remainder: RemainderStats
    short_remainder: RemainderStats

    @property
    def long_matched_units(self) -> int:
        return sum(order.matched_units for order in self.long_orders)

    @property
    def short_matched_units(self) -> int:
        return sum(order.matched_units for order in self.short_orders)

    @property
    def is_balanced(self) -> bool:
        """Both pools closed the same number of units."""
        return self.long_matched_units == self.short_matched_units == self.matched_units


class MatchReport(BaseModel):
    """Spread matching results for every contract of a run."""

    contracts: List[ContractMatchResult] = Field(
        default_factory=list, description="Per-contract results in contract order"
    )
    statistics: dict[str, Any] = Field(
        default_factory=dict, description="Pool statistics after matching"
    )

    @property
    def total_matched_units(self) -> int:
        return sum(result.matched_units for result in self.contracts)

    @property
    def total_profit(self) -> Decimal:
        return sum((result.profit for result in self.contracts), Decimal("0"))

    @property
    def fills(self) -> List[MatchFill]:
        return [fill for result in self.contracts for fill in result.fills]

    def get_contract(self, contract: str) -> Optional[ContractMatchResult]:
        """Get the result for one contract, or None if it was not in the run."""
        for result in self.contracts:
            if result.contract == contract:
                return result
        return None
