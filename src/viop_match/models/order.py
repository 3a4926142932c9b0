"""Order data model for VIOP spread matching."""

from decimal import Decimal
from enum import Enum
from typing import Any
from pydantic import BaseModel, Field, ConfigDict, ValidationInfo, field_validator


class OrderSide(str, Enum):
    """Direction of a position: bought to open or sold to open."""
    LONG = "LONG"
    SHORT = "SHORT"


class Order(BaseModel):
    """A directional position on one contract at one price.

    Orders handed out by an OrderPool are the single owning instance for
    their id; the spread matcher increments ``matched_units`` on them in
    place. Raw orders produced by the normalizer are never matched directly.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        str_strip_whitespace=True
    )

    order_id: str = Field(..., min_length=1, description="Unique identifier inside a pool")
    trade_date: str = Field(
        ..., pattern=r"^\d{4}-\d{2}-\d{2}$", description="Trade day as YYYY-MM-DD"
    )
    contract: str = Field(..., min_length=1, description="Contract code (e.g., F_TCELL0525)")
    side: OrderSide = Field(..., description="LONG or SHORT")
    units: int = Field(..., gt=0, description="Contract count")
    price: Decimal = Field(..., ge=0, description="Price per unit")
    matched_units: int = Field(default=0, ge=0, description="Units closed by the spread matcher")

    # Field validators run before the value is stored, so a rejected
    # assignment leaves the order unchanged.
    @field_validator("matched_units")
    @classmethod
    def _check_matched_units(cls, value: int, info: ValidationInfo) -> int:
        units = info.data.get("units")
        if units is not None and value > units:
            raise ValueError(f"matched_units {value} exceeds units {units}")
        return value

    @field_validator("units")
    @classmethod
    def _check_units(cls, value: int, info: ValidationInfo) -> int:
        matched = info.data.get("matched_units", 0)
        if value < matched:
            raise ValueError(f"units {value} below matched_units {matched}")
        return value

    def __setattr__(self, name: str, value: Any) -> None:
        # Fills are never undone
        if name == "matched_units" and isinstance(value, int) and value < self.matched_units:
            raise ValueError(
                f"matched_units cannot decrease from {self.matched_units} to {value}"
            )
        super().__setattr__(name, value)

    @property
    def remaining(self) -> int:
        """Units not yet matched."""
        return self.units - self.matched_units

    @property
    def is_long(self) -> bool:
        return self.side == OrderSide.LONG

    @property
    def sort_key(self) -> tuple[Decimal, int]:
        """Matching order: cheapest first, smaller lot first on equal price."""
        return (self.price, self.units)

    @property
    def aggregation_key(self) -> tuple[str, OrderSide, Decimal]:
        """Key under which duplicate executions collapse into one position."""
        return (self.contract, self.side, self.price)

    def volume(self, contract_multiplier: int = 100) -> Decimal:
        """Notional value of the full order."""
        return self.units * self.price * contract_multiplier

    def apply_fill(self, quantity: int) -> None:
        """Close ``quantity`` more units of this order.

        Raises:
            ValueError: If quantity is not positive or exceeds the remainder
        """
        if quantity <= 0:
            raise ValueError(f"Fill quantity must be positive, got {quantity}")
        if quantity > self.remaining:
            raise ValueError(
                f"Fill of {quantity} exceeds remaining {self.remaining} on {self.order_id}"
            )
        self.matched_units += quantity

    def __str__(self) -> str:
        """String representation for debugging."""
        return (
            f"Order({self.order_id}: {self.side.value} {self.contract} "
            f"{self.remaining}/{self.units} @ {self.price} on {self.trade_date})"
        )
