"""Trading summary models for daily and cumulative totals."""

from decimal import Decimal
from pydantic import BaseModel, Field, ConfigDict

from .order import Order, OrderSide


class Summary(BaseModel):
    """Additive totals over a set of orders.

    Created empty and only ever increased through ``add_order``.
    """

    model_config = ConfigDict(validate_assignment=True)

    total_short: int = Field(default=0, ge=0, description="Units sold to open")
    total_long: int = Field(default=0, ge=0, description="Units bought to open")
    total_units: Decimal = Field(default=Decimal("0"), description="Units on both sides")
    total_volume: Decimal = Field(default=Decimal("0"), description="Notional volume")
    total_commission: Decimal = Field(default=Decimal("0"), description="Commission charged")

    @property
    def net_long_units(self) -> int:
        """Net long units (long minus short)."""
        return self.total_long - self.total_short

    def add_order(
        self, order: Order, commission_rate: Decimal, contract_multiplier: int = 100
    ) -> None:
        """Accumulate one order into these totals."""
        volume = order.volume(contract_multiplier)
        commission = volume * commission_rate

        if order.side == OrderSide.SHORT:
            self.total_short += order.units
        else:
            self.total_long += order.units

        self.total_units += order.units
        self.total_volume += volume
        self.total_commission += commission


class SummaryReport(BaseModel):
    """Per (date, contract) summaries plus one global summary."""

    daily: dict[tuple[str, str], Summary] = Field(
        default_factory=dict,
        description="Summaries keyed by (trade_date, contract), in key order",
    )
    total: Summary = Field(default_factory=Summary, description="Cumulative summary")

    def iter_daily(self):
        """Yield ((trade_date, contract), Summary) in lexicographic key order."""
        for key in sorted(self.daily):
            yield key, self.daily[key]

    @property
    def trading_days(self) -> list[str]:
        return sorted({trade_date for trade_date, _ in self.daily})
