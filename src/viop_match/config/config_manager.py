"""Configuration manager for VIOP spread matching."""

import json
from enum import Enum
from pathlib import Path
from decimal import Decimal
from typing import Any, Optional
from pydantic import BaseModel, Field, ConfigDict, model_validator

from common.validation import ConfigurationError


class SummarySource(str, Enum):
    """Which order list feeds the summary builder."""

    RAW = "raw"  # Filtered orders before aggregation (actual fills per day)
    AGGREGATED = "aggregated"  # Net positions the matcher runs on


class VIOPMatchingConfig(BaseModel):
    """Configuration for the VIOP spread matching engine.

    Defaults are the reference values of the desk tool: an open spread
    window of (0.139, 0.171) and a commission of 1.478 per ten thousand.
    """

    model_config = ConfigDict(
        frozen=True,
        validate_assignment=True,  # Immutable configuration
    )

    margin_min: Decimal = Field(
        default=Decimal("0.139"), description="Exclusive lower bound of the spread window"
    )
    margin_max: Decimal = Field(
        default=Decimal("0.171"), description="Exclusive upper bound of the spread window"
    )
    commission_rate: Decimal = Field(
        default=Decimal("1.478") / Decimal("10000"),
        description="Fraction of notional volume charged as commission",
    )
    contract_multiplier: int = Field(
        default=100, gt=0, description="Monetary value of one price point per unit"
    )
    aggregate_orders: bool = Field(
        default=True, description="Collapse same contract/side/price orders before matching"
    )
    summary_source: SummarySource = Field(
        default=SummarySource.RAW, description="Orders used for daily summaries"
    )
    allowed_contracts: frozenset[str] = Field(
        default_factory=frozenset, description="Contracts to keep; empty keeps all"
    )
    allowed_dates: frozenset[str] = Field(
        default_factory=frozenset, description="Trade dates (YYYY-MM-DD) to keep; empty keeps all"
    )
    fail_fast: bool = Field(
        default=False, description="Abort on the first unparseable record"
    )
    strict_remainder_average: bool = Field(
        default=False,
        description="Raise instead of reporting no remainder when nothing is left unmatched",
    )

    @model_validator(mode="after")
    def _check_margins(self) -> "VIOPMatchingConfig":
        # ConfigurationError is not a ValueError, so pydantic lets it propagate
        if self.margin_min >= self.margin_max:
            raise ConfigurationError(
                f"margin_min ({self.margin_min}) must be lower than margin_max ({self.margin_max})",
                setting="margin_min",
            )
        if self.commission_rate < 0:
            raise ConfigurationError(
                f"commission_rate must not be negative, got {self.commission_rate}",
                setting="commission_rate",
            )
        return self


class ConfigManager:
    """Manages configuration for the VIOP spread matching engine.

    Loads normalizer settings (field mappings, side indicators, source date
    format) from JSON and holds the immutable matching configuration.
    """

    def __init__(self, config_path: Optional[Path] = None, **overrides: Any):
        """Initialize configuration manager.

        Args:
            config_path: Optional path to config directory. Defaults to this module's dir.
            **overrides: Values replacing VIOPMatchingConfig defaults

        Raises:
            ConfigurationError: If the settings are inconsistent
        """
        if config_path is None:
            config_path = Path(__file__).parent

        self.config_path = config_path
        self.normalizer_config_path = config_path / "normalizer_config.json"
        self._overrides = dict(overrides)

        # Load configurations
        self._load_normalizer_config()
        self.matching_config = VIOPMatchingConfig(**self._overrides)

    def _load_normalizer_config(self) -> None:
        """Load normalizer configuration from JSON file."""
        try:
            with open(self.normalizer_config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise FileNotFoundError(
                f"Normalizer config not found at {self.normalizer_config_path}"
            ) from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in normalizer config: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError("Normalizer config must be a dictionary")

        indicators = data.get("long_side_indicators") or []
        if not indicators:
            raise ConfigurationError(
                "No long side indicators configured; every order would be read as SHORT",
                setting="long_side_indicators",
            )

        self.normalizer_config: dict[str, Any] = data

    def get_field_mappings(self) -> dict[str, str]:
        """Get mapping from source column names to raw record keys.

        Returns:
            dict mapping source field names to date/contract/side/units/price
        """
        return dict(self.normalizer_config.get("field_mappings", {}))

    def get_long_side_indicators(self) -> list[str]:
        """Get side indicator texts that mean "bought to open".

        Returns:
            List of indicators; any other text is read as SHORT
        """
        return list(self.normalizer_config["long_side_indicators"])

    def get_date_format(self) -> str:
        """Get the strptime format of non-ISO source dates.

        Returns:
            Date format string (e.g., "%d.%m.%Y")
        """
        return self.normalizer_config.get("date_format", "%d.%m.%Y")

    def get_margin_window(self) -> tuple[Decimal, Decimal]:
        """Get the open spread window.

        Returns:
            Tuple of (margin_min, margin_max)
        """
        return self.matching_config.margin_min, self.matching_config.margin_max

    def get_commission_rate(self) -> Decimal:
        return self.matching_config.commission_rate

    def get_contract_multiplier(self) -> int:
        return self.matching_config.contract_multiplier

    def get_rule_info(self) -> dict[str, Any]:
        """Get a display-friendly view of the matching settings."""
        config = self.matching_config
        return {
            "margin_min": str(config.margin_min),
            "margin_max": str(config.margin_max),
            "commission_rate": str(config.commission_rate),
            "contract_multiplier": config.contract_multiplier,
            "aggregate_orders": config.aggregate_orders,
            "summary_source": config.summary_source.value,
            "allowed_contracts": sorted(config.allowed_contracts),
            "allowed_dates": sorted(config.allowed_dates),
        }

    def reload_config(self) -> None:
        """Reload configuration from files.

        Useful for development and testing when config files change.
        """
        self._load_normalizer_config()
        # MatchingConfig is immutable, so we create a new instance
        self.matching_config = VIOPMatchingConfig(**self._overrides)
