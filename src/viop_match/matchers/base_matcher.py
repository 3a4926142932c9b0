"""Base matcher shared by VIOP matching rules."""

from typing import Any, Union
import uuid
import logging
from abc import ABC, abstractmethod

from ..config import ConfigManager
from ..core import OrderPool
from ..models import MatchReport

logger = logging.getLogger(__name__)


class BaseMatcher(ABC):
    """Base class for all VIOP matching rules."""

    rule_number: int = 0

    def __init__(self, config_manager: ConfigManager):
        """Initialize base matcher with configuration.

        Args:
            config_manager: Configuration manager for matching settings
        """
        self.config_manager = config_manager
        self.contract_multiplier = config_manager.get_contract_multiplier()

        logger.debug(f"Initialized {self.__class__.__name__}")

    def generate_match_id(self, rule_number: int) -> str:
        """Generate a unique match ID with VIOP prefix and rule number.

        Args:
            rule_number: The rule number that created this match

        Returns:
            Match ID in format: VIOP_{rule}_{uuid}
        """
        unique_id = str(uuid.uuid4())[:8]
        return f"VIOP_{rule_number}_{unique_id}"

    @abstractmethod
    def find_matches(self, pool: OrderPool) -> MatchReport:
        """Find matches using this rule's logic.

        Must be implemented by each specific matcher.

        Args:
            pool: Order pool whose orders are matched in place

        Returns:
            Match report for every contract in the pool
        """
        pass

    @abstractmethod
    def get_rule_info(self) -> dict[str, Union[str, int, float, list[str]]]:
        """Get information about this matching rule.

        Returns:
            Dictionary with rule metadata (name, description, settings, etc.)
        """
        pass

    def describe(self) -> dict[str, Any]:
        info: dict[str, Any] = dict(self.get_rule_info())
        info["settings"] = self.config_manager.get_rule_info()
        return info
