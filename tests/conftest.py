# tests/conftest.py
"""Test configuration and fixtures."""

from decimal import Decimal

import pytest

from viop_match.config import ConfigManager
from viop_match.models import Order, OrderSide


@pytest.fixture(name="config_manager")
def config_manager_fixture():
    """Default configuration with the reference spread window."""
    return ConfigManager()


@pytest.fixture(name="make_order")
def make_order_fixture():
    """Factory for orders with sequential ids."""
    counter = {"next": 0}

    def _make_order(
        side,
        units,
        price,
        contract="F_TCELL0525",
        trade_date="2025-05-02",
        order_id=None,
    ):
        if order_id is None:
            order_id = f"T_{counter['next']}"
            counter["next"] += 1
        return Order(
            order_id=order_id,
            trade_date=trade_date,
            contract=contract,
            side=OrderSide(side),
            units=units,
            price=Decimal(str(price)),
        )

    return _make_order


@pytest.fixture(name="sample_records")
def sample_records_fixture():
    """Raw records as a loader hands them to the normalizer."""
    return [
        {"date": "2025-04-30T10:02:11", "contract": "F_TCELL0525", "side": "UZUN", "units": 5.0, "price": 98.35},
        {"date": "2025-04-30T10:05:40", "contract": "F_TCELL0525", "side": "UZUN", "units": 3.0, "price": 98.35},
        {"date": "2025-04-30T11:40:52", "contract": "F_TCELL0525", "side": "KISA", "units": 6.0, "price": 98.50},
        {"date": "02.05.2025", "contract": "F_TCELL0525", "side": "Alış", "units": "4", "price": "97,90"},
        {"date": "02.05.2025 14:12:45", "contract": "F_TCELL0525", "side": "Satış", "units": "4", "price": "98,05"},
        {"date": "2025-05-02", "contract": "F_TCELL0525", "side": "KISA", "units": 2, "price": "98.70"},
        {"date": "2025-05-05", "contract": "F_THYAO0525", "side": "long", "units": 10, "price": "301.25"},
        {"date": "2025-05-05", "contract": "F_THYAO0525", "side": "SHORT", "units": 7, "price": "301.40"},
    ]
