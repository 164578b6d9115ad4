"""
Shared fixtures for the test suite.
"""

import logging

import pytest

from agentalpha.data.models import MarketSnapshot, StrategyContext


def make_context(
    *markets,
    balance=10000.0,
    positions=None,
    max_position_size_percent=10.0,
    risk_tolerance="medium",
):
    """Build a StrategyContext from (symbol, price, change) tuples."""
    return StrategyContext(
        agent_balance=balance,
        current_positions=positions or {},
        market_data=tuple(
            m if isinstance(m, MarketSnapshot) else MarketSnapshot(*m)
            for m in markets
        ),
        risk_tolerance=risk_tolerance,
        max_position_size_percent=max_position_size_percent,
    )


@pytest.fixture
def context_factory():
    """Factory for strategy contexts."""
    return make_context


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging so tests stay isolated."""
    yield
    logger = logging.getLogger("agentalpha")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
