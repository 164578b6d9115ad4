"""
Agent Alpha - Multi-Strategy Trading Signal Engine

Given a snapshot of market conditions, a balance, current holdings and a
risk profile, decides per symbol whether to buy, sell or hold, with what
confidence and what size.
"""

__version__ = "0.1.0"

from agentalpha.config import Settings, get_settings, setup_logging
from agentalpha.data.models import (
    MarketSnapshot,
    RiskTolerance,
    SignalAction,
    StrategyContext,
    TradingSignal,
)
from agentalpha.strategies import Strategy, StrategyType, list_strategies, resolve

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "MarketSnapshot",
    "RiskTolerance",
    "SignalAction",
    "StrategyContext",
    "TradingSignal",
    "Strategy",
    "StrategyType",
    "resolve",
    "list_strategies",
    "__version__",
]
