"""
Strategies layer for Agent Alpha.

Strategies turn a market snapshot into BUY/SELL signals with a confidence
and a size.

Hierarchy:
    StrategySpec (thresholds, confidence, sizing) → Strategy (evaluator) → TradingSignal
"""

from agentalpha.strategies.base import (
    ConfidenceRule,
    Strategy,
    StrategySpec,
    Trigger,
    calculate_position_size,
    has_existing_position,
)
from agentalpha.strategies.library import (
    AGGRESSIVE,
    BUILTIN_STRATEGIES,
    CONSERVATIVE,
    MEAN_REVERSION,
    MOMENTUM,
    SWING,
    TREND_FOLLOWER,
)
from agentalpha.strategies.registry import (
    StrategyRegistry,
    StrategyType,
    get_strategy,
    list_categories,
    list_strategies,
    register,
    resolve,
)

__all__ = [
    # Core
    "Strategy",
    "StrategySpec",
    "Trigger",
    "ConfidenceRule",
    "calculate_position_size",
    "has_existing_position",
    # Registry
    "StrategyRegistry",
    "StrategyType",
    "register",
    "resolve",
    "get_strategy",
    "list_strategies",
    "list_categories",
    # Built-in strategies
    "MOMENTUM",
    "SWING",
    "CONSERVATIVE",
    "AGGRESSIVE",
    "TREND_FOLLOWER",
    "MEAN_REVERSION",
    "BUILTIN_STRATEGIES",
]
