"""
Strategy registry.

Maps strategy identifiers from agent configuration to evaluators. Resolution
is total: an unrecognized identifier falls back to the default strategy.
"""

import logging
from enum import Enum
from typing import Dict, List, Optional

from agentalpha.strategies.base import Strategy, StrategySpec
from agentalpha.strategies.library import BUILTIN_STRATEGIES, CONSERVATIVE

logger = logging.getLogger(__name__)


class StrategyType(str, Enum):
    """Identifiers of the built-in strategies."""

    MOMENTUM = "momentum"
    SWING = "swing"
    CONSERVATIVE = "conservative"
    AGGRESSIVE = "aggressive"
    TREND_FOLLOWER = "trend_follower"
    MEAN_REVERSION = "mean_reversion"


class StrategyRegistry:
    """
    Registry for strategy discovery and resolution.

    Example:
        registry = StrategyRegistry(default="conservative")
        registry.register(MY_SPEC)
        strategy = registry.resolve("my_code")
    """

    def __init__(self, default: str = CONSERVATIVE.code):
        """
        Initialize the registry.

        Args:
            default: Code of the strategy returned for unknown identifiers.
                It must be registered before the first fallback.
        """
        self._strategies: Dict[str, Strategy] = {}
        self.default = default

    def register(self, spec: StrategySpec) -> Strategy:
        """Register a strategy spec, replacing any spec with the same code."""
        strategy = Strategy(spec)
        self._strategies[spec.code] = strategy
        return strategy

    def get(self, code: str) -> Optional[Strategy]:
        """Get a strategy by code, or None."""
        return self._strategies.get(code)

    def resolve(self, identifier: Optional[str]) -> Strategy:
        """
        Resolve an identifier to a strategy, falling back to the default.

        A fallback usually means a typo in agent configuration, so it is
        logged as a warning.
        """
        strategy = self._strategies.get(identifier) if identifier else None
        if strategy is not None:
            return strategy

        logger.warning(
            "Unknown strategy %r, falling back to %r", identifier, self.default
        )
        return self._strategies[self.default]

    def list(self, category: Optional[str] = None) -> List[str]:
        """List registered strategy codes."""
        if category:
            return [
                code
                for code, strategy in self._strategies.items()
                if strategy.spec.category == category
            ]
        return list(self._strategies.keys())

    def categories(self) -> List[str]:
        """Get all unique categories, sorted."""
        return sorted(set(s.spec.category for s in self._strategies.values()))

    def __contains__(self, code: str) -> bool:
        return code in self._strategies


def _builtin_registry() -> StrategyRegistry:
    registry = StrategyRegistry(default=StrategyType.CONSERVATIVE.value)
    for spec in BUILTIN_STRATEGIES:
        registry.register(spec)
    return registry


# Global registry instance
_registry = _builtin_registry()


def register(spec: StrategySpec) -> Strategy:
    """Register a strategy spec in the global registry."""
    return _registry.register(spec)


def resolve(identifier: Optional[str]) -> Strategy:
    """Resolve a strategy identifier using the global registry."""
    return _registry.resolve(identifier)


def get_strategy(code: str) -> Optional[Strategy]:
    """Get a strategy by code from the global registry."""
    return _registry.get(code)


def list_strategies(category: Optional[str] = None) -> List[str]:
    """List all registered strategies."""
    return _registry.list(category)


def list_categories() -> List[str]:
    """List all strategy categories."""
    return _registry.categories()
