"""
Strategy System for Agent Alpha.

A strategy is data, not a subclass: a ``StrategySpec`` record holds the
entry/exit thresholds on the 24h change, the confidence formulas and the
position size multiplier. ``Strategy`` is the single evaluator that runs any
spec against a ``StrategyContext``.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from agentalpha.data.models import (
    MarketSnapshot,
    PositionBook,
    SignalAction,
    StrategyContext,
    TradingSignal,
)

logger = logging.getLogger(__name__)


def calculate_position_size(
    balance: float,
    max_position_percent: float,
    price: float,
) -> float:
    """
    Quantity affordable with a percentage of the balance.

    No rounding or lot-size logic is applied; exchange precision belongs to
    the execution layer.

    Args:
        balance: Available balance
        max_position_percent: Percentage of balance to commit (0-100)
        price: Current price, must be > 0

    Returns:
        Quantity of the asset
    """
    max_investment = balance * (max_position_percent / 100)
    return max_investment / price


def has_existing_position(symbol: str, positions: PositionBook) -> bool:
    """True iff the book holds a strictly positive quantity of ``symbol``."""
    return (positions.get(symbol) or 0) > 0


def is_real_number(value: Any) -> bool:
    """True for int and float values, excluding bools."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class Trigger:
    """
    Open interval on the 24h change that fires a rule.

    ``above`` and ``below`` are strict bounds; either may be omitted.
    ``reason`` is a format template receiving ``change``.
    """

    above: Optional[float] = None
    below: Optional[float] = None
    reason: str = ""

    def matches(self, change: float) -> bool:
        if self.above is not None and not change > self.above:
            return False
        if self.below is not None and not change < self.below:
            return False
        return True

    def describe(self) -> str:
        """Human-readable condition, e.g. ``2 < change < 8``."""
        if self.above is not None and self.below is not None:
            return f"{self.above:g} < change < {self.below:g}"
        if self.above is not None:
            return f"change > {self.above:g}"
        if self.below is not None:
            return f"change < {self.below:g}"
        return "always"


@dataclass(frozen=True)
class ConfidenceRule:
    """
    Confidence formula.

    With a ``divisor`` the confidence is ``min(|change| / divisor, cap)``;
    without one it is the fixed value ``cap``.
    """

    cap: float
    divisor: Optional[float] = None

    def __call__(self, change: float) -> float:
        if self.divisor is None:
            return self.cap
        return min(abs(change) / self.divisor, self.cap)

    def describe(self) -> str:
        if self.divisor is None:
            return f"{self.cap:g}"
        return f"min(|change| / {self.divisor:g}, {self.cap:g})"


@dataclass(frozen=True)
class StrategySpec:
    """Configuration record for one trading policy."""

    code: str
    name: str
    entry: Tuple[Trigger, ...]
    exit: Tuple[Trigger, ...]
    entry_confidence: ConfidenceRule
    exit_confidence: ConfidenceRule
    size_multiplier: float = 1.0
    category: str = "general"  # momentum, mean_reversion, risk, etc.
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "code": self.code,
            "name": self.name,
            "category": self.category,
            "description": self.description,
            "entry": [t.describe() for t in self.entry],
            "exit": [t.describe() for t in self.exit],
            "entry_confidence": self.entry_confidence.describe(),
            "exit_confidence": self.exit_confidence.describe(),
            "size_multiplier": self.size_multiplier,
        }


class Strategy:
    """
    Evaluates a StrategySpec against a StrategyContext.

    Stateless between calls: ``analyze`` is pure and deterministic, so one
    instance may be shared across agents and threads.

    Example:
        strategy = resolve("momentum")
        signals = strategy.analyze(context)
        for signal in signals:
            print(signal.action, signal.symbol, signal.quantity)
    """

    def __init__(self, spec: StrategySpec):
        self.spec = spec

    @property
    def code(self) -> str:
        return self.spec.code

    @property
    def name(self) -> str:
        return self.spec.name

    def analyze(self, context: StrategyContext) -> List[TradingSignal]:
        """
        Generate trading signals for every market in the context.

        Entry is checked before exit. At most one signal is produced per
        snapshot, in the order of ``context.market_data``.

        Args:
            context: Balance, positions and market snapshots for this cycle

        Returns:
            List of BUY/SELL signals (empty when nothing triggers)
        """
        signals = []

        for market in context.market_data:
            if not market.symbol:
                logger.debug("Skipping market snapshot without symbol")
                continue
            if not (is_real_number(market.change_24h) and is_real_number(market.current_price)):
                logger.debug(
                    "Skipping %s: malformed price %r or 24h change %r",
                    market.symbol, market.current_price, market.change_24h,
                )
                continue

            signal = self._evaluate(market, context)
            if signal is not None:
                logger.debug(
                    "%s: %s %s (confidence %.2f)",
                    self.code, signal.action.value, signal.symbol, signal.confidence,
                )
                signals.append(signal)

        return signals

    def _evaluate(
        self,
        market: MarketSnapshot,
        context: StrategyContext,
    ) -> Optional[TradingSignal]:
        change = market.change_24h
        held = has_existing_position(market.symbol, context.current_positions)

        if not held:
            trigger = self._first_match(self.spec.entry, change)
            if trigger is None:
                return None
            quantity = calculate_position_size(
                context.agent_balance,
                context.max_position_size_percent * self.spec.size_multiplier,
                market.current_price,
            )
            return TradingSignal(
                action=SignalAction.BUY,
                symbol=market.symbol,
                confidence=self.spec.entry_confidence(change),
                quantity=quantity,
                reason=trigger.reason.format(change=change),
            )

        trigger = self._first_match(self.spec.exit, change)
        if trigger is None:
            return None
        return TradingSignal(
            action=SignalAction.SELL,
            symbol=market.symbol,
            confidence=self.spec.exit_confidence(change),
            quantity=context.current_positions[market.symbol],
            reason=trigger.reason.format(change=change),
        )

    @staticmethod
    def _first_match(triggers: Tuple[Trigger, ...], change: float) -> Optional[Trigger]:
        for trigger in triggers:
            if trigger.matches(change):
                return trigger
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert strategy configuration to dictionary."""
        return self.spec.to_dict()

    def __repr__(self) -> str:
        return f"Strategy({self.code!r})"
