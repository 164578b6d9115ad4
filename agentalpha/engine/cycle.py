"""
Trading cycle for one agent.

Glues the pieces an external scheduler would call once per cycle: resolve
the agent's strategy, assemble a StrategyContext from live balance,
positions and market data, analyze, and optionally run the risk validator.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from agentalpha.data.models import MarketSnapshot, StrategyContext, TradingSignal
from agentalpha.engine.config import AgentProfile
from agentalpha.signals.validator import SignalValidator
from agentalpha.strategies.base import Strategy, is_real_number
from agentalpha.strategies.registry import StrategyRegistry, resolve

logger = logging.getLogger(__name__)


@dataclass
class CycleResult:
    """Output of one trading cycle."""

    agent: str
    strategy: str
    signals: List[TradingSignal] = field(default_factory=list)
    rejected: List[Tuple[TradingSignal, str]] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)  # Symbols with unusable prices

    def to_dict(self) -> Dict[str, Any]:
        return {
            "agent": self.agent,
            "strategy": self.strategy,
            "signals": [s.to_dict() for s in self.signals],
            "rejected": [
                {**s.to_dict(), "rejection_reason": reason}
                for s, reason in self.rejected
            ],
            "skipped": list(self.skipped),
        }

    def summary(self) -> str:
        """One-line summary for logs and the CLI."""
        return (
            f"{self.agent} [{self.strategy}]: {len(self.signals)} signals, "
            f"{len(self.rejected)} rejected, {len(self.skipped)} skipped"
        )


def _normalize_positions(positions: Mapping[str, float]) -> Dict[str, float]:
    normalized: Dict[str, float] = {}
    for symbol, quantity in positions.items():
        key = str(symbol).strip().upper()
        normalized[key] = normalized.get(key, 0.0) + (quantity or 0.0)
    return normalized


class TradingCycle:
    """
    Runs an agent's strategy over one cycle of market data.

    Example:
        cycle = TradingCycle(AgentProfile(strategy_type="momentum"))
        result = cycle.run(balance=10000, positions={}, market_data=markets)
        for signal in result.signals:
            executor.submit(signal)
    """

    def __init__(
        self,
        profile: AgentProfile,
        validator: Optional[SignalValidator] = None,
        registry: Optional[StrategyRegistry] = None,
    ):
        """
        Initialize the cycle.

        Args:
            profile: Validated agent configuration
            validator: Risk validator applied to signals (None to skip)
            registry: Strategy registry (the global one by default)
        """
        self.profile = profile
        self.validator = validator
        if registry is not None:
            self.strategy: Strategy = registry.resolve(profile.strategy_type)
        else:
            self.strategy = resolve(profile.strategy_type)

    def build_context(
        self,
        balance: float,
        positions: Mapping[str, float],
        market_data: Sequence[MarketSnapshot],
    ) -> Tuple[StrategyContext, List[str]]:
        """
        Assemble the strategy context for this cycle.

        Symbols and position keys are upper-cased so that markets, trading
        pairs and positions match. Markets outside the profile's trading
        pairs are dropped. Markets without a positive price are dropped and
        reported.

        Returns:
            (context, skipped symbols)
        """
        pairs = set(self.profile.trading_pairs)
        markets = []
        skipped = []

        for market in market_data:
            symbol = (market.symbol or "").strip().upper()
            if pairs and symbol not in pairs:
                continue
            if symbol != market.symbol:
                market = replace(market, symbol=symbol)
            price = market.current_price
            if not (is_real_number(price) and price > 0):
                logger.warning(
                    "Skipping %s: non-positive price %r", market.symbol, market.current_price
                )
                skipped.append(market.symbol)
                continue
            markets.append(market)

        context = StrategyContext(
            agent_balance=balance,
            current_positions=_normalize_positions(positions),
            market_data=tuple(markets),
            risk_tolerance=self.profile.risk_tolerance,
            max_position_size_percent=self.profile.max_position_size_percent,
        )
        return context, skipped

    def run(
        self,
        balance: float,
        positions: Mapping[str, float],
        market_data: Sequence[MarketSnapshot],
    ) -> CycleResult:
        """
        Evaluate one cycle.

        Args:
            balance: Agent's available balance
            positions: Symbol -> held quantity
            market_data: This cycle's market snapshots

        Returns:
            CycleResult with accepted signals, rejections and skipped symbols
        """
        context, skipped = self.build_context(balance, positions, market_data)
        signals = self.strategy.analyze(context)

        result = CycleResult(
            agent=self.profile.name,
            strategy=self.strategy.code,
            skipped=skipped,
        )

        if self.validator is not None:
            summary = self.validator.filter(signals, context)
            result.signals = summary.accepted
            result.rejected = summary.rejected
        else:
            result.signals = signals

        logger.info(result.summary())
        return result
