"""
Signal Validation System for Agent Alpha.

Checks strategy signals against account-level risk limits before they are
handed to the execution layer.

Rules:
- Minimum capital: agents below the floor do not trade
- Cycle limit: at most N signals accepted per trading cycle
- Position cap: BUY notional is capped at a percentage of capital
- Minimum notional: BUYs too small to fill are rejected
- Overextension: BUYs after an extreme 24h surge are blocked
- Position state: no BUY on a held symbol, no SELL without a position
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from agentalpha.config import RiskConfig
from agentalpha.data.models import SignalAction, StrategyContext, TradingSignal
from agentalpha.strategies.base import has_existing_position

logger = logging.getLogger(__name__)


@dataclass
class SignalValidationResult:
    """Outcome of validating one signal."""

    is_valid: bool
    reason: Optional[str] = None
    adjusted_quantity: Optional[float] = None  # Set when a BUY was scaled down

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "reason": self.reason,
            "adjusted_quantity": self.adjusted_quantity,
        }


@dataclass
class ValidationSummary:
    """Signals split into accepted and rejected for one cycle."""

    accepted: List[TradingSignal] = field(default_factory=list)
    rejected: List[Tuple[TradingSignal, str]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "accepted": [s.to_dict() for s in self.accepted],
            "rejected": [
                {**s.to_dict(), "rejection_reason": reason}
                for s, reason in self.rejected
            ],
        }


class SignalValidator:
    """
    Validates trading signals against risk limits.

    Example:
        validator = SignalValidator(max_signals_per_cycle=2)
        summary = validator.filter(signals, context)

        for signal, reason in summary.rejected:
            print(f"Rejected {signal.symbol}: {reason}")
    """

    def __init__(
        self,
        min_capital_to_trade: float = 7.0,
        max_signals_per_cycle: int = 3,
        max_position_size_percent: float = 25.0,
        min_trade_notional: float = 10.0,
        max_buy_change_24h: float = 50.0,
    ):
        """
        Initialize the validator.

        Args:
            min_capital_to_trade: Balance below which no signal is accepted
            max_signals_per_cycle: Maximum accepted signals per cycle
            max_position_size_percent: Maximum BUY notional as % of balance
            min_trade_notional: Minimum BUY notional
            max_buy_change_24h: BUY is blocked when the 24h change exceeds this
        """
        self.min_capital_to_trade = min_capital_to_trade
        self.max_signals_per_cycle = max_signals_per_cycle
        self.max_position_size_percent = max_position_size_percent
        self.min_trade_notional = min_trade_notional
        self.max_buy_change_24h = max_buy_change_24h

    @classmethod
    def from_config(cls, config: RiskConfig) -> "SignalValidator":
        """Create a validator from the risk section of the settings."""
        return cls(
            min_capital_to_trade=config.min_capital_to_trade,
            max_signals_per_cycle=config.max_signals_per_cycle,
            max_position_size_percent=config.max_position_size_percent,
            min_trade_notional=config.min_trade_notional,
            max_buy_change_24h=config.max_buy_change_24h,
        )

    def validate(
        self,
        signal: TradingSignal,
        context: StrategyContext,
        recent_trades: int = 0,
    ) -> SignalValidationResult:
        """
        Validate a single signal.

        Args:
            signal: Signal to check
            context: The context the signal was generated from
            recent_trades: Signals already accepted in this cycle

        Returns:
            SignalValidationResult, with ``adjusted_quantity`` set when a BUY
            passes only after being scaled down to the position cap
        """
        if signal.action is SignalAction.HOLD:
            return SignalValidationResult(is_valid=True)

        if context.agent_balance < self.min_capital_to_trade:
            return SignalValidationResult(
                is_valid=False,
                reason=(
                    f"Insufficient capital: ${context.agent_balance:.2f} < "
                    f"minimum ${self.min_capital_to_trade:.2f}"
                ),
            )

        if recent_trades >= self.max_signals_per_cycle:
            return SignalValidationResult(
                is_valid=False,
                reason=(
                    f"Trade frequency limit reached: {recent_trades}/"
                    f"{self.max_signals_per_cycle} trades in current cycle"
                ),
            )

        if signal.action is SignalAction.BUY:
            return self._validate_buy(signal, context)
        return self._validate_sell(signal, context)

    def _validate_buy(
        self,
        signal: TradingSignal,
        context: StrategyContext,
    ) -> SignalValidationResult:
        if has_existing_position(signal.symbol, context.current_positions):
            return SignalValidationResult(
                is_valid=False,
                reason=f"Already have open position in {signal.symbol}",
            )

        if signal.quantity <= 0:
            return SignalValidationResult(is_valid=False, reason="Position size must be > 0")

        market = next(
            (m for m in context.market_data if m.symbol == signal.symbol), None
        )
        if market is None:
            return SignalValidationResult(
                is_valid=False,
                reason=f"No market data available for {signal.symbol}",
            )

        if market.change_24h > self.max_buy_change_24h:
            return SignalValidationResult(
                is_valid=False,
                reason=(
                    f"Market appears extremely overbought (+{market.change_24h:.2f}%), "
                    "blocking potential bad trade"
                ),
            )

        notional = signal.quantity * market.current_price
        max_notional = context.agent_balance * self.max_position_size_percent / 100

        adjusted_quantity = None
        if notional > max_notional:
            adjusted_quantity = max_notional / market.current_price
            notional = max_notional

        if notional < self.min_trade_notional:
            return SignalValidationResult(
                is_valid=False,
                reason=(
                    f"Trade amount too small: ${notional:.2f} < "
                    f"${self.min_trade_notional:.2f} minimum"
                ),
            )

        return SignalValidationResult(is_valid=True, adjusted_quantity=adjusted_quantity)

    def _validate_sell(
        self,
        signal: TradingSignal,
        context: StrategyContext,
    ) -> SignalValidationResult:
        if not has_existing_position(signal.symbol, context.current_positions):
            return SignalValidationResult(
                is_valid=False,
                reason=f"No open position in {signal.symbol} to sell",
            )
        return SignalValidationResult(is_valid=True)

    def filter(
        self,
        signals: Sequence[TradingSignal],
        context: StrategyContext,
    ) -> ValidationSummary:
        """
        Validate a cycle's signals in order.

        Accepted BUYs that exceeded the position cap are replaced by a copy
        with the capped quantity. Only accepted signals count toward the
        per-cycle limit.
        """
        summary = ValidationSummary()

        for signal in signals:
            result = self.validate(signal, context, recent_trades=len(summary.accepted))
            if not result.is_valid:
                logger.info("Rejected %s %s: %s", signal.action.value, signal.symbol, result.reason)
                summary.rejected.append((signal, result.reason))
                continue

            if result.adjusted_quantity is not None:
                logger.info(
                    "Capped %s %s quantity from %.8g to %.8g",
                    signal.action.value, signal.symbol,
                    signal.quantity, result.adjusted_quantity,
                )
                signal = replace(signal, quantity=result.adjusted_quantity)
            summary.accepted.append(signal)

        return summary
