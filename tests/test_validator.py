"""
Tests for the signal validator.
"""

import logging

import pytest

from agentalpha.config import RiskConfig
from agentalpha.data.models import SignalAction, TradingSignal
from agentalpha.signals import SignalValidator


def buy(symbol, quantity, confidence=0.8):
    return TradingSignal(
        action=SignalAction.BUY, symbol=symbol, confidence=confidence,
        quantity=quantity, reason="test",
    )


def sell(symbol, quantity, confidence=0.8):
    return TradingSignal(
        action=SignalAction.SELL, symbol=symbol, confidence=confidence,
        quantity=quantity, reason="test",
    )


class TestSignalValidator:
    """Test single-signal rules."""

    @pytest.fixture
    def validator(self):
        return SignalValidator()

    def test_valid_buy(self, validator, context_factory):
        context = context_factory(("BTC", 50000, 8))

        result = validator.validate(buy("BTC", 0.02), context)

        assert result.is_valid
        assert result.adjusted_quantity is None

    def test_insufficient_capital(self, validator, context_factory):
        context = context_factory(("BTC", 50000, 8), balance=5)

        result = validator.validate(buy("BTC", 0.00001), context)

        assert not result.is_valid
        assert "Insufficient capital" in result.reason

    def test_cycle_limit(self, validator, context_factory):
        context = context_factory(("BTC", 50000, 8))

        result = validator.validate(buy("BTC", 0.02), context, recent_trades=3)

        assert not result.is_valid
        assert "3/3" in result.reason

    def test_buy_with_existing_position(self, validator, context_factory):
        context = context_factory(("BTC", 50000, 8), positions={"BTC": 0.1})

        result = validator.validate(buy("BTC", 0.02), context)

        assert not result.is_valid
        assert "Already have open position" in result.reason

    def test_buy_without_market_data(self, validator, context_factory):
        context = context_factory(("ETH", 2000, 8))

        result = validator.validate(buy("BTC", 0.02), context)

        assert not result.is_valid
        assert "No market data" in result.reason

    def test_non_positive_quantity(self, validator, context_factory):
        context = context_factory(("BTC", 50000, 8))

        result = validator.validate(buy("BTC", 0.0), context)

        assert not result.is_valid
        assert "must be > 0" in result.reason

    def test_overbought_buy_blocked(self, validator, context_factory):
        context = context_factory(("PEPE", 0.001, 75))

        result = validator.validate(buy("PEPE", 1000), context)

        assert not result.is_valid
        assert "+75.00%" in result.reason

    def test_buy_capped_to_max_position(self, validator, context_factory):
        context = context_factory(("BTC", 50000, 8), balance=10000)

        # $50,000 notional against a 25% cap of $2,500
        result = validator.validate(buy("BTC", 1.0), context)

        assert result.is_valid
        assert result.adjusted_quantity == pytest.approx(0.05)

    def test_buy_too_small(self, validator, context_factory):
        context = context_factory(("BTC", 50000, 8), balance=100)

        result = validator.validate(buy("BTC", 0.0001), context)

        assert not result.is_valid
        assert "too small" in result.reason

    def test_sell_requires_position(self, validator, context_factory):
        context = context_factory(("BTC", 50000, -8))

        result = validator.validate(sell("BTC", 1.0), context)

        assert not result.is_valid
        assert "No open position" in result.reason

    def test_sell_not_blocked_in_crash(self, validator, context_factory):
        context = context_factory(("BTC", 20000, -60), positions={"BTC": 1.0})

        assert validator.validate(sell("BTC", 1.0), context).is_valid

    def test_from_config(self):
        validator = SignalValidator.from_config(
            RiskConfig(max_signals_per_cycle=1, min_trade_notional=0)
        )

        assert validator.max_signals_per_cycle == 1
        assert validator.min_trade_notional == 0
        assert validator.max_position_size_percent == 25.0


class TestValidatorFilter:
    """Test cycle-level filtering."""

    def test_cycle_limit_counts_accepted_only(self, context_factory):
        context = context_factory(
            ("A", 10, 8), ("B", 10, 8), ("C", 10, 8), ("D", 10, 8), ("E", 10, 8),
            positions={"A": 1.0},
        )
        signals = [buy(s, 10) for s in "ABCDE"]

        summary = SignalValidator().filter(signals, context)

        assert [s.symbol for s in summary.accepted] == ["B", "C", "D"]
        assert [s.symbol for s, _ in summary.rejected] == ["A", "E"]
        assert "frequency" in summary.rejected[1][1]

    def test_capped_signal_is_replaced(self, context_factory):
        context = context_factory(("BTC", 50000, 8), balance=10000)

        summary = SignalValidator().filter([buy("BTC", 1.0)], context)

        assert summary.accepted[0].quantity == pytest.approx(0.05)
        assert summary.accepted[0].reason == "test"

    def test_rejections_are_logged(self, context_factory, caplog):
        context = context_factory(("BTC", 50000, -8))

        with caplog.at_level(logging.INFO, logger="agentalpha.signals.validator"):
            SignalValidator().filter([sell("BTC", 1.0)], context)

        assert "No open position in BTC" in caplog.text

    def test_summary_to_dict(self, context_factory):
        context = context_factory(("BTC", 50000, -8))

        d = SignalValidator().filter([sell("BTC", 1.0)], context).to_dict()

        assert d["accepted"] == []
        assert d["rejected"][0]["symbol"] == "BTC"
        assert "rejection_reason" in d["rejected"][0]
