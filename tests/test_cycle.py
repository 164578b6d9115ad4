"""
Tests for the trading cycle and agent profile.
"""

import logging

import pytest
from pydantic import ValidationError

from agentalpha.config import Settings, StrategyDefaultsConfig
from agentalpha.data.models import MarketSnapshot, RiskTolerance, SignalAction
from agentalpha.engine import AgentProfile, TradingCycle
from agentalpha.signals import SignalValidator
from agentalpha.strategies import CONSERVATIVE, MOMENTUM, StrategyRegistry


class TestAgentProfile:
    """Test agent configuration validation."""

    def test_defaults(self):
        profile = AgentProfile()

        assert profile.strategy_type == "conservative"
        assert profile.risk_tolerance is RiskTolerance.MEDIUM
        assert profile.max_position_size_percent == 30.0
        assert profile.trading_pairs == []

    @pytest.mark.parametrize("value", [0, -5, 100.5])
    def test_max_position_out_of_range(self, value):
        with pytest.raises(ValidationError):
            AgentProfile(max_position_size_percent=value)

    def test_invalid_risk_tolerance(self):
        with pytest.raises(ValidationError):
            AgentProfile(risk_tolerance="reckless")

    def test_normalization(self):
        profile = AgentProfile(strategy_type="  Momentum ", trading_pairs=["btcusdt ", "", "eth"])

        assert profile.strategy_type == "momentum"
        assert profile.trading_pairs == ["BTCUSDT", "ETH"]

    def test_from_settings(self):
        settings = Settings(
            strategy=StrategyDefaultsConfig(
                default_strategy="swing",
                default_max_position_size_percent=12,
                default_risk_tolerance="low",
            )
        )

        profile = AgentProfile.from_settings(settings, name="bot", risk_tolerance=None)

        assert profile.name == "bot"
        assert profile.strategy_type == "swing"
        assert profile.max_position_size_percent == 12
        assert profile.risk_tolerance is RiskTolerance.LOW

    def test_from_settings_overrides(self):
        profile = AgentProfile.from_settings(Settings(), strategy_type="aggressive")

        assert profile.strategy_type == "aggressive"

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "agent.yaml"
        path.write_text(
            "agent:\n"
            "  name: grok\n"
            "  strategy_type: aggressive\n"
            "  risk_tolerance: high\n"
            "  max_position_size_percent: 40\n"
        )

        profile = AgentProfile.from_yaml(path)

        assert profile.name == "grok"
        assert profile.strategy_type == "aggressive"
        assert profile.risk_tolerance is RiskTolerance.HIGH

    def test_from_yaml_missing(self, tmp_path):
        assert AgentProfile.from_yaml(tmp_path / "nope.yaml") == AgentProfile()


class TestTradingCycle:
    """Test one evaluation cycle."""

    def test_run_without_validator(self):
        cycle = TradingCycle(AgentProfile(strategy_type="momentum", max_position_size_percent=10))
        markets = [MarketSnapshot("BTC", 50000, 8), MarketSnapshot("ETH", 2000, -5)]

        result = cycle.run(10000, {"ETH": 1.0}, markets)

        assert result.strategy == "momentum"
        assert [(s.action, s.symbol) for s in result.signals] == [
            (SignalAction.BUY, "BTC"),
            (SignalAction.SELL, "ETH"),
        ]
        assert result.signals[0].quantity == pytest.approx(0.02)
        assert result.rejected == []

    def test_non_positive_prices_skipped(self, caplog):
        cycle = TradingCycle(AgentProfile(strategy_type="momentum"))
        markets = [
            MarketSnapshot("BAD", 0.0, 9),
            MarketSnapshot("NEG", -1.0, 9),
            MarketSnapshot("BTC", 50000, 9),
        ]

        with caplog.at_level(logging.WARNING, logger="agentalpha.engine.cycle"):
            result = cycle.run(10000, {}, markets)

        assert result.skipped == ["BAD", "NEG"]
        assert [s.symbol for s in result.signals] == ["BTC"]
        assert "non-positive price" in caplog.text

    def test_trading_pairs_filter(self):
        profile = AgentProfile(strategy_type="momentum", trading_pairs=["BTCUSDT"])
        markets = [MarketSnapshot("BTCUSDT", 50000, 9), MarketSnapshot("ETHUSDT", 2000, 9)]

        result = TradingCycle(profile).run(10000, {}, markets)

        assert [s.symbol for s in result.signals] == ["BTCUSDT"]
        assert result.skipped == []

    def test_symbols_normalized_against_positions(self):
        profile = AgentProfile(strategy_type="momentum", trading_pairs=["btcusdt", "ETHUSDT"])
        markets = [MarketSnapshot(" btcusdt", 50000, -5), MarketSnapshot("ethusdt", 2000, 9)]

        result = TradingCycle(profile).run(10000, {"BTCUSDT": 0.5}, markets)

        assert [(s.action, s.symbol) for s in result.signals] == [
            (SignalAction.SELL, "BTCUSDT"),
            (SignalAction.BUY, "ETHUSDT"),
        ]
        assert result.signals[0].quantity == 0.5

    def test_lowercase_position_keys(self):
        cycle = TradingCycle(AgentProfile(strategy_type="momentum"))

        result = cycle.run(10000, {"eth": 1.0}, [MarketSnapshot("ETH", 2000, 9)])

        # ETH is held, and +9% is not an exit for momentum
        assert result.signals == []

    def test_non_numeric_price_skipped(self):
        cycle = TradingCycle(AgentProfile(strategy_type="momentum"))
        markets = [MarketSnapshot("BAD", None, 9), MarketSnapshot("BTC", 50000, 9)]

        result = cycle.run(10000, {}, markets)

        assert result.skipped == ["BAD"]
        assert [s.symbol for s in result.signals] == ["BTC"]

    def test_with_validator(self):
        profile = AgentProfile(strategy_type="aggressive", max_position_size_percent=30)
        validator = SignalValidator(max_signals_per_cycle=1)
        markets = [MarketSnapshot("ETH", 2000, 15), MarketSnapshot("SOL", 100, 12)]

        result = TradingCycle(profile, validator=validator).run(10000, {}, markets)

        # 45% requested against a 25% cap: 2500 / 2000
        assert len(result.signals) == 1
        assert result.signals[0].quantity == pytest.approx(1.25)
        assert result.rejected[0][0].symbol == "SOL"

    def test_unknown_strategy_uses_conservative(self):
        cycle = TradingCycle(AgentProfile(strategy_type="typo"))

        assert cycle.strategy.code == "conservative"

    def test_custom_registry(self):
        registry = StrategyRegistry()
        registry.register(CONSERVATIVE)
        registry.register(MOMENTUM)

        cycle = TradingCycle(AgentProfile(strategy_type="momentum"), registry=registry)

        assert cycle.strategy.code == "momentum"

    def test_result_to_dict(self):
        cycle = TradingCycle(AgentProfile(name="bot", strategy_type="momentum"))

        d = cycle.run(10000, {}, [MarketSnapshot("BTC", 50000, 8)]).to_dict()

        assert d["agent"] == "bot"
        assert d["strategy"] == "momentum"
        assert d["signals"][0]["action"] == "BUY"
        assert d["skipped"] == []

    def test_summary(self):
        result = TradingCycle(AgentProfile(name="bot")).run(10000, {}, [])

        assert result.summary() == "bot [conservative]: 0 signals, 0 rejected, 0 skipped"
