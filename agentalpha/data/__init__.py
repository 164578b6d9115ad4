"""
Data layer for Agent Alpha.

This module provides:
- Market snapshots and their optional indicator enrichment
- Strategy context and trading signal types
- Loading snapshots from YAML, JSON, CSV or pandas
"""

from agentalpha.data.loader import AccountSnapshot, SnapshotLoader
from agentalpha.data.models import (
    MACD,
    BollingerBands,
    MarketSnapshot,
    PositionBook,
    PricePoint,
    RiskTolerance,
    Sentiment,
    SignalAction,
    Stochastic,
    StrategyContext,
    TradingSignal,
)

__all__ = [
    "AccountSnapshot",
    "SnapshotLoader",
    "MarketSnapshot",
    "PricePoint",
    "MACD",
    "BollingerBands",
    "Stochastic",
    "Sentiment",
    "PositionBook",
    "RiskTolerance",
    "SignalAction",
    "StrategyContext",
    "TradingSignal",
]
