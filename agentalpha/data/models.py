"""
Data model for Agent Alpha.

Market snapshots flow in, trading signals flow out. Every type here is an
immutable per-cycle value: the caller builds it fresh each trading cycle and
nothing in the core mutates it.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

PositionBook = Mapping[str, float]


class SignalAction(str, Enum):
    """Trading action."""

    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class RiskTolerance(str, Enum):
    """Agent risk profile. Reserved for policies that scale with risk."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def _lookup(data: Mapping[str, Any], *keys: str) -> Any:
    """Return the first present key's value (camelCase or snake_case)."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _optional_float(value: Any) -> Optional[float]:
    """Coerce an optional numeric field, ignoring anything malformed."""
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    return result if math.isfinite(result) else None


def _optional_str(value: Any, allowed: Sequence[str]) -> Optional[str]:
    if not isinstance(value, str):
        return None
    value = value.upper()
    return value if value in allowed else None


@dataclass(frozen=True)
class PricePoint:
    """One hourly price sample."""
    timestamp: float
    price: float


@dataclass(frozen=True)
class MACD:
    value: float
    signal: float
    histogram: float


@dataclass(frozen=True)
class BollingerBands:
    upper: float
    middle: float
    lower: float


@dataclass(frozen=True)
class Stochastic:
    k: float
    d: float


@dataclass(frozen=True)
class Sentiment:
    """News sentiment summary."""
    overall_sentiment: Optional[str] = None  # BULLISH, BEARISH, NEUTRAL
    sentiment_score: Optional[float] = None  # -1 (very bearish) to +1
    bullish_percent: Optional[float] = None
    bearish_percent: Optional[float] = None
    recent_news_count: Optional[int] = None


@dataclass(frozen=True)
class MarketSnapshot:
    """
    One symbol's market state for one trading cycle.

    Only ``symbol``, ``current_price`` and ``change_24h`` are required. The
    enrichment fields are optional context; built-in strategies never read
    them.
    """

    symbol: str
    current_price: float
    change_24h: float  # Signed percentage

    volume_24h: Optional[float] = None
    high_24h: Optional[float] = None
    low_24h: Optional[float] = None
    price_history: Tuple[PricePoint, ...] = ()
    short_term_trend: Optional[str] = None  # UP, DOWN, SIDEWAYS
    volatility: Optional[float] = None
    distance_from_high: Optional[float] = None
    distance_from_low: Optional[float] = None
    rsi_approx: Optional[float] = None
    rsi: Optional[float] = None
    macd: Optional[MACD] = None
    bollinger_bands: Optional[BollingerBands] = None
    adx: Optional[float] = None
    stoch: Optional[Stochastic] = None
    sentiment: Optional[Sentiment] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MarketSnapshot":
        """
        Build a snapshot from a raw record.

        Accepts camelCase (``currentPrice``) or snake_case (``current_price``)
        keys. Optional fields that are missing or malformed become ``None``.

        Raises:
            ValueError: If ``symbol``, the price or the 24h change is missing
                or not numeric
        """
        symbol = _lookup(data, "symbol")
        if not isinstance(symbol, str) or not symbol.strip():
            raise ValueError(f"Market record missing symbol: {dict(data)!r}")

        price = _optional_float(_lookup(data, "current_price", "currentPrice", "price"))
        if price is None:
            raise ValueError(f"Market record for {symbol} missing current price")

        change = _optional_float(_lookup(data, "change_24h", "change24h"))
        if change is None:
            raise ValueError(f"Market record for {symbol} missing 24h change")

        return cls(
            symbol=symbol.strip(),
            current_price=price,
            change_24h=change,
            volume_24h=_optional_float(_lookup(data, "volume_24h", "volume24h")),
            high_24h=_optional_float(_lookup(data, "high_24h", "high24h")),
            low_24h=_optional_float(_lookup(data, "low_24h", "low24h")),
            price_history=_parse_history(_lookup(data, "price_history", "priceHistory")),
            short_term_trend=_optional_str(
                _lookup(data, "short_term_trend", "shortTermTrend"),
                ("UP", "DOWN", "SIDEWAYS"),
            ),
            volatility=_optional_float(_lookup(data, "volatility")),
            distance_from_high=_optional_float(
                _lookup(data, "distance_from_high", "distanceFromHigh")
            ),
            distance_from_low=_optional_float(
                _lookup(data, "distance_from_low", "distanceFromLow")
            ),
            rsi_approx=_optional_float(_lookup(data, "rsi_approx", "rsiApprox")),
            rsi=_optional_float(_lookup(data, "rsi")),
            macd=_parse_triple(MACD, _lookup(data, "macd"), ("value", "signal", "histogram")),
            bollinger_bands=_parse_triple(
                BollingerBands,
                _lookup(data, "bollinger_bands", "bollingerBands"),
                ("upper", "middle", "lower"),
            ),
            adx=_optional_float(_lookup(data, "adx")),
            stoch=_parse_triple(Stochastic, _lookup(data, "stoch"), ("k", "d")),
            sentiment=_parse_sentiment(_lookup(data, "sentiment")),
        )


def _parse_history(raw: Any) -> Tuple[PricePoint, ...]:
    if not isinstance(raw, (list, tuple)):
        return ()
    points = []
    for item in raw:
        if not isinstance(item, Mapping):
            continue
        timestamp = _optional_float(item.get("timestamp"))
        price = _optional_float(item.get("price"))
        if timestamp is not None and price is not None:
            points.append(PricePoint(timestamp=timestamp, price=price))
    return tuple(points)


def _parse_triple(model, raw: Any, names: Tuple[str, ...]):
    """Parse a small all-numeric indicator record, or None if incomplete."""
    if not isinstance(raw, Mapping):
        return None
    values = {name: _optional_float(raw.get(name)) for name in names}
    if any(v is None for v in values.values()):
        return None
    return model(**values)


def _parse_sentiment(raw: Any) -> Optional[Sentiment]:
    if not isinstance(raw, Mapping):
        return None
    count = _optional_float(_lookup(raw, "recent_news_count", "recentNewsCount"))
    return Sentiment(
        overall_sentiment=_optional_str(
            _lookup(raw, "overall_sentiment", "overallSentiment"),
            ("BULLISH", "BEARISH", "NEUTRAL"),
        ),
        sentiment_score=_optional_float(_lookup(raw, "sentiment_score", "sentimentScore")),
        bullish_percent=_optional_float(_lookup(raw, "bullish_percent", "bullishPercent")),
        bearish_percent=_optional_float(_lookup(raw, "bearish_percent", "bearishPercent")),
        recent_news_count=int(count) if count is not None else None,
    )


@dataclass(frozen=True)
class StrategyContext:
    """
    Everything a strategy sees in one evaluation.

    ``current_positions`` is copied into a read-only mapping so a context is
    a true snapshot of the ledger at construction time.
    """

    agent_balance: float
    current_positions: PositionBook = field(default_factory=dict)
    market_data: Tuple[MarketSnapshot, ...] = ()
    risk_tolerance: RiskTolerance = RiskTolerance.MEDIUM
    max_position_size_percent: float = 30.0

    def __post_init__(self):
        object.__setattr__(
            self, "current_positions", MappingProxyType(dict(self.current_positions))
        )
        object.__setattr__(self, "market_data", tuple(self.market_data))
        object.__setattr__(self, "risk_tolerance", RiskTolerance(self.risk_tolerance))


@dataclass(frozen=True)
class TradingSignal:
    """
    A BUY or SELL decision for one symbol.

    HOLD is implicit: a symbol without a signal is held as-is.
    """

    action: SignalAction
    symbol: str
    confidence: float  # 0.0 to 1.0
    quantity: Optional[float] = None
    reason: str = ""

    def __post_init__(self):
        object.__setattr__(self, "action", SignalAction(self.action))
        if self.action is SignalAction.HOLD:
            raise ValueError("HOLD is implicit and never emitted as a signal")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence out of range [0, 1]: {self.confidence}")
        if self.quantity is None:
            raise ValueError(f"{self.action.value} signal for {self.symbol} needs a quantity")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "action": self.action.value,
            "symbol": self.symbol,
            "confidence": self.confidence,
            "quantity": self.quantity,
            "reason": self.reason,
        }
