"""
Built-in strategy library.

Each policy is one StrategySpec. All thresholds are on the 24h change in
percent and are strict.
"""

from agentalpha.strategies.base import ConfidenceRule, StrategySpec, Trigger


MOMENTUM = StrategySpec(
    code="momentum",
    name="Momentum Trading",
    category="momentum",
    description="Buys strong 24h gains, exits when momentum turns negative.",
    entry=(
        Trigger(above=5, reason="Strong upward momentum detected: +{change:.2f}% in 24h"),
    ),
    exit=(
        Trigger(below=-3, reason="Momentum weakening: {change:.2f}% drop"),
    ),
    entry_confidence=ConfidenceRule(cap=1.0, divisor=10),
    exit_confidence=ConfidenceRule(cap=1.0, divisor=10),
)

SWING = StrategySpec(
    code="swing",
    name="Swing Trading",
    category="mean_reversion",
    description="Buys oversold drops, sells into overbought rallies.",
    entry=(
        Trigger(
            below=-8,
            reason="Oversold condition: {change:.2f}% drop presents swing opportunity",
        ),
    ),
    exit=(
        Trigger(
            above=12,
            reason="Overbought condition: +{change:.2f}% gain suggests pullback",
        ),
    ),
    entry_confidence=ConfidenceRule(cap=0.9, divisor=15),
    exit_confidence=ConfidenceRule(cap=0.9, divisor=15),
)

CONSERVATIVE = StrategySpec(
    code="conservative",
    name="Conservative",
    category="capital_preservation",
    description="Small positions on steady moderate growth, quick exit on decline.",
    entry=(
        Trigger(
            above=2,
            below=8,
            reason="Steady moderate growth: +{change:.2f}% suggests stability",
        ),
    ),
    exit=(
        Trigger(
            below=-2,
            reason="Risk mitigation: {change:.2f}% decline triggers conservative exit",
        ),
    ),
    entry_confidence=ConfidenceRule(cap=0.6),
    exit_confidence=ConfidenceRule(cap=0.7),
    size_multiplier=0.6,
)

AGGRESSIVE = StrategySpec(
    code="aggressive",
    name="Aggressive High-Risk",
    category="momentum",
    description="Oversized entries on surges, with a stop-loss and a take-profit exit.",
    entry=(
        Trigger(above=10, reason="High volatility opportunity: +{change:.2f}% surge"),
    ),
    exit=(
        Trigger(below=-5, reason="Stop-loss triggered: {change:.2f}%"),
        Trigger(above=20, reason="Take profit at peak: +{change:.2f}%"),
    ),
    entry_confidence=ConfidenceRule(cap=0.95),
    exit_confidence=ConfidenceRule(cap=0.85),
    size_multiplier=1.5,
)

TREND_FOLLOWER = StrategySpec(
    code="trend_follower",
    name="Trend Follower",
    category="trend",
    description="Rides 24h uptrends, exits on a downtrend reversal.",
    entry=(
        Trigger(above=3, reason="Following uptrend: +{change:.2f}% momentum"),
    ),
    exit=(
        Trigger(below=-4, reason="Trend reversal detected: {change:.2f}% downtrend"),
    ),
    entry_confidence=ConfidenceRule(cap=0.9, divisor=8),
    exit_confidence=ConfidenceRule(cap=0.9, divisor=8),
)

MEAN_REVERSION = StrategySpec(
    code="mean_reversion",
    name="Mean Reversion",
    category="mean_reversion",
    description="Buys extreme drops, sells extreme gains, expecting a return to the mean.",
    entry=(
        Trigger(below=-10, reason="Mean reversion opportunity: {change:.2f}% oversold"),
    ),
    exit=(
        Trigger(
            above=10,
            reason="Mean reversion: +{change:.2f}% overbought, expecting pullback",
        ),
    ),
    entry_confidence=ConfidenceRule(cap=0.95, divisor=12),
    exit_confidence=ConfidenceRule(cap=0.95, divisor=12),
)

BUILTIN_STRATEGIES = (
    MOMENTUM,
    SWING,
    CONSERVATIVE,
    AGGRESSIVE,
    TREND_FOLLOWER,
    MEAN_REVERSION,
)
