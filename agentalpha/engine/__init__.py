"""
Engine layer for Agent Alpha.

Runs an agent's configured strategy for one trading cycle.
"""

from agentalpha.engine.config import AgentProfile
from agentalpha.engine.cycle import CycleResult, TradingCycle

__all__ = [
    "AgentProfile",
    "CycleResult",
    "TradingCycle",
]
