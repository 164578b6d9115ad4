"""
Agent Configuration for Agent Alpha.

An AgentProfile is the validated form of an agent's trading configuration.
Validating here is what lets the strategy layer assume a sane
``max_position_size_percent``.
"""

from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator

from agentalpha.config import Settings, get_settings
from agentalpha.data.models import RiskTolerance


class AgentProfile(BaseModel):
    """
    Trading configuration of one agent.

    Example:
        profile = AgentProfile(
            name="momentum-bot",
            strategy_type="momentum",
            max_position_size_percent=25,
            trading_pairs=["BTCUSDT", "ETHUSDT"],
        )
    """

    name: str = "agent"

    # Free-form on purpose: unknown identifiers resolve to the default strategy
    strategy_type: str = "conservative"
    risk_tolerance: RiskTolerance = RiskTolerance.MEDIUM
    max_position_size_percent: float = Field(default=30.0, gt=0, le=100)

    # Empty means every symbol in the snapshot is tradable
    trading_pairs: List[str] = Field(default_factory=list)

    @field_validator("strategy_type")
    @classmethod
    def _normalize_strategy(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("trading_pairs")
    @classmethod
    def _normalize_pairs(cls, value: List[str]) -> List[str]:
        return [pair.strip().upper() for pair in value if pair.strip()]

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        **overrides,
    ) -> "AgentProfile":
        """
        Build a profile with defaults from the ``strategy`` settings section.

        Args:
            settings: Settings to read defaults from (cached settings if None)
            **overrides: Explicit field values, ``None`` values are ignored
        """
        settings = settings or get_settings()
        defaults = settings.strategy
        data = {
            "strategy_type": defaults.default_strategy,
            "risk_tolerance": defaults.default_risk_tolerance,
            "max_position_size_percent": defaults.default_max_position_size_percent,
        }
        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Union[Path, str]) -> "AgentProfile":
        """
        Load an AgentProfile from the ``agent`` section of a YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            AgentProfile with values from YAML, or defaults if the file or
            section doesn't exist
        """
        path = Path(path)
        if not path.exists():
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        agent_data = data.get("agent", {})
        if not agent_data:
            return cls()

        return cls(**agent_data)
