"""
Configuration management for Agent Alpha.

Uses Pydantic for validation and YAML for configuration files.
"""

from __future__ import annotations

import logging
import sys
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class StrategyDefaultsConfig(BaseModel):
    """Defaults applied when an agent profile leaves a field out."""
    default_strategy: str = "conservative"
    default_max_position_size_percent: float = Field(default=30.0, gt=0, le=100)
    default_risk_tolerance: Literal["low", "medium", "high"] = "medium"


class RiskConfig(BaseModel):
    """Pre-execution risk limits used by the signal validator."""
    min_capital_to_trade: float = 7.0
    max_signals_per_cycle: int = 3
    max_position_size_percent: float = 25.0  # Of capital, per new position
    min_trade_notional: float = 10.0
    max_buy_change_24h: float = 50.0  # BUY blocked above this 24h move


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None


class Settings(BaseSettings):
    """Main settings class."""
    strategy: StrategyDefaultsConfig = Field(default_factory=StrategyDefaultsConfig)
    risk: RiskConfig = Field(default_factory=RiskConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    class Config:
        env_prefix = "AGENTALPHA_"
        env_nested_delimiter = "__"
        extra = "ignore"

    @classmethod
    def from_yaml(cls, path: Union[Path, str]) -> "Settings":
        """Load settings from YAML file."""
        path = Path(path)
        if not path.exists():
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)


def find_config_file() -> Optional[Path]:
    """Find configuration file in standard locations."""
    search_paths = [
        Path.cwd() / "configs" / "default.yaml",
        Path.cwd() / "config.yaml",
        Path.home() / ".agentalpha" / "config.yaml",
    ]

    for path in search_paths:
        if path.exists():
            return path

    return None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    config_path = find_config_file()
    if config_path:
        return Settings.from_yaml(config_path)
    return Settings()


def setup_logging(config: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Configure the package logger from a LoggingConfig.

    Handlers are replaced on every call, so repeated setup is safe.

    Args:
        config: Logging configuration (defaults to the cached settings)

    Returns:
        The configured ``agentalpha`` logger
    """
    config = config or get_settings().logging

    logger = logging.getLogger("agentalpha")
    logger.setLevel(config.level.upper())
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(config.format)

    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(formatter)
    logger.addHandler(stream)

    if config.file:
        log_path = Path(config.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
