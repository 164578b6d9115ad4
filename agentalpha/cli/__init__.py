"""
CLI layer for Agent Alpha.

Provides Click-based command line interface for:
- strategies: List and inspect the strategy library
- signals: Evaluate a strategy against a market snapshot
"""

from agentalpha.cli.main import cli

__all__ = ["cli"]
