"""
Snapshot Loader for Agent Alpha.

Reads one cycle's market and account state from files or DataFrames. This
is the offline stand-in for the live market-data provider and position
ledger.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Union

import pandas as pd
import yaml

from agentalpha.data.models import MarketSnapshot

logger = logging.getLogger(__name__)


@dataclass
class AccountSnapshot:
    """Balance, positions and markets read from a snapshot file."""

    balance: float = 0.0
    positions: Dict[str, float] = field(default_factory=dict)
    market_data: List[MarketSnapshot] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "balance": self.balance,
            "positions": dict(self.positions),
            "symbols": [m.symbol for m in self.market_data],
        }


class SnapshotLoader:
    """
    Load market snapshots from YAML, JSON, CSV or pandas.

    Records missing a required field are skipped with a warning rather than
    failing the whole load.

    Example:
        loader = SnapshotLoader()
        account = loader.load("snapshot.yaml")
        markets = loader.load_csv("markets.csv")
    """

    MARKET_KEYS = ("markets", "market_data", "marketData")

    def load(self, path: Union[str, Path]) -> AccountSnapshot:
        """
        Load a YAML or JSON snapshot file.

        Expected layout::

            balance: 10000
            positions: {BTC: 0.5}
            markets:
              - {symbol: BTC, currentPrice: 50000, change24h: 8}

        Args:
            path: Path to a .yaml, .yml or .json file

        Returns:
            AccountSnapshot with balance, positions and markets
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Snapshot file not found: {path}")

        with open(path) as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)

        if data is None:
            data = {}
        if isinstance(data, list):
            data = {"markets": data}
        if not isinstance(data, Mapping):
            raise ValueError(f"Snapshot file must contain a mapping or a list: {path}")

        return self.from_dict(data)

    def from_dict(self, data: Mapping[str, Any]) -> AccountSnapshot:
        """Build an AccountSnapshot from an already-parsed document."""
        markets: Iterable[Any] = []
        for key in self.MARKET_KEYS:
            if key in data:
                markets = data[key] or []
                break

        balance = data.get("balance", data.get("agent_balance", 0.0))
        try:
            balance = float(balance)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid balance: {balance!r}")

        return AccountSnapshot(
            balance=balance,
            positions=self.parse_positions(data.get("positions") or {}),
            market_data=self.parse_markets(markets),
        )

    def load_csv(self, path: Union[str, Path]) -> List[MarketSnapshot]:
        """Load market snapshots from a CSV file with one row per symbol."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Market file not found: {path}")
        return self.from_frame(pd.read_csv(path))

    def from_frame(self, df: pd.DataFrame) -> List[MarketSnapshot]:
        """
        Convert a DataFrame to market snapshots.

        Columns may use camelCase or snake_case names. Missing values in
        optional columns are ignored.
        """
        return self.parse_markets(df.to_dict(orient="records"))

    @staticmethod
    def parse_markets(records: Iterable[Any]) -> List[MarketSnapshot]:
        """Parse raw market records, skipping malformed ones."""
        markets = []
        for record in records:
            if not isinstance(record, Mapping):
                logger.warning("Skipping market record that is not a mapping: %r", record)
                continue
            try:
                markets.append(MarketSnapshot.from_dict(record))
            except ValueError as e:
                logger.warning("Skipping market record: %s", e)
        return markets

    @staticmethod
    def parse_positions(raw: Any) -> Dict[str, float]:
        """Parse a symbol -> quantity mapping, skipping malformed entries."""
        if not isinstance(raw, Mapping):
            logger.warning("Ignoring positions that are not a mapping: %r", raw)
            return {}

        positions = {}
        for symbol, quantity in raw.items():
            try:
                positions[str(symbol)] = float(quantity)
            except (TypeError, ValueError):
                logger.warning("Skipping position %s with quantity %r", symbol, quantity)
        return positions
