"""
Leader trade CSV loading.

This module reads leader execution histories from CSV files and returns
validated, chronologically ordered LeaderTrade lists.
"""

from datetime import datetime
from pathlib import Path
from threading import RLock

import pandas as pd
from cachetools import LRUCache
from loguru import logger

from src.core.constants import TRADE_CSV_COLUMNS
from src.core.enums import TradeSide
from src.core.exceptions.backtest import DataError
from src.core.interfaces.trade_source import ITradeSource
from src.core.models.trade import LeaderTrade

from .trade_csv_validator import TradeCSVValidator


class LeaderTradeCSVLoader(ITradeSource):
    """Trade source backed by a single CSV file of leader executions.

    Expected columns: timestamp, leader_id, symbol, side, quantity, price.
    Parsed frames are cached per (path, mtime) so several backtests over
    the same file only parse it once.
    """

    DEFAULT_CACHE_SIZE = 16

    def __init__(self, file_path: str | Path, cache_size: int = DEFAULT_CACHE_SIZE):
        self.file_path = Path(file_path)
        self._cache: LRUCache[tuple[str, int], pd.DataFrame] = LRUCache(maxsize=cache_size)
        self._cache_lock = RLock()

    def load_trades(
        self, leader_id: str, start_date: datetime, end_date: datetime
    ) -> list[LeaderTrade]:
        """Load one leader's executions inside [start_date, end_date], oldest first."""
        df = self.load_frame()
        if df.empty:
            return []

        try:
            mask = (
                (df["leader_id"] == leader_id)
                & (df["timestamp"] >= start_date)
                & (df["timestamp"] <= end_date)
            )
        except TypeError as e:
            raise DataError(
                f"Cannot compare timestamps in {self.file_path.name} "
                f"with the requested window: {e}"
            ) from e

        window = df.loc[mask].sort_values("timestamp", kind="stable")
        trades = [self._row_to_trade(row) for row in window.itertuples(index=False)]
        logger.info(
            f"Loaded {len(trades)} trades for leader {leader_id} from {self.file_path.name}"
        )
        return trades

    def load_frame(self) -> pd.DataFrame:
        """Read, validate and normalize the whole CSV file."""
        if not self.file_path.exists():
            raise FileNotFoundError(f"Trade file not found: {self.file_path}")

        cache_key = (str(self.file_path.resolve()), self.file_path.stat().st_mtime_ns)
        with self._cache_lock:
            cached = self._cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Cache hit for {self.file_path.name}")
            return cached

        df = self._read_csv()
        with self._cache_lock:
            self._cache[cache_key] = df
        return df

    def _read_csv(self) -> pd.DataFrame:
        logger.debug(f"Loading file: {self.file_path}")
        try:
            df = pd.read_csv(self.file_path, dtype={"leader_id": str, "symbol": str})
        except pd.errors.EmptyDataError:
            logger.warning(f"Empty trade file: {self.file_path.name}")
            return pd.DataFrame(columns=TRADE_CSV_COLUMNS)
        except (pd.errors.ParserError, UnicodeDecodeError) as e:
            logger.error(f"CSV parsing error ({type(e).__name__}) in {self.file_path.name}: {e}")
            raise DataError(f"Failed to load CSV file: {self.file_path.name}") from e
        except OSError as e:
            logger.error(f"File system error loading {self.file_path.name}: {e}")
            raise DataError(f"File system error loading {self.file_path.name}") from e

        TradeCSVValidator.validate_csv_structure(df, self.file_path)
        return self._normalize(df)

    def _normalize(self, df: pd.DataFrame) -> pd.DataFrame:
        """Coerce column types once validation has passed."""
        df = df.copy()
        try:
            df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True)
        except (TypeError, ValueError) as e:
            raise DataError(f"Invalid timestamp data in {self.file_path}") from e
        df["leader_id"] = df["leader_id"].str.strip()
        df["symbol"] = df["symbol"].str.strip()
        df["side"] = df["side"].astype(str).str.strip().str.upper()
        df["quantity"] = pd.to_numeric(df["quantity"])
        df["price"] = pd.to_numeric(df["price"])
        return df

    @staticmethod
    def _row_to_trade(row) -> LeaderTrade:
        return LeaderTrade(
            timestamp=row.timestamp.to_pydatetime(),
            symbol=row.symbol,
            side=TradeSide(row.side),
            quantity=float(row.quantity),
            price=float(row.price),
        )
