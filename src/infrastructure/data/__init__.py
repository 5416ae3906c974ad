"""
Trade source infrastructure.

This module provides adapters that supply leader execution histories
to the backtest engine.
"""

from .memory_source import InMemoryTradeSource
from .trade_csv_loader import LeaderTradeCSVLoader
from .trade_csv_validator import TradeCSVValidator

__all__ = ["InMemoryTradeSource", "LeaderTradeCSVLoader", "TradeCSVValidator"]
