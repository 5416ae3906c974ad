"""
In-memory trade source.
"""

from collections.abc import Iterable
from datetime import datetime

from src.core.interfaces.trade_source import ITradeSource
from src.core.models.trade import LeaderTrade
from src.core.utils.validation import validate_symbol


class InMemoryTradeSource(ITradeSource):
    """Trade source holding executions per leader in memory.

    Useful for tests and for callers that already fetched a history.
    """

    def __init__(self, trades_by_leader: dict[str, Iterable[LeaderTrade]] | None = None):
        self._trades: dict[str, list[LeaderTrade]] = {}
        for leader_id, trades in (trades_by_leader or {}).items():
            self.add_trades(leader_id, trades)

    def add_trades(self, leader_id: str, trades: Iterable[LeaderTrade]) -> None:
        """Append executions for a leader."""
        leader_id = validate_symbol(leader_id, "leader_id")
        self._trades.setdefault(leader_id, []).extend(trades)

    def leaders(self) -> list[str]:
        return sorted(self._trades)

    def load_trades(
        self, leader_id: str, start_date: datetime, end_date: datetime
    ) -> list[LeaderTrade]:
        """Executions in [start_date, end_date], stably ordered by timestamp."""
        window = [
            trade
            for trade in self._trades.get(leader_id, [])
            if start_date <= trade.timestamp <= end_date
        ]
        return sorted(window, key=lambda trade: trade.timestamp)
