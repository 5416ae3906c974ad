"""
Trade source interfaces.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from src.core.models.trade import LeaderTrade


class ITradeSource(ABC):
    """Abstract interface for leader execution history."""

    @abstractmethod
    def load_trades(
        self, leader_id: str, start_date: datetime, end_date: datetime
    ) -> list[LeaderTrade]:
        """Load the leader's executions in [start_date, end_date], oldest first."""
        pass
