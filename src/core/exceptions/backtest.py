"""
Custom exception hierarchy for the copy-trading backtest engine.

This module defines domain-specific exceptions for better error handling.
Only malformed input is fatal; per-event outcomes of a replay (sub-unit
quantities, insufficient cash, oversized sells) are never raised.
"""

from datetime import datetime


class BacktestException(Exception):
    """Base exception for all backtesting-related errors."""

    pass


class ValidationError(BacktestException):
    """Raised when input validation fails."""

    pass


class ConfigurationError(ValidationError):
    """Raised when a backtest configuration is invalid."""

    pass


class InputError(ValidationError):
    """Raised when the leader trade history cannot be replayed."""

    pass


class EmptyHistoryError(InputError):
    """Raised when no leader trades fall inside the requested window."""

    def __init__(self, leader_id: str, start_date: datetime, end_date: datetime):
        self.leader_id = leader_id
        self.start_date = start_date
        self.end_date = end_date
        super().__init__(
            f"No trades found for leader {leader_id} between "
            f"{start_date.isoformat()} and {end_date.isoformat()}"
        )


class UnsortedHistoryError(InputError):
    """Raised when the leader trade history is not in chronological order."""

    def __init__(self, index: int, previous: datetime, current: datetime):
        self.index = index
        self.previous = previous
        self.current = current
        super().__init__(
            f"Trade history is not sorted: trade {index} at {current.isoformat()} "
            f"precedes {previous.isoformat()}"
        )


class InvalidTradeError(InputError):
    """Raised when a leader trade record has an invalid field."""

    pass


class PositionNotFoundError(BacktestException):
    """Raised when trying to operate on a non-existent position."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"Position not found for symbol: {symbol}")


class DataError(BacktestException):
    """Raised when data access or processing fails."""

    pass


class CalculationError(BacktestException):
    """Raised when mathematical calculations fail."""

    pass


class ResultAssemblyError(BacktestException):
    """Raised when a replay produced nothing to report."""

    pass
