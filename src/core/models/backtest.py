"""
Backtest configuration and results models.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import pandas as pd

from src.core.constants import MAX_COMMISSION, MAX_SLIPPAGE
from src.core.exceptions.backtest import ConfigurationError, ValidationError
from src.core.models.trade import SimulatedTrade
from src.core.types.financial import round_amount, round_percentage
from src.core.utils.validation import (
    validate_fraction,
    validate_non_negative,
    validate_positive,
    validate_rate,
)


@dataclass(frozen=True)
class BacktestConfig:
    """Follower configuration for replaying one leader's history.

    Fractions are expressed as ratios (0.1 == 10%). Validation runs on
    construction, so an existing config is always replayable.
    """

    leader_id: str
    start_date: datetime
    end_date: datetime
    initial_capital: float
    position_size: float
    max_position_size: float = 1.0
    slippage: float = 0.0
    commission: float = 0.0
    stop_loss: float | None = None
    take_profit: float | None = None

    def __post_init__(self) -> None:
        """Fail fast on an invalid configuration."""
        try:
            self._validate()
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e

    def _validate(self) -> None:
        if not isinstance(self.leader_id, str) or not self.leader_id.strip():
            raise ValidationError("leader_id cannot be empty")
        if not self.is_valid_date_range():
            raise ValidationError(
                f"Invalid date range: start_date {self.start_date} "
                f"is after end_date {self.end_date}"
            )
        validate_positive(self.initial_capital, "initial_capital")
        validate_fraction(self.position_size, "position_size")
        validate_fraction(self.max_position_size, "max_position_size")
        if self.position_size > self.max_position_size:
            raise ValidationError(
                f"position_size {self.position_size} exceeds "
                f"max_position_size {self.max_position_size}"
            )
        validate_rate(self.slippage, "slippage", MAX_SLIPPAGE)
        validate_rate(self.commission, "commission", MAX_COMMISSION)
        if self.stop_loss is not None:
            validate_non_negative(self.stop_loss, "stop_loss")
        if self.take_profit is not None:
            validate_non_negative(self.take_profit, "take_profit")

    def is_valid_date_range(self) -> bool:
        """Validate that end_date is not before start_date."""
        try:
            return self.end_date >= self.start_date
        except TypeError as e:
            raise ValidationError(f"Invalid date range: {e}") from e

    def duration_days(self) -> int:
        """Calculate duration of backtest in days."""
        return (self.end_date - self.start_date).days

    def contains(self, timestamp: datetime) -> bool:
        """Check if a timestamp falls inside the replay window (inclusive)."""
        return self.start_date <= timestamp <= self.end_date

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "leader_id": self.leader_id,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "initial_capital": self.initial_capital,
            "position_size": self.position_size,
            "max_position_size": self.max_position_size,
            "slippage": self.slippage,
            "commission": self.commission,
            "stop_loss": self.stop_loss,
            "take_profit": self.take_profit,
        }


@dataclass(frozen=True)
class EquityPoint:
    """Account value snapshot taken after each executed trade."""

    timestamp: datetime
    equity: float
    drawdown: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "equity": self.equity,
            "drawdown": self.drawdown,
        }


@dataclass(frozen=True)
class BacktestResult:
    """Results from a backtest execution."""

    config: BacktestConfig
    final_capital: float
    total_return: float
    total_return_percent: float
    max_drawdown: float
    sharpe_ratio: float
    win_rate: float
    total_trades: int
    successful_trades: int
    failed_trades: int
    equity_curve: tuple[EquityPoint, ...]
    trades: tuple[SimulatedTrade, ...]
    skipped_events: dict[str, int] = field(default_factory=dict)

    @property
    def leader_id(self) -> str:
        return self.config.leader_id

    @property
    def initial_capital(self) -> float:
        return self.config.initial_capital

    def is_profitable(self) -> bool:
        """Check if the backtest was profitable."""
        return self.total_return > 0.0

    def performance_summary(self) -> dict[str, Any]:
        """Get a summary of key performance metrics."""
        return {
            "leader_id": self.leader_id,
            "initial_capital": self.initial_capital,
            "final_capital": round_amount(self.final_capital),
            "total_return": round_amount(self.total_return),
            "total_return_percent": round_percentage(self.total_return_percent),
            "max_drawdown": round_percentage(self.max_drawdown),
            "sharpe_ratio": round_percentage(self.sharpe_ratio),
            "win_rate": round_percentage(self.win_rate),
            "total_trades": self.total_trades,
            "duration_days": self.config.duration_days(),
        }

    def equity_frame(self) -> pd.DataFrame:
        """Equity curve as a DataFrame indexed by timestamp."""
        frame = pd.DataFrame(
            [
                {"timestamp": p.timestamp, "equity": p.equity, "drawdown": p.drawdown}
                for p in self.equity_curve
            ],
            columns=["timestamp", "equity", "drawdown"],
        )
        return frame.set_index("timestamp")

    def trades_frame(self) -> pd.DataFrame:
        """Trade ledger as a DataFrame, one row per simulated trade."""
        columns = [
            "timestamp",
            "symbol",
            "side",
            "quantity",
            "price",
            "value",
            "commission",
            "pnl",
            "cumulative_pnl",
            "forced",
        ]
        rows = []
        for trade in self.trades:
            row = trade.to_dict()
            row["timestamp"] = trade.timestamp
            rows.append(row)
        return pd.DataFrame(rows, columns=columns)

    def to_dict(self) -> dict[str, Any]:
        """Convert results to dictionary."""
        return {
            "config": self.config.to_dict(),
            "final_capital": self.final_capital,
            "total_return": self.total_return,
            "total_return_percent": self.total_return_percent,
            "max_drawdown": self.max_drawdown,
            "sharpe_ratio": self.sharpe_ratio,
            "win_rate": self.win_rate,
            "total_trades": self.total_trades,
            "successful_trades": self.successful_trades,
            "failed_trades": self.failed_trades,
            "skipped_events": dict(self.skipped_events),
            "equity_curve": [point.to_dict() for point in self.equity_curve],
            "trades": [trade.to_dict() for trade in self.trades],
        }
