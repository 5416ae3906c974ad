"""
Pydantic schemas for the backtest service boundary.

These models parse untrusted request payloads into domain objects and
serialize results for transport. They hold no simulation logic.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from src.core.constants import (
    DEFAULT_COMMISSION,
    DEFAULT_INITIAL_CAPITAL,
    DEFAULT_MAX_POSITION_SIZE,
    DEFAULT_POSITION_SIZE,
    DEFAULT_SLIPPAGE,
    MAX_COMMISSION,
    MAX_SLIPPAGE,
)
from src.core.enums import TradeSide
from src.core.models.backtest import BacktestConfig, BacktestResult
from src.core.models.trade import LeaderTrade


class LeaderTradeRecord(BaseModel):
    """One leader execution in a request payload."""

    timestamp: datetime
    symbol: str = Field(..., min_length=1, description="Instrument symbol")
    side: TradeSide = Field(..., description="BUY or SELL")
    quantity: float = Field(
        ..., gt=0, allow_inf_nan=False, description="Units executed by the leader"
    )
    price: float = Field(..., gt=0, allow_inf_nan=False, description="Leader fill price")

    @field_validator("side", mode="before")
    @classmethod
    def normalize_side(cls, v: Any) -> Any:
        """Accept sides in any letter case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    def to_domain(self) -> LeaderTrade:
        return LeaderTrade(
            timestamp=self.timestamp,
            symbol=self.symbol,
            side=self.side,
            quantity=self.quantity,
            price=self.price,
        )


class BacktestRequest(BaseModel):
    """Request model for a backtest run."""

    leader_id: str = Field(..., min_length=1, description="Leader whose history is replayed")
    start_date: datetime = Field(..., description="Replay window start")
    end_date: datetime = Field(..., description="Replay window end")
    initial_capital: float = Field(
        default=DEFAULT_INITIAL_CAPITAL, gt=0, allow_inf_nan=False, description="Starting capital"
    )
    position_size: float = Field(
        default=DEFAULT_POSITION_SIZE, gt=0, le=1, description="Fraction of cash per trade"
    )
    max_position_size: float = Field(
        default=DEFAULT_MAX_POSITION_SIZE, gt=0, le=1, description="Upper bound for position_size"
    )
    slippage: float = Field(
        default=DEFAULT_SLIPPAGE, ge=0, lt=MAX_SLIPPAGE, description="Slippage fraction"
    )
    commission: float = Field(
        default=DEFAULT_COMMISSION, ge=0, lt=MAX_COMMISSION, description="Commission fraction"
    )
    stop_loss: float | None = Field(default=None, ge=0, description="Stop-loss fraction")
    take_profit: float | None = Field(default=None, ge=0, description="Take-profit fraction")
    trades: list[LeaderTradeRecord] = Field(..., min_length=1)

    @field_validator("end_date")
    @classmethod
    def validate_date_range(cls, v: datetime, info) -> datetime:
        """Validate that end_date is not before start_date."""
        if "start_date" in info.data and v < info.data["start_date"]:
            raise ValueError("end_date must not be before start_date")
        return v

    @model_validator(mode="after")
    def validate_position_sizes(self) -> "BacktestRequest":
        """Validate that the per-trade fraction respects its upper bound."""
        if self.position_size > self.max_position_size:
            raise ValueError(
                f"position_size {self.position_size} exceeds "
                f"max_position_size {self.max_position_size}"
            )
        return self

    def to_config(self) -> BacktestConfig:
        return BacktestConfig(
            leader_id=self.leader_id,
            start_date=self.start_date,
            end_date=self.end_date,
            initial_capital=self.initial_capital,
            position_size=self.position_size,
            max_position_size=self.max_position_size,
            slippage=self.slippage,
            commission=self.commission,
            stop_loss=self.stop_loss,
            take_profit=self.take_profit,
        )

    def to_trades(self) -> list[LeaderTrade]:
        return [record.to_domain() for record in self.trades]


class EquityPointSchema(BaseModel):
    timestamp: datetime
    equity: float
    drawdown: float


class SimulatedTradeSchema(BaseModel):
    timestamp: datetime
    symbol: str
    side: TradeSide
    quantity: int
    price: float
    value: float
    commission: float
    pnl: float | None = None
    cumulative_pnl: float
    forced: bool = False


class BacktestReport(BaseModel):
    """Response model for a completed backtest."""

    leader_id: str
    config: dict[str, Any]
    final_capital: float
    total_return: float
    total_return_percent: float
    max_drawdown: float
    sharpe_ratio: float
    win_rate: float
    total_trades: int
    successful_trades: int
    failed_trades: int
    skipped_events: dict[str, int]
    equity_curve: list[EquityPointSchema]
    trades: list[SimulatedTradeSchema]

    @classmethod
    def from_result(cls, result: BacktestResult) -> "BacktestReport":
        return cls(
            leader_id=result.leader_id,
            config=result.config.to_dict(),
            final_capital=result.final_capital,
            total_return=result.total_return,
            total_return_percent=result.total_return_percent,
            max_drawdown=result.max_drawdown,
            sharpe_ratio=result.sharpe_ratio,
            win_rate=result.win_rate,
            total_trades=result.total_trades,
            successful_trades=result.successful_trades,
            failed_trades=result.failed_trades,
            skipped_events=dict(result.skipped_events),
            equity_curve=[
                EquityPointSchema(timestamp=p.timestamp, equity=p.equity, drawdown=p.drawdown)
                for p in result.equity_curve
            ],
            trades=[
                SimulatedTradeSchema(
                    timestamp=t.timestamp,
                    symbol=t.symbol,
                    side=t.side,
                    quantity=t.quantity,
                    price=t.price,
                    value=t.value,
                    commission=t.commission,
                    pnl=t.pnl,
                    cumulative_pnl=t.cumulative_pnl,
                    forced=t.forced,
                )
                for t in result.trades
            ],
        )


class ErrorResponse(BaseModel):
    """Response model for errors."""

    error: str
    message: str
    details: dict | None = None

    @classmethod
    def from_exception(cls, exc: Exception) -> "ErrorResponse":
        return cls(error=type(exc).__name__, message=str(exc))
