"""
Trade domain models.

LeaderTrade is one historical execution of the trader being copied;
SimulatedTrade is one entry of the follower's simulated trade ledger.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from src.core.enums import TradeSide
from src.core.exceptions.backtest import InvalidTradeError, ValidationError
from src.core.utils.validation import validate_positive, validate_symbol


@dataclass(frozen=True)
class LeaderTrade:
    """A single historical execution by the leader."""

    timestamp: datetime
    symbol: str
    side: TradeSide
    quantity: float
    price: float

    def __post_init__(self) -> None:
        """Validate trade data after initialization."""
        if not isinstance(self.timestamp, datetime):
            raise InvalidTradeError(
                f"timestamp must be datetime, got {type(self.timestamp).__name__}"
            )
        if not isinstance(self.side, TradeSide):
            raise InvalidTradeError(f"side must be TradeSide enum, got {self.side!r}")
        try:
            object.__setattr__(self, "symbol", validate_symbol(self.symbol))
            validate_positive(self.quantity, "Quantity")
            validate_positive(self.price, "Price")
        except (TypeError, ValidationError) as e:
            raise InvalidTradeError(str(e)) from e

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "LeaderTrade":
        """Factory method to build a trade from a loosely-typed record.

        Args:
            record: Mapping with timestamp, symbol, side, quantity and price keys

        Returns:
            New validated LeaderTrade

        Raises:
            InvalidTradeError: If a field is missing or cannot be coerced
        """
        try:
            timestamp = record["timestamp"]
            if isinstance(timestamp, str):
                timestamp = datetime.fromisoformat(timestamp)
            side = record["side"]
            if not isinstance(side, TradeSide):
                side = TradeSide.from_string(str(side))
            return cls(
                timestamp=timestamp,
                symbol=record["symbol"],
                side=side,
                quantity=float(record["quantity"]),
                price=float(record["price"]),
            )
        except KeyError as e:
            raise InvalidTradeError(f"Trade record missing field: {e.args[0]}") from e
        except (TypeError, ValueError) as e:
            raise InvalidTradeError(f"Invalid trade record: {e}") from e


@dataclass(frozen=True)
class SimulatedTrade:
    """An executed follower trade in the simulated ledger."""

    timestamp: datetime
    symbol: str
    side: TradeSide
    quantity: int
    price: float
    value: float
    commission: float
    cumulative_pnl: float
    pnl: float | None = None
    forced: bool = False

    @property
    def is_closing(self) -> bool:
        """Check if the trade realized PnL."""
        return self.pnl is not None

    def cash_flow(self) -> float:
        """Signed change in cash caused by this trade."""
        if self.side.is_buy:
            return -(self.value + self.commission)
        return self.value - self.commission

    def to_dict(self) -> dict[str, Any]:
        """Convert trade to dictionary."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "symbol": self.symbol,
            "side": self.side.value,
            "quantity": self.quantity,
            "price": self.price,
            "value": self.value,
            "commission": self.commission,
            "pnl": self.pnl,
            "cumulative_pnl": self.cumulative_pnl,
            "forced": self.forced,
        }
