"""
Simulated position domain model.
"""

from dataclasses import dataclass

from src.core.exceptions.backtest import ValidationError
from src.core.types.financial import ZERO


@dataclass
class SimulatedPosition:
    """Follower holding in one symbol, tracked at average cost.

    Owned by the PositionLedger and mutated only during a replay.
    """

    symbol: str
    quantity: float
    average_cost: float

    def __post_init__(self) -> None:
        """Validate position data after initialization."""
        if self.quantity < ZERO:
            raise ValidationError(f"Position quantity must be non-negative, got {self.quantity}")
        if self.average_cost <= ZERO:
            raise ValidationError(f"Average cost must be positive, got {self.average_cost}")
