"""
Position ledger for a simulated follower account.

This module owns per-symbol position state, following the Single
Responsibility Principle for holdings management. Cash is not tracked
here; the simulation engine settles cash around each ledger call.
"""

from src.core.exceptions.backtest import PositionNotFoundError
from src.core.models.position import SimulatedPosition
from src.core.types.financial import ZERO, weighted_average_cost
from src.core.utils.decorators import validate_inputs


class PositionLedger:
    """Per-symbol average-cost holdings.

    Only long positions exist: a sell can close at most what is held,
    and a position is removed once its quantity reaches exactly zero.
    """

    def __init__(self) -> None:
        self._positions: dict[str, SimulatedPosition] = {}

    def __len__(self) -> int:
        return len(self._positions)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._positions

    @validate_inputs
    def apply_buy(self, symbol: str, quantity: float, price: float) -> None:
        """Add quantity at price to the holding for symbol.

        Args:
            symbol: Instrument symbol
            quantity: Units bought
            price: Execution price per unit
        """
        position = self._positions.get(symbol)
        if position is None:
            self._positions[symbol] = SimulatedPosition(
                symbol=symbol, quantity=quantity, average_cost=price
            )
            return

        position.average_cost = weighted_average_cost(
            position.quantity, position.average_cost, quantity, price
        )
        position.quantity = position.quantity + quantity

    @validate_inputs
    def apply_sell(self, symbol: str, quantity: float) -> float:
        """Close quantity units of symbol if the holding can cover them.

        Args:
            symbol: Instrument symbol
            quantity: Units to close

        Returns:
            Units actually closed: quantity on success, 0 when rejected
        """
        position = self._positions.get(symbol)
        if position is None or position.quantity < quantity:
            return ZERO

        position.quantity = position.quantity - quantity
        if position.quantity == ZERO:
            del self._positions[symbol]
        return quantity

    def position_of(self, symbol: str) -> SimulatedPosition | None:
        """Get the open position for symbol, if any."""
        return self._positions.get(symbol)

    def held_quantity(self, symbol: str) -> float:
        """Units held for symbol (0 if no position)."""
        position = self._positions.get(symbol)
        return position.quantity if position else ZERO

    def open_positions(self) -> list[SimulatedPosition]:
        """Snapshot of open positions in insertion order."""
        return list(self._positions.values())

    def close_position(self, symbol: str) -> SimulatedPosition:
        """Remove and return the whole position for symbol.

        Raises:
            PositionNotFoundError: If no position exists for symbol
        """
        if symbol not in self._positions:
            raise PositionNotFoundError(symbol)
        return self._positions.pop(symbol)
