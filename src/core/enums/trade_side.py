"""
Trade side enumeration.

This module defines the sides a leader execution can take.
"""

from enum import StrEnum


class TradeSide(StrEnum):
    """
    Allowed trade sides.

    Sells are always closing sells; short positions are not modeled.
    """

    BUY = "BUY"
    SELL = "SELL"

    @property
    def is_buy(self) -> bool:
        """Check if side opens or adds to a position."""
        return self == self.BUY

    @property
    def slippage_sign(self) -> float:
        """Direction in which slippage moves the fill price against the follower."""
        return 1.0 if self.is_buy else -1.0

    @classmethod
    def from_string(cls, value: str) -> "TradeSide":
        """
        Convert string to TradeSide enum, with case-insensitive matching.

        Args:
            value: String representation of the side

        Returns:
            Corresponding TradeSide enum value

        Raises:
            ValueError: If side is not supported
        """
        value_upper = value.strip().upper()

        if value_upper in ["BUY", "B"]:
            return cls.BUY
        elif value_upper in ["SELL", "S"]:
            return cls.SELL
        else:
            raise ValueError(
                f"Unsupported trade side: {value}. "
                f"Supported sides: {', '.join([s.value for s in cls])}"
            )
