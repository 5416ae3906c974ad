"""
Core type definitions and utilities.
"""

# Re-export financial utilities for easy access
from .financial import (
    FINANCIAL_DECIMALS,
    HUNDRED,
    ONE,
    PERCENTAGE_DECIMALS,
    ZERO,
    apply_slippage,
    calculate_commission,
    calculate_realized_pnl,
    round_amount,
    round_percentage,
    scaled_quantity,
    weighted_average_cost,
)

__all__ = [
    # Utility functions
    "round_amount",
    "round_percentage",
    "apply_slippage",
    "scaled_quantity",
    "calculate_commission",
    "weighted_average_cost",
    "calculate_realized_pnl",
    # Constants
    "FINANCIAL_DECIMALS",
    "PERCENTAGE_DECIMALS",
    "ZERO",
    "ONE",
    "HUNDRED",
]
