"""
Financial helpers for the replay engine.

All amounts are plain floats. The engine never rounds intermediate values:
cash must equal the initial capital plus the exact sum of every trade's cash
flow, so rounding is applied only when presenting results.

IMPORTANT PRECISION CONSIDERATIONS:
- Float64 provides ~15-16 significant decimal digits
- Suitable for simulating historical data where performance > precision
- Always use the provided rounding functions when reporting
"""

import math

# Presentation precision (number of decimal places)
FINANCIAL_DECIMALS = 8
PERCENTAGE_DECIMALS = 4

# Common financial values as float constants
ZERO = 0.0
ONE = 1.0
HUNDRED = 100.0


def round_amount(amount: float) -> float:
    """Round a cash amount for reporting."""
    return round(amount, FINANCIAL_DECIMALS)


def round_percentage(percentage: float) -> float:
    """Round a percentage or ratio for reporting."""
    return round(percentage, PERCENTAGE_DECIMALS)


def apply_slippage(price: float, slippage: float, sign: float) -> float:
    """Degrade a fill price by the slippage fraction.

    Args:
        price: Leader fill price
        slippage: Slippage fraction (e.g. 0.001 for 0.1%)
        sign: +1 for buys (pay more), -1 for sells (receive less)

    Returns:
        Execution price after slippage
    """
    return price * (ONE + sign * slippage)


def scaled_quantity(cash: float, position_size: float, execution_price: float) -> int:
    """Whole units affordable with the given fraction of cash.

    Args:
        cash: Current follower cash
        position_size: Fraction of cash committed per trade
        execution_price: Post-slippage price per unit

    Returns:
        Floor of target notional over price
    """
    if execution_price <= ZERO:
        raise ValueError(f"Execution price must be positive, got {execution_price}")
    return math.floor(cash * position_size / execution_price)


def calculate_commission(notional: float, commission_rate: float) -> float:
    """Commission charged on a notional amount."""
    return notional * commission_rate


def weighted_average_cost(
    held_quantity: float, average_cost: float, quantity: float, price: float
) -> float:
    """Average cost after adding quantity at price to an existing holding.

    Args:
        held_quantity: Quantity currently held
        average_cost: Current average cost per unit
        quantity: Quantity being added
        price: Price paid for the added quantity

    Returns:
        New weighted-mean cost per unit
    """
    total_quantity = held_quantity + quantity
    if total_quantity <= ZERO:
        raise ValueError(f"Total quantity must be positive, got {total_quantity}")
    return (held_quantity * average_cost + quantity * price) / total_quantity


def calculate_realized_pnl(
    exit_price: float, average_cost: float, quantity: float, commission: float
) -> float:
    """Realized PnL of a closing sell, net of its commission."""
    return (exit_price - average_cost) * quantity - commission
