"""
Validation utilities for core domain models.

Provides consistent validation across the application.
"""

import math
from typing import Any

from src.core.exceptions.backtest import ValidationError


def validate_finite(value: float, param_name: str) -> float:
    """Reject NaN and infinite values, which pass every ordering check."""
    if not math.isfinite(value):
        raise ValidationError(f"{param_name} must be a finite number, got {value}")
    return value


def validate_symbol(symbol: Any, param_name: str = "symbol") -> str:
    """Validate that a value is a usable instrument symbol.

    Args:
        symbol: Value to validate
        param_name: Parameter name for error messages

    Returns:
        The symbol with surrounding whitespace removed

    Raises:
        TypeError: If symbol is not a string
        ValidationError: If symbol is blank
    """
    if not isinstance(symbol, str):
        raise TypeError(f"{param_name} must be str, got {type(symbol).__name__}")
    cleaned = symbol.strip()
    if not cleaned:
        raise ValidationError(f"{param_name} cannot be empty")
    return cleaned


def validate_positive(value: float, param_name: str) -> float:
    """Validate that a numeric value is positive.

    Args:
        value: Value to validate
        param_name: Parameter name for error messages

    Returns:
        The validated value

    Raises:
        ValidationError: If value is not finite or not positive
    """
    validate_finite(value, param_name)
    if value <= 0:
        raise ValidationError(f"{param_name} must be positive, got {value}")
    return value


def validate_non_negative(value: float, param_name: str) -> float:
    """Validate that a numeric value is zero or greater.

    Raises:
        ValidationError: If value is not finite or is negative
    """
    validate_finite(value, param_name)
    if value < 0:
        raise ValidationError(f"{param_name} must be non-negative, got {value}")
    return value


def validate_fraction(value: float, param_name: str = "fraction") -> float:
    """Validate that a value is a fraction in (0, 1].

    Args:
        value: Value to validate
        param_name: Parameter name for error messages

    Returns:
        The validated fraction

    Raises:
        ValidationError: If value is not finite or not in (0, 1]
    """
    validate_finite(value, param_name)
    if value <= 0 or value > 1:
        raise ValidationError(f"{param_name} must be in (0, 1], got {value}")
    return value


def validate_rate(value: float, param_name: str, upper: float) -> float:
    """Validate that a cost rate is in [0, upper).

    Args:
        value: Rate to validate
        param_name: Parameter name for error messages
        upper: Exclusive upper bound

    Returns:
        The validated rate

    Raises:
        ValidationError: If rate is not finite or outside [0, upper)
    """
    validate_finite(value, param_name)
    if value < 0 or value >= upper:
        raise ValidationError(f"{param_name} must be in [0, {upper}), got {value}")
    return value
