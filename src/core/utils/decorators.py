"""
Utility decorators for input validation and operation logging.
"""

import functools
import inspect
import time
import uuid
from collections.abc import Callable
from typing import Any, TypeVar

from loguru import logger

from src.core.exceptions.backtest import ValidationError
from src.core.utils.validation import validate_positive, validate_symbol

_NUMERIC_PARAMS = ("quantity", "price")
_CONTEXT_PARAMS = ("symbol", "quantity", "price", "config")

F = TypeVar("F", bound=Callable[..., Any])


def _validate_parameter(param_name: str, value: Any, bound_args: inspect.BoundArguments) -> None:
    """Validate a single ledger parameter."""
    if value is None:
        return

    if param_name == "symbol":
        try:
            bound_args.arguments[param_name] = validate_symbol(value)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid {param_name}: {e}") from e

    elif param_name in _NUMERIC_PARAMS:
        try:
            bound_args.arguments[param_name] = validate_positive(value, param_name)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid {param_name}: {e}") from e


def _process_function_arguments(
    func: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]
) -> Any:
    """Process and validate function arguments."""
    sig = inspect.signature(func)
    bound_args = sig.bind(*args, **kwargs)
    bound_args.apply_defaults()

    for param_name, value in bound_args.arguments.items():
        if param_name != "self":
            _validate_parameter(param_name, value, bound_args)

    return func(*bound_args.args, **bound_args.kwargs)


def validate_inputs(func: F) -> F:
    """Decorator to validate ledger inputs (symbol, quantity, price)."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return _process_function_arguments(func, args, kwargs)

    return wrapper  # type: ignore


def _serialize_parameter_value(value: Any) -> Any:
    """Serialize parameter value for logging."""
    if hasattr(value, "leader_id"):
        return value.leader_id  # Backtest configs are logged by leader
    elif hasattr(value, "value"):
        return str(value.value)  # Handle enum values
    return value


def _extract_context(bound_args: inspect.BoundArguments) -> dict[str, Any]:
    """Extract loggable context from function arguments."""
    context = {}
    for param_name, value in bound_args.arguments.items():
        if param_name in _CONTEXT_PARAMS:
            context[param_name] = _serialize_parameter_value(value)
        elif isinstance(value, list | tuple):
            context[f"{param_name}_count"] = len(value)
    return context


def _setup_logging_context(
    func: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]
) -> dict[str, Any]:
    """Build the bound logging context for one call."""
    sig = inspect.signature(func)
    bound_args = sig.bind(*args, **kwargs)
    bound_args.apply_defaults()

    return {
        "correlation_id": str(uuid.uuid4())[:8],
        **_extract_context(bound_args),
    }


def log_backtest(func: F) -> F:
    """Decorator to log a backtest operation with a correlation ID and timing."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        context = _setup_logging_context(func, args, kwargs)
        bound_logger = logger.bind(**context)
        func_name = func.__name__

        bound_logger.info(f"Backtest operation started: {func_name}")
        start_time = time.perf_counter()

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            execution_time_ms = round((time.perf_counter() - start_time) * 1000, 2)
            bound_logger.bind(
                success=False,
                execution_time_ms=execution_time_ms,
                error_type=type(e).__name__,
            ).error(f"Backtest operation failed: {func_name}: {e}")
            raise

        execution_time_ms = round((time.perf_counter() - start_time) * 1000, 2)
        bound_logger.bind(success=True, execution_time_ms=execution_time_ms).success(
            f"Backtest operation completed: {func_name}"
        )
        return result

    return wrapper  # type: ignore
