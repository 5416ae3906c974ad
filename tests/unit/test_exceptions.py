"""
Unit tests for custom exceptions.
Testing all exception classes and their attributes.
"""

from datetime import UTC, datetime

from src.core.exceptions.backtest import (
    BacktestException,
    CalculationError,
    ConfigurationError,
    DataError,
    EmptyHistoryError,
    InputError,
    InvalidTradeError,
    PositionNotFoundError,
    ResultAssemblyError,
    UnsortedHistoryError,
    ValidationError,
)


class TestBacktestException:
    """Tests for BacktestException base class."""

    def test_should_create_base_exception_with_message(self) -> None:
        """Test creating base exception with message."""
        exc = BacktestException("Test error message")
        assert str(exc) == "Test error message"
        assert isinstance(exc, Exception)


class TestValidationHierarchy:
    """Tests for the fatal input error hierarchy."""

    def test_should_treat_configuration_error_as_validation_error(self) -> None:
        """Test configuration errors are validation errors."""
        exc = ConfigurationError("initial_capital must be positive, got -1")
        assert isinstance(exc, ValidationError)
        assert isinstance(exc, BacktestException)
        assert "-1" in str(exc)

    def test_should_group_history_errors_under_input_error(self) -> None:
        """Test every history problem is an InputError."""
        start = datetime(2024, 1, 1, tzinfo=UTC)
        end = datetime(2024, 1, 31, tzinfo=UTC)

        assert isinstance(EmptyHistoryError("leader-1", start, end), InputError)
        assert isinstance(UnsortedHistoryError(3, end, start), InputError)
        assert isinstance(InvalidTradeError("Price must be positive"), InputError)


class TestEmptyHistoryError:
    """Tests for EmptyHistoryError."""

    def test_should_carry_window_attributes(self) -> None:
        """Test creating empty history error with all attributes."""
        start = datetime(2024, 1, 1, tzinfo=UTC)
        end = datetime(2024, 1, 31, tzinfo=UTC)

        exc = EmptyHistoryError("leader-1", start, end)

        assert exc.leader_id == "leader-1"
        assert exc.start_date == start
        assert exc.end_date == end
        assert "No trades found for leader leader-1" in str(exc)
        assert "2024-01-01" in str(exc)


class TestUnsortedHistoryError:
    """Tests for UnsortedHistoryError."""

    def test_should_carry_offending_index(self) -> None:
        """Test creating unsorted history error with all attributes."""
        earlier = datetime(2024, 1, 2, tzinfo=UTC)
        later = datetime(2024, 1, 5, tzinfo=UTC)

        exc = UnsortedHistoryError(index=4, previous=later, current=earlier)

        assert exc.index == 4
        assert exc.previous == later
        assert exc.current == earlier
        assert "trade 4" in str(exc)


class TestOtherErrors:
    """Tests for non-input errors."""

    def test_should_create_position_not_found_error(self) -> None:
        """Test creating position not found error."""
        exc = PositionNotFoundError("AAPL")
        assert exc.symbol == "AAPL"
        assert str(exc) == "Position not found for symbol: AAPL"

    def test_should_keep_runtime_errors_outside_validation(self) -> None:
        """Test data, calculation and assembly errors are not validation errors."""
        for exc in [
            DataError("Failed to load CSV file"),
            CalculationError("Initial capital must be positive"),
            ResultAssemblyError("empty equity curve"),
        ]:
            assert isinstance(exc, BacktestException)
            assert not isinstance(exc, ValidationError)
