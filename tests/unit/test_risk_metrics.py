"""
Unit tests for risk and performance metrics.
"""

from datetime import UTC, datetime, timedelta

import numpy as np
import pytest

from src.core.engine.risk_metrics import (
    calculate_max_drawdown,
    calculate_risk_metrics,
    calculate_sharpe_ratio,
    calculate_win_rate,
    step_returns,
)
from src.core.enums import TradeSide
from src.core.exceptions.backtest import CalculationError
from src.core.models.backtest import EquityPoint
from src.core.models.trade import SimulatedTrade

START = datetime(2024, 1, 1, tzinfo=UTC)


def curve(*equities: float) -> list[EquityPoint]:
    """Build an equity curve with drawdowns against the running peak."""
    points = []
    peak = equities[0]
    for i, equity in enumerate(equities):
        peak = max(peak, equity)
        drawdown = (peak - equity) / peak if peak > 0 else 0.0
        points.append(EquityPoint(START + timedelta(days=i), equity, drawdown))
    return points


class TestStepReturns:
    """Test suite for step returns."""

    def test_should_compute_fractional_changes(self) -> None:
        """Test returns between consecutive points."""
        returns = step_returns(curve(100.0, 110.0, 99.0))

        np.testing.assert_allclose(returns, [0.1, -0.1])

    def test_should_return_empty_for_single_point(self) -> None:
        """Test a one-point curve has no returns."""
        assert step_returns(curve(100.0)).size == 0

    def test_should_treat_step_from_zero_as_flat(self) -> None:
        """Test a step starting at zero equity contributes zero."""
        returns = step_returns(curve(100.0, 0.0, 50.0))

        np.testing.assert_allclose(returns, [-1.0, 0.0])


class TestSharpeRatio:
    """Test suite for the Sharpe ratio."""

    def test_should_compute_mean_over_population_std(self) -> None:
        """Test Sharpe on a buy-then-close curve."""
        # returns -0.1 and 1/9: mean 1/180, population std 19/180
        assert calculate_sharpe_ratio(curve(10000.0, 9000.0, 10000.0)) == pytest.approx(1 / 19)

    def test_should_return_zero_with_fewer_than_two_returns(self) -> None:
        """Test short curves have zero Sharpe."""
        assert calculate_sharpe_ratio(curve(10000.0)) == 0.0
        assert calculate_sharpe_ratio(curve(10000.0, 11000.0)) == 0.0

    def test_should_return_zero_for_constant_returns(self) -> None:
        """Test zero standard deviation yields zero instead of dividing."""
        assert calculate_sharpe_ratio(curve(100.0, 100.0, 100.0)) == 0.0


class TestMaxDrawdown:
    """Test suite for max drawdown."""

    def test_should_return_largest_recorded_drawdown(self) -> None:
        """Test max drawdown over the curve."""
        assert calculate_max_drawdown(curve(100.0, 80.0, 120.0, 90.0)) == pytest.approx(0.25)

    def test_should_return_zero_for_single_point(self) -> None:
        """Test a one-point curve has no drawdown."""
        assert calculate_max_drawdown(curve(100.0)) == 0.0


class TestWinRate:
    """Test suite for win rate."""

    def test_should_divide_successes_by_total_trades(self) -> None:
        """Test win rate over the ledger."""
        assert calculate_win_rate(1, 2) == 0.5

    def test_should_return_zero_without_trades(self) -> None:
        """Test win rate with an empty ledger."""
        assert calculate_win_rate(0, 0) == 0.0


class TestCalculateRiskMetrics:
    """Test suite for the combined metrics."""

    def _ledger(self) -> list[SimulatedTrade]:
        return [
            SimulatedTrade(START, "AAPL", TradeSide.BUY, 100, 10.0, 1000.0, 0.0, 0.0),
            SimulatedTrade(
                START + timedelta(days=2), "AAPL", TradeSide.SELL, 100, 10.0, 1000.0, 0.0, 0.0,
                pnl=0.0, forced=True,
            ),
        ]

    def test_should_combine_all_metrics(self) -> None:
        """Test metrics for a break-even round trip."""
        metrics = calculate_risk_metrics(
            equity_curve=curve(10000.0, 9000.0, 10000.0),
            trades=self._ledger(),
            initial_capital=10000.0,
            final_capital=10000.0,
            successful_trades=1,
        )

        assert metrics.total_return == 0.0
        assert metrics.total_return_percent == 0.0
        assert metrics.max_drawdown == pytest.approx(0.1)
        assert metrics.sharpe_ratio == pytest.approx(1 / 19)
        assert metrics.win_rate == 0.5
        assert metrics.total_trades == 2

    def test_should_compute_return_percent(self) -> None:
        """Test return percent is relative to initial capital."""
        metrics = calculate_risk_metrics(curve(1000.0, 1250.0), [], 1000.0, 1250.0, 0)

        assert metrics.total_return == 250.0
        assert metrics.total_return_percent == 25.0

    def test_should_reject_non_positive_initial_capital(self) -> None:
        """Test invalid capital raises CalculationError."""
        with pytest.raises(CalculationError, match="Initial capital must be positive"):
            calculate_risk_metrics(curve(1.0), [], 0.0, 0.0, 0)
