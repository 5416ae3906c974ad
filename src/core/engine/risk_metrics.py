"""
Risk and performance metrics.

This module computes summary statistics over a completed replay. Every
function is pure: it reads the equity curve and trade ledger and never
touches replay state.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from src.core.exceptions.backtest import CalculationError
from src.core.models.backtest import EquityPoint
from src.core.models.trade import SimulatedTrade
from src.core.types.financial import HUNDRED, ZERO

# Standard deviations at or below this are treated as zero
STDDEV_EPSILON = 1e-12


@dataclass(frozen=True)
class RiskMetrics:
    """Aggregate statistics for one backtest."""

    total_return: float
    total_return_percent: float
    max_drawdown: float
    sharpe_ratio: float
    win_rate: float
    total_trades: int


def step_returns(equity_curve: Sequence[EquityPoint]) -> np.ndarray:
    """Fractional change between consecutive equity points.

    A step starting from zero equity contributes a return of 0.
    """
    equities = np.array([point.equity for point in equity_curve], dtype=float)
    if equities.size < 2:
        return np.empty(0, dtype=float)

    previous = equities[:-1]
    changes = np.diff(equities)
    return np.divide(changes, previous, out=np.zeros_like(changes), where=previous != ZERO)


def calculate_sharpe_ratio(equity_curve: Sequence[EquityPoint]) -> float:
    """Raw per-step Sharpe ratio: mean over population standard deviation.

    No risk-free rate is subtracted and no annualization is applied.
    Returns 0 with fewer than two returns or a zero standard deviation.
    """
    returns = step_returns(equity_curve)
    if returns.size < 2:
        return ZERO

    std_dev = float(np.std(returns))
    if std_dev <= STDDEV_EPSILON:
        return ZERO
    return float(np.mean(returns)) / std_dev


def calculate_max_drawdown(equity_curve: Sequence[EquityPoint]) -> float:
    """Largest drawdown fraction recorded on the curve (0 for fewer than 2 points)."""
    if len(equity_curve) < 2:
        return ZERO
    return max(point.drawdown for point in equity_curve)


def calculate_win_rate(successful_trades: int, total_trades: int) -> float:
    """Share of ledger trades counted as successful (0 when there are none)."""
    if total_trades == 0:
        return ZERO
    return successful_trades / total_trades


def calculate_risk_metrics(
    equity_curve: Sequence[EquityPoint],
    trades: Sequence[SimulatedTrade],
    initial_capital: float,
    final_capital: float,
    successful_trades: int,
) -> RiskMetrics:
    """Compute return, drawdown, Sharpe and win-rate statistics.

    Args:
        equity_curve: Completed equity curve, initial point first
        trades: Completed simulated trade ledger
        initial_capital: Starting cash
        final_capital: Cash after the forced close
        successful_trades: Closing trades with non-negative realized PnL

    Returns:
        RiskMetrics for the replay

    Raises:
        CalculationError: If initial capital is not positive
    """
    if initial_capital <= ZERO:
        raise CalculationError(f"Initial capital must be positive, got {initial_capital}")

    total_return = final_capital - initial_capital
    total_trades = len(trades)

    return RiskMetrics(
        total_return=total_return,
        total_return_percent=total_return / initial_capital * HUNDRED,
        max_drawdown=calculate_max_drawdown(equity_curve),
        sharpe_ratio=calculate_sharpe_ratio(equity_curve),
        win_rate=calculate_win_rate(successful_trades, total_trades),
        total_trades=total_trades,
    )
