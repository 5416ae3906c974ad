"""
Cross-backtest comparison and per-leader statistics.
"""

from collections.abc import Iterable
from dataclasses import dataclass

import pandas as pd

from src.core.models.backtest import BacktestResult


@dataclass(frozen=True)
class LeaderBacktestStats:
    """Aggregate view over every backtest run against one leader."""

    leader_id: str
    total_backtests: int
    average_return: float
    average_drawdown: float
    average_sharpe_ratio: float
    average_win_rate: float
    best_return: float
    worst_return: float


def compare_backtests(results: Iterable[BacktestResult]) -> list[BacktestResult]:
    """Order results from best to worst total return percent.

    Ties keep their input order.
    """
    return sorted(results, key=lambda result: result.total_return_percent, reverse=True)


def results_frame(results: Iterable[BacktestResult]) -> pd.DataFrame:
    """Headline metrics of many results, one row per backtest."""
    return pd.DataFrame(
        [
            {
                "leader_id": result.leader_id,
                "total_return_percent": result.total_return_percent,
                "max_drawdown": result.max_drawdown,
                "sharpe_ratio": result.sharpe_ratio,
                "win_rate": result.win_rate,
                "total_trades": result.total_trades,
            }
            for result in results
        ],
        columns=[
            "leader_id",
            "total_return_percent",
            "max_drawdown",
            "sharpe_ratio",
            "win_rate",
            "total_trades",
        ],
    )


def leader_backtest_stats(
    results: Iterable[BacktestResult], leader_id: str
) -> LeaderBacktestStats | None:
    """Summarize all backtests for a leader.

    Args:
        results: Backtest results, possibly for several leaders
        leader_id: Leader to summarize

    Returns:
        Aggregate statistics, or None when no result matches the leader
    """
    frame = results_frame(results)
    frame = frame[frame["leader_id"] == leader_id]
    if frame.empty:
        return None

    returns = frame["total_return_percent"]
    return LeaderBacktestStats(
        leader_id=leader_id,
        total_backtests=len(frame),
        average_return=float(returns.mean()),
        average_drawdown=float(frame["max_drawdown"].mean()),
        average_sharpe_ratio=float(frame["sharpe_ratio"].mean()),
        average_win_rate=float(frame["win_rate"].mean()),
        best_return=float(returns.max()),
        worst_return=float(returns.min()),
    )
