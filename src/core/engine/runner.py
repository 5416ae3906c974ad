"""
Backtest entry points.

run_backtest validates the input history, replays it, computes metrics
and assembles the result. Either a complete BacktestResult is returned or
a single exception is raised; a partial result is never handed back.
"""

import asyncio
from collections.abc import Iterable, Sequence
from typing import Any

from loguru import logger

from src.core.engine.result_assembler import assemble_result
from src.core.engine.risk_metrics import calculate_risk_metrics
from src.core.engine.simulation import SimulationEngine
from src.core.exceptions.backtest import EmptyHistoryError, UnsortedHistoryError
from src.core.interfaces.trade_source import ITradeSource
from src.core.models.backtest import BacktestConfig, BacktestResult
from src.core.models.trade import LeaderTrade
from src.core.utils.decorators import log_backtest


def prepare_trade_history(
    config: BacktestConfig, leader_trades: Iterable[LeaderTrade | dict[str, Any]]
) -> list[LeaderTrade]:
    """Validate a leader history and restrict it to the config's window.

    Raw mapping records are coerced to LeaderTrade. The input is never
    re-sorted.

    Raises:
        InvalidTradeError: If a record has a missing or non-positive field
        UnsortedHistoryError: If timestamps ever decrease
        EmptyHistoryError: If no trade falls inside [start_date, end_date]
    """
    trades = [
        trade if isinstance(trade, LeaderTrade) else LeaderTrade.from_record(trade)
        for trade in leader_trades
    ]

    for index in range(1, len(trades)):
        previous, current = trades[index - 1].timestamp, trades[index].timestamp
        if current < previous:
            raise UnsortedHistoryError(index, previous, current)

    in_window = [trade for trade in trades if config.contains(trade.timestamp)]
    if not in_window:
        raise EmptyHistoryError(config.leader_id, config.start_date, config.end_date)

    dropped = len(trades) - len(in_window)
    if dropped:
        logger.debug(f"Dropped {dropped} leader trade(s) outside the replay window")
    return in_window


@log_backtest
def run_backtest(
    config: BacktestConfig, leader_trades: Sequence[LeaderTrade | dict[str, Any]]
) -> BacktestResult:
    """Replay a leader's history for a follower configuration.

    Args:
        config: Follower capital and cost configuration
        leader_trades: Leader executions sorted ascending by timestamp

    Returns:
        Complete backtest result
    """
    trades = prepare_trade_history(config, leader_trades)

    state = SimulationEngine(config).replay(trades)
    metrics = calculate_risk_metrics(
        equity_curve=state.equity_curve,
        trades=state.trades,
        initial_capital=config.initial_capital,
        final_capital=state.cash,
        successful_trades=state.successful_trades,
    )
    result = assemble_result(config, state, metrics)

    logger.info(
        f"Leader {config.leader_id}: {result.total_trades} trades, "
        f"return {result.total_return_percent:.2f}%, max drawdown {result.max_drawdown:.4f}"
    )
    return result


def run_backtest_from_source(config: BacktestConfig, source: ITradeSource) -> BacktestResult:
    """Load the leader's window from a trade source and run the backtest."""
    leader_trades = source.load_trades(config.leader_id, config.start_date, config.end_date)
    return run_backtest(config, leader_trades)


async def run_backtests(
    jobs: Sequence[tuple[BacktestConfig, Sequence[LeaderTrade]]],
    timeout: float | None = None,
) -> list[BacktestResult]:
    """Run independent backtests concurrently in worker threads.

    Each job owns its own replay state. If the deadline expires the whole
    batch fails with TimeoutError and no partial results are returned.

    Args:
        jobs: (config, leader_trades) pairs
        timeout: Optional deadline in seconds for the whole batch

    Returns:
        Results in the same order as jobs
    """
    tasks = [asyncio.to_thread(run_backtest, config, trades) for config, trades in jobs]
    results = await asyncio.wait_for(asyncio.gather(*tasks), timeout=timeout)
    return list(results)
