"""
Backtest result assembly.
"""

from src.core.engine.risk_metrics import RiskMetrics
from src.core.engine.simulation import ReplayState
from src.core.exceptions.backtest import ResultAssemblyError
from src.core.models.backtest import BacktestConfig, BacktestResult


def assemble_result(
    config: BacktestConfig, state: ReplayState, metrics: RiskMetrics
) -> BacktestResult:
    """Package a finished replay and its metrics into a BacktestResult.

    Raises:
        ResultAssemblyError: If the replay never produced an equity point
    """
    if not state.equity_curve:
        raise ResultAssemblyError(
            f"Replay for leader {config.leader_id} produced an empty equity curve"
        )

    return BacktestResult(
        config=config,
        final_capital=state.cash,
        total_return=metrics.total_return,
        total_return_percent=metrics.total_return_percent,
        max_drawdown=metrics.max_drawdown,
        sharpe_ratio=metrics.sharpe_ratio,
        win_rate=metrics.win_rate,
        total_trades=metrics.total_trades,
        successful_trades=state.successful_trades,
        failed_trades=state.failed_trades,
        equity_curve=tuple(state.equity_curve),
        trades=tuple(state.trades),
        skipped_events=state.skipped_events(),
    )
