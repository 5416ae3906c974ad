"""
Backtest engine.

Replays a leader's executions for a follower configuration and reports
the resulting equity curve, trade ledger and risk metrics.
"""

from .comparison import LeaderBacktestStats, compare_backtests, leader_backtest_stats
from .result_assembler import assemble_result
from .risk_metrics import RiskMetrics, calculate_risk_metrics
from .runner import prepare_trade_history, run_backtest, run_backtest_from_source, run_backtests
from .simulation import ReplayState, SimulationEngine

__all__ = [
    "SimulationEngine",
    "ReplayState",
    "RiskMetrics",
    "calculate_risk_metrics",
    "assemble_result",
    "prepare_trade_history",
    "run_backtest",
    "run_backtest_from_source",
    "run_backtests",
    "compare_backtests",
    "leader_backtest_stats",
    "LeaderBacktestStats",
]
