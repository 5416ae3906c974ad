"""
Integration tests for the backtest pipeline.

Tests the interaction between LeaderTradeCSVLoader, the replay engine,
comparison helpers and the report schema with real files.
"""

from datetime import UTC, datetime
from pathlib import Path

import pytest

from src.api.schemas.api_models import BacktestReport
from src.core.engine import (
    compare_backtests,
    leader_backtest_stats,
    run_backtest_from_source,
    run_backtests,
)
from src.core.models.backtest import BacktestConfig
from src.infrastructure.data import LeaderTradeCSVLoader

START = datetime(2024, 1, 1, tzinfo=UTC)
END = datetime(2024, 1, 31, tzinfo=UTC)


class TestBacktestPipeline:
    """Integration tests for CSV to report."""

    @pytest.fixture
    def loader(self, tmp_path: Path) -> LeaderTradeCSVLoader:
        path = tmp_path / "leader_trades.csv"
        path.write_text(
            "timestamp,leader_id,symbol,side,quantity,price\n"
            "2024-01-02T10:00:00Z,alpha,AAA,BUY,100,10\n"
            "2024-01-03T10:00:00Z,alpha,BBB,BUY,20,50\n"
            "2024-01-04T10:00:00Z,beta,AAA,BUY,5,10\n"
            "2024-01-05T10:00:00Z,alpha,AAA,BUY,100,20\n"
            "2024-01-06T10:00:00Z,alpha,BBB,BUY,20,60\n"
            "2024-01-08T10:00:00Z,beta,AAA,SELL,5,8\n"
            "2024-03-01T10:00:00Z,alpha,AAA,SELL,100,99\n"
        )
        return LeaderTradeCSVLoader(path)

    def config(self, leader_id: str) -> BacktestConfig:
        return BacktestConfig(
            leader_id=leader_id,
            start_date=START,
            end_date=END,
            initial_capital=10000.0,
            position_size=0.1,
        )

    def test_should_backtest_leader_from_csv(self, loader: LeaderTradeCSVLoader) -> None:
        """Test a multi-symbol history loaded from CSV."""
        result = run_backtest_from_source(self.config("alpha"), loader)

        # Four buys plus one forced close per symbol; the March sell is outside the window
        assert result.total_trades == 6
        assert result.final_capital == pytest.approx(11180.0)
        assert result.total_return_percent == pytest.approx(11.8)
        assert result.successful_trades == 2
        assert result.failed_trades == 0
        assert [t.symbol for t in result.trades if t.forced] == ["AAA", "BBB"]

    def test_should_build_report(self, loader: LeaderTradeCSVLoader) -> None:
        """Test the transport report for a CSV backtest."""
        result = run_backtest_from_source(self.config("beta"), loader)

        report = BacktestReport.from_result(result)

        # 100 units at 10 sold at 8
        assert report.final_capital == pytest.approx(9800.0)
        assert report.failed_trades == 1
        assert report.win_rate == 0.0
        assert report.max_drawdown == pytest.approx(0.1)
        assert report.config["leader_id"] == "beta"

    @pytest.mark.asyncio
    async def test_should_compare_leaders(self, loader: LeaderTradeCSVLoader) -> None:
        """Test concurrent runs feed comparison and leader statistics."""
        jobs = [
            (self.config(leader), loader.load_trades(leader, START, END))
            for leader in ("beta", "alpha")
        ]

        results = await run_backtests(jobs, timeout=30)
        ranked = compare_backtests(results)
        stats = leader_backtest_stats(results, "alpha")

        assert [r.leader_id for r in ranked] == ["alpha", "beta"]
        assert stats is not None
        assert stats.total_backtests == 1
        assert stats.best_return == pytest.approx(11.8)
