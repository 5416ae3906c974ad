"""
Unit tests for backtest result models.
"""

from datetime import UTC, datetime

import pytest

from src.core.enums import TradeSide
from src.core.models.backtest import BacktestConfig, BacktestResult, EquityPoint
from src.core.models.trade import SimulatedTrade


@pytest.fixture
def config() -> BacktestConfig:
    return BacktestConfig(
        leader_id="leader-1",
        start_date=datetime(2024, 1, 1, tzinfo=UTC),
        end_date=datetime(2024, 1, 31, tzinfo=UTC),
        initial_capital=10000.0,
        position_size=0.1,
    )


@pytest.fixture
def result(config: BacktestConfig) -> BacktestResult:
    buy_time = datetime(2024, 1, 5, tzinfo=UTC)
    trades = (
        SimulatedTrade(buy_time, "AAPL", TradeSide.BUY, 100, 10.0, 1000.0, 0.0, 0.0),
        SimulatedTrade(
            config.end_date, "AAPL", TradeSide.SELL, 100, 12.0, 1200.0, 0.0, 200.0,
            pnl=200.0, forced=True,
        ),
    )
    curve = (
        EquityPoint(config.start_date, 10000.0, 0.0),
        EquityPoint(buy_time, 9000.0, 0.1),
        EquityPoint(config.end_date, 10200.0, 0.0),
    )
    return BacktestResult(
        config=config,
        final_capital=10200.0,
        total_return=200.0,
        total_return_percent=2.0,
        max_drawdown=0.1,
        sharpe_ratio=0.123456789,
        win_rate=0.5,
        total_trades=2,
        successful_trades=1,
        failed_trades=0,
        equity_curve=curve,
        trades=trades,
        skipped_events={"sub_unit_quantity": 1},
    )


class TestBacktestResult:
    """Test suite for BacktestResult."""

    def test_should_expose_config_fields(self, result: BacktestResult) -> None:
        """Test leader and capital come from the config."""
        assert result.leader_id == "leader-1"
        assert result.initial_capital == 10000.0

    def test_should_report_profitability(self, result: BacktestResult) -> None:
        """Test profitable check."""
        assert result.is_profitable()

    def test_should_build_rounded_summary(self, result: BacktestResult) -> None:
        """Test performance summary rounds ratios."""
        summary = result.performance_summary()

        assert summary["sharpe_ratio"] == 0.1235
        assert summary["total_trades"] == 2
        assert summary["duration_days"] == 30

    def test_should_build_equity_frame(self, result: BacktestResult) -> None:
        """Test equity curve DataFrame is indexed by timestamp."""
        frame = result.equity_frame()

        assert list(frame.columns) == ["equity", "drawdown"]
        assert len(frame) == 3
        assert frame["drawdown"].max() == 0.1
        assert frame["equity"].iloc[-1] == 10200.0

    def test_should_build_trades_frame(self, result: BacktestResult) -> None:
        """Test trade ledger DataFrame has one row per trade."""
        frame = result.trades_frame()

        assert len(frame) == 2
        assert list(frame["side"]) == ["BUY", "SELL"]
        assert frame["forced"].tolist() == [False, True]
        assert frame["pnl"].iloc[1] == 200.0

    def test_should_build_empty_trades_frame(self, config: BacktestConfig) -> None:
        """Test a result without trades still has the ledger columns."""
        empty = BacktestResult(
            config=config,
            final_capital=10000.0,
            total_return=0.0,
            total_return_percent=0.0,
            max_drawdown=0.0,
            sharpe_ratio=0.0,
            win_rate=0.0,
            total_trades=0,
            successful_trades=0,
            failed_trades=0,
            equity_curve=(EquityPoint(config.start_date, 10000.0, 0.0),),
            trades=(),
        )

        frame = empty.trades_frame()

        assert frame.empty
        assert "cumulative_pnl" in frame.columns
        assert empty.skipped_events == {}

    def test_should_serialize_to_dict(self, result: BacktestResult) -> None:
        """Test dictionary conversion."""
        data = result.to_dict()

        assert data["config"]["leader_id"] == "leader-1"
        assert len(data["equity_curve"]) == 3
        assert data["trades"][1]["forced"] is True
        assert data["skipped_events"] == {"sub_unit_quantity": 1}
