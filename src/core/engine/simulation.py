"""
Copy-trade replay simulation.

This module replays a leader's executions as scaled follower trades. The
replay is a single ordered fold: every piece of mutable state lives in a
ReplayState created inside SimulationEngine.replay and returned at the end.
"""

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from loguru import logger

from src.core.constants import MIN_ORDER_QUANTITY
from src.core.enums import EventOutcome, TradeSide
from src.core.models.backtest import BacktestConfig, EquityPoint
from src.core.models.position_ledger import PositionLedger
from src.core.models.trade import LeaderTrade, SimulatedTrade
from src.core.types.financial import (
    ZERO,
    apply_slippage,
    calculate_commission,
    calculate_realized_pnl,
    scaled_quantity,
)


@dataclass
class ReplayState:
    """Follower account state accumulated over one replay."""

    cash: float
    peak_equity: float
    positions: PositionLedger = field(default_factory=PositionLedger)
    equity_curve: list[EquityPoint] = field(default_factory=list)
    trades: list[SimulatedTrade] = field(default_factory=list)
    cumulative_pnl: float = ZERO
    successful_trades: int = 0
    failed_trades: int = 0
    last_prices: dict[str, float] = field(default_factory=dict)
    outcomes: Counter[EventOutcome] = field(default_factory=Counter)

    @classmethod
    def initial(cls, config: BacktestConfig) -> "ReplayState":
        """Fresh state holding only the initial capital, with the opening equity point."""
        state = cls(cash=config.initial_capital, peak_equity=config.initial_capital)
        state.equity_curve.append(
            EquityPoint(timestamp=config.start_date, equity=config.initial_capital, drawdown=ZERO)
        )
        return state

    def skipped_events(self) -> dict[str, int]:
        """Tally of events that produced no executed trade."""
        return {
            outcome.value: self.outcomes.get(outcome, 0)
            for outcome in EventOutcome.diagnostic_outcomes()
        }


class SimulationEngine:
    """Deterministic replay of leader executions for one follower config.

    The engine holds only its immutable config, so one instance can run
    any number of independent replays.
    """

    def __init__(self, config: BacktestConfig) -> None:
        self.config = config

    def replay(self, leader_trades: Sequence[LeaderTrade]) -> ReplayState:
        """Replay the trades in the given order and force-close what remains.

        Args:
            leader_trades: Leader executions, already sorted by timestamp

        Returns:
            Final replay state
        """
        state = ReplayState.initial(self.config)

        for leader_trade in leader_trades:
            outcome = self._process_event(state, leader_trade)
            state.outcomes[outcome] += 1
            if outcome.is_failure:
                state.failed_trades += 1
            if outcome != EventOutcome.EXECUTED:
                logger.debug(
                    f"{leader_trade.side} {leader_trade.symbol} at "
                    f"{leader_trade.timestamp.isoformat()} not executed: {outcome}"
                )

        self._force_close(state)
        return state

    def _process_event(self, state: ReplayState, leader_trade: LeaderTrade) -> EventOutcome:
        """Size and execute the follower trade for one leader execution."""
        state.last_prices[leader_trade.symbol] = leader_trade.price

        execution_price = apply_slippage(
            leader_trade.price, self.config.slippage, leader_trade.side.slippage_sign
        )
        quantity = scaled_quantity(state.cash, self.config.position_size, execution_price)
        if quantity < MIN_ORDER_QUANTITY:
            return EventOutcome.SUB_UNIT_QUANTITY

        if leader_trade.side.is_buy:
            return self._execute_buy(state, leader_trade, quantity, execution_price)
        return self._execute_sell(state, leader_trade, quantity, execution_price)

    def _execute_buy(
        self,
        state: ReplayState,
        leader_trade: LeaderTrade,
        quantity: int,
        execution_price: float,
    ) -> EventOutcome:
        cost = quantity * execution_price
        commission = calculate_commission(cost, self.config.commission)
        if state.cash < cost + commission:
            return EventOutcome.INSUFFICIENT_FUNDS

        state.cash -= cost + commission
        state.positions.apply_buy(leader_trade.symbol, quantity, execution_price)
        state.trades.append(
            SimulatedTrade(
                timestamp=leader_trade.timestamp,
                symbol=leader_trade.symbol,
                side=TradeSide.BUY,
                quantity=quantity,
                price=execution_price,
                value=cost,
                commission=commission,
                cumulative_pnl=state.cumulative_pnl,
            )
        )
        self._record_equity(state, leader_trade.timestamp)
        return EventOutcome.EXECUTED

    def _execute_sell(
        self,
        state: ReplayState,
        leader_trade: LeaderTrade,
        quantity: int,
        execution_price: float,
    ) -> EventOutcome:
        symbol = leader_trade.symbol
        position = state.positions.position_of(symbol)
        average_cost = position.average_cost if position else ZERO
        # Cap at the held quantity. With no position the raw quantity is passed
        # through so the ledger rejects the sell.
        held = state.positions.held_quantity(symbol)
        requested = min(quantity, int(held)) if held else quantity

        if state.positions.apply_sell(symbol, requested) == ZERO:
            return EventOutcome.REJECTED_SELL

        self._settle_close(
            state,
            timestamp=leader_trade.timestamp,
            symbol=symbol,
            quantity=requested,
            exit_price=execution_price,
            average_cost=average_cost,
        )
        return EventOutcome.EXECUTED

    def _force_close(self, state: ReplayState) -> None:
        """Liquidate every open position at its last raw leader fill price."""
        open_positions = state.positions.open_positions()
        if not open_positions:
            return

        logger.info(
            f"Force-closing {len(open_positions)} open position(s) for leader "
            f"{self.config.leader_id} at {self.config.end_date.isoformat()}"
        )
        for position in open_positions:
            state.positions.close_position(position.symbol)
            self._settle_close(
                state,
                timestamp=self.config.end_date,
                symbol=position.symbol,
                quantity=int(position.quantity),
                exit_price=state.last_prices[position.symbol],
                average_cost=position.average_cost,
                forced=True,
            )

    def _settle_close(
        self,
        state: ReplayState,
        timestamp: datetime,
        symbol: str,
        quantity: int,
        exit_price: float,
        average_cost: float,
        forced: bool = False,
    ) -> None:
        """Book cash, PnL, counters and ledger entries for a closing sell."""
        proceeds = quantity * exit_price
        commission = calculate_commission(proceeds, self.config.commission)
        pnl = calculate_realized_pnl(exit_price, average_cost, quantity, commission)

        state.cash += proceeds - commission
        state.cumulative_pnl += pnl
        if pnl >= ZERO:
            state.successful_trades += 1
        else:
            state.failed_trades += 1

        state.trades.append(
            SimulatedTrade(
                timestamp=timestamp,
                symbol=symbol,
                side=TradeSide.SELL,
                quantity=quantity,
                price=exit_price,
                value=proceeds,
                commission=commission,
                cumulative_pnl=state.cumulative_pnl,
                pnl=pnl,
                forced=forced,
            )
        )
        self._record_equity(state, timestamp)

    @staticmethod
    def _record_equity(state: ReplayState, timestamp: datetime) -> None:
        """Append an equity point; equity is cash only at trade time."""
        state.peak_equity = max(state.peak_equity, state.cash)
        drawdown = (state.peak_equity - state.cash) / state.peak_equity
        state.equity_curve.append(
            EquityPoint(timestamp=timestamp, equity=state.cash, drawdown=drawdown)
        )
