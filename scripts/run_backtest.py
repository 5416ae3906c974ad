#!/usr/bin/env python3
"""
Copy-Trading Backtest Runner

Replays a leader's historical executions for a hypothetical follower and
prints the resulting report as JSON.

Input is either a CSV of leader executions with columns
timestamp,leader_id,symbol,side,quantity,price (plus config flags), or a
JSON request file matching the BacktestRequest schema.
"""

import argparse
import json
import sys
from datetime import UTC, datetime
from pathlib import Path

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from src.api.schemas.api_models import BacktestReport, BacktestRequest, ErrorResponse
from src.core.constants import (
    DEFAULT_COMMISSION,
    DEFAULT_INITIAL_CAPITAL,
    DEFAULT_MAX_POSITION_SIZE,
    DEFAULT_POSITION_SIZE,
    DEFAULT_SLIPPAGE,
)
from src.core.engine import run_backtest, run_backtest_from_source
from src.core.exceptions.backtest import BacktestException
from src.core.models.backtest import BacktestConfig, BacktestResult
from src.infrastructure.data import LeaderTradeCSVLoader


def setup_logging(debug: bool = False):
    """Configure logging with loguru."""
    logger.remove()

    level = "DEBUG" if debug else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level,
    )


def parse_date(value: str) -> datetime:
    """Parse an ISO date or datetime argument; naive values are taken as UTC."""
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(
            f"Invalid date '{value}'. Use YYYY-MM-DD or ISO datetime format."
        ) from e
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Backtest copying a leader's trade history",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Replay leader_42 from a CSV export
  python scripts/run_backtest.py --trades trades.csv --leader leader_42 \\
      --start-date 2024-01-01 --end-date 2024-06-30 --capital 25000

  # Replay a JSON request payload
  python scripts/run_backtest.py --request request.json --summary
        """,
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--trades", type=Path, help="CSV file of leader executions")
    source.add_argument("--request", type=Path, help="JSON file matching BacktestRequest")

    parser.add_argument("--leader", type=str, help="Leader ID to replay (with --trades)")
    parser.add_argument("--start-date", type=parse_date, help="Replay window start")
    parser.add_argument("--end-date", type=parse_date, help="Replay window end")
    parser.add_argument(
        "--capital",
        type=float,
        default=DEFAULT_INITIAL_CAPITAL,
        help=f"Initial capital (default: {DEFAULT_INITIAL_CAPITAL})",
    )
    parser.add_argument(
        "--position-size",
        type=float,
        default=DEFAULT_POSITION_SIZE,
        help=f"Fraction of cash per trade (default: {DEFAULT_POSITION_SIZE})",
    )
    parser.add_argument(
        "--max-position-size",
        type=float,
        default=DEFAULT_MAX_POSITION_SIZE,
        help=f"Upper bound for --position-size (default: {DEFAULT_MAX_POSITION_SIZE})",
    )
    parser.add_argument(
        "--slippage",
        type=float,
        default=DEFAULT_SLIPPAGE,
        help=f"Slippage fraction (default: {DEFAULT_SLIPPAGE})",
    )
    parser.add_argument(
        "--commission",
        type=float,
        default=DEFAULT_COMMISSION,
        help=f"Commission fraction (default: {DEFAULT_COMMISSION})",
    )
    parser.add_argument("--output", type=Path, help="Write the JSON report to this file")
    parser.add_argument(
        "--summary", action="store_true", help="Print headline metrics instead of the full report"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def run_from_csv(args: argparse.Namespace) -> BacktestResult:
    config = BacktestConfig(
        leader_id=args.leader,
        start_date=args.start_date,
        end_date=args.end_date,
        initial_capital=args.capital,
        position_size=args.position_size,
        max_position_size=args.max_position_size,
        slippage=args.slippage,
        commission=args.commission,
    )
    return run_backtest_from_source(config, LeaderTradeCSVLoader(args.trades))


def run_from_request(path: Path) -> BacktestResult:
    request = BacktestRequest.model_validate_json(path.read_text())
    return run_backtest(request.to_config(), request.to_trades())


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.trades and not (args.leader and args.start_date and args.end_date):
        parser.error("--trades requires --leader, --start-date and --end-date")

    setup_logging(args.debug)

    try:
        result = run_from_csv(args) if args.trades else run_from_request(args.request)
    except (BacktestException, PydanticValidationError, FileNotFoundError) as e:
        logger.error(f"Backtest failed: {e}")
        print(ErrorResponse.from_exception(e).model_dump_json(indent=2))
        return 1

    if args.summary:
        output = json.dumps(result.performance_summary(), indent=2)
    else:
        output = BacktestReport.from_result(result).model_dump_json(indent=2)

    if args.output:
        args.output.write_text(output)
        logger.success(f"Report written to {args.output}")
    else:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
