"""
Leader trade CSV validation utilities.

This module provides structure and value validation for leader execution
files before they are turned into LeaderTrade records.
"""

from pathlib import Path

import pandas as pd

from src.core.constants import TRADE_CSV_COLUMNS
from src.core.enums import TradeSide
from src.core.exceptions.backtest import DataError, InvalidTradeError


class TradeCSVValidator:
    """Handles validation of leader trade CSV data."""

    @staticmethod
    def validate_csv_structure(df: pd.DataFrame, file_path: Path) -> None:
        """Validate CSV file has expected structure and sane values."""
        TradeCSVValidator._validate_csv_columns(df, file_path)
        if df.empty:
            return

        TradeCSVValidator._validate_sides(df, file_path)
        TradeCSVValidator._validate_positive_values(df, file_path)

    @staticmethod
    def _validate_csv_columns(df: pd.DataFrame, file_path: Path) -> None:
        """Validate CSV file has required columns."""
        missing_columns = set(TRADE_CSV_COLUMNS) - set(df.columns)
        if missing_columns:
            raise DataError(f"CSV file {file_path} missing columns: {sorted(missing_columns)}")

    @staticmethod
    def _validate_sides(df: pd.DataFrame, file_path: Path) -> None:
        """Validate every side is BUY or SELL (case-insensitive)."""
        sides = df["side"].astype(str).str.strip().str.upper()
        invalid = sorted(set(sides) - {side.value for side in TradeSide})
        if invalid:
            raise DataError(f"Invalid side values in {file_path}: {invalid}")

    @staticmethod
    def _validate_positive_values(df: pd.DataFrame, file_path: Path) -> None:
        """Validate quantity and price columns are numeric and positive."""
        for col in ["quantity", "price"]:
            try:
                values = pd.to_numeric(df[col])
            except (TypeError, ValueError) as e:
                raise DataError(f"Invalid {col} data in {file_path}: invalid data type") from e

            if values.isna().any():
                raise DataError(f"Invalid {col} data in {file_path}: missing values")
            if (values <= 0).any():
                first_bad = int((values <= 0).to_numpy().nonzero()[0][0])
                raise InvalidTradeError(
                    f"Invalid {col} data in {file_path}: non-positive value in row {first_bad}"
                )
