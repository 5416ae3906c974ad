"""
Core enumerations for the backtest engine.

This module provides centralized enumerations for domain concepts
like trade sides and replay event outcomes.
"""

from .event_outcomes import EventOutcome
from .trade_side import TradeSide

__all__ = ["TradeSide", "EventOutcome"]
