"""
Replay event outcome enumeration.

This module classifies what happened to each leader execution during a replay.
"""

from enum import StrEnum


class EventOutcome(StrEnum):
    """
    Outcome of replaying a single leader execution.

    Only EXECUTED and REJECTED_SELL touch the trade counters. The two skip
    outcomes are silent no-ops that are tallied for diagnostics only.
    """

    EXECUTED = "executed"
    SUB_UNIT_QUANTITY = "sub_unit_quantity"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    REJECTED_SELL = "rejected_sell"

    @property
    def is_failure(self) -> bool:
        """Check if the event counts as a failed trade."""
        return self == self.REJECTED_SELL

    @classmethod
    def diagnostic_outcomes(cls) -> list["EventOutcome"]:
        """Outcomes reported in a result's skipped-event tally."""
        return [cls.SUB_UNIT_QUANTITY, cls.INSUFFICIENT_FUNDS, cls.REJECTED_SELL]
