"""
Enums shared by the valuation layer.
"""

from enum import Enum


class EvaluationTimePolicy(Enum):
    """Which cash flows count relative to the evaluation time.

    INCLUSIVE counts flows at or after the evaluation time, EXCLUSIVE only
    flows strictly after it. SUMMIT behaves like INCLUSIVE and additionally
    moves the evaluation time of notional-exchanging legs forward to their
    first period start.
    """

    INCLUSIVE = "INCLUSIVE"
    EXCLUSIVE = "EXCLUSIVE"
    SUMMIT = "SUMMIT"

    def counts(self, time: float, evaluation_time: float) -> bool:
        """Whether a flow at ``time`` is still alive at ``evaluation_time``."""
        if self is EvaluationTimePolicy.EXCLUSIVE:
            return time > evaluation_time
        return time >= evaluation_time
