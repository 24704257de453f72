"""Late-payment rules for scheduled contract payments.

This module decides whether a payment is late and how large the
surcharge is. It holds no state and performs no I/O.
"""

from .models import PaymentSchedule

DEFAULT_PENALTY_RATE_PERCENT = 10


class PenaltyCalculator:
    """Applies a flat percentage surcharge to late payments.

    Pure decision logic, no side effects.
    """

    def __init__(self, rate_percent: int = DEFAULT_PENALTY_RATE_PERCENT):
        if rate_percent < 0:
            raise ValueError(
                f"rate_percent must be non-negative, got {rate_percent}"
            )
        self.rate_percent = rate_percent

    def is_late(self, schedule: PaymentSchedule, current_time: int) -> bool:
        """Is a payment made at current_time late for this schedule?

        Paying exactly on the due date already counts as late.
        """
        return current_time >= schedule.due_date

    def compute(self, amount: int) -> int:
        """Penalty owed on a late payment of amount, floored to an integer."""
        return (amount * self.rate_percent) // 100
