"""
Historical aggregation for the Micro-Loan Risk Engine.

The repayment-history and first-time-borrower factors only need a handful of
aggregates over the applicant's previous applications:
- Total number of prior applications
- Number that ended overdue / repaid
- Mean days overdue across recorded installment measurements

The history itself is never mutated; every helper is a read-only pass.
"""

from dataclasses import dataclass
from typing import Optional

from .models import LoanStatus, PriorLoanHistory


@dataclass(frozen=True)
class LoanHistorySummary:
    """
    Aggregates of an applicant's prior loans.

    Attributes:
        total_loans: Number of prior applications (any status)
        overdue_loans: Prior applications that ended overdue
        repaid_loans: Prior applications that were repaid
        average_days_overdue: Mean of the recorded days-overdue measurements,
            None when no measurement is available
    """
    total_loans: int
    overdue_loans: int
    repaid_loans: int
    average_days_overdue: Optional[float]

    @property
    def is_first_time_borrower(self) -> bool:
        return self.total_loans == 0


def count_loans_with_status(history: PriorLoanHistory, status: LoanStatus) -> int:
    return sum(1 for loan in history.loans if loan.status == status)


def count_overdue_loans(history: PriorLoanHistory) -> int:
    return count_loans_with_status(history, LoanStatus.OVERDUE)


def count_repaid_loans(history: PriorLoanHistory) -> int:
    return count_loans_with_status(history, LoanStatus.REPAID)


def calculate_average_days_overdue(history: PriorLoanHistory) -> Optional[float]:
    """
    Calculate the mean days overdue over the prior loans that report it.

    Loans without a days-overdue measurement are skipped rather than counted
    as zero, so missing data neither improves nor worsens the average.

    Args:
        history: Prior loan history snapshot

    Returns:
        Mean days overdue, or None if no loan carries a measurement
    """
    measurements = [
        loan.days_overdue for loan in history.loans
        if loan.days_overdue is not None
    ]

    if not measurements:
        return None

    return sum(measurements) / len(measurements)


def summarize_history(history: PriorLoanHistory) -> LoanHistorySummary:
    """Compute every aggregate the risk factors need in a single call."""
    return LoanHistorySummary(
        total_loans=len(history),
        overdue_loans=count_overdue_loans(history),
        repaid_loans=count_repaid_loans(history),
        average_days_overdue=calculate_average_days_overdue(history),
    )
