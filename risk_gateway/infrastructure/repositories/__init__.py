"""Repository implementations."""

from .applicant_repository import PostgresApplicantRepository
from .decision_repository import PostgresDecisionRepository
from .loan_history_repository import PostgresLoanHistoryRepository
from .settings_repository import PostgresLoanSettingsRepository

__all__ = [
    "PostgresApplicantRepository",
    "PostgresDecisionRepository",
    "PostgresLoanHistoryRepository",
    "PostgresLoanSettingsRepository",
]
