"""
Domain Interfaces (Ports)
"""

from .repositories import (
    ApplicantRepository,
    DecisionRepository,
    LoanHistoryRepository,
    LoanSettingsRepository,
)

__all__ = [
    "ApplicantRepository",
    "DecisionRepository",
    "LoanHistoryRepository",
    "LoanSettingsRepository",
]
