"""
Shared builders for the engine unit tests.

Every builder starts from a clean, eligible, low-risk applicant so a test
only spells out the attributes it is about.
"""

from datetime import date
from typing import Callable, Optional

import pytest

from risk_gateway.service.eligibility import (
    Applicant,
    ConfigurationSnapshot,
    IdentityRecord,
    LoanStatus,
    PriorLoan,
    PriorLoanHistory,
    ScoringSettings,
    VerificationStatus,
)

AS_OF = date(2026, 1, 15)


def dob_for_age(age: int, as_of: date = AS_OF) -> date:
    """Date of birth that makes the applicant `age` on `as_of` (mid-year)."""
    return date(as_of.year - age - 1, 6, 1)


@pytest.fixture
def as_of() -> date:
    return AS_OF


@pytest.fixture
def config() -> ConfigurationSnapshot:
    return ConfigurationSnapshot()


@pytest.fixture
def settings() -> ScoringSettings:
    return ScoringSettings()


@pytest.fixture
def make_applicant() -> Callable[..., Applicant]:
    def _make(age: Optional[int] = 26, **overrides) -> Applicant:
        fields = dict(
            phone_number="9876543210",
            date_of_birth=dob_for_age(age) if age is not None else None,
            bureau_score=780,
            credit_limit=50_000,
            used_credit=0,
            bank_account_number="123456789012",
            bank_verified=True,
        )
        fields.update(overrides)
        return Applicant(**fields)

    return _make


@pytest.fixture
def make_identity() -> Callable[..., IdentityRecord]:
    def _make(**overrides) -> IdentityRecord:
        fields = dict(
            verification_status=VerificationStatus.VERIFIED,
            internal_risk_score=20,
            has_primary_id=True,
            has_address_proof=True,
            has_selfie=True,
        )
        fields.update(overrides)
        return IdentityRecord(**fields)

    return _make


@pytest.fixture
def make_history() -> Callable[..., PriorLoanHistory]:
    def _make(repaid: int = 0, overdue_days: tuple = (), other: int = 0) -> PriorLoanHistory:
        loans = [PriorLoan(status=LoanStatus.REPAID, days_overdue=0) for _ in range(repaid)]
        loans += [PriorLoan(status=LoanStatus.OVERDUE, days_overdue=d) for d in overdue_days]
        loans += [PriorLoan(status=LoanStatus.OTHER) for _ in range(other)]
        return PriorLoanHistory.of(loans)

    return _make
