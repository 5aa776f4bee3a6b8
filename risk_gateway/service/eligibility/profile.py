"""
Applicant attribute helpers shared by the eligibility gate and the risk scorer.

Both components need the same derived facts about an applicant (age, whether
the mobile number is valid, whether a payout account is usable). Deriving
them in one place keeps the gate and the scorer from drifting apart.
"""

import math
import re
from datetime import date
from typing import Optional

from .models import Applicant
from .settings import ScoringSettings, scoring_settings

DAYS_PER_YEAR = 365.25


def calculate_age(date_of_birth: Optional[date], as_of: date) -> Optional[int]:
    """
    Calculate an applicant's age in whole years.

    Age is floor(days_since_birth / 365.25), evaluated on the `as_of` date
    rather than the wall clock so that re-running a decision gives the same
    answer.

    Args:
        date_of_birth: Date of birth, or None if not captured
        as_of: Evaluation date of the decision

    Returns:
        Age in years, or None when the date of birth is missing
    """
    if date_of_birth is None:
        return None

    return math.floor((as_of - date_of_birth).days / DAYS_PER_YEAR)


def is_valid_mobile_number(
    phone_number: Optional[str],
    settings: ScoringSettings = scoring_settings,
) -> bool:
    """Check a phone number against the 10-digit mobile pattern."""
    if not phone_number:
        return False

    return re.fullmatch(settings.mobile_number_pattern, phone_number) is not None


def has_bank_account(applicant: Applicant) -> bool:
    return bool(applicant.bank_account_number and applicant.bank_account_number.strip())


def has_verified_bank_account(applicant: Applicant) -> bool:
    return has_bank_account(applicant) and applicant.bank_verified
