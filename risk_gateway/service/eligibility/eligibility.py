"""
Eligibility Gate for the Micro-Loan Risk Engine.

Hard pass/fail rules an application must clear before it is scored. Every
rule is evaluated, even after one has already failed, so that an operator
sees the complete list of problems in one go instead of fixing them one at a
time.

Rules, in reporting order:
1. KYC verified, with primary ID, address proof and selfie on file
2. Age within the configured window
3. Valid 10-digit mobile number
4. Payout bank account added and verified
5. Not blacklisted, not flagged for fraud (absolute vetoes)
6. Bureau score at or above the configured floor, when one is set
"""

from datetime import date
from typing import List, Optional

from .configuration import ConfigurationSnapshot
from .models import Applicant, EligibilityResult, IdentityRecord
from .profile import (
    calculate_age,
    has_bank_account,
    is_valid_mobile_number,
)
from .settings import ScoringSettings, scoring_settings


def check_identity(identity_record: Optional[IdentityRecord]) -> List[str]:
    """Reasons the KYC record does not satisfy the gate (empty if it does)."""
    if identity_record is None or not identity_record.is_verified:
        return ["KYC not completed or verified"]

    reasons = []
    if not identity_record.has_primary_id:
        reasons.append("Primary ID proof not provided")
    if not identity_record.has_address_proof:
        reasons.append("Address proof not provided")
    if not identity_record.has_selfie:
        reasons.append("Selfie not provided")
    return reasons


def check_age(
    applicant: Applicant,
    config: ConfigurationSnapshot,
    as_of: date,
) -> List[str]:
    age = calculate_age(applicant.date_of_birth, as_of)
    if age is None:
        return ["Date of birth not provided"]

    if age < config.min_age or age > config.max_age:
        return [
            f"Age must be between {config.min_age} and {config.max_age} years "
            f"(Current: {age})"
        ]
    return []


def check_bank_account(applicant: Applicant) -> List[str]:
    if not has_bank_account(applicant):
        return ["Bank account not added"]
    if not applicant.bank_verified:
        return ["Bank account not verified"]
    return []


def check_critical_flags(applicant: Applicant) -> List[str]:
    reasons = []
    if applicant.is_blocked:
        reasons.append("User is blacklisted")
    if applicant.fraud_flag:
        reasons.append("Account flagged for fraudulent activity")
    return reasons


def check_credit_score(
    applicant: Applicant,
    config: ConfigurationSnapshot,
) -> List[str]:
    """
    Apply the optional bureau score floor.

    An applicant without a bureau file is not rejected here; the missing
    score is priced in by the risk scorer instead.
    """
    if config.min_credit_score <= 0 or applicant.bureau_score is None:
        return []

    if applicant.bureau_score < config.min_credit_score:
        return [
            "Credit score below minimum requirement "
            f"(Required: {config.min_credit_score}, Current: {applicant.bureau_score})"
        ]
    return []


def check_eligibility(
    applicant: Applicant,
    identity_record: Optional[IdentityRecord],
    config: ConfigurationSnapshot,
    as_of: date,
    settings: ScoringSettings = scoring_settings,
) -> EligibilityResult:
    """
    Run every eligibility rule and collect the failures.

    Args:
        applicant: Applicant profile snapshot
        identity_record: KYC record (None if the applicant never started KYC)
        config: Policy thresholds for this decision
        as_of: Evaluation date used for the age rule
        settings: Scoring settings (supplies the mobile number pattern)

    Returns:
        EligibilityResult; eligible only if no rule failed
    """
    reasons: List[str] = []

    reasons.extend(check_identity(identity_record))
    reasons.extend(check_age(applicant, config, as_of))

    if not is_valid_mobile_number(applicant.phone_number, settings):
        reasons.append("Valid mobile number required")

    reasons.extend(check_bank_account(applicant))
    reasons.extend(check_critical_flags(applicant))
    reasons.extend(check_credit_score(applicant, config))

    return EligibilityResult(eligible=not reasons, reasons=tuple(reasons))
