"""
Risk Factor Rules for the Micro-Loan Risk Engine.

Each of the ten factors is a pure function of the raw inputs. A factor never
looks at another factor's outcome; it returns the contributions it makes to
the composite score, each paired with the explanation an operator will see:

    1. KYC quality              6. Bureau score
    2. Age band                 7. Repayment history
    3. Bank verification        8. Behavioural flags
    4. Phone validity           9. Credit-limit utilization
    5. Blacklist / fraud       10. First-time borrower

A factor that does not fire returns an empty tuple. Only the repayment
history factor can return negative points (the good-history bonus).
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional, Tuple

from .configuration import ConfigurationSnapshot
from .history import LoanHistorySummary
from .models import Applicant, FactorContribution, IdentityRecord
from .profile import calculate_age, has_verified_bank_account, is_valid_mobile_number
from .settings import ScoringSettings, get_scoring_settings

Contributions = Tuple[FactorContribution, ...]


@dataclass(frozen=True)
class ScoringContext:
    """Everything a risk factor may read. Built once per scoring run."""
    applicant: Applicant
    identity_record: Optional[IdentityRecord]
    requested_amount: int
    config: ConfigurationSnapshot
    history: LoanHistorySummary
    as_of: date
    settings: ScoringSettings = field(default_factory=get_scoring_settings)


def _contribution(points: int, reason: str) -> Contributions:
    return (FactorContribution(points=points, reason=reason),)


def score_kyc_quality(ctx: ScoringContext) -> Contributions:
    """
    Factor 1: identity verification quality.

    An unverified (or missing) KYC record carries the full penalty. A
    verified record with a high internal risk score is scaled into the
    score, so a KYC risk of 60 adds 12 points with the default weight.
    """
    settings = ctx.settings
    record = ctx.identity_record

    if record is None or not record.is_verified:
        return _contribution(settings.kyc_unverified_points, "KYC not verified")

    kyc_score = record.internal_risk_score
    if kyc_score is not None and kyc_score > settings.kyc_high_risk_threshold:
        return _contribution(
            round(kyc_score * settings.kyc_risk_weight),
            f"High KYC risk score: {kyc_score}",
        )
    return ()


def score_age_band(ctx: ScoringContext) -> Contributions:
    """Factor 2: age relative to the preferred borrower band."""
    settings = ctx.settings
    age = calculate_age(ctx.applicant.date_of_birth, ctx.as_of)

    if age is None:
        return _contribution(settings.age_missing_points, "Date of birth not provided")

    if age < settings.adult_age:
        return _contribution(settings.under_age_points, f"Under age: {age} years")
    elif age > settings.preferred_max_age:
        return _contribution(
            settings.above_preferred_age_points,
            f"Above preferred age: {age} years",
        )
    elif age <= settings.young_borrower_max_age:
        return _contribution(settings.young_borrower_points, f"Young borrower: {age} years")
    return ()


def score_bank_verification(ctx: ScoringContext) -> Contributions:
    """Factor 3: payout account missing or unverified."""
    if has_verified_bank_account(ctx.applicant):
        return ()
    return _contribution(ctx.settings.bank_unverified_points, "Bank account not verified")


def score_phone_validity(ctx: ScoringContext) -> Contributions:
    """Factor 4: phone number fails the 10-digit mobile pattern."""
    if is_valid_mobile_number(ctx.applicant.phone_number, ctx.settings):
        return ()
    return _contribution(ctx.settings.invalid_phone_points, "Invalid mobile number")


def score_critical_flags(ctx: ScoringContext) -> Contributions:
    """Factor 5: blacklist and fraud flags, additive."""
    contributions = ()
    if ctx.applicant.is_blocked:
        contributions += _contribution(ctx.settings.blocked_points, "User is blocked/blacklisted")
    if ctx.applicant.fraud_flag:
        contributions += _contribution(ctx.settings.fraud_points, "Fraud flag detected")
    return contributions


def score_bureau_score(ctx: ScoringContext) -> Contributions:
    """
    Factor 6: external bureau score.

    Bands (default):
        < 600      poor       +20
        600 - 699  fair       +10
        700 - 749  good        +5
        >= 750     excellent    0
        missing               +8
    """
    settings = ctx.settings
    bureau_score = ctx.applicant.bureau_score

    if bureau_score is None:
        return _contribution(settings.credit_score_missing_points, "No credit score available")

    if bureau_score < settings.credit_score_poor_below:
        return _contribution(
            settings.credit_score_poor_points,
            f"Poor credit score: {bureau_score}",
        )
    elif bureau_score < settings.credit_score_fair_below:
        return _contribution(
            settings.credit_score_fair_points,
            f"Fair credit score: {bureau_score}",
        )
    elif bureau_score < settings.credit_score_good_below:
        return _contribution(
            settings.credit_score_good_points,
            f"Good credit score: {bureau_score}",
        )
    return ()


def score_repayment_history(ctx: ScoringContext) -> Contributions:
    """
    Factor 7: how previous loans were repaid.

    Contributions, in order:
        - overdue_loan_points for every prior loan that ended overdue
        - minus good_history_bonus when enough loans were repaid and none
          went overdue
        - a penalty when the mean days overdue is moderate or high
    """
    settings = ctx.settings
    history = ctx.history
    contributions = ()

    if history.overdue_loans > 0:
        contributions += _contribution(
            history.overdue_loans * settings.overdue_loan_points,
            f"{history.overdue_loans} overdue loan(s)",
        )

    if history.repaid_loans >= settings.good_history_min_repaid and history.overdue_loans == 0:
        contributions += _contribution(
            -settings.good_history_bonus,
            f"Good repayment history: {history.repaid_loans} loans repaid",
        )

    avg_days = history.average_days_overdue
    if avg_days is not None:
        if avg_days > settings.avg_overdue_high_days:
            contributions += _contribution(
                settings.avg_overdue_high_points,
                f"High average overdue days: {avg_days:.1f}",
            )
        elif avg_days > settings.avg_overdue_moderate_days:
            contributions += _contribution(
                settings.avg_overdue_moderate_points,
                f"Moderate average overdue days: {avg_days:.1f}",
            )

    return contributions


def score_behavioral_flags(ctx: ScoringContext) -> Contributions:
    """Factor 8: device and behaviour monitoring flags."""
    contributions = ()
    if ctx.applicant.multiple_accounts_flag:
        contributions += _contribution(
            ctx.settings.multiple_accounts_points,
            "Multiple accounts detected from same device",
        )
    if ctx.applicant.suspicious_activity_flag:
        contributions += _contribution(
            ctx.settings.suspicious_activity_points,
            "Suspicious activity detected",
        )
    return contributions


def score_credit_utilization(ctx: ScoringContext) -> Contributions:
    """
    Factor 9: requested amount against the applicant's credit line.

    A request above the remaining credit (limit - used) always fires.
    Otherwise the projected utilization (used + requested) / limit is
    banded at 90% and 75%.
    """
    settings = ctx.settings
    applicant = ctx.applicant
    requested = ctx.requested_amount
    available = applicant.available_credit

    if requested > available:
        return _contribution(
            settings.exceeds_available_points,
            f"Exceeds available credit: requested {requested}, available {available}",
        )

    if applicant.credit_limit <= 0:
        return ()

    utilization = (applicant.used_credit + requested) / applicant.credit_limit * 100
    if utilization > settings.utilization_high_pct:
        return _contribution(
            settings.utilization_high_points,
            f"High total credit utilization: {utilization:.1f}%",
        )
    elif utilization > settings.utilization_moderate_pct:
        return _contribution(
            settings.utilization_moderate_points,
            f"Moderate credit utilization: {utilization:.1f}%",
        )
    return ()


def score_first_time_borrower(ctx: ScoringContext) -> Contributions:
    """Factor 10: no prior applications on record."""
    if ctx.history.is_first_time_borrower:
        return _contribution(ctx.settings.first_time_borrower_points, "First time borrower")
    return ()


RiskFactor = Callable[[ScoringContext], Contributions]

# Evaluation order is part of the contract: explanations are listed in this order.
RISK_FACTORS: Tuple[Tuple[str, RiskFactor], ...] = (
    ("kyc_quality", score_kyc_quality),
    ("age_band", score_age_band),
    ("bank_verification", score_bank_verification),
    ("phone_validity", score_phone_validity),
    ("critical_flags", score_critical_flags),
    ("bureau_score", score_bureau_score),
    ("repayment_history", score_repayment_history),
    ("behavioral_flags", score_behavioral_flags),
    ("credit_utilization", score_credit_utilization),
    ("first_time_borrower", score_first_time_borrower),
)
