"""
Risk Score Calculation for the Micro-Loan Risk Engine.

This module folds the ten risk factors into a composite 0-100 risk score
(higher = riskier) and keeps the ordered list of explanations behind it.
"""

from datetime import date
from typing import Iterable, List, Optional, Tuple

from .configuration import ConfigurationSnapshot
from .history import summarize_history
from .models import (
    Applicant,
    FactorContribution,
    IdentityRecord,
    PriorLoanHistory,
    RiskScoreResult,
)
from .risk_factors import RISK_FACTORS, ScoringContext
from .settings import ScoringSettings, scoring_settings

MIN_RISK_SCORE = 0
MAX_RISK_SCORE = 100


def collect_contributions(ctx: ScoringContext) -> List[FactorContribution]:
    """Evaluate every factor in order and flatten their contributions."""
    contributions: List[FactorContribution] = []
    for _name, factor in RISK_FACTORS:
        contributions.extend(factor(ctx))
    return contributions


def fold_contributions(
    contributions: Iterable[FactorContribution],
) -> Tuple[int, Tuple[str, ...]]:
    """
    Sum factor contributions into a clamped score.

    The running total is floored at 0 after each contribution, so a bonus
    can never push the total negative before later factors are added. The
    final total is capped at 100.

    Args:
        contributions: Factor contributions in evaluation order

    Returns:
        Tuple of (risk_score, reasons) where reasons lists every non-zero
        contribution in the order it was applied
    """
    total = MIN_RISK_SCORE
    reasons: List[str] = []

    for contribution in contributions:
        if contribution.points == 0:
            continue
        total = max(MIN_RISK_SCORE, total + contribution.points)
        reasons.append(contribution.reason)

    return min(MAX_RISK_SCORE, total), tuple(reasons)


def calculate_risk_score(
    applicant: Applicant,
    identity_record: Optional[IdentityRecord],
    requested_amount: int,
    config: ConfigurationSnapshot,
    history: PriorLoanHistory,
    as_of: date,
    settings: ScoringSettings = scoring_settings,
) -> RiskScoreResult:
    """
    Calculate the composite risk score of an eligible application.

    Args:
        applicant: Applicant profile snapshot
        identity_record: KYC record (None is scored as unverified)
        requested_amount: Principal the applicant asked for
        config: Policy thresholds for this decision
        history: Prior applications of the applicant
        as_of: Evaluation date used for the age band
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        RiskScoreResult with a score from 0-100 and ordered explanations
    """
    ctx = ScoringContext(
        applicant=applicant,
        identity_record=identity_record,
        requested_amount=requested_amount,
        config=config,
        history=summarize_history(history),
        as_of=as_of,
        settings=settings,
    )

    risk_score, reasons = fold_contributions(collect_contributions(ctx))

    return RiskScoreResult(risk_score=risk_score, risk_factors=reasons)
