"""
Approval Router for the Micro-Loan Risk Engine.

This module orchestrates the complete decision-making process:
1. Reject applications whose applicant cannot be resolved
2. Run the eligibility gate (failure short-circuits to REJECTED)
3. Calculate the composite risk score
4. Bucket the score into a risk category
5. Route the application to an approval lane under the routing policy

This is the main entry point for the eligibility module.
"""

from datetime import date
from typing import Optional

import structlog

from .categorizer import categorize_risk
from .configuration import ConfigurationSnapshot, RoutingMode, RoutingPolicy
from .eligibility import check_eligibility
from .models import (
    Applicant,
    Decision,
    DecisionAction,
    DecisionStatus,
    EligibilityResult,
    IdentityRecord,
    LoanApplicationRequest,
    PriorLoanHistory,
    RiskAssessmentResult,
    RiskCategory,
)
from .risk_score import calculate_risk_score
from .settings import ScoringSettings, scoring_settings

logger = structlog.get_logger(__name__)

USER_NOT_FOUND_MESSAGE = "User not found"

MANUAL_REVIEW_MESSAGES = {
    RiskCategory.LOW: "Loan requires manual review (Low risk profile)",
    RiskCategory.MEDIUM: "Loan requires manual review (Medium risk profile)",
    RiskCategory.HIGH: "Loan requires manual review (High risk profile - proceed with caution)",
}
AUTO_APPROVE_MESSAGE = "Loan auto-approved (Low risk profile)"
AUTO_REJECT_MESSAGE = "Loan auto-rejected (High risk profile)"
REASON_SEPARATOR = "; "


def reject_unknown_applicant() -> Decision:
    """Decision for an application whose phone number matches no applicant."""
    return Decision(
        action=DecisionAction.REJECT,
        status=DecisionStatus.REJECTED,
        message=USER_NOT_FOUND_MESSAGE,
        risk_assessment=None,
    )


def _manual_review(risk_assessment: RiskAssessmentResult) -> Decision:
    return Decision(
        action=DecisionAction.MANUAL_REVIEW,
        status=DecisionStatus.UNDER_REVIEW,
        message=MANUAL_REVIEW_MESSAGES[risk_assessment.risk_category],
        risk_assessment=risk_assessment,
    )


def route_decision(
    application: LoanApplicationRequest,
    eligibility: EligibilityResult,
    risk_assessment: Optional[RiskAssessmentResult],
    policy: Optional[RoutingPolicy] = None,
) -> Decision:
    """
    Turn the gate outcome and risk assessment into a routing decision.

    Routing Logic:
        - Not eligible: REJECT with the joined eligibility reasons
        - ALWAYS_MANUAL policy (default): every eligible application goes to
          MANUAL_REVIEW; the category only shapes the advisory message
        - TIERED policy: LOW risk within max_auto_approval_amount is
          AUTO_APPROVE, HIGH risk is AUTO_REJECT (each only when enabled),
          everything else MANUAL_REVIEW

    Args:
        application: The loan application being decided
        eligibility: Outcome of the eligibility gate
        risk_assessment: Scored profile (required when eligible)
        policy: Routing policy (always-manual if not provided)

    Returns:
        The final Decision

    Raises:
        ValueError: If an eligible application arrives without a risk assessment
    """
    if not eligibility.eligible:
        return Decision(
            action=DecisionAction.REJECT,
            status=DecisionStatus.REJECTED,
            message=REASON_SEPARATOR.join(eligibility.reasons),
            risk_assessment=None,
            eligibility_reasons=tuple(eligibility.reasons),
        )

    if risk_assessment is None:
        raise ValueError("An eligible application must carry a risk assessment")

    policy = policy or RoutingPolicy()

    if policy.mode == RoutingMode.ALWAYS_MANUAL:
        return _manual_review(risk_assessment)

    category = risk_assessment.risk_category

    if (
        category == RiskCategory.LOW
        and policy.auto_approval_enabled
        and application.requested_amount <= policy.max_auto_approval_amount
    ):
        return Decision(
            action=DecisionAction.AUTO_APPROVE,
            status=DecisionStatus.APPROVED,
            message=AUTO_APPROVE_MESSAGE,
            risk_assessment=risk_assessment,
        )

    if category == RiskCategory.HIGH and policy.auto_reject_enabled:
        return Decision(
            action=DecisionAction.AUTO_REJECT,
            status=DecisionStatus.REJECTED,
            message=AUTO_REJECT_MESSAGE,
            risk_assessment=risk_assessment,
        )

    return _manual_review(risk_assessment)


def evaluate_application(
    application: LoanApplicationRequest,
    applicant: Optional[Applicant],
    identity_record: Optional[IdentityRecord],
    config: ConfigurationSnapshot,
    history: PriorLoanHistory,
    as_of: date,
    settings: ScoringSettings = scoring_settings,
) -> Decision:
    """
    Decide a loan application end to end.

    The risk scorer only runs for applications that cleared the eligibility
    gate, so blacklisted or fraud-flagged applicants never receive a score.

    Args:
        application: Phone number and requested amount
        applicant: Applicant resolved from the phone number (None if unknown)
        identity_record: The applicant's KYC record (None if never started)
        config: Policy snapshot valid for this decision
        history: Prior applications of the applicant
        as_of: Evaluation date (drives age calculation)
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        Decision with action, status, message and optional risk assessment
    """
    if applicant is None:
        return reject_unknown_applicant()

    eligibility = check_eligibility(applicant, identity_record, config, as_of, settings)

    if not eligibility.eligible:
        logger.debug("eligibility_failed", reasons=list(eligibility.reasons))
        return route_decision(application, eligibility, None, config.routing)

    score = calculate_risk_score(
        applicant=applicant,
        identity_record=identity_record,
        requested_amount=application.requested_amount,
        config=config,
        history=history,
        as_of=as_of,
        settings=settings,
    )
    risk_assessment = RiskAssessmentResult(
        risk_score=score.risk_score,
        risk_category=categorize_risk(score.risk_score, config),
        risk_factors=score.risk_factors,
    )
    logger.debug(
        "risk_scored",
        risk_score=risk_assessment.risk_score,
        risk_category=risk_assessment.risk_category.value,
    )

    return route_decision(application, eligibility, risk_assessment, config.routing)


def explain_decision(decision: Decision) -> str:
    """
    Generate a human-readable explanation of a decision.

    This can be used for:
    - Logging and debugging
    - Reviewer notes on the manual review queue

    Args:
        decision: The decision to explain

    Returns:
        Human-readable explanation string
    """
    lines = [f"Decision: {decision.action.value} ({decision.status.value})"]
    lines.append(f"Message: {decision.message}")

    assessment = decision.risk_assessment
    if assessment is None:
        lines.append("Risk Score: not assessed")
        return "\n".join(lines)

    lines.append(f"Risk Score: {assessment.risk_score}/100 ({assessment.risk_category.value})")
    lines.append("")
    lines.append("Contributing Factors:")
    if not assessment.risk_factors:
        lines.append("  - none")
    for reason in assessment.risk_factors:
        lines.append(f"  - {reason}")

    return "\n".join(lines)
