"""
Eligibility and Risk Scoring Module for the Micro-Loan Risk Gateway
"""

from .models import (
    Applicant,
    IdentityRecord,
    VerificationStatus,
    PriorLoan,
    PriorLoanHistory,
    LoanStatus,
    LoanApplicationRequest,
    EligibilityResult,
    FactorContribution,
    RiskScoreResult,
    RiskAssessmentResult,
    RiskCategory,
    Decision,
    DecisionAction,
    DecisionStatus,
)
from .settings import ScoringSettings, scoring_settings
from .configuration import (
    ConfigurationSnapshot,
    PolicyDefaults,
    RoutingMode,
    RoutingPolicy,
    get_policy_defaults,
)
from .history import LoanHistorySummary, summarize_history
from .profile import calculate_age, is_valid_mobile_number
from .eligibility import check_eligibility
from .risk_score import calculate_risk_score
from .categorizer import categorize_risk
from .decision import (
    REASON_SEPARATOR,
    evaluate_application,
    explain_decision,
    reject_unknown_applicant,
    route_decision,
)

__all__ = [
    # Settings
    "ScoringSettings",
    "scoring_settings",
    # Configuration
    "ConfigurationSnapshot",
    "PolicyDefaults",
    "RoutingMode",
    "RoutingPolicy",
    "get_policy_defaults",
    # Models
    "Applicant",
    "IdentityRecord",
    "VerificationStatus",
    "PriorLoan",
    "PriorLoanHistory",
    "LoanStatus",
    "LoanApplicationRequest",
    "EligibilityResult",
    "FactorContribution",
    "RiskScoreResult",
    "RiskAssessmentResult",
    "RiskCategory",
    "Decision",
    "DecisionAction",
    "DecisionStatus",
    # History
    "LoanHistorySummary",
    "summarize_history",
    # Profile
    "calculate_age",
    "is_valid_mobile_number",
    # Gate
    "check_eligibility",
    # Scoring
    "calculate_risk_score",
    "categorize_risk",
    # Decision
    "REASON_SEPARATOR",
    "evaluate_application",
    "explain_decision",
    "reject_unknown_applicant",
    "route_decision",
]
