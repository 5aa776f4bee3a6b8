"""
Data models for the eligibility and risk-scoring engine.

These records are point-in-time copies of externally owned data (applicant
profile, KYC record, prior loans) plus the artifacts the engine produces
(eligibility result, risk assessment, final decision). All of them are
frozen: the engine never mutates its inputs and holds no state between calls.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional, Tuple


class VerificationStatus(str, Enum):
    """KYC verification status of an identity record."""
    NOT_STARTED = "not_started"
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"
    EXPIRED = "expired"


class LoanStatus(str, Enum):
    """Terminal status of a prior loan application, as seen by the scorer."""
    REPAID = "repaid"
    OVERDUE = "overdue"
    OTHER = "other"


class RiskCategory(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class DecisionAction(str, Enum):
    """What the surrounding system should do with the application."""
    REJECT = "REJECT"
    MANUAL_REVIEW = "MANUAL_REVIEW"
    AUTO_APPROVE = "AUTO_APPROVE"
    AUTO_REJECT = "AUTO_REJECT"


class DecisionStatus(str, Enum):
    """Application status label attached to a decision."""
    REJECTED = "REJECTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    APPROVED = "APPROVED"


@dataclass(frozen=True)
class Applicant:
    """
    Identity and financial attributes of a borrower.

    Attributes:
        phone_number: Mobile number, also the routing key for applications
        date_of_birth: Date of birth (None if never captured)
        is_blocked: Applicant is blacklisted
        fraud_flag: Applicant has been flagged for fraud
        multiple_accounts_flag: Several accounts detected from the same device
        suspicious_activity_flag: Behavioural monitoring raised an alert
        bureau_score: Credit bureau score, 300-900 (None if no bureau file)
        credit_limit: Total credit limit granted to the applicant
        used_credit: Portion of the credit limit currently drawn
        bank_account_number: Payout account number (None if not added)
        bank_verified: Payout account has been verified
    """
    phone_number: str
    date_of_birth: Optional[date] = None
    is_blocked: bool = False
    fraud_flag: bool = False
    multiple_accounts_flag: bool = False
    suspicious_activity_flag: bool = False
    bureau_score: Optional[int] = None
    credit_limit: int = 0
    used_credit: int = 0
    bank_account_number: Optional[str] = None
    bank_verified: bool = False

    @property
    def available_credit(self) -> int:
        return self.credit_limit - self.used_credit


@dataclass(frozen=True)
class IdentityRecord:
    """
    KYC record of an applicant.

    Attributes:
        verification_status: Where the KYC review currently stands
        internal_risk_score: Internal KYC risk score, 0-100 (None if not computed)
        has_primary_id: Primary government ID proof is on file
        has_address_proof: Secondary ID / address proof is on file
        has_selfie: Live selfie is on file
    """
    verification_status: VerificationStatus = VerificationStatus.NOT_STARTED
    internal_risk_score: Optional[int] = None
    has_primary_id: bool = False
    has_address_proof: bool = False
    has_selfie: bool = False

    @property
    def is_verified(self) -> bool:
        return self.verification_status == VerificationStatus.VERIFIED


@dataclass(frozen=True)
class PriorLoan:
    """A previous application of the same applicant."""
    status: LoanStatus
    days_overdue: Optional[int] = None


@dataclass(frozen=True)
class PriorLoanHistory:
    """Ordered snapshot of an applicant's previous applications."""
    loans: Tuple[PriorLoan, ...] = ()

    @classmethod
    def of(cls, loans: List[PriorLoan]) -> "PriorLoanHistory":
        return cls(loans=tuple(loans))

    def __len__(self) -> int:
        return len(self.loans)


@dataclass(frozen=True)
class LoanApplicationRequest:
    phone_number: str
    requested_amount: int


@dataclass(frozen=True)
class EligibilityResult:
    eligible: bool
    reasons: Tuple[str, ...] = ()


@dataclass(frozen=True)
class FactorContribution:
    """Points added (or removed) by one risk factor, with its explanation."""
    points: int
    reason: str


@dataclass(frozen=True)
class RiskScoreResult:
    """Composite risk score and the ordered explanations behind it."""
    risk_score: int
    risk_factors: Tuple[str, ...] = ()


@dataclass(frozen=True)
class RiskAssessmentResult:
    """
    Scored and categorized risk profile of an eligible application.

    Attributes:
        risk_score: Composite score from 0-100 (higher = riskier)
        risk_category: LOW / MEDIUM / HIGH bucket of the score
        risk_factors: One explanation per contributing factor, in evaluation order
    """
    risk_score: int
    risk_category: RiskCategory
    risk_factors: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Decision:
    """
    The engine's final routing decision for a loan application.

    Attributes:
        action: What should happen to the application next
        status: Status label to record on the application
        message: Plain-language message for the operator or applicant
        risk_assessment: Risk profile (None when rejected before scoring)
        eligibility_reasons: Failed gate rules behind a REJECT (empty when the
            gate passed or never ran)
    """
    action: DecisionAction
    status: DecisionStatus
    message: str
    risk_assessment: Optional[RiskAssessmentResult] = field(default=None)
    eligibility_reasons: Tuple[str, ...] = ()
