"""Data transfer objects for loan decision operations."""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from risk_gateway.service.eligibility import ConfigurationSnapshot, LoanApplicationRequest


@dataclass(frozen=True)
class DecisionRequest:
    """Input data for requesting a loan decision."""
    phone_number: str
    requested_amount: int

    def validate(self, config: Optional[ConfigurationSnapshot] = None) -> List[str]:
        errors = []

        if not self.phone_number or not self.phone_number.strip():
            errors.append("phone_number is required")

        if self.requested_amount <= 0:
            errors.append("requested_amount must be positive")
        elif config is not None and not (
            config.min_loan_amount <= self.requested_amount <= config.max_loan_amount
        ):
            errors.append(
                f"Loan amount must be between {config.min_loan_amount} "
                f"and {config.max_loan_amount}"
            )

        return errors

    def to_application(self) -> LoanApplicationRequest:
        return LoanApplicationRequest(
            phone_number=self.phone_number.strip(),
            requested_amount=self.requested_amount,
        )


@dataclass(frozen=True)
class RiskAssessmentDTO:
    """Risk assessment included in decision responses."""

    risk_score: int
    risk_category: str
    risk_factors: Tuple[str, ...]


@dataclass(frozen=True)
class DecisionResponse:
    """Response data for a loan decision."""

    decision_id: str
    action: str
    status: str
    message: str
    risk_assessment: Optional[RiskAssessmentDTO]
    created_at: str
    rejection_reasons: Tuple[str, ...] = ()

    @classmethod
    def from_record(cls, record) -> "DecisionResponse":
        assessment = None
        if record.is_scored:
            assessment = RiskAssessmentDTO(
                risk_score=record.risk_score,
                risk_category=record.risk_category,
                risk_factors=tuple(record.risk_factors),
            )
        return cls(
            decision_id=str(record.id),
            action=record.action,
            status=record.status,
            message=record.message,
            risk_assessment=assessment,
            created_at=record.created_at.isoformat(),
            rejection_reasons=tuple(record.eligibility_reasons),
        )


@dataclass(frozen=True)
class DecisionSummary:
    """Brief summary of a decision for history listings."""

    decision_id: str
    requested_amount: int
    action: str
    status: str
    risk_score: Optional[int]
    risk_category: Optional[str]
    created_at: str


@dataclass(frozen=True)
class DecisionHistoryResponse:
    """Response containing an applicant's decision history."""

    phone_number: str
    decisions: List[DecisionSummary]

    @classmethod
    def from_records(cls, phone_number: str, records: list) -> "DecisionHistoryResponse":
        summaries = [
            DecisionSummary(
                decision_id=str(r.id),
                requested_amount=r.requested_amount,
                action=r.action,
                status=r.status,
                risk_score=r.risk_score,
                risk_category=r.risk_category,
                created_at=r.created_at.isoformat(),
            )
            for r in records
        ]
        return cls(phone_number=phone_number, decisions=summaries)
