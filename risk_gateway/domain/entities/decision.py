"""Decision record entity - the audit trail of a loan decision."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Tuple
from uuid import UUID, uuid4

from risk_gateway.service.eligibility import Decision, LoanApplicationRequest


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class DecisionRecord:
    """
    A persisted loan decision.

    Captures the application, the routing outcome and, for applications that
    cleared the eligibility gate, the risk assessment behind it.
    """

    phone_number: str
    requested_amount: int
    action: str
    status: str
    message: str
    risk_score: Optional[int] = None
    risk_category: Optional[str] = None
    risk_factors: Tuple[str, ...] = ()
    eligibility_reasons: Tuple[str, ...] = ()
    config_version: Optional[str] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def from_decision(
        cls,
        application: LoanApplicationRequest,
        decision: Decision,
        config_version: Optional[str] = None,
    ) -> "DecisionRecord":
        assessment = decision.risk_assessment
        return cls(
            phone_number=application.phone_number,
            requested_amount=application.requested_amount,
            action=decision.action.value,
            status=decision.status.value,
            message=decision.message,
            risk_score=assessment.risk_score if assessment else None,
            risk_category=assessment.risk_category.value if assessment else None,
            risk_factors=assessment.risk_factors if assessment else (),
            eligibility_reasons=decision.eligibility_reasons,
            config_version=config_version,
        )

    @property
    def is_scored(self) -> bool:
        """Whether the application reached the risk scorer."""
        return self.risk_score is not None
