"""Decision-related domain exceptions."""

from .base import DomainException


class DecisionNotFoundException(DomainException):
    """Raised when a persisted decision cannot be found."""

    def __init__(self, decision_id: str):
        super().__init__(
            message=f"Decision not found: {decision_id}",
            code="DECISION_NOT_FOUND",
        )
        self.decision_id = decision_id


class InvalidLoanRequestException(DomainException):
    """Raised when a loan application fails input validation."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_LOAN_REQUEST",
        )
