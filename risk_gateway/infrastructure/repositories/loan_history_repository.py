"""PostgreSQL implementation of LoanHistoryRepository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from risk_gateway.domain.interfaces import LoanHistoryRepository
from risk_gateway.infrastructure.database.models import LoanApplicationModel
from risk_gateway.service.eligibility import LoanStatus, PriorLoan, PriorLoanHistory


def _to_loan_status(value: str) -> LoanStatus:
    """Map a stored status onto the statuses the scorer distinguishes."""
    try:
        return LoanStatus(value)
    except ValueError:
        return LoanStatus.OTHER


class PostgresLoanHistoryRepository(LoanHistoryRepository):
    """PostgreSQL implementation of the loan history repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_history(self, phone_number: str) -> PriorLoanHistory:
        """Load every prior application of an applicant, oldest first."""
        stmt = (
            select(LoanApplicationModel)
            .where(LoanApplicationModel.phone_number == phone_number)
            .order_by(LoanApplicationModel.created_at.asc())
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return PriorLoanHistory.of(
            [
                PriorLoan(
                    status=_to_loan_status(model.status),
                    days_overdue=model.days_overdue,
                )
                for model in models
            ]
        )
