"""PostgreSQL implementation of DecisionRepository."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from risk_gateway.domain.entities import DecisionRecord
from risk_gateway.domain.interfaces import DecisionRepository
from risk_gateway.infrastructure.database.models import DecisionModel


class PostgresDecisionRepository(DecisionRepository):
    """
    PostgreSQL implementation of the Decision repository.

    Uses SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, record: DecisionRecord) -> DecisionRecord:
        """Persist a decision record to the database."""
        model = DecisionModel(
            id=str(record.id),
            phone_number=record.phone_number,
            requested_amount=record.requested_amount,
            action=record.action,
            status=record.status,
            message=record.message,
            risk_score=record.risk_score,
            risk_category=record.risk_category,
            risk_factors=list(record.risk_factors),
            eligibility_reasons=list(record.eligibility_reasons),
            config_version=record.config_version,
            created_at=record.created_at,
        )

        self._session.add(model)
        await self._session.flush()

        return record

    async def get_by_id(self, decision_id: UUID) -> Optional[DecisionRecord]:
        """Retrieve a decision record by ID."""
        stmt = select(DecisionModel).where(DecisionModel.id == str(decision_id))
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_entity(model)

    async def get_by_phone_number(
        self,
        phone_number: str,
        limit: int = 10,
        offset: int = 0,
    ) -> List[DecisionRecord]:
        """Retrieve decision records for an applicant, newest first."""
        stmt = (
            select(DecisionModel)
            .where(DecisionModel.phone_number == phone_number)
            .order_by(DecisionModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    def _to_entity(self, model: DecisionModel) -> DecisionRecord:
        """Convert database model to domain entity."""
        return DecisionRecord(
            id=UUID(model.id),
            phone_number=model.phone_number,
            requested_amount=model.requested_amount,
            action=model.action,
            status=model.status,
            message=model.message,
            risk_score=model.risk_score,
            risk_category=model.risk_category,
            risk_factors=tuple(model.risk_factors or ()),
            eligibility_reasons=tuple(model.eligibility_reasons or ()),
            config_version=model.config_version,
            created_at=model.created_at,
        )
