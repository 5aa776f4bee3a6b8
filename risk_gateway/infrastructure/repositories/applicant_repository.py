"""PostgreSQL implementation of ApplicantRepository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from risk_gateway.domain.interfaces import ApplicantRepository
from risk_gateway.infrastructure.database.models import ApplicantModel, IdentityRecordModel
from risk_gateway.service.eligibility import (
    Applicant,
    IdentityRecord,
    VerificationStatus,
)


def _to_verification_status(value: str) -> VerificationStatus:
    """Unrecognised statuses read as not started, which the gate rejects."""
    try:
        return VerificationStatus(value)
    except ValueError:
        return VerificationStatus.NOT_STARTED


class PostgresApplicantRepository(ApplicantRepository):
    """
    PostgreSQL implementation of the Applicant repository.

    Rows are converted to immutable engine records on read.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_phone_number(self, phone_number: str) -> Optional[Applicant]:
        """Resolve an applicant profile from a phone number."""
        stmt = select(ApplicantModel).where(ApplicantModel.phone_number == phone_number)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return Applicant(
            phone_number=model.phone_number,
            date_of_birth=model.date_of_birth,
            is_blocked=model.is_blocked,
            fraud_flag=model.fraud_flag,
            multiple_accounts_flag=model.multiple_accounts_flag,
            suspicious_activity_flag=model.suspicious_activity_flag,
            bureau_score=model.bureau_score,
            credit_limit=model.credit_limit,
            used_credit=model.used_credit,
            bank_account_number=model.bank_account_number,
            bank_verified=model.bank_verified,
        )

    async def get_identity_record(self, phone_number: str) -> Optional[IdentityRecord]:
        """Retrieve the applicant's KYC record."""
        stmt = select(IdentityRecordModel).where(
            IdentityRecordModel.phone_number == phone_number
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return IdentityRecord(
            verification_status=_to_verification_status(model.verification_status),
            internal_risk_score=model.internal_risk_score,
            has_primary_id=model.has_primary_id,
            has_address_proof=model.has_address_proof,
            has_selfie=model.has_selfie,
        )
