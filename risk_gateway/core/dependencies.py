"""Dependency injection for FastAPI."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from risk_gateway.infrastructure.database import get_db_session, get_read_session
from risk_gateway.infrastructure.repositories import (
    PostgresApplicantRepository,
    PostgresDecisionRepository,
    PostgresLoanHistoryRepository,
    PostgresLoanSettingsRepository,
)
from risk_gateway.application.services import DecisionService


# Repository dependencies
async def get_applicant_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresApplicantRepository:
    """Get an ApplicantRepository instance."""
    return PostgresApplicantRepository(session)


async def get_loan_history_repository(
    session: Annotated[AsyncSession, Depends(get_read_session)],
) -> PostgresLoanHistoryRepository:
    """Get a LoanHistoryRepository on its own session."""
    return PostgresLoanHistoryRepository(session)


async def get_settings_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresLoanSettingsRepository:
    """Get a LoanSettingsRepository instance."""
    return PostgresLoanSettingsRepository(session)


async def get_decision_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresDecisionRepository:
    """Get a DecisionRepository instance."""
    return PostgresDecisionRepository(session)


# Service dependencies
async def get_decision_service(
    applicant_repo: Annotated[PostgresApplicantRepository, Depends(get_applicant_repository)],
    history_repo: Annotated[PostgresLoanHistoryRepository, Depends(get_loan_history_repository)],
    settings_repo: Annotated[PostgresLoanSettingsRepository, Depends(get_settings_repository)],
    decision_repo: Annotated[PostgresDecisionRepository, Depends(get_decision_repository)],
) -> DecisionService:
    """Get a DecisionService instance with all dependencies."""
    return DecisionService(
        applicant_repository=applicant_repo,
        loan_history_repository=history_repo,
        settings_repository=settings_repo,
        decision_repository=decision_repo,
    )
