"""Decision service - orchestrates the loan decision use case."""

import asyncio
from datetime import date
from typing import Callable, Optional
from uuid import UUID

import structlog

from risk_gateway.domain.entities import DecisionRecord
from risk_gateway.domain.exceptions import (
    DecisionNotFoundException,
    InvalidLoanRequestException,
)
from risk_gateway.domain.interfaces import (
    ApplicantRepository,
    DecisionRepository,
    LoanHistoryRepository,
    LoanSettingsRepository,
)
from risk_gateway.application.dto import (
    DecisionHistoryResponse,
    DecisionRequest,
    DecisionResponse,
)
from risk_gateway.service.eligibility import (
    PriorLoanHistory,
    ScoringSettings,
    evaluate_application,
    explain_decision,
    scoring_settings,
)

logger = structlog.get_logger(__name__)


class DecisionService:
    """
    Application service for loan decision use cases.

    Gathers everything the engine needs for one application, runs it
    against a single configuration snapshot and records the outcome.
    """

    def __init__(
        self,
        applicant_repository: ApplicantRepository,
        loan_history_repository: LoanHistoryRepository,
        settings_repository: LoanSettingsRepository,
        decision_repository: DecisionRepository,
        scoring: ScoringSettings = scoring_settings,
        today: Callable[[], date] = date.today,
    ):
        self._applicant_repo = applicant_repository
        self._history_repo = loan_history_repository
        self._settings_repo = settings_repository
        self._decision_repo = decision_repository
        self._scoring = scoring
        self._today = today

    async def make_decision(
        self,
        request: DecisionRequest,
        as_of: Optional[date] = None,
    ) -> DecisionResponse:
        """
        Process a loan application.

        Args:
            request: Phone number and requested amount
            as_of: Evaluation date (defaults to today)

        Returns:
            DecisionResponse with action, status, message and risk assessment

        Raises:
            InvalidLoanRequestException: If request validation fails
            InvalidConfigurationException: If the active settings are invalid
        """
        errors = request.validate()
        if errors:
            raise InvalidLoanRequestException("; ".join(errors))

        # One snapshot per decision; later settings changes do not apply mid-flight.
        config = await self._settings_repo.get_active_snapshot()

        errors = request.validate(config)
        if errors:
            raise InvalidLoanRequestException("; ".join(errors))

        application = request.to_application()
        evaluation_date = as_of or self._today()

        log = logger.bind(
            phone_number=application.phone_number,
            requested_amount=application.requested_amount,
            config_version=config.version,
        )
        log.info("decision_requested")

        applicant = await self._applicant_repo.get_by_phone_number(application.phone_number)

        identity_record = None
        history = PriorLoanHistory()
        if applicant is not None:
            identity_record, history = await asyncio.gather(
                self._applicant_repo.get_identity_record(application.phone_number),
                self._history_repo.get_history(application.phone_number),
            )
            log.info("applicant_loaded", prior_loans=len(history))
        else:
            log.info("applicant_not_found")

        decision = evaluate_application(
            application=application,
            applicant=applicant,
            identity_record=identity_record,
            config=config,
            history=history,
            as_of=evaluation_date,
            settings=self._scoring,
        )

        record = DecisionRecord.from_decision(
            application,
            decision,
            config_version=config.version,
        )
        await self._decision_repo.save(record)

        log.info(
            "decision_made",
            decision_id=str(record.id),
            action=record.action,
            status=record.status,
            risk_score=record.risk_score,
            risk_category=record.risk_category,
        )
        log.debug("decision_explanation", explanation=explain_decision(decision))

        return DecisionResponse.from_record(record)

    async def get_decision_history(
        self,
        phone_number: str,
        limit: int = 10,
    ) -> DecisionHistoryResponse:
        """
        Get decision history for an applicant.

        Args:
            phone_number: The applicant's phone number
            limit: Maximum number of decisions to return

        Returns:
            DecisionHistoryResponse with list of decisions
        """
        records = await self._decision_repo.get_by_phone_number(phone_number, limit=limit)
        return DecisionHistoryResponse.from_records(phone_number, records)

    async def get_decision_by_id(self, decision_id: UUID) -> DecisionResponse:
        """
        Get a specific decision by ID.

        Args:
            decision_id: The decision's unique identifier

        Returns:
            The decision as returned when it was made

        Raises:
            DecisionNotFoundException: If decision not found
        """
        record = await self._decision_repo.get_by_id(decision_id)
        if record is None:
            raise DecisionNotFoundException(str(decision_id))
        return DecisionResponse.from_record(record)
