"""PostgreSQL implementation of LoanSettingsRepository."""

import structlog
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from risk_gateway.domain.exceptions import InvalidConfigurationException
from risk_gateway.domain.interfaces import LoanSettingsRepository
from risk_gateway.infrastructure.database.models import LoanSettingsModel
from risk_gateway.service.eligibility import (
    ConfigurationSnapshot,
    PolicyDefaults,
    RoutingPolicy,
    get_policy_defaults,
)

logger = structlog.get_logger(__name__)


def _first_error_message(exc: ValidationError) -> str:
    error = exc.errors()[0]
    message = error.get("msg", str(exc))
    # model_validator errors arrive as "Value error, <message>"
    return message.removeprefix("Value error, ")


class PostgresLoanSettingsRepository(LoanSettingsRepository):
    """
    Loads the active loan settings row as a validated snapshot.

    When no row is active the environment policy defaults apply.
    """

    def __init__(self, session: AsyncSession, defaults: PolicyDefaults | None = None):
        self._session = session
        self._defaults = defaults

    async def get_active_snapshot(self) -> ConfigurationSnapshot:
        """Load and validate the active configuration."""
        stmt = (
            select(LoanSettingsModel)
            .where(LoanSettingsModel.is_active.is_(True))
            .order_by(LoanSettingsModel.created_at.desc(), LoanSettingsModel.id.desc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        try:
            if model is None:
                defaults = self._defaults or get_policy_defaults()
                return defaults.to_snapshot()
            return self._to_snapshot(model)
        except ValidationError as exc:
            message = _first_error_message(exc)
            logger.error(
                "invalid_loan_settings",
                version=model.version if model is not None else "defaults",
                error=message,
            )
            raise InvalidConfigurationException(message) from exc

    def _to_snapshot(self, model: LoanSettingsModel) -> ConfigurationSnapshot:
        return ConfigurationSnapshot(
            version=model.version,
            min_age=model.min_age,
            max_age=model.max_age,
            min_credit_score=model.min_credit_score,
            low_risk_threshold=model.low_risk_threshold,
            medium_risk_threshold=model.medium_risk_threshold,
            min_loan_amount=model.min_loan_amount,
            max_loan_amount=model.max_loan_amount,
            routing=RoutingPolicy(
                mode=model.routing_mode,
                auto_approval_enabled=model.auto_approval_enabled,
                auto_reject_enabled=model.auto_reject_enabled,
                max_auto_approval_amount=model.max_auto_approval_amount,
            ),
        )
