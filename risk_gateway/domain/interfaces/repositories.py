"""Repository interfaces for data access."""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from risk_gateway.domain.entities import DecisionRecord
from risk_gateway.service.eligibility import (
    Applicant,
    ConfigurationSnapshot,
    IdentityRecord,
    PriorLoanHistory,
)


class ApplicantRepository(ABC):
    """
    Abstract repository for applicant profiles and their KYC records.

    Implementations may use PostgreSQL, in-memory storage, etc.
    """

    @abstractmethod
    async def get_by_phone_number(self, phone_number: str) -> Optional[Applicant]:
        """
        Resolve an applicant from the phone number on the application.

        Args:
            phone_number: The applicant's registered phone number

        Returns:
            The applicant profile if found, None otherwise
        """
        ...

    @abstractmethod
    async def get_identity_record(self, phone_number: str) -> Optional[IdentityRecord]:
        """
        Retrieve the applicant's identity verification record.

        Args:
            phone_number: The applicant's registered phone number

        Returns:
            The KYC record, or None if verification was never started
        """
        ...


class LoanHistoryRepository(ABC):
    """Abstract repository for prior loan applications."""

    @abstractmethod
    async def get_history(self, phone_number: str) -> PriorLoanHistory:
        """
        Retrieve every prior loan application of an applicant.

        Args:
            phone_number: The applicant's registered phone number

        Returns:
            The applicant's loan history (empty for first-time borrowers)
        """
        ...


class LoanSettingsRepository(ABC):
    """Abstract repository for the operator-managed policy configuration."""

    @abstractmethod
    async def get_active_snapshot(self) -> ConfigurationSnapshot:
        """
        Load the configuration that applies to new decisions.

        Returns:
            A validated configuration snapshot

        Raises:
            InvalidConfigurationException: If the stored settings violate
                their invariants
        """
        ...


class DecisionRepository(ABC):
    """
    Abstract repository for DecisionRecord persistence.

    Implementations may use PostgreSQL, in-memory storage, etc.
    """

    @abstractmethod
    async def save(self, record: DecisionRecord) -> DecisionRecord:
        """
        Persist a decision record.

        Args:
            record: The decision record to save

        Returns:
            The saved record
        """
        ...

    @abstractmethod
    async def get_by_id(self, decision_id: UUID) -> Optional[DecisionRecord]:
        """
        Retrieve a decision record by ID.

        Args:
            decision_id: The decision's unique identifier

        Returns:
            The record if found, None otherwise
        """
        ...

    @abstractmethod
    async def get_by_phone_number(
        self,
        phone_number: str,
        limit: int = 10,
        offset: int = 0,
    ) -> List[DecisionRecord]:
        """
        Retrieve decision records for an applicant.

        Args:
            phone_number: The applicant's phone number
            limit: Maximum number of records to return
            offset: Number of records to skip

        Returns:
            List of records, ordered by created_at descending
        """
        ...
