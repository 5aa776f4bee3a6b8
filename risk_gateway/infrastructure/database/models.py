"""SQLAlchemy ORM models for the micro-loan tables."""

from datetime import date, datetime, timezone
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    JSON,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class ApplicantModel(Base):
    """Applicant profile, keyed by phone number."""

    __tablename__ = "applicants"

    phone_number: Mapped[str] = mapped_column(String(20), primary_key=True)
    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    is_blocked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    fraud_flag: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    multiple_accounts_flag: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    suspicious_activity_flag: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    bureau_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    credit_limit: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    used_credit: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    bank_account_number: Mapped[str | None] = mapped_column(String(34), nullable=True)
    bank_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    identity_record: Mapped["IdentityRecordModel | None"] = relationship(
        "IdentityRecordModel",
        back_populates="applicant",
        uselist=False,
    )


class IdentityRecordModel(Base):
    """KYC verification record of an applicant."""

    __tablename__ = "identity_records"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    phone_number: Mapped[str] = mapped_column(
        String(20),
        ForeignKey("applicants.phone_number", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    verification_status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="not_started",
    )
    internal_risk_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    has_primary_id: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    has_address_proof: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    has_selfie: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    applicant: Mapped["ApplicantModel"] = relationship(
        "ApplicantModel",
        back_populates="identity_record",
    )


class LoanApplicationModel(Base):
    """A prior loan application and how it was repaid."""

    __tablename__ = "loan_applications"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    phone_number: Mapped[str] = mapped_column(
        String(20),
        ForeignKey("applicants.phone_number", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    days_overdue: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )


class LoanSettingsModel(Base):
    """Operator-managed policy configuration. One row is active at a time."""

    __tablename__ = "loan_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    version: Mapped[str] = mapped_column(String(50), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    min_age: Mapped[int] = mapped_column(Integer, nullable=False)
    max_age: Mapped[int] = mapped_column(Integer, nullable=False)
    min_credit_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    low_risk_threshold: Mapped[int] = mapped_column(Integer, nullable=False)
    medium_risk_threshold: Mapped[int] = mapped_column(Integer, nullable=False)
    min_loan_amount: Mapped[int] = mapped_column(Integer, nullable=False)
    max_loan_amount: Mapped[int] = mapped_column(Integer, nullable=False)
    routing_mode: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="always_manual",
    )
    auto_approval_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    auto_reject_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    max_auto_approval_amount: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=50_000,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )


class DecisionModel(Base):
    """Persisted loan decision record."""

    __tablename__ = "loan_decisions"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    phone_number: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    requested_amount: Mapped[int] = mapped_column(Integer, nullable=False)
    action: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    risk_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    risk_category: Mapped[str | None] = mapped_column(String(10), nullable=True)
    risk_factors: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    eligibility_reasons: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    config_version: Mapped[str | None] = mapped_column(String(50), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
