"""
Fixtures for integration tests.

Provides:
- Test client for FastAPI app
- File-backed SQLite database (aiosqlite) seeded with applicants
- Session dependency overrides so every request-scoped session is
  served from the test database
"""

from datetime import date, timedelta
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from risk_gateway.main import app
from risk_gateway.infrastructure.database import (
    Base,
    get_db_session,
    get_read_session,
)
from risk_gateway.infrastructure.database.models import (
    ApplicantModel,
    IdentityRecordModel,
    LoanApplicationModel,
    LoanSettingsModel,
)


# =============================================================================
# Test Data
# =============================================================================

CLEAN_PHONE = "9876543210"
BLOCKED_PHONE = "9123456789"
RISKY_PHONE = "9988776655"
PENDING_KYC_PHONE = "9012345678"
LEGACY_KYC_PHONE = "9090909090"
UNKNOWN_PHONE = "9000000000"


def dob_for_age(age: int) -> date:
    """Date of birth that puts the applicant mid-way through `age` today."""
    return date.today() - timedelta(days=int((age + 0.5) * 365.25))


def _applicant(phone_number: str, age: int, **overrides) -> ApplicantModel:
    fields = dict(
        phone_number=phone_number,
        date_of_birth=dob_for_age(age),
        bureau_score=780,
        credit_limit=50_000,
        used_credit=0,
        bank_account_number="123456789012",
        bank_verified=True,
    )
    fields.update(overrides)
    return ApplicantModel(**fields)


def _identity(phone_number: str, status: str = "verified") -> IdentityRecordModel:
    return IdentityRecordModel(
        phone_number=phone_number,
        verification_status=status,
        internal_risk_score=20,
        has_primary_id=True,
        has_address_proof=True,
        has_selfie=True,
    )


async def seed_applicants(session: AsyncSession) -> None:
    session.add_all([
        _applicant(CLEAN_PHONE, age=26),
        _applicant(BLOCKED_PHONE, age=26, is_blocked=True),
        _applicant(RISKY_PHONE, age=18, bureau_score=550, suspicious_activity_flag=True),
        _applicant(PENDING_KYC_PHONE, age=26),
        _applicant(LEGACY_KYC_PHONE, age=26),
    ])
    await session.flush()

    session.add_all([
        _identity(CLEAN_PHONE),
        _identity(BLOCKED_PHONE),
        _identity(RISKY_PHONE),
        _identity(PENDING_KYC_PHONE, status="pending"),
        _identity(LEGACY_KYC_PHONE, status="VERIFIED"),
        LoanApplicationModel(
            phone_number=RISKY_PHONE, amount=5_000, status="overdue", days_overdue=12
        ),
        LoanApplicationModel(
            phone_number=RISKY_PHONE, amount=8_000, status="overdue", days_overdue=15
        ),
    ])
    await session.commit()


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine(tmp_path):
    """
    Create a file-backed SQLite async engine for testing.

    A file database (rather than :memory: with a single shared connection)
    gives each session its own connection, matching production pooling.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'risk_gateway.db'}",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker:
    return async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def test_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a seeded test database session."""
    async with session_factory() as session:
        await seed_applicants(session)
        yield session


# =============================================================================
# App Client Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def client(
    test_session: AsyncSession,
    session_factory: async_sessionmaker,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client backed by the seeded test database.

    Each request-scoped session dependency gets its own session, committed
    when the request succeeds and rolled back when it fails.
    """
    async def override_get_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_session
    app.dependency_overrides[get_read_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def add_loan_settings(test_session: AsyncSession):
    """Insert an active loan settings row."""

    async def _add(**overrides) -> LoanSettingsModel:
        fields = dict(
            version="v2",
            is_active=True,
            min_age=18,
            max_age=30,
            min_credit_score=0,
            low_risk_threshold=30,
            medium_risk_threshold=60,
            min_loan_amount=1_000,
            max_loan_amount=100_000,
        )
        fields.update(overrides)
        model = LoanSettingsModel(**fields)
        test_session.add(model)
        await test_session.commit()
        return model

    return _add


# =============================================================================
# Helper Fixtures
# =============================================================================

@pytest.fixture
def clean_request() -> dict:
    """Request body for the clean, low-risk applicant."""
    return {"phone_number": CLEAN_PHONE, "requested_amount": 10_000}


@pytest.fixture
def blocked_request() -> dict:
    """Request body for the blacklisted applicant."""
    return {"phone_number": BLOCKED_PHONE, "requested_amount": 10_000}


@pytest.fixture
def risky_request() -> dict:
    """Request body for the high-risk applicant with overdue history."""
    return {"phone_number": RISKY_PHONE, "requested_amount": 10_000}
