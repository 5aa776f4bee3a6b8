"""
Integration tests for decision persistence.

These tests verify:
1. Every decision is written to loan_decisions
2. GET /v1/decision/{decision_id} - Retrieve a persisted decision
3. GET /v1/decision/history - Decision history for an applicant
"""

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import uuid4

from risk_gateway.infrastructure.database.models import DecisionModel


# =============================================================================
# Stored Record Tests
# =============================================================================

class TestDecisionRecords:
    """Decisions are persisted with their risk assessment."""

    @pytest.mark.asyncio
    async def test_scored_decision_is_persisted(
        self,
        client: AsyncClient,
        test_session: AsyncSession,
        risky_request: dict,
    ):
        response = await client.post("/v1/decision", json=risky_request)
        decision_id = response.json()["decision_id"]

        result = await test_session.execute(
            select(DecisionModel).where(DecisionModel.id == decision_id)
        )
        model = result.scalar_one()

        assert model.phone_number == risky_request["phone_number"]
        assert model.requested_amount == risky_request["requested_amount"]
        assert model.action == "MANUAL_REVIEW"
        assert model.status == "UNDER_REVIEW"
        assert model.risk_score == 75
        assert model.risk_category == "HIGH"
        assert model.risk_factors[0] == "Young borrower: 18 years"
        assert model.config_version == "defaults"
        assert model.eligibility_reasons == []

    @pytest.mark.asyncio
    async def test_rejected_decision_is_persisted_without_score(
        self,
        client: AsyncClient,
        test_session: AsyncSession,
        blocked_request: dict,
    ):
        response = await client.post("/v1/decision", json=blocked_request)
        decision_id = response.json()["decision_id"]

        result = await test_session.execute(
            select(DecisionModel).where(DecisionModel.id == decision_id)
        )
        model = result.scalar_one()

        assert model.action == "REJECT"
        assert model.risk_score is None
        assert model.risk_category is None
        assert model.risk_factors == []
        assert model.eligibility_reasons == ["User is blacklisted"]

    @pytest.mark.asyncio
    async def test_invalid_request_is_not_persisted(
        self,
        client: AsyncClient,
        test_session: AsyncSession,
        clean_request: dict,
    ):
        await client.post("/v1/decision", json={**clean_request, "requested_amount": 500})

        result = await test_session.execute(select(DecisionModel))
        assert result.scalars().all() == []


# =============================================================================
# GET /v1/decision/{decision_id} Tests
# =============================================================================

class TestDecisionRetrieval:
    """Tests for GET /v1/decision/{decision_id}."""

    @pytest.mark.asyncio
    async def test_retrieve_matches_creation_response(
        self,
        client: AsyncClient,
        clean_request: dict,
    ):
        created = (await client.post("/v1/decision", json=clean_request)).json()

        response = await client.get(f"/v1/decision/{created['decision_id']}")

        assert response.status_code == 200

        fetched = response.json()
        assert fetched["decision_id"] == created["decision_id"]
        assert fetched["action"] == created["action"]
        assert fetched["message"] == created["message"]
        assert fetched["risk_assessment"] == created["risk_assessment"]

    @pytest.mark.asyncio
    async def test_unknown_decision_returns_404(self, client: AsyncClient):
        missing = uuid4()

        response = await client.get(f"/v1/decision/{missing}")

        assert response.status_code == 404

        data = response.json()
        assert data["error"] == "DECISION_NOT_FOUND"
        assert str(missing) in data["message"]

    @pytest.mark.asyncio
    async def test_malformed_decision_id(self, client: AsyncClient):
        response = await client.get("/v1/decision/not-a-uuid")

        assert response.status_code == 422


# =============================================================================
# GET /v1/decision/history Tests
# =============================================================================

class TestDecisionHistory:
    """Tests for GET /v1/decision/history."""

    @pytest.mark.asyncio
    async def test_history_newest_first(
        self,
        client: AsyncClient,
        clean_request: dict,
    ):
        first = (await client.post("/v1/decision", json=clean_request)).json()
        second = (
            await client.post("/v1/decision", json={**clean_request, "requested_amount": 20_000})
        ).json()

        response = await client.get(
            "/v1/decision/history",
            params={"phone_number": clean_request["phone_number"]},
        )

        assert response.status_code == 200

        data = response.json()
        assert data["phone_number"] == clean_request["phone_number"]
        assert [d["decision_id"] for d in data["decisions"]] == [
            second["decision_id"],
            first["decision_id"],
        ]
        assert data["decisions"][0]["requested_amount"] == 20_000
        assert data["decisions"][0]["risk_category"] == "LOW"

    @pytest.mark.asyncio
    async def test_history_limit(
        self,
        client: AsyncClient,
        clean_request: dict,
    ):
        for _ in range(3):
            await client.post("/v1/decision", json=clean_request)

        response = await client.get(
            "/v1/decision/history",
            params={"phone_number": clean_request["phone_number"], "limit": 2},
        )

        assert len(response.json()["decisions"]) == 2

    @pytest.mark.asyncio
    async def test_history_for_applicant_without_decisions(self, client: AsyncClient):
        response = await client.get(
            "/v1/decision/history",
            params={"phone_number": "9000000000"},
        )

        assert response.status_code == 200
        assert response.json()["decisions"] == []

    @pytest.mark.asyncio
    async def test_history_requires_phone_number(self, client: AsyncClient):
        response = await client.get("/v1/decision/history")

        assert response.status_code == 422
