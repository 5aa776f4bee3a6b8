"""
Integration tests for metrics tracking.

These tests verify:
1. Metrics endpoint returns valid Prometheus format
2. Business metrics (actions, risk categories, rejection reasons) are tracked
3. Technical metrics (latency, HTTP requests) are recorded
"""

import pytest
from httpx import AsyncClient

from risk_gateway.core.metrics import REGISTRY, reason_label


def sample(name: str, labels: dict | None = None) -> float:
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


# =============================================================================
# Metrics Endpoint Tests
# =============================================================================

class TestMetricsEndpoint:
    """Tests for GET /metrics endpoint."""

    @pytest.mark.asyncio
    async def test_metrics_endpoint_returns_prometheus_format(self, client: AsyncClient):
        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "text/plain" in response.headers.get("content-type", "")
        assert "# HELP" in response.text

    @pytest.mark.asyncio
    async def test_metrics_include_custom_metrics(
        self,
        client: AsyncClient,
        clean_request: dict,
    ):
        await client.post("/v1/decision", json=clean_request)

        content = (await client.get("/metrics")).text

        assert "risk_gateway_decision_total" in content
        assert "risk_gateway_risk_category_total" in content
        assert "risk_gateway_decision_latency_seconds" in content
        assert "risk_gateway_http_requests_total" in content


# =============================================================================
# Decision Metrics Tests
# =============================================================================

class TestDecisionMetrics:
    """Business metrics are incremented per decision."""

    @pytest.mark.asyncio
    async def test_manual_review_is_counted(
        self,
        client: AsyncClient,
        clean_request: dict,
    ):
        before_action = sample("risk_gateway_decision_total", {"action": "MANUAL_REVIEW"})
        before_category = sample("risk_gateway_risk_category_total", {"category": "LOW"})
        before_latency = sample("risk_gateway_decision_latency_seconds_count")

        await client.post("/v1/decision", json=clean_request)

        assert sample("risk_gateway_decision_total", {"action": "MANUAL_REVIEW"}) == before_action + 1
        assert sample("risk_gateway_risk_category_total", {"category": "LOW"}) == before_category + 1
        assert sample("risk_gateway_decision_latency_seconds_count") == before_latency + 1

    @pytest.mark.asyncio
    async def test_rejection_reasons_are_counted(
        self,
        client: AsyncClient,
        blocked_request: dict,
    ):
        labels = {"reason": "User is blacklisted"}
        before_reason = sample("risk_gateway_eligibility_rejection_reason_total", labels)
        before_reject = sample("risk_gateway_decision_total", {"action": "REJECT"})

        await client.post("/v1/decision", json=blocked_request)

        assert sample("risk_gateway_eligibility_rejection_reason_total", labels) == before_reason + 1
        assert sample("risk_gateway_decision_total", {"action": "REJECT"}) == before_reject + 1

    @pytest.mark.asyncio
    async def test_unknown_applicant_is_not_a_gate_rejection(
        self,
        client: AsyncClient,
    ):
        labels = {"reason": "User not found"}
        before_reason = sample("risk_gateway_eligibility_rejection_reason_total", labels)
        before_reject = sample("risk_gateway_decision_total", {"action": "REJECT"})

        response = await client.post(
            "/v1/decision",
            json={"phone_number": "9000000000", "requested_amount": 10_000},
        )

        assert response.json()["message"] == "User not found"
        assert sample("risk_gateway_eligibility_rejection_reason_total", labels) == before_reason
        assert sample("risk_gateway_decision_total", {"action": "REJECT"}) == before_reject + 1

    @pytest.mark.asyncio
    async def test_http_requests_use_route_template(
        self,
        client: AsyncClient,
    ):
        labels = {"method": "GET", "endpoint": "/v1/health", "status": "200"}
        before = sample("risk_gateway_http_requests_total", labels)

        response = await client.get("/v1/health")

        assert response.status_code == 200
        assert sample("risk_gateway_http_requests_total", labels) == before + 1

    @pytest.mark.asyncio
    async def test_path_parameters_use_route_template(
        self,
        client: AsyncClient,
        clean_request: dict,
    ):
        labels = {"method": "GET", "endpoint": "/v1/decision/{decision_id}", "status": "200"}
        before = sample("risk_gateway_http_requests_total", labels)

        created = await client.post("/v1/decision", json=clean_request)
        response = await client.get(f"/v1/decision/{created.json()['decision_id']}")

        assert response.status_code == 200
        assert sample("risk_gateway_http_requests_total", labels) == before + 1


class TestReasonLabel:
    """Rejection reason labels drop applicant-specific detail."""

    def test_strips_current_values(self):
        assert reason_label("Age must be between 18 and 30 years (Current: 35)") == (
            "Age must be between 18 and 30 years"
        )
        assert reason_label(
            "Credit score below minimum requirement (Required: 650, Current: 600)"
        ) == "Credit score below minimum requirement"

    def test_plain_reason_unchanged(self):
        assert reason_label("User is blacklisted") == "User is blacklisted"
