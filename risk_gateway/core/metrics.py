"""Prometheus metrics for the Risk Gateway service.

Metrics are organized into two categories:

Business Metrics (for Risk/Operations):
- risk_gateway_decision_total: Decisions by action
- risk_gateway_risk_category_total: Scored applications by risk category
- risk_gateway_risk_score: Distribution of composite risk scores
- risk_gateway_eligibility_rejection_reason_total: Gate rejections by reason

Technical Metrics (for Engineering/SRE):
- risk_gateway_decision_latency_seconds: Decision request latency
- risk_gateway_http_requests_total: HTTP requests by endpoint/status
"""

import re
import time
from contextlib import contextmanager
from typing import Generator, Iterable, Optional

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics (Risk/Operations dashboards)
# =============================================================================

decision_total = Counter(
    "risk_gateway_decision_total",
    "Total number of loan decisions made",
    ["action"],  # REJECT, MANUAL_REVIEW, AUTO_APPROVE, AUTO_REJECT
)

risk_category_total = Counter(
    "risk_gateway_risk_category_total",
    "Scored applications by risk category",
    ["category"],  # LOW, MEDIUM, HIGH
)

risk_score_histogram = Histogram(
    "risk_gateway_risk_score",
    "Composite risk scores of eligible applications",
    buckets=[10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
)

eligibility_rejection_reason_total = Counter(
    "risk_gateway_eligibility_rejection_reason_total",
    "Eligibility gate failures by reason",
    ["reason"],
)


# =============================================================================
# Technical Metrics (Engineering/SRE dashboards)
# =============================================================================

decision_latency = Histogram(
    "risk_gateway_decision_latency_seconds",
    "Decision request latency in seconds",
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

http_requests_total = Counter(
    "risk_gateway_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "risk_gateway_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

_DETAIL_SUFFIX = re.compile(r"\s*\(.*\)$")


def reason_label(reason: str) -> str:
    """Strip the applicant-specific detail so the label set stays bounded."""
    return _DETAIL_SUFFIX.sub("", reason)


def record_decision(
    action: str,
    risk_category: Optional[str] = None,
    risk_score: Optional[int] = None,
    rejection_reasons: Iterable[str] = (),
) -> None:
    """Record a decision in metrics."""
    decision_total.labels(action=action).inc()

    if risk_category is not None:
        risk_category_total.labels(category=risk_category).inc()
    if risk_score is not None:
        risk_score_histogram.observe(risk_score)
    for reason in rejection_reasons:
        eligibility_rejection_reason_total.labels(reason=reason_label(reason)).inc()


@contextmanager
def track_decision_latency() -> Generator[None, None, None]:
    """Context manager to track decision latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        decision_latency.observe(duration)


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
