"""Prometheus metrics for the RentCasaYa API.

Metrics are organized into two categories:

Business Metrics (for Product):
- rentcasaya_applications_total: Application lifecycle events
- rentcasaya_verification_checks_total: Verification checks by outcome
- rentcasaya_tenant_score_total: Tenant scores by recommendation
- rentcasaya_tenant_score_points: Distribution of tenant scores
- rentcasaya_newsletter_subscriptions_total: Newsletter signups by outcome

Technical Metrics (for Engineering):
- rentcasaya_provider_request_latency_seconds: External provider latency
- rentcasaya_provider_requests_total: External provider requests
- rentcasaya_provider_failures_total: External provider failures
- rentcasaya_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics
# =============================================================================

applications_total = Counter(
    "rentcasaya_applications_total",
    "Application lifecycle events",
    ["event"],  # submitted, approved, rejected, revoked
)

verification_checks_total = Counter(
    "rentcasaya_verification_checks_total",
    "Tenant verification checks",
    ["check", "outcome"],  # identity/income/bank_account, success/failure
)

tenant_score_total = Counter(
    "rentcasaya_tenant_score_total",
    "Tenant scores computed by recommendation",
    ["recommendation"],
)

tenant_score_histogram = Histogram(
    "rentcasaya_tenant_score_points",
    "Distribution of tenant scores",
    buckets=[20, 40, 60, 70, 80, 90, 100],
)

newsletter_subscriptions_total = Counter(
    "rentcasaya_newsletter_subscriptions_total",
    "Newsletter subscription attempts",
    ["outcome"],  # subscribed, duplicate
)


# =============================================================================
# Technical Metrics
# =============================================================================

provider_request_latency = Histogram(
    "rentcasaya_provider_request_latency_seconds",
    "External provider request latency in seconds",
    ["provider"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

provider_requests_total = Counter(
    "rentcasaya_provider_requests_total",
    "Total external provider requests",
    ["provider", "status"],  # success, failure
)

provider_failures_total = Counter(
    "rentcasaya_provider_failures_total",
    "External provider failures",
    ["provider", "error_type"],  # timeout, error
)

http_requests_total = Counter(
    "rentcasaya_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "rentcasaya_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_application_event(event: str) -> None:
    """Record an application lifecycle event."""
    applications_total.labels(event=event).inc()


def record_verification_check(check: str, success: bool) -> None:
    """Record the outcome of a single verification check."""
    outcome = "success" if success else "failure"
    verification_checks_total.labels(check=check, outcome=outcome).inc()


def record_tenant_score(score: int, recommendation: str) -> None:
    """Record a computed tenant score."""
    tenant_score_total.labels(recommendation=recommendation).inc()
    tenant_score_histogram.observe(score)


def record_newsletter_subscription(outcome: str) -> None:
    """Record a newsletter subscription attempt."""
    newsletter_subscriptions_total.labels(outcome=outcome).inc()


@contextmanager
def track_provider_latency(provider: str) -> Generator[None, None, None]:
    """Context manager to track external provider latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        provider_request_latency.labels(provider=provider).observe(duration)


def record_provider_success(provider: str) -> None:
    """Record a successful provider call."""
    provider_requests_total.labels(provider=provider, status="success").inc()


def record_provider_failure(provider: str, error_type: str) -> None:
    """Record a failed provider call."""
    provider_requests_total.labels(provider=provider, status="failure").inc()
    provider_failures_total.labels(provider=provider, error_type=error_type).inc()


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
