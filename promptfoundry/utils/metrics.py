"""
Prometheus-based metrics for production monitoring.
Provides /metrics endpoint for scraping.
"""
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import APIRouter, Response


# Counters
webhook_events_total = Counter(
    "webhook_events_total",
    "Stripe webhook deliveries by event type and outcome",
    ["event_type", "outcome"],  # handled, ignored, dropped, rejected, failed
)

license_verifications_total = Counter(
    "license_verifications_total",
    "License verify calls",
    ["result"],  # entitled, not_entitled, unknown, error
)

license_emails_total = Counter(
    "license_emails_total",
    "License emails",
    ["status"],  # sent, stub, error
)

checkout_sessions_total = Counter(
    "checkout_sessions_total",
    "Checkout sessions created",
    ["status"],
)

# Histograms
webhook_processing_seconds = Histogram(
    "webhook_processing_seconds",
    "Stripe webhook handling duration",
    ["event_type"],
    buckets=[0.05, 0.1, 0.5, 1, 2, 5, 10],
)


# Metrics endpoint router
router = APIRouter()


@router.get("/metrics")
def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
