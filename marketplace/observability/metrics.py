"""
Prometheus Metrics for the Marketplace Backend.

DEPENDENCY:
    pip install prometheus-client

DATA FLOW:
    This file                  presentation/api/metrics.py         Scraper
    ─────────                  ────────────────────────────         ───────
    Define metrics ──────────► /metrics endpoint ──────────────►   Prometheus / Alloy

METRIC TYPES:
    - Gauge: Value goes up/down (open realtime channels)
    - Counter: Value only goes up (messages sent, messages rejected)
    - Histogram: Distribution (for percentiles like P95, e.g., latency)
"""

from prometheus_client import (
    Gauge,
    Histogram,
    Counter,
    generate_latest,
    CONTENT_TYPE_LATEST,
)


# =============================================================================
# METRICS DEFINITIONS
# =============================================================================
WS_CONNECTIONS = Gauge(
    "marketplace_ws_connections", "Number of authenticated realtime channels currently open"
)

REQUEST_LATENCY = Histogram(
    "http_server_request_duration_seconds",  # must be the same name as grafana panel metric
    "Http request latency in seconds",
    ["method", "route", "http_status_code"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10],  # in seconds
)

CHAT_MESSAGES_TOTAL = Counter(
    "marketplace_chat_messages_total",
    "Total number of chat messages persisted and broadcast",
)

CHAT_REJECTIONS_TOTAL = Counter(
    "marketplace_chat_rejections_total",
    "Total number of realtime chat events rejected, by reason",
    ["reason"],
)


# =============================================================================
# LABEL CONSTANTS (avoid hardcoding strings throughout codebase)
# =============================================================================
class RejectionReason:
    """Reason labels for marketplace_chat_rejections_total."""

    INVALID = "invalid"  # empty content, missing/malformed buyerId
    NOT_FOUND = "not_found"  # product or chat absent
    FORBIDDEN = "forbidden"
    MALFORMED_FRAME = "malformed_frame"
    ERROR = "error"  # unexpected failure


# =============================================================================
# RECORDING FUNCTIONS
# =============================================================================
def increment_ws_connections():
    """Call when a channel passes the session gate. Integration point: presentation/realtime/chat_socket.py"""
    WS_CONNECTIONS.inc()


def decrement_ws_connections():
    """Call when that channel closes (in finally block)."""
    WS_CONNECTIONS.dec()


def observe_request_latency(method: str, route: str, status_code: int, duration: float):
    """Call to record request latency. Integration point: fastapi_app.py MetricsMiddleware"""
    REQUEST_LATENCY.labels(
        method=method, route=route, http_status_code=str(status_code)
    ).observe(duration)


def increment_chat_messages():
    CHAT_MESSAGES_TOTAL.inc()


def increment_chat_rejection(reason: str):
    """
    Call to record a rejected realtime event.

    Args:
        reason: One of the RejectionReason labels
    """
    CHAT_REJECTIONS_TOTAL.labels(reason=reason).inc()


# =============================================================================
# HELPER FOR /metrics ENDPOINT
# =============================================================================
def get_metrics_content():
    """
    Generate Prometheus metrics output.

    Called by: presentation/api/metrics.py

    Returns:
        Tuple of (content_bytes, content_type_string)
    """
    return generate_latest(), CONTENT_TYPE_LATEST


# =============================================================================
# EXPORTS
# =============================================================================
__all__ = [
    "increment_ws_connections",
    "decrement_ws_connections",
    "observe_request_latency",
    "increment_chat_messages",
    "increment_chat_rejection",
    "get_metrics_content",
    "RejectionReason",
]
