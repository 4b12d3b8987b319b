"""Observability package for the Marketplace Backend."""

from marketplace.observability.metrics import (
    increment_ws_connections,
    decrement_ws_connections,
    observe_request_latency,
    increment_chat_messages,
    increment_chat_rejection,
    get_metrics_content,
    RejectionReason,
)

__all__ = [
    "increment_ws_connections",
    "decrement_ws_connections",
    "observe_request_latency",
    "increment_chat_messages",
    "increment_chat_rejection",
    "get_metrics_content",
    "RejectionReason",
]
