"""
Prometheus Metrics Endpoint for the Marketplace Backend.

DATA FLOW:
    observability/metrics.py         This file                    Scraper
    ────────────────────────         ─────────                    ───────
    Define & record metrics ──────►  /metrics endpoint ──────────► Prometheus / Alloy

Test with: curl http://localhost:4000/metrics
"""

from fastapi import APIRouter, Response
from marketplace.observability.metrics import get_metrics_content


router = APIRouter(prefix="/metrics", tags=["observability"])


@router.get("")
async def metrics():
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus text format.
    """
    content, content_type = get_metrics_content()
    return Response(content=content, media_type=content_type)
