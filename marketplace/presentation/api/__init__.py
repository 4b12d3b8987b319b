"""
API Routers - FastAPI endpoint definitions.
"""

from marketplace.presentation.api.auth import router as auth_router
from marketplace.presentation.api.chats import router as chats_router
from marketplace.presentation.api.health import router as health_router
from marketplace.presentation.api.metrics import router as metrics_router
from marketplace.presentation.api.products import router as products_router

__all__ = [
    "auth_router",
    "chats_router",
    "health_router",
    "metrics_router",
    "products_router",
]
