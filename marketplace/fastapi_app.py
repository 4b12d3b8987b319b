"""
FastAPI Application Factory.
Creates and configures the FastAPI application with all routers, middleware, and DI.

Endpoints:
- /api/signup, /api/login, /api/logout, /api/me
- /api/products, /api/products/{id}, /api/products/{id}/chats
- /api/chats/{product_id}
- /ws (chat WebSocket)
- /uploads (product images), /healthz, /metrics

The module-level app lives in marketplace/main.py, which picks the storage
backend. Tests build apps here with an in-memory container.
"""

import logging
import os
import time
from contextlib import asynccontextmanager
from typing import Optional

from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from marketplace.config.logging_config import (
    NO_CORRELATION_ID,
    correlation_id_var,
    setup_logging,
)
from marketplace.config.settings import describe_environment, get_config
from marketplace.observability.metrics import observe_request_latency
from marketplace.presentation.api import (
    auth_router,
    chats_router,
    health_router,
    metrics_router,
    products_router,
)
from marketplace.presentation.realtime import realtime_router
from marketplace.setup.ioc import create_container

logger = logging.getLogger(__name__)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Middleware to extract and set correlation ID from request headers."""

    async def dispatch(self, request: Request, call_next):
        # Get correlation ID from header or use default
        correlation_id = request.headers.get("X-Correlation-ID", NO_CORRELATION_ID)

        # Set in contextvars (propagates to async tasks and logging)
        correlation_id_var.set(correlation_id)

        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Records request latency labelled by route template, not raw path."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            route = request.scope.get("route")
            observe_request_latency(
                method=request.method,
                route=getattr(route, "path", "unmatched"),
                status_code=status_code,
                duration=time.perf_counter() - start,
            )


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
    )


def _validation_message(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())[1:])
        messages.append(f"{field}: {error.get('msg')}" if field else error.get("msg"))
    return ", ".join(messages) or "Invalid request"


def create_fastapi_app(container: Optional[AsyncContainer] = None) -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Args:
        container: DI container; defaults to one with in-memory storage

    Returns:
        FastAPI application instance
    """
    settings = get_config()
    setup_logging("DEBUG" if settings.DEBUG else settings.LOG_LEVEL, settings.LOG_PATH)
    container = container or create_container()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Startup: log the effective environment (secrets masked).
        Shutdown: close the DI container (disconnects Prisma, etc.)
        """
        logger.info(f"Environment: {describe_environment(settings)}")
        if not settings.SESSION_SECRET:
            logger.warning("SESSION_SECRET is not set; sessions are signed with an empty key")
        yield
        await container.close()
        logger.info("FastAPI application shutdown. DI container closed.")

    app = FastAPI(
        title="Marketplace API",
        description="Marketplace backend: accounts, product listings and buyer-seller chat",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Setup Dishka BEFORE app starts (must add middleware before startup)
    setup_dishka(container, app)

    app.add_middleware(MetricsMiddleware)

    # Correlation ID middleware (must be added before CORS)
    app.add_middleware(CorrelationIdMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.info(f"Validation error on {request.url.path}: {exc.errors()}")
        return _error(400, _validation_message(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code >= 500:
            logger.error(f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}")
        return _error(exc.status_code, str(exc.detail))

    # Unexpected errors: details go to the log only
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _error(500, "Internal server error")

    app.include_router(auth_router)
    app.include_router(products_router)
    app.include_router(chats_router)
    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(realtime_router)

    os.makedirs(settings.UPLOAD_PATH, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_PATH), name="uploads")

    return app
