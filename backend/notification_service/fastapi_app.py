"""
FastAPI Application Factory.
Creates and configures the FastAPI application with all routers, middleware, and DI.

Surfaces:
- /api/notifications  REST (history, unread count, presence, internal sends)
- /api/test           manual testing endpoints
- /rpc/NotificationService/*  service-to-service RPC
- /chatHub            realtime WebSocket
- /metrics            Prometheus
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from notification_service.application.services import ConnectionCleanupWorker
from notification_service.config.logging_config import (
    NO_CORRELATION_ID,
    correlation_id_var,
    setup_logging,
)
from notification_service.config.settings import Config, get_config
from notification_service.domain.exceptions import (
    AccessDeniedError,
    DomainValidationError,
    EntityNotFoundError,
    InvalidStateTransition,
)
from notification_service.presentation.api import (
    metrics_router,
    notifications_router,
    rpc_router,
    test_router,
)
from notification_service.presentation.realtime import chat_hub_router
from notification_service.setup.ioc.container import create_container

# Setup logging
setup_logging(Config.LOG_LEVEL, Config.LOG_PATH)

logger = logging.getLogger(__name__)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Middleware to extract and set correlation ID from request headers."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID", NO_CORRELATION_ID)

        # Set in contextvars (propagates to async tasks and logging)
        correlation_id_var.set(correlation_id)

        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id

        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager.

    - Startup: start the connection cleanup loop
    - Shutdown: stop the loop, then close the DI container (Prisma, Redis, httpx)
    """
    container: AsyncContainer = app.state.dishka_container
    worker = await container.get(ConnectionCleanupWorker)
    stop_event = asyncio.Event()
    cleanup_task = asyncio.create_task(worker.run(stop_event))
    logger.info("Notification service started")

    yield

    stop_event.set()
    await cleanup_task
    await container.close()
    logger.info("Notification service shutdown. DI container closed.")


def create_fastapi_app(container: Optional[AsyncContainer] = None) -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Args:
        container: DI container to use; the production container when omitted

    Returns:
        FastAPI application instance
    """
    settings = get_config()
    app = FastAPI(
        title="Notification Service",
        debug=settings.DEBUG,
        description="Presence tracking and realtime notification fan-out",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Setup Dishka BEFORE app starts (must add middleware before startup)
    setup_dishka(container or create_container(), app)

    # Correlation ID middleware (must be added before CORS)
    app.add_middleware(CorrelationIdMiddleware)

    # The realtime hub needs credentials, so origins are listed explicitly
    app.add_middleware(
        CORSMiddleware,
        allow_origins=Config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.warning(f"[VALIDATION ERROR] {errors}")
        return JSONResponse(
            status_code=400,
            content={"error": "Validation error", "details": _jsonable_errors(errors)},
        )

    @app.exception_handler(DomainValidationError)
    async def domain_validation_handler(request: Request, exc: DomainValidationError):
        logger.warning(f"[DOMAIN VALIDATION ERROR] {exc.message}")
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(EntityNotFoundError)
    async def not_found_handler(request: Request, exc: EntityNotFoundError):
        return JSONResponse(status_code=404, content={"error": str(exc)})

    @app.exception_handler(AccessDeniedError)
    async def access_denied_handler(request: Request, exc: AccessDeniedError):
        return JSONResponse(status_code=403, content={"error": str(exc)})

    @app.exception_handler(InvalidStateTransition)
    async def invalid_state_handler(request: Request, exc: InvalidStateTransition):
        return JSONResponse(status_code=409, content={"error": str(exc)})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.info(f"[HTTP ERROR {exc.status_code}] {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception(f"[GLOBAL ERROR] {type(exc).__name__}: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
        )

    # Health check routes
    @app.get("/", tags=["health"])
    async def root():
        return {"message": "Notification service is running."}

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "healthy"}

    # Register routers
    app.include_router(notifications_router)
    app.include_router(test_router)
    app.include_router(rpc_router)
    app.include_router(chat_hub_router)
    app.include_router(metrics_router)

    return app


def _jsonable_errors(errors) -> list:
    """Pydantic error entries may carry exception objects in ctx."""
    return [
        {key: value for key, value in error.items() if key in ("type", "loc", "msg")}
        for error in errors
    ]


# Create the app instance
app = create_fastapi_app()
