"""
Auditoria backend application.

Usage:
    uvicorn auditoria.main:create_app --factory
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, HTTPException
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from auditoria.bootstrap import ApplicationContainer, create_container
from auditoria.core.config import Settings, get_settings
from auditoria.core.context import RequestContext
from auditoria.core.database import create_all
from auditoria.core.logging import configure_logging, get_logger
from auditoria.modules.identity.application.commands.authorization import (
    SyncAuthorizationCatalogCommand,
    SyncAuthorizationCatalogCommandHandler,
)
from auditoria.presentation.middleware import (
    ErrorHandlingMiddleware,
    LoggingMiddleware,
    RequestIDMiddleware,
    register_exception_handlers,
)

logger = get_logger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Create tables, seed the authorization catalog and dispose the engine on shutdown."""
    container: ApplicationContainer = app.state.container
    settings: Settings = container.settings()
    engine = container.engine()

    logger.info(
        "Starting Auditoria backend",
        version=settings.app_version,
        environment=settings.environment.value,
        database_driver=engine.dialect.name,
    )

    await create_all(engine)
    await SyncAuthorizationCatalogCommandHandler(container.identity_uow)(
        SyncAuthorizationCatalogCommand(context=RequestContext.system())
    )

    try:
        yield
    finally:
        await engine.dispose()
        logger.info("Auditoria backend stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.logging)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url=None,
    )
    app.state.container = create_container(settings)

    # Added last runs first: request id wraps logging, logging wraps errors.
    add_error_handling_middleware(app, settings)
    add_logging_middleware(app)
    add_request_id_middleware(app)
    register_exception_handlers(app)

    register_module_routes(app)
    register_health_endpoints(app)

    logger.info("FastAPI application configured", environment=settings.environment.value)
    return app


def add_request_id_middleware(app: FastAPI) -> None:
    """Add request ID middleware for tracing."""
    app.add_middleware(RequestIDMiddleware)


def add_error_handling_middleware(app: FastAPI, settings: Settings) -> None:
    app.add_middleware(ErrorHandlingMiddleware, debug=settings.debug)


def add_logging_middleware(app: FastAPI) -> None:
    """Add request/response logging middleware."""
    app.add_middleware(LoggingMiddleware)


def register_module_routes(app: FastAPI) -> None:
    """Register API routes for all modules."""
    from auditoria.modules.identity.presentation.api import router as identity_router
    from auditoria.modules.notifications.presentation.api import router as notifications_router
    from auditoria.modules.organizations.presentation.api import router as organizations_router

    api_router = APIRouter(prefix=API_PREFIX)
    api_router.include_router(identity_router)
    api_router.include_router(organizations_router)
    api_router.include_router(notifications_router)
    app.include_router(api_router)


def register_health_endpoints(app: FastAPI) -> None:
    """Register health check endpoints."""

    @app.get("/health", tags=["health"])
    async def health_check():
        settings: Settings = app.state.container.settings()
        return {
            "status": "healthy",
            "version": settings.app_version,
            "environment": settings.environment.value,
        }

    @app.get("/health/db", tags=["health"])
    async def database_health():
        engine = app.state.container.engine()
        try:
            async with engine.connect() as connection:
                await connection.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.exception("Database health check failed", error=str(e))
            raise HTTPException(status_code=503, detail="Database unhealthy") from e
        return {"status": "healthy", "component": "database"}


__all__ = ["create_app"]
