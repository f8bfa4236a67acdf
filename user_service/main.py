"""
User service FastAPI application entry point.

Accounts and profiles, workspaces, membership roles and join requests.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from user_service import __version__
from user_service.config import get_settings
from user_service.db.session import check_db_connection, engine
from user_service.services.auth import InMemoryCredentialStore
from user_service.services.errors import WorkspaceServiceError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown."""
    logger.info("User service starting")
    try:
        try:
            check_db_connection()
            logger.info("Database connection verified")
        except Exception as e:
            logger.critical("Database unreachable: %s", e)
            raise

        if get_settings().temp_auth_enabled:
            logger.warning("Temporary email/password auth is enabled")

        yield
    finally:
        logger.info("User service shutting down")
        app.state.credential_store.clear()
        engine.dispose()
        logger.info("Database connection pool closed")


async def _service_error_handler(request: Request, exc: WorkspaceServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.credential_store = InMemoryCredentialStore()
    app.add_exception_handler(WorkspaceServiceError, _service_error_handler)

    # Mount API routes
    from user_service.api.auth import router as auth_router
    from user_service.api.users import router as users_router
    from user_service.api.workspaces import router as workspaces_router

    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(users_router, prefix="/api/users", tags=["users"])
    app.include_router(workspaces_router, prefix="/api/workspaces", tags=["workspaces"])

    # Internal administrative endpoints (token-authenticated)
    from user_service.api.internal import router as internal_router

    app.include_router(internal_router, tags=["internal"])

    @app.get("/health")
    def health() -> dict:
        """Health check endpoint. Confirms DB connectivity."""
        from sqlalchemy import text

        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return {
                "status": "ok",
                "version": __version__,
                "database": "connected",
            }
        except Exception:
            return JSONResponse(
                status_code=503,
                content={
                    "status": "unhealthy",
                    "version": __version__,
                    "database": "disconnected",
                },
            )

    return app


app = create_app()
