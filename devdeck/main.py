"""FastAPI main application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from devdeck.core.config import Settings, settings as default_settings
from devdeck.core.middleware import setup_middleware
from devdeck.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    DevDeckError,
    ResourceNotFoundError,
    ValidationError,
)
from devdeck.db.base import Base
from devdeck.db.seeds.seed_admin import seed_default_admin
from devdeck.db.session import create_db_engine, create_session_factory
import devdeck.models  # noqa: F401  (registers tables on Base.metadata)

from devdeck.api.auth import router as auth_router
from devdeck.api.users import router as users_router
from devdeck.api.projects import router as projects_router
from devdeck.api.messages import router as messages_router
from devdeck.api.admin import router as admin_router

logger = logging.getLogger("devdeck")

# Domain error -> HTTP status. Services never see these codes.
ERROR_STATUS = {
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    AuthorizationError: status.HTTP_403_FORBIDDEN,
    ResourceNotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_400_BAD_REQUEST,
}


def status_for(exc: DevDeckError) -> int:
    for error_type, code in ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    app_settings: Settings = app.state.settings
    logger.info("🚀 Starting %s API", app_settings.APP_NAME)

    if not app_settings.JWT_SECRET:
        logger.critical("JWT_SECRET is not set; refusing to start")
        raise ConfigurationError("JWT_SECRET is not configured")

    Base.metadata.create_all(bind=app.state.engine)

    if app_settings.SEED_DEFAULT_ADMIN:
        db = app.state.session_factory()
        try:
            seed_default_admin(db, app_settings)
        finally:
            db.close()

    yield

    app.state.engine.dispose()
    logger.info("🔻 Shutting down %s API", app_settings.APP_NAME)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(DevDeckError)
    async def devdeck_exception_handler(request: Request, exc: DevDeckError):
        code = status_for(exc)
        if code >= 500:
            logger.error("Unmapped domain error: %s", exc.message)
            return JSONResponse(status_code=code, content={"detail": "Internal server error"})
        headers = {"WWW-Authenticate": "Bearer"} if code == status.HTTP_401_UNAUTHORIZED else None
        return JSONResponse(status_code=code, content={"detail": exc.message}, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            first = errors[0]
            field = ".".join(str(part) for part in first.get("loc", ())[1:]) or "request"
            message = f"{field}: {first.get('msg', 'invalid value')}"
        else:
            message = "Invalid request"
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": message})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled error on %s %s [%s]",
            request.method,
            request.url.path,
            getattr(request.state, "request_id", "-"),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application with its own engine and session factory."""
    settings = settings or default_settings
    configure_logging(settings)

    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description="Developer portfolio hosting: profiles, projects, messages",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.engine = create_db_engine(settings)
    app.state.session_factory = create_session_factory(app.state.engine)

    # Middleware
    setup_middleware(app, settings)

    register_exception_handlers(app)

    # Register routers
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(projects_router)
    app.include_router(messages_router)
    app.include_router(admin_router)

    @app.get("/")
    async def root():
        return {
            "name": settings.APP_NAME,
            "version": "1.0.0",
            "docs": "/docs",
        }

    @app.get("/health")
    async def health():
        """Quick health check endpoint."""
        return {"status": "ok"}

    return app


app = create_app()
