from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import uuid4

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.routes.auth import router as auth_router
from src.api.routes.favorites import router as favorites_router
from src.api.routes.frontend import router as frontend_router
from src.api.routes.gifs import router as gifs_router
from src.api.routes.tags import router as tags_router
from src.clients.giphy import GiphyClient
from src.core.logging import configure_logging, correlation_id_var, user_var
from src.core.settings import AppSettings, get_app_settings
from src.db.run_migrations import main as run_alembic
from src.db.session import create_schema, dispose_engine
from src.repositories.memory import MemoryStore
from src.schemas.common import ErrorInfo, ErrorResponse, MessageResponse

# Configure structured logging once at import
configure_logging(get_app_settings().LOG_LEVEL)
logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "Health", "description": "Liveness probe."},
    {"name": "Auth", "description": "Register, login, logout and session cookie handling."},
    {"name": "Favorites", "description": "GIFs saved by the current user."},
    {"name": "Tags", "description": "User-defined labels on favorites."},
    {"name": "Gifs", "description": "Lookup and search against the GIF provider."},
]


def _build_error_response(
    request: Request,
    status_code: int,
    error_type: str,
    message: str,
    details: Any | None = None,
) -> JSONResponse:
    """Build a standardized ErrorResponse JSONResponse."""
    err = ErrorResponse(
        status=status_code,
        error=ErrorInfo(type=error_type, message=message, details=details),
        correlation_id=getattr(request.state, "correlation_id", None),
        user=getattr(request.state, "user", None),
        path=request.url.path,
        method=request.method,
        timestamp=datetime.now(tz=timezone.utc),
    )
    return JSONResponse(status_code=status_code, content=err.model_dump(mode="json"))


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """
        Global handler for HTTPException to produce a standardized error envelope.
        """
        detail = exc.detail if isinstance(exc.detail, str) else "HTTP Error"
        return _build_error_response(
            request=request,
            status_code=exc.status_code,
            error_type="http_error",
            message=str(detail),
            details=None if isinstance(exc.detail, str) else exc.detail,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """
        Global handler for request validation errors with a standard structure.
        """
        return _build_error_response(
            request=request,
            status_code=422,
            error_type="validation_error",
            message="Request validation failed",
            details=exc.errors(),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        """
        Catch-all handler to avoid leaking stack traces and to return a structured error.
        """
        logger.exception("Unhandled error processing request")
        return _build_error_response(
            request=request,
            status_code=500,
            error_type="internal_error",
            message="An unexpected error occurred",
            details=None,
        )


async def _prepare_database(settings: AppSettings) -> None:
    """
    Bring the schema up to date before serving.

    Migrations run in a worker thread because Alembic's env drives its own event loop.
    """
    if settings.RUN_MIGRATIONS_ON_STARTUP:
        try:
            logger.info("Running Alembic migrations: upgrade head")
            await asyncio.to_thread(run_alembic, ["upgrade", "head"])
            logger.info("Migrations completed.")
        except Exception as exc:
            logger.exception("Migration step failed: %s", exc)
            # Keep serving; requests will fail loudly if the schema is really missing.
    elif settings.CREATE_SCHEMA_ON_STARTUP:
        logger.info("Creating database schema from ORM metadata")
        await create_schema()


# PUBLIC_INTERFACE
def create_app(
    settings: Optional[AppSettings] = None,
    *,
    gif_client: Optional[GiphyClient] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Parameters:
        settings: Application settings; read from the environment when omitted.
        gif_client: Giphy client to use instead of one built from settings.
    """
    settings = settings or get_app_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting %s (store=%s)", settings.APP_NAME, settings.STORE_BACKEND)
        if settings.STORE_BACKEND == "memory":
            app.state.memory_store = MemoryStore()
        else:
            app.state.memory_store = None
            await _prepare_database(settings)

        app.state.gif_client = gif_client or GiphyClient(
            settings.NOTGIPHY_API_KEY,
            per_page=settings.GIPHY_RESULTS_PER_PAGE,
            rating=settings.GIPHY_RATING,
            base_url=settings.GIPHY_BASE_URL,
            timeout=settings.GIPHY_TIMEOUT_SECONDS,
        )
        try:
            yield
        finally:
            await app.state.gif_client.aclose()
            await dispose_engine()
            logger.info("Stopped %s", settings.APP_NAME)

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS - avoid wildcard with credentials
    cors_allow_credentials = settings.CORS_ALLOW_CREDENTIALS
    if settings.CORS_ORIGINS == ["*"] and cors_allow_credentials:
        logger.warning("CORS_ALLOW_CREDENTIALS=True with '*' origins is not permitted; disabling credentials.")
        cors_allow_credentials = False

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=cors_allow_credentials,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        """
        Enrich request context with a correlation_id for logging and error responses.
        Adds 'X-Correlation-ID' to every response.
        """
        corr = request.headers.get("X-Correlation-ID") or request.headers.get("X-Request-ID") or str(uuid4())
        token_corr = correlation_id_var.set(corr)
        token_user = user_var.set(None)
        request.state.correlation_id = corr

        logger.info("Incoming request %s %s", request.method, request.url.path)
        try:
            response = await call_next(request)
            logger.info("Completed %s %s -> %s", request.method, request.url.path, response.status_code)
            response.headers["X-Correlation-ID"] = corr
            return response
        finally:
            correlation_id_var.reset(token_corr)
            user_var.reset(token_user)

    _register_error_handlers(app)

    api = APIRouter(prefix="/api")

    # PUBLIC_INTERFACE
    @api.get(
        "/health",
        response_model=MessageResponse,
        summary="Health Check",
        tags=["Health"],
    )
    def health_check() -> MessageResponse:
        """
        Basic liveness health check endpoint.

        Returns:
            MessageResponse: Simple confirmation that the service is running.
        """
        return MessageResponse(message="Healthy")

    api.include_router(auth_router)
    api.include_router(favorites_router)
    api.include_router(tags_router)
    api.include_router(gifs_router)
    app.include_router(api)

    # Catch-all for the UI bundle; must stay last
    app.include_router(frontend_router)
    return app


app = create_app()


# PUBLIC_INTERFACE
def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    import uvicorn

    settings = get_app_settings()
    uvicorn.run("src.api.main:app", host=settings.HOST, port=settings.PORT, log_config=None)
