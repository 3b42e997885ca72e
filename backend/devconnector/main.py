"""
DevConnector Backend — FastAPI Application Factory
====================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app(settings) returns a configured FastAPI
       instance. Settings, the database engine, the session factory, the token
       service and the password hasher are built once here and stored on
       `app.state`; nothing reads configuration from module globals.
Who:   Called by uvicorn (uvicorn devconnector.main:app) and by the tests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │  Req ID      │→│Rate Limit│→│  Logging        │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────┐ ┌──────────┐ ┌──────────┐ ┌────────┐  │
    │  │/api/auth │ │/api/users│ │/api/posts│ │/profile│  │
    │  └──────────┘ └──────────┘ └──────────┘ └────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ Auth→401 │ 404 │ DB→500     │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, settings check, schema creation for SQLite URLs
    Shutdown: dispose database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from devconnector import __version__
from devconnector.config import Settings
from devconnector.database import (
    build_engine,
    build_session_factory,
    create_schema,
    dispose_engine,
)
from devconnector.dependencies import authenticate, requires_identity
from devconnector.exceptions import (
    AuthError,
    DatabaseError,
    InvalidActionError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from devconnector.middleware.logging import RequestLoggingMiddleware
from devconnector.middleware.rate_limit import RateLimitMiddleware
from devconnector.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    current_request_id,
)
from devconnector.routes import auth, health, posts, profile, users
from devconnector.services.passwords import PasswordHasher
from devconnector.services.token_service import TokenService

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Server error."


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings)
    logger.info("=" * 60)
    logger.info("DevConnector Backend starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Development keeps running with defaults; the warning stays in the logs
        logger.warning("Configuration warning: %s", str(e))

    if settings.is_sqlite:
        await create_schema(app.state.engine)
        logger.info("SQLite database schema ensured")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("DevConnector Backend shutting down...")
    await dispose_engine(app.state.engine)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _message_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": code, "msg": message, "request_id": current_request_id()},
    )


def _field_errors_response(code: str, errors: List[Dict[str, Any]]) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": code, "errors": errors, "request_id": current_request_id()},
    )


def _field_error_from_pydantic(err: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert one pydantic error into {"msg", "param", "location"}.

    Validators raise ValueError with the user-facing message; pydantic
    keeps the exception in ctx["error"] and prefixes `msg` with "Value error, ".
    """
    ctx = err.get("ctx") or {}
    message = str(ctx["error"]) if "error" in ctx else err.get("msg", "Invalid value")
    loc = list(err.get("loc", ()))
    location = str(loc[0]) if loc else None
    param = ".".join(str(part) for part in loc[1:]) or None
    return {"msg": message, "param": param, "location": location}


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the exception hierarchy onto HTTP responses.

    Handler table:
        RequestValidationError  → 400 {"errors": [...]}
        ValidationError         → 400 {"errors": [...]}
        InvalidActionError      → 400 {"msg": ...}
        AuthError               → 401
        UnauthorizedError       → 401
        NotFoundError           → 404
        DatabaseError           → 500 generic message
        Exception (fallback)    → 500 generic message

    Server-side details (context, stack traces) are logged, never returned.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        # Undecodable JSON is rejected before dependencies run; protected
        # routes still answer with the Auth Gate's 401 first
        route = request.scope.get("route")
        dependant = getattr(route, "dependant", None)
        if dependant is not None and requires_identity(dependant):
            try:
                authenticate(request, request.app.state.token_service)
            except AuthError as auth_exc:
                logger.info("[%s] Auth rejected: %s", current_request_id(), auth_exc.error_code)
                return _message_response(401, auth_exc.error_code, auth_exc.message)

        errors = [_field_error_from_pydantic(err) for err in exc.errors()]
        logger.info("[%s] Request validation failed: %s", current_request_id(), errors)
        return _field_errors_response("validation_error", errors)

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.info("[%s] Validation error: %s", current_request_id(), exc.message)
        return _field_errors_response(exc.error_code, exc.errors)

    @app.exception_handler(InvalidActionError)
    async def handle_invalid_action(request: Request, exc: InvalidActionError):
        return _message_response(400, exc.error_code, exc.message)

    @app.exception_handler(AuthError)
    async def handle_auth_error(request: Request, exc: AuthError):
        logger.info("[%s] Auth rejected: %s", current_request_id(), exc.error_code)
        return _message_response(401, exc.error_code, exc.message)

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(request: Request, exc: UnauthorizedError):
        return _message_response(401, exc.error_code, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _message_response(404, exc.error_code, exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            current_request_id(), exc.message, exc.context,
        )
        return _message_response(500, exc.error_code, SERVER_ERROR_MESSAGE)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            current_request_id(request),
            str(exc),
            exc_info=True,
        )
        # Runs in ServerErrorMiddleware, outside RequestIDMiddleware
        rid = current_request_id(request)
        response = JSONResponse(
            status_code=500,
            content={"error": "internal_server_error", "msg": SERVER_ERROR_MESSAGE, "request_id": rid},
        )
        if rid:
            response.headers[REQUEST_ID_HEADER] = rid
        return response


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Immutable configuration; loaded from the environment when omitted.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    settings = settings or Settings()

    app = FastAPI(
        title="DevConnector API",
        description="Developer social network: authentication, profiles, posts, likes and comments.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Shared State ──────────────────────────────────────────────────────
    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_service = TokenService.from_settings(settings)
    app.state.password_hasher = PasswordHasher.from_settings(settings)

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → RateLimit → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window,
    )
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(posts.router)
    app.include_router(profile.router)
    app.include_router(health.router)

    return app


def run() -> None:
    """Console entry point: serve `app` with uvicorn on the configured host/port."""
    import uvicorn

    settings: Settings = app.state.settings
    uvicorn.run(
        app,
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `devconnector.main:app` to be importable
app = create_app()


if __name__ == "__main__":
    run()
