"""FastAPI application entry point."""
import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from agentcrm.core.config import Settings, settings as default_settings
from agentcrm.core.errors import CRMError, StorageError
from agentcrm.core.structured_logging import build_log_context, configure_logging
from agentcrm.db.session import build_session_factory, create_db_engine
from agentcrm.routers import (
    build_resource_router,
    campaign_personas_router,
    fallback_router,
    principals_router,
    status_router,
    uploads_router,
)
from agentcrm.schemas.registry import RESOURCE_SCHEMAS

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


# ============================================================================
# Sentry Integration (optional, for production error tracking)
# ============================================================================

def init_sentry(settings: Settings) -> bool:
    """Initialize Sentry when a DSN is configured outside dev."""
    if not settings.SENTRY_DSN or settings.ENV == "dev":
        return False

    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENV,
        release=settings.VERSION,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
        ],
        traces_sample_rate=0.1,  # 10% of requests for performance monitoring
        send_default_pii=False,  # Authorization headers carry API keys
    )
    logger.info("Sentry initialized for error tracking")
    return True


# ============================================================================
# Error rendering: every failure is {"error": "<message>"}
# ============================================================================

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _format_request_validation(exc: RequestValidationError) -> str:
    missing: list[str] = []
    invalid: list[str] = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        name = ".".join(loc) or "body"
        if error.get("type") in ("missing", "string_too_short"):
            missing.append(name)
        else:
            invalid.append(f"Invalid value for '{name}': {error.get('msg', 'invalid')}")
    if missing:
        return f"Missing required fields: {', '.join(missing)}"
    return invalid[0] if invalid else "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(CRMError)
    async def crm_error_handler(request: Request, exc: CRMError):
        if isinstance(exc, StorageError):
            logger.error("Storage error on %s %s: %s", request.method, request.url.path, exc.detail)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error(400, _format_request_validation(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return _error(404, "Route not found")
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Unhandled database error on %s %s", request.method, request.url.path)
        return _error(500, StorageError.default_message)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, StorageError.default_message)


# ============================================================================
# Request logging
# ============================================================================

def register_request_logging(app: FastAPI) -> None:
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        principal = getattr(request.state, "principal", None)
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            extra=build_log_context(
                principal_id=principal.id if principal is not None else None,
                role=principal.role if principal is not None else None,
                request_id=request_id,
                route=request.url.path,
                method=request.method,
                status_code=response.status_code,
            ),
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


# ============================================================================
# FastAPI App
# ============================================================================

def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the API.

    The engine and session factory are created here and kept on
    ``app.state``; nothing connects at import time.
    """
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)
    init_sentry(settings)

    app = FastAPI(
        title="AgentCRM API",
        description="Internal CRM for an agent-driven service business",
        version=settings.VERSION,
        docs_url="/docs" if settings.ENV == "dev" else None,
        redoc_url="/redoc" if settings.ENV == "dev" else None,
    )

    engine = create_db_engine(settings.DATABASE_URL)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    register_exception_handlers(app)
    register_request_logging(app)

    # CORS middleware - added last so it wraps request logging
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER, "Content-Disposition"],
    )

    # Public
    app.include_router(status_router)
    app.include_router(principals_router)

    # Protected
    for schema in RESOURCE_SCHEMAS:
        app.include_router(build_resource_router(schema))
    app.include_router(campaign_personas_router)
    app.include_router(uploads_router)

    # Must stay last
    app.include_router(fallback_router)

    logger.info("AgentCRM API %s ready (%d resources)", settings.VERSION, len(RESOURCE_SCHEMAS))
    return app


app = create_app()
