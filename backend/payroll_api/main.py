import logging
import traceback
from datetime import datetime
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from pydantic import BaseModel
from starlette.middleware.base import BaseHTTPMiddleware

from payroll_api import __version__
from payroll_api.api.routes import api_router
from payroll_api.core.config import settings
from payroll_api.core.exceptions import APIError, PayloadValidationError
from payroll_api.core.logging_config import RequestLoggingMiddleware, setup_logging
from payroll_api.core.shutdown import RequestTrackingMiddleware, lifespan_manager
from payroll_api.db.session import check_db_connection
from payroll_api.schemas.employee import format_validation_errors

# Configure structured logging (JSON in production, colored in development)
setup_logging()
logger = logging.getLogger("payroll")


SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add security headers to all responses.
    """
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        return response


class ErrorResponse(BaseModel):
    """Body of every 500 response."""
    error: str
    detail: str | None = None
    timestamp: str
    path: str | None = None


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    environment: str
    checks: dict[str, bool]


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Organization-scoped employee management for payroll",
    version=__version__,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan_manager,
)

cors_origins = settings.ALLOWED_ORIGINS


def get_cors_headers(request: Request) -> dict:
    """CORS headers for responses produced outside the CORS middleware."""
    origin = request.headers.get("origin", "")
    if origin in cors_origins:
        return {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Credentials": "true",
        }
    return {}


@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are reported like any other payload violation."""
    error = PayloadValidationError(details=format_validation_errors(exc.errors()))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Catch-all for unhandled exceptions.
    The client gets an opaque body with a reference id; the details go to the log.
    """
    error_id = datetime.utcnow().strftime("%Y%m%d%H%M%S%f")

    logger.error(
        f"Unhandled exception [{error_id}]: {exc}\n"
        f"Path: {request.url.path}\n"
        f"Method: {request.method}\n"
        f"Traceback: {''.join(traceback.format_exception(type(exc), exc, exc.__traceback__))}"
    )

    # Rendered outside the middleware stack, so set what the middleware would have
    headers = {**SECURITY_HEADERS, **get_cors_headers(request)}
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        headers["X-Request-ID"] = request_id

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="Internal server error",
            detail=f"An unexpected error occurred. Reference ID: {error_id}",
            timestamp=datetime.utcnow().isoformat(),
            path=request.url.path,
        ).model_dump(),
        headers=headers,
    )


# When credentials are needed, we must specify exact origins (not "*")
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestTrackingMiddleware)
app.add_middleware(RequestLoggingMiddleware)

app.include_router(api_router, prefix=settings.API_PREFIX)

# Exposes /metrics for Prometheus scraping
instrumentator = Instrumentator(
    should_group_status_codes=False,
    should_ignore_untemplated=True,
    excluded_handlers=["/health", "/metrics"],
)
instrumentator.instrument(app).expose(app, include_in_schema=False)


@app.get("/health", response_model=HealthResponse)
async def health_check() -> Any:
    """
    Report whether the database answers. 503 when it does not.
    """
    db_healthy = await check_db_connection()

    response = HealthResponse(
        status="healthy" if db_healthy else "unhealthy",
        service="payroll-api",
        version=__version__,
        environment=settings.ENVIRONMENT,
        checks={"database": db_healthy},
    )

    if not db_healthy:
        logger.warning(f"Health check failed: {response.checks}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump(),
        )

    return response


@app.get("/")
async def root():
    return {"message": "Welcome to the Payroll API"}
