"""This file contains the main application entry point."""

import traceback
import uuid
from contextlib import asynccontextmanager
from typing import (
    Any,
    Dict,
    Optional,
)

from fastapi import (
    FastAPI,
    Request,
)
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException

from skillswap.api.v1.api import api_router
from skillswap.constants.http import (
    CORS_ALLOW_HEADERS,
    CORS_ALLOW_METHODS,
    HTTP_400_BAD_REQUEST,
    HTTP_429_TOO_MANY_REQUESTS,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_503_SERVICE_UNAVAILABLE,
    SECURITY_HEADERS,
)
from skillswap.core.config import (
    Environment,
    settings,
)
from skillswap.core.dependencies import UserRepositoryDep
from skillswap.core.limiter import limiter
from skillswap.core.logging import logger
from skillswap.domain.exceptions import DomainError
from skillswap.shared.middleware import RequestLoggingMiddleware
from skillswap.shared.response_models import (
    ErrorResponse,
    StatusResponse,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logger.info(
        "application_startup",
        project_name=settings.PROJECT_NAME,
        version=settings.VERSION,
        environment=settings.APP_ENV.value,
        api_prefix=settings.API_PREFIX,
    )

    yield

    logger.info("application_shutdown")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description=settings.DESCRIPTION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS_LIST,
    allow_credentials=True,
    allow_methods=CORS_ALLOW_METHODS,
    allow_headers=CORS_ALLOW_HEADERS,
    expose_headers=["X-Request-ID"],
)

# Rate limiting: per-route decorators plus the default limit for every other route
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)


def _error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    body = ErrorResponse(error=error, message=message, details=details)
    response = JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=headers,
    )

    # Add security headers
    for header, value in SECURITY_HEADERS.items():
        response.headers[header] = value

    return response


# Exception handlers
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors from request data.

    Args:
        request: The request that caused the validation error
        exc: The validation error

    Returns:
        JSONResponse: A 400 error envelope listing the offending fields
    """
    formatted_errors = []
    for error in exc.errors():
        loc = " -> ".join(str(loc_part) for loc_part in error["loc"] if loc_part != "body")
        formatted_errors.append(
            {
                "field": loc,
                "message": error["msg"],
                "type": error.get("type", "validation_error"),
            }
        )

    logger.warning(
        "validation_error",
        path=request.url.path,
        method=request.method,
        errors=formatted_errors,
    )

    return _error_response(
        HTTP_400_BAD_REQUEST,
        "INVALID_ARGUMENT",
        "Request validation failed",
        details={"errors": formatted_errors},
    )


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    """Translate domain errors into the error envelope.

    Args:
        request: The request that caused the error
        exc: The domain exception

    Returns:
        JSONResponse: A formatted error response with the exception's status
    """
    log = logger.error if exc.status_code >= HTTP_500_INTERNAL_SERVER_ERROR else logger.warning
    log(
        "domain_error",
        error_type=type(exc).__name__,
        error_code=exc.error_code,
        message=exc.message,
        status_code=exc.status_code,
        path=request.url.path,
        method=request.method,
    )

    details = dict(exc.details or {})
    field = getattr(exc, "field", None)
    if field:
        details["field"] = field

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return _error_response(
        exc.status_code,
        exc.error_code,
        exc.message,
        details=details or None,
        headers=headers,
    )


@app.exception_handler(RateLimitExceeded)
async def rate_limit_exception_handler(request: Request, exc: RateLimitExceeded):
    logger.warning(
        "rate_limit_exceeded",
        path=request.url.path,
        limit=str(exc.detail),
        client_host=request.client.host if request.client else "unknown",
    )
    response = _error_response(
        HTTP_429_TOO_MANY_REQUESTS,
        "RATE_LIMITED",
        "Too many requests, please try again later",
        details={"limit": str(exc.detail)},
    )
    view_rate_limit = getattr(request.state, "view_rate_limit", None)
    if view_rate_limit is None:
        return response
    return request.app.state.limiter._inject_headers(response, view_rate_limit)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions, such as unknown routes.

    Args:
        request: The request that caused the error
        exc: The HTTP exception

    Returns:
        JSONResponse: A formatted error response
    """
    logger.warning(
        "http_exception",
        status_code=exc.status_code,
        detail=str(exc.detail),
        path=request.url.path,
        method=request.method,
    )
    return _error_response(
        exc.status_code,
        "HTTP_ERROR",
        str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions.

    Args:
        request: The request that caused the error
        exc: The unexpected exception

    Returns:
        JSONResponse: A generic 500 error envelope
    """
    error_id = str(uuid.uuid4())

    logger.error(
        "unexpected_error",
        error_id=error_id,
        error_type=type(exc).__name__,
        message=str(exc),
        path=request.url.path,
        method=request.method,
        traceback=traceback.format_exc(),
    )

    # Don't expose internal error details in production
    if settings.APP_ENV == Environment.PRODUCTION:
        message = "Internal server error"
    else:
        message = f"Internal server error: {str(exc)}"

    return _error_response(
        HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL",
        message,
        details={"error_id": error_id},
    )


# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
@limiter.limit(settings.RATE_LIMIT_ENDPOINTS["default"][0])
async def root(request: Request):
    """Root endpoint returning basic API information."""
    return {
        "success": True,
        "name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "environment": settings.APP_ENV.value,
        "api_prefix": settings.API_PREFIX,
        "docs_url": "/docs",
    }


@app.get("/health", response_model=StatusResponse)
@limiter.limit(settings.RATE_LIMIT_ENDPOINTS["health"][0])
async def health_check(request: Request, user_repository: UserRepositoryDep) -> JSONResponse:
    """Health check endpoint.

    Returns:
        JSONResponse: 200 when the user store is reachable, 503 otherwise
    """
    store_healthy = await user_repository.health_check()
    body = StatusResponse(
        status="healthy" if store_healthy else "degraded",
        version=settings.VERSION,
        environment=settings.APP_ENV.value,
        checks={"firestore": "healthy" if store_healthy else "unhealthy"},
    )

    if not store_healthy:
        logger.warning("health_check_degraded")

    return JSONResponse(
        status_code=200 if store_healthy else HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump(mode="json"),
    )
