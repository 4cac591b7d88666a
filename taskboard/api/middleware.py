"""API middleware and exception handlers."""
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from ..config import settings
from ..core.exceptions import BaseAPIException, InternalError
from ..core.logging import RequestLogger
from ..schemas.common import ErrorResponse


def error_response(
    status_code: int,
    message: str,
    error_code: str,
    details: dict = None
) -> JSONResponse:
    """Render an error in the common body shape."""
    body = ErrorResponse(
        error=message,
        error_code=error_code,
        details=details or {},
        timestamp=time.time()
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging requests and responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Generate request ID
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        # Log request
        start_time = time.time()
        RequestLogger.log_request(
            method=request.method,
            path=str(request.url.path),
            request_id=request_id,
            extra_data={
                "query_params": dict(request.query_params),
                "client_ip": request.client.host if request.client else None,
                "user_agent": request.headers.get("user-agent")
            }
        )

        # Process request
        response = await call_next(request)

        # Log response
        RequestLogger.log_response(
            method=request.method,
            path=str(request.url.path),
            status_code=response.status_code,
            response_time_ms=(time.time() - start_time) * 1000,
            request_id=request_id
        )

        # Add request ID to response headers
        response.headers["X-Request-ID"] = request_id

        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Turn exceptions raised by routes into JSON error responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)

        except BaseAPIException as e:
            return error_response(e.status_code, e.message, e.error_code, e.details)

        except Exception as e:
            RequestLogger.log_unhandled_error(
                method=request.method,
                path=str(request.url.path),
                request_id=getattr(request.state, "request_id", None)
            )
            error = InternalError()
            # Detail only leaves the server outside production
            details = {} if settings.is_production else {"message": str(e)}
            return error_response(error.status_code, error.message, error.error_code, details)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        return response


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unmatched routes and other framework-level HTTP errors."""
    message = "Route not found" if exc.status_code == 404 else str(exc.detail)
    return error_response(exc.status_code, message, "HTTP_EXCEPTION")


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Bodies FastAPI could not parse at all, such as invalid JSON."""
    return error_response(
        400,
        "Invalid request body",
        "VALIDATION_ERROR",
        {"errors": [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
            for err in exc.errors()
        ]}
    )
