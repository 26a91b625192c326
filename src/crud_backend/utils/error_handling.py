"""
Centralized error handling and structured error logging.
Every error response body is JSON with an "error" key; internal details
stay in the logs.
"""

import json
import logging
import traceback
import uuid
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union
from contextvars import ContextVar

from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from crud_backend.services.validation import FieldError

# Context variable for request tracing
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

logger = logging.getLogger(__name__)


class ErrorHandlingConfig:
    """Centralized configuration for error handling behavior"""

    SANITIZE_SENSITIVE_FIELDS = True
    SENSITIVE_FIELD_PATTERNS = [
        'password', 'token', 'key', 'secret', 'authorization',
        'auth', 'bearer', 'credential', 'cookie'
    ]
    LOG_HEADERS = True
    INCLUDE_TRACE_ID = True  # only on 5xx bodies; always in X-Trace-ID

    @classmethod
    def is_sensitive_field(cls, field_name: str) -> bool:
        """Check if a field contains sensitive data"""
        field_lower = field_name.lower()
        return any(pattern in field_lower for pattern in cls.SENSITIVE_FIELD_PATTERNS)

    @classmethod
    def sanitize_data(cls, data: Union[Dict, List, Any]) -> Any:
        """Recursively redact sensitive values before logging"""
        if not cls.SANITIZE_SENSITIVE_FIELDS:
            return data

        if isinstance(data, dict):
            return {
                key: "***REDACTED***" if cls.is_sensitive_field(key) else cls.sanitize_data(value)
                for key, value in data.items()
            }
        elif isinstance(data, list):
            return [cls.sanitize_data(item) for item in data]
        return data


class PayloadValidationError(Exception):
    """A request body failed validation; always answered with 400"""

    def __init__(self, errors: List[FieldError]):
        self.errors = errors
        super().__init__(f"{len(errors)} validation error(s)")


class StructuredLogger:
    """Structured logging with consistent format and context"""

    @staticmethod
    def log_error(
        error_type: str,
        message: str,
        request: Optional[Request] = None,
        exception: Optional[Exception] = None,
        extra_context: Optional[Dict] = None,
        include_traceback: bool = True,
        level: int = logging.ERROR
    ) -> str:
        """Log structured error with request context, returns the trace id"""
        trace_id = request_id_var.get('') or str(uuid.uuid4())[:8]

        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "trace_id": trace_id,
            "error_type": error_type,
            "message": message,
            "level": logging.getLevelName(level)
        }

        if request:
            headers = dict(request.headers)
            log_entry["request"] = {
                "method": request.method,
                "path": request.url.path,
                "query_params": dict(request.query_params),
                "headers": ErrorHandlingConfig.sanitize_data(headers) if ErrorHandlingConfig.LOG_HEADERS else {},
                "client_ip": request.client.host if request.client else None,
            }

        if exception:
            log_entry["exception"] = {
                "type": type(exception).__name__,
                "details": str(exception),
            }
            if include_traceback:
                log_entry["exception"]["traceback"] = "".join(
                    traceback.format_exception(type(exception), exception, exception.__traceback__)
                )

        if extra_context:
            log_entry["context"] = ErrorHandlingConfig.sanitize_data(extra_context)

        logger.log(level, json.dumps(log_entry, indent=2, default=str))
        return trace_id


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware that assigns a trace id to every request"""

    async def dispatch(self, request: Request, call_next):
        trace_id = str(uuid.uuid4())[:8]
        request_id_var.set(trace_id)
        request.state.trace_id = trace_id

        response = await call_next(request)
        # Add trace ID to response headers for client-side debugging
        response.headers["X-Trace-ID"] = trace_id
        return response


def _validation_response(errors: List[Dict[str, Any]]) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Validation failed", "detail": errors}
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions raised by routes and by the router itself"""
    detail = exc.detail
    # The router raises the plain Starlette exception for paths nothing serves
    if exc.status_code == 404 and not isinstance(exc, HTTPException):
        detail = "Route not found"

    if exc.status_code >= 500:
        StructuredLogger.log_error(
            f"http_{exc.status_code}",
            f"HTTP {exc.status_code}: {exc.detail}",
            request=request,
            exception=exc,
            include_traceback=False
        )
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {detail}")

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": detail},
        headers=getattr(exc, "headers", None)
    )


async def payload_validation_exception_handler(request: Request, exc: PayloadValidationError) -> JSONResponse:
    """Handle bodies rejected by the service-level validation"""
    details = [asdict(error) for error in exc.errors]
    logger.info(f"{request.method} {request.url.path} -> 400: {[d['field'] for d in details]}")
    return _validation_response(details)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle FastAPI request parsing errors (bad JSON and the like) as 400"""
    details = []
    for error in exc.errors():
        location = [str(loc) for loc in error.get("loc", []) if loc != "body"]
        details.append(asdict(FieldError(
            field=".".join(location) or "body",
            message=error.get("msg", "Unknown validation error"),
            type=error.get("type", "unknown"),
        )))

    StructuredLogger.log_error(
        "request_validation_error",
        f"Request validation failed: {len(details)} validation errors",
        request=request,
        extra_context={"validation_errors": details},
        include_traceback=False,
        level=logging.WARNING
    )
    return _validation_response(details)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all other exceptions without exposing internal details"""
    trace_id = StructuredLogger.log_error(
        "internal_server_error",
        f"Unhandled exception: {str(exc)}",
        request=request,
        exception=exc,
        include_traceback=True
    )

    response_content = {"error": "Internal Server Error"}
    if ErrorHandlingConfig.INCLUDE_TRACE_ID:
        response_content["trace_id"] = trace_id

    return JSONResponse(status_code=500, content=response_content)


def setup_error_handling(app):
    """Install the request-context middleware and exception handlers"""
    app.add_middleware(RequestContextMiddleware)

    app.add_exception_handler(PayloadValidationError, payload_validation_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Centralized error handling initialized")
