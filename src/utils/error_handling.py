"""
Centralized Error Handling and Logging System
Structured error logging with request tracing, plus the mapping from service
results to HTTP errors used by the route handlers.
"""

import json
import logging
import traceback
import uuid
from datetime import datetime
from typing import Any, Dict, Optional
from contextvars import ContextVar

from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from services.base_service import CONFLICT, NOT_FOUND, VALIDATION_ERROR, ServiceResult

# Context variables for request tracing
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

logger = logging.getLogger(__name__)

# ServiceResult.error_type -> HTTP status
ERROR_STATUS_CODES = {
    VALIDATION_ERROR: 400,
    NOT_FOUND: 404,
    CONFLICT: 409,
}

# Header and context keys whose values never reach the logs
SENSITIVE_FIELD_PATTERNS = (
    'password', 'token', 'key', 'secret', 'authorization',
    'auth', 'credential', 'cookie'
)
MAX_LOGGED_STRING = 5000

def is_sensitive_field(field_name: str) -> bool:
    field_lower = field_name.lower()
    return any(pattern in field_lower for pattern in SENSITIVE_FIELD_PATTERNS)

def redact(data: Any) -> Any:
    """Recursively mask sensitive keys and truncate long strings for logging"""
    if isinstance(data, dict):
        return {
            key: "***REDACTED***" if is_sensitive_field(str(key)) else redact(value)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [redact(item) for item in data]
    if isinstance(data, str) and len(data) > MAX_LOGGED_STRING:
        return data[:MAX_LOGGED_STRING] + "...[TRUNCATED]"
    return data

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
        """Log structured error with full context"""

        trace_id = request_id_var.get('') or str(uuid.uuid4())[:8]

        log_entry = {
            "timestamp": datetime.utcnow().isoformat(),
            "trace_id": trace_id,
            "error_type": error_type,
            "message": message,
            "level": logging.getLevelName(level)
        }

        if request:
            log_entry["request"] = {
                "method": request.method,
                "path": request.url.path,
                "query_params": dict(request.query_params),
                "headers": redact(dict(request.headers)),
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
            log_entry["context"] = redact(extra_context)

        logger.log(level, json.dumps(log_entry, indent=2, default=str))
        return trace_id

class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware that assigns a trace ID to every request"""

    async def dispatch(self, request: Request, call_next):
        trace_id = str(uuid.uuid4())[:8]
        request_id_var.set(trace_id)
        request.state.trace_id = trace_id

        response = await call_next(request)
        # Add trace ID to response headers for client-side debugging
        response.headers["X-Trace-ID"] = trace_id
        return response

def _response_content(error: str, message: Any, trace_id: str) -> Dict[str, Any]:
    return {
        "error": error,
        "message": message,
        "trace_id": trace_id,
        "timestamp": datetime.utcnow().isoformat(),
    }

# Global Exception Handlers
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions; 5xx are logged as errors, 4xx as warnings"""
    trace_id = StructuredLogger.log_error(
        f"http_{exc.status_code}",
        f"HTTP {exc.status_code}: {exc.detail}",
        request=request,
        exception=exc,
        extra_context={"status_code": exc.status_code},
        include_traceback=exc.status_code >= 500,
        level=logging.ERROR if exc.status_code >= 500 else logging.WARNING
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=_response_content(f"HTTP {exc.status_code}", exc.detail, trace_id)
    )

async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle FastAPI validation errors (HTTP 422)"""
    validation_details = []
    for error in exc.errors():
        validation_details.append({
            "field": " -> ".join(str(loc) for loc in error.get("loc", [])),
            "message": error.get("msg", "Unknown validation error"),
            "type": error.get("type", "unknown"),
        })

    trace_id = StructuredLogger.log_error(
        "validation_error_422",
        f"Request validation failed: {len(validation_details)} validation errors",
        request=request,
        extra_context={"validation_errors": validation_details},
        include_traceback=False,
        level=logging.WARNING
    )

    content = _response_content("Validation Error", "Request validation failed", trace_id)
    content["detail"] = validation_details
    content["error_count"] = len(validation_details)
    return JSONResponse(status_code=422, content=content)

async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all other exceptions without exposing internal details"""
    trace_id = StructuredLogger.log_error(
        "internal_server_error",
        f"Unhandled exception: {str(exc)}",
        request=request,
        exception=exc,
        include_traceback=True
    )
    return JSONResponse(
        status_code=500,
        content=_response_content("Internal Server Error", "An unexpected error occurred", trace_id)
    )

def setup_error_handling(app):
    """Setup centralized error handling for FastAPI app"""
    app.add_middleware(RequestContextMiddleware)

    # Most specific first
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Centralized error handling system initialized")

def raise_for_result(result: ServiceResult) -> None:
    """Turn a failed ServiceResult into the matching HTTPException"""
    if result.success:
        return
    status_code = ERROR_STATUS_CODES.get(result.error_type, 500)
    raise HTTPException(status_code=status_code, detail=result.error)
