"""
Centralized Error Handling and Logging
Maps the service error taxonomy to HTTP responses and logs failures with
structured context.
"""

import json
import logging
import time
import traceback
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Dict, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from employee_api.models.common import Envelope
from employee_api.utils.errors import EmployeeAPIError

# Context variable for request tracing
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("employee_api.access")


def new_trace_id() -> str:
    return str(uuid.uuid4())[:8]


class StructuredLogger:
    """Structured logging with consistent format and context"""

    @staticmethod
    def log_error(
        error_type: str,
        message: str,
        request: Optional[Request] = None,
        exception: Optional[BaseException] = None,
        extra_context: Optional[Dict] = None,
        include_traceback: bool = True
    ) -> str:
        """Log structured error with full context; returns the trace id"""
        trace_id = request_id_var.get('') or new_trace_id()

        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "trace_id": trace_id,
            "error_type": error_type,
            "message": message,
            "level": "ERROR"
        }

        if request:
            log_entry["request"] = {
                "method": request.method,
                "path": request.url.path,
                "query_params": dict(request.query_params),
                "client_ip": request.client.host if request.client else None,
                "user_agent": request.headers.get("user-agent", "unknown")
            }

        if exception:
            log_entry["exception"] = {
                "type": type(exception).__name__,
                "details": str(exception),
                "cause": repr(exception.__cause__) if exception.__cause__ else None
            }
            if include_traceback:
                log_entry["exception"]["traceback"] = "".join(
                    traceback.format_exception(type(exception), exception, exception.__traceback__)
                )

        if extra_context:
            log_entry["context"] = extra_context

        logger.error(json.dumps(log_entry, indent=2, default=str))
        return trace_id


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assigns a trace id per request and writes one access log line"""

    async def dispatch(self, request: Request, call_next):
        trace_id = new_trace_id()
        request_id_var.set(trace_id)
        request.state.trace_id = trace_id

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            # Unhandled errors still get a trace id and an access log line
            response = await general_exception_handler(request, e)
        elapsed_ms = (time.perf_counter() - started) * 1000

        response.headers["X-Trace-ID"] = trace_id
        access_logger.info(
            f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms [{trace_id}]"
        )
        return response


def error_response(status_code: int, message: str, data: Optional[str] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=Envelope.error(message, data).model_dump(mode="json")
    )


async def api_error_handler(request: Request, exc: EmployeeAPIError) -> JSONResponse:
    """Handle the service error taxonomy"""
    if exc.status_code >= 500:
        StructuredLogger.log_error(
            exc.error_type.lower(),
            exc.message,
            request=request,
            exception=exc
        )
    else:
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code} {exc.error_type}: {exc.message}")

    return error_response(exc.status_code, exc.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Path, query and body validation failures map to 400"""
    details = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error.get("loc", ()))
        details.append(f"{field}: {error.get('msg', 'invalid value')}")

    logger.warning(f"{request.method} {request.url.path} -> 400 validation: {'; '.join(details)}")
    return error_response(400, "Request validation failed", "; ".join(details) or None)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Router-level errors (404, 405) and explicit HTTPExceptions"""
    if exc.status_code >= 500:
        StructuredLogger.log_error(
            f"http_{exc.status_code}",
            f"HTTP {exc.status_code}: {exc.detail}",
            request=request,
            exception=exc,
            include_traceback=False
        )
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all other exceptions without exposing internals"""
    StructuredLogger.log_error(
        "internal_server_error",
        f"Unhandled exception: {exc}",
        request=request,
        exception=exc
    )
    return error_response(500, "An unexpected error occurred")


def setup_error_handling(app):
    """Register middleware and exception handlers on the app"""
    app.add_middleware(RequestContextMiddleware)

    app.add_exception_handler(EmployeeAPIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Centralized error handling initialized")
