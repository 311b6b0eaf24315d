"""API middleware.

A single middleware wraps every request: it assigns the correlation ID,
binds it to the structlog context, logs one access line per request and
turns exceptions that escaped the handlers into the standard error body.
Domain errors never reach it; they are rendered by the exception handler
registered in ``sunbeam.main``.
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


def internal_error_response(request_id: str | None) -> JSONResponse:
    """Build the body returned for unexpected failures."""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error_code": "INTERNAL_ERROR",
            "message": "An internal error occurred",
            "details": {},
            "request_id": request_id,
        },
    )


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Correlate, log and guard each request.

    The request ID is taken from the ``X-Request-ID`` header when the
    client sends one, otherwise generated. It is stored on
    ``request.state``, echoed in the response header and attached to
    every log line emitted while the request is handled.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Handle one request.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Handler response, or a 500 error response.
        """
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception("Unhandled exception", path=request.url.path, error=str(e))
            response = internal_error_response(request_id)

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            query=str(request.url.query) or None,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        structlog.contextvars.unbind_contextvars("request_id")
        return response


def setup_middleware(app: FastAPI) -> None:
    """Install the request middleware.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(RequestContextMiddleware)
