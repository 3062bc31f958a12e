"""HTTP middleware: request context logging and application error rendering."""

import logging
import time
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from rehearsal.exceptions import AppError
from rehearsal.infrastructure.logging import clear_request_context, set_request_context

logger = logging.getLogger("http")


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        log_level = "warning" if exc.status_code < 500 else "error"
        getattr(logger, log_level)(
            f"Application error: {exc.message}",
            extra={
                "service": "http",
                "status": exc.code,
                "metadata": {
                    "details": exc.details,
                    "retryable": exc.retryable,
                    "path": request.url.path,
                },
            },
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            f"Unhandled exception: {exc}",
            extra={
                "service": "http",
                "error": type(exc).__name__,
                "metadata": {"path": request.url.path},
            },
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "details": {},
                    "retryable": False,
                }
            },
        )


def register_request_context(app: FastAPI) -> None:
    """Tag every request with a request id and log one line when it completes."""

    @app.middleware("http")
    async def _http_request_context(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or str(uuid4())
        set_request_context(request_id=request_id)
        start = time.time()
        status_code: int | None = None
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["x-request-id"] = request_id
            return response
        finally:
            logger.info(
                "HTTP request completed",
                extra={
                    "service": "http",
                    "duration_ms": int((time.time() - start) * 1000),
                    "metadata": {
                        "method": request.method,
                        "path": request.url.path,
                        "status_code": status_code,
                    },
                },
            )
            clear_request_context()
