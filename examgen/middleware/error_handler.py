"""
Global error handlers
Every failure leaves the service as {"error": ..., "detail"?: ..., "raw"?: ...}
"""
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from examgen.core.constants import ErrorCodes, ErrorMessages, HTTPHeaders
from examgen.core.exceptions import AppException
from examgen.core.settings import settings

logger = logging.getLogger(__name__)

_HTTP_MESSAGES = {
    status.HTTP_404_NOT_FOUND: ErrorMessages.NOT_FOUND,
    status.HTTP_405_METHOD_NOT_ALLOWED: ErrorMessages.METHOD_NOT_ALLOWED,
}


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register the global exception handlers

    Args:
        app: FastAPI application
    """

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request,
        exc: AppException
    ) -> JSONResponse:
        """Pipeline failures (validation, configuration, model, output shape)"""
        trace_id = getattr(request.state, "trace_id", None)

        # 4xx warning, 5xx error
        log_level = logging.WARNING if exc.status_code < 500 else logging.ERROR
        logger.log(
            log_level,
            exc.code,
            extra={
                "trace_id": trace_id,
                "error": exc.message,
                "detail": exc.detail,
                "status_code": exc.status_code,
                "details": exc.details,
                "raw_excerpt": exc.raw,
                "path": str(request.url.path),
                "method": request.method,
            }
        )

        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict()
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException
    ) -> JSONResponse:
        """Routing errors (404/405) in the same error shape"""
        message = _HTTP_MESSAGES.get(exc.status_code) or str(exc.detail)
        headers = dict(getattr(exc, "headers", None) or {})
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            allowed = _allowed_methods(request)
            if allowed:
                headers[HTTPHeaders.ALLOW] = allowed
        return create_error_response(
            message,
            status_code=exc.status_code,
            headers=headers or None,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception
    ) -> JSONResponse:
        """Last resort; RequestContextMiddleware normally renders these first"""
        return unhandled_exception_response(request, exc)


def _allowed_methods(request: Request) -> Optional[str]:
    """Methods of every route registered for the request path, e.g. "OPTIONS, POST"."""
    path = request.url.path
    methods = set()
    for route in request.app.router.routes:
        regex = getattr(route, "path_regex", None)
        if regex is not None and regex.match(path):
            methods.update(getattr(route, "methods", None) or ())
    return ", ".join(sorted(methods)) or None


def unhandled_exception_response(request: Request, exc: Exception) -> JSONResponse:
    """
    Structured 500 for an unexpected exception

    The traceback goes to the log only; the body keeps the {error, detail} shape.
    """
    trace_id = getattr(request.state, "trace_id", None)

    logger.error(
        "unhandled_exception",
        extra={
            "trace_id": trace_id,
            "code": ErrorCodes.INTERNAL_ERROR,
            "error_type": type(exc).__name__,
            "error_message": str(exc),
            "path": str(request.url.path),
            "method": request.method,
        },
        exc_info=(type(exc), exc, exc.__traceback__)
    )

    if settings.DEBUG:
        detail = f"{type(exc).__name__}: {exc}"
    else:
        detail = ErrorMessages.INTERNAL_ERROR

    return create_error_response(
        ErrorMessages.GENERATION_FAILED,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=detail,
    )


def create_error_response(
    message: str,
    status_code: int = 500,
    detail: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None
) -> JSONResponse:
    """
    Build an error response

    Args:
        message: error message
        status_code: HTTP status code
        detail: optional detail line
        headers: extra response headers (e.g. Allow)

    Returns:
        JSONResponse
    """
    content: Dict[str, Any] = {"error": message}
    if detail:
        content["detail"] = detail

    return JSONResponse(
        status_code=status_code,
        content=content,
        headers=headers
    )
