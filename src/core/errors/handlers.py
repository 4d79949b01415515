from collections.abc import Awaitable, Callable
import logging
from typing import Any, cast

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import sentry_sdk
from starlette.responses import Response

from loggers import get_logger
from src.core.errors.exceptions import CoreException

response_logger = get_logger("app.request.error_response", plain_format=True)

HandlerCallable = Callable[[Request, Exception], Awaitable[Response]]

SENSITIVE_KEYS = {
    "authorization",
    "token",
    "refresh_token",
    "access_token",
    "password",
    "secret",
}
MAX_LOG_MESSAGE_LENGTH = 500


def as_exception_handler(handler: Any) -> HandlerCallable:
    """
    Convert a handler class instance to a compatible exception handler callable.
    This helps mypy understand the correct typing for FastAPI exception handlers.
    """
    return cast(HandlerCallable, handler.__call__)


def format_error_response(error_type: str, message: str | None) -> dict[str, Any]:
    """
    Build the ``{error, message}`` body every handled error is rendered with.
    """
    return {
        "error": error_type,
        "message": message or "No additional details available",
    }


def _mask(key: str, value: Any) -> str:
    return "***" if key.lower() in SENSITIVE_KEYS else repr(value)


def format_log_message(
    request: Request,
    error_type: str,
    message: str | None,
    additional_info: dict[str, Any] | None = None,
    include_request_path: bool = False,
) -> str:
    """
    Format error message for logging

    Args:
        request: FastAPI Request object
        error_type: Type of error
        message: Error message
        additional_info: Context for logs only; values under sensitive keys are masked
        include_request_path: Include request method and path in the log message

    Returns:
        Single-line log message, prefixed with the X-Request-ID header when present
    """
    msg = " ".join((message or "No additional details available").split())
    if len(msg) > MAX_LOG_MESSAGE_LENGTH:
        msg = msg[: MAX_LOG_MESSAGE_LENGTH - 3] + "..."

    label = (error_type or "").strip()
    label = label[:1].upper() + label[1:] if label else "Error"

    request_id = request.headers.get("x-request-id")
    parts = [f"[{request_id}] " if request_id else "", f"[{label}] "]
    if include_request_path:
        parts.append(f"{request.method} {request.url.path} | ")
    parts.append(msg)

    if additional_info:
        context = ", ".join(
            f"{key}={_mask(key, additional_info[key])}"
            for key in sorted(additional_info)
        )
        parts.append(f" | Additional info: {context}")

    return "".join(parts)


class CoreExceptionHandler:
    """
    Renders a ``CoreException`` as ``{error, message}`` with a fixed status.

    Subclasses only pick the status code, the error label and the log level.
    """

    status_code = 400
    error_type = "Bad request"
    log_level = logging.INFO
    headers: dict[str, str] | None = None

    def report(self, exc: CoreException) -> None:
        """Hook for forwarding the error somewhere besides the log."""

    async def __call__(self, request: Request, exc: CoreException) -> JSONResponse:
        response_logger.log(
            self.log_level,
            format_log_message(
                request, self.error_type, exc.message, exc.additional_info
            ),
        )
        self.report(exc)
        return JSONResponse(
            status_code=self.status_code,
            content=format_error_response(self.error_type, exc.message),
            headers=self.headers,
        )


class InfrastructureExceptionHandler(CoreExceptionHandler):
    status_code = 500
    error_type = "Infrastructure error"
    log_level = logging.ERROR

    def report(self, exc: CoreException) -> None:
        sentry_sdk.capture_exception(exc)


class InstanceNotFoundExceptionHandler(CoreExceptionHandler):
    status_code = 404
    error_type = "Instance not found"


class InstanceAlreadyExistsExceptionHandler(CoreExceptionHandler):
    status_code = 409
    error_type = "Instance already exists"


class InstanceProcessingExceptionHandler(CoreExceptionHandler):
    status_code = 400
    error_type = "Instance processing error"


class UnauthorizedExceptionHandler(CoreExceptionHandler):
    status_code = 401
    error_type = "Unauthorized"
    log_level = logging.WARNING
    headers = {"WWW-Authenticate": "Bearer"}


class RequestValidationExceptionHandler:
    async def __call__(
        self, request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # drop submitted values, they may carry passwords or tokens
        safe_detail = jsonable_encoder(
            [{k: v for k, v in error.items() if k != "input"} for error in exc.errors()]
        )
        response_logger.debug(
            format_log_message(
                request,
                "Request validation error",
                str(safe_detail),
                include_request_path=True,
            )
        )
        return JSONResponse(status_code=422, content={"detail": safe_detail})
