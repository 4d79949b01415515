from collections.abc import Awaitable, Callable
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import sentry_sdk
from sqlalchemy.exc import IntegrityError, OperationalError
from starlette.responses import Response

from loggers import get_logger

logger = get_logger(__name__)
timing_logger = get_logger("src.request.timing", plain_format=True)
UNEXPECTED_ERROR_DETAIL = "Unexpected error"
UNIQUE_VIOLATION_SQLSTATE = "23505"

FAST_REQUEST_SECONDS = 0.5
SLOW_REQUEST_SECONDS = 2.0


def classify_duration(seconds: float) -> str:
    if seconds < FAST_REQUEST_SECONDS:
        return "[FAST]"
    if seconds < SLOW_REQUEST_SECONDS:
        return "[MODERATE]"
    return "[SLOW]"


def register_middlewares(app: FastAPI) -> None:
    """Registers all custom middlewares in proper order, the last one outermost"""

    @app.middleware("http")
    async def request_timing_middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        process_time = time.perf_counter() - start_time

        category = classify_duration(process_time)
        log = timing_logger.info if category == "[FAST]" else timing_logger.warning
        log(
            "%s %s %s |%.3fs|%s",
            category,
            request.method,
            request.url.path,
            process_time,
            response.status_code,
        )
        return response

    @app.middleware("http")
    async def database_error_middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        try:
            return await call_next(request)
        except IntegrityError as exc:
            # two sign-ins racing for one login end up here
            if getattr(exc.orig, "sqlstate", None) == UNIQUE_VIOLATION_SQLSTATE:
                logger.info("Integrity error at %s: %s", request.url.path, exc.orig)
                return JSONResponse(
                    status_code=409,
                    content={
                        "error": "Instance already exists",
                        "message": "Login is already taken",
                    },
                )
            logger.error(
                "Integrity error at %s: %s", request.url.path, exc.orig, exc_info=True
            )
            sentry_sdk.capture_exception(exc)
            return JSONResponse(
                status_code=500, content={"detail": UNEXPECTED_ERROR_DETAIL}
            )
        except OperationalError as exc:
            logger.error(
                "Database connection error at %s: %s", request.url.path, exc.orig
            )
            sentry_sdk.capture_exception(exc)
            return JSONResponse(
                status_code=500,
                content={
                    "detail": "Database connection error. Please try again later."
                },
            )

    @app.middleware("http")
    async def unexpected_error_middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception("Unexpected error at %s: %s", request.url.path, exc)
            sentry_sdk.capture_exception(exc)
            return JSONResponse(
                status_code=500, content={"detail": UNEXPECTED_ERROR_DETAIL}
            )

    @app.middleware("http")
    async def security_headers_middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Content-Security-Policy", "frame-ancestors 'none'")
        # token responses must never be cached by intermediaries
        if request.url.path.startswith("/v1/identity"):
            response.headers.setdefault("Cache-Control", "no-store")
        return response
