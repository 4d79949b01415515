from fastapi import APIRouter, FastAPI
from fastapi.exceptions import RequestValidationError

from src.core.errors.exceptions import (
    CoreException,
    InfrastructureException,
    InstanceAlreadyExistsException,
    InstanceNotFoundException,
    InstanceProcessingException,
    UnauthorizedException,
)
from src.core.errors.handlers import (
    CoreExceptionHandler,
    InfrastructureExceptionHandler,
    InstanceAlreadyExistsExceptionHandler,
    InstanceNotFoundExceptionHandler,
    InstanceProcessingExceptionHandler,
    RequestValidationExceptionHandler,
    UnauthorizedExceptionHandler,
    as_exception_handler,
)
from src.identity import routers as identity_routers
from src.system import routers as system_routers

EXCEPTION_HANDLERS: list[tuple[type[Exception], object]] = [
    (InfrastructureException, InfrastructureExceptionHandler()),
    (RequestValidationError, RequestValidationExceptionHandler()),
    (InstanceNotFoundException, InstanceNotFoundExceptionHandler()),
    (InstanceAlreadyExistsException, InstanceAlreadyExistsExceptionHandler()),
    (InstanceProcessingException, InstanceProcessingExceptionHandler()),
    (UnauthorizedException, UnauthorizedExceptionHandler()),
    (CoreException, CoreExceptionHandler()),
]


def include_routers(app: FastAPI) -> None:
    """
    Mount the identity API under ``/v1/identity``, the protected probe under
    ``/v1`` and the unversioned system routes at the root.
    """
    v1_router = APIRouter()
    v1_router.include_router(
        identity_routers.router, prefix="/identity", tags=["Identity"]
    )
    v1_router.include_router(system_routers.protected_router, tags=["System"])

    app.include_router(v1_router, prefix="/v1")
    app.include_router(system_routers.router, tags=["System"])


def include_exceptions_handlers(app: FastAPI) -> None:
    """
    Register the class-based handlers for the project exception hierarchy.

    Starlette resolves handlers along the exception's MRO, so subclasses such
    as ``RefreshTokenExpired`` are rendered by their base class handler.
    """
    for exc_class, handler in EXCEPTION_HANDLERS:
        app.add_exception_handler(exc_class, as_exception_handler(handler))
