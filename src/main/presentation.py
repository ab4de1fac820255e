from fastapi import APIRouter, FastAPI
from fastapi.exceptions import RequestValidationError

from src.auth import routers as auth_routers
from src.core.errors.exceptions import (
    AccessForbiddenException,
    CoreException,
    InfrastructureException,
    UnauthorizedException,
)
from src.core.errors.handlers import (
    AccessForbiddenExceptionHandler,
    CoreExceptionHandler,
    InfrastructureExceptionHandler,
    RequestValidationExceptionHandler,
    UnauthorizedExceptionHandler,
    as_exception_handler,
)
from src.healthcheck import routers as healthcheck_routers


def include_routers(app: FastAPI) -> None:
    """
    Includes API routers into the FastAPI application.

    Parameters:
        app (FastAPI): The FastAPI application instance to which routers will
        be added.
    """
    v1_router = APIRouter()
    v1_router.include_router(auth_routers.router, prefix="/auth", tags=["Auth"])

    app.include_router(v1_router, prefix="/v1")
    app.include_router(healthcheck_routers.router, tags=["System"])


def include_exceptions_handlers(app: FastAPI) -> None:
    """
    Registers exception handlers for the custom exceptions. Subclasses (the
    token error kinds) resolve to the handler of their nearest registered base.

    Parameters:
        app (FastAPI): The FastAPI application instance to which the exception handlers
        will be added.
    """
    app.add_exception_handler(
        InfrastructureException, as_exception_handler(InfrastructureExceptionHandler())
    )
    app.add_exception_handler(
        RequestValidationError,
        as_exception_handler(RequestValidationExceptionHandler()),
    )
    app.add_exception_handler(
        CoreException,
        as_exception_handler(CoreExceptionHandler()),
    )
    app.add_exception_handler(
        UnauthorizedException, as_exception_handler(UnauthorizedExceptionHandler())
    )
    app.add_exception_handler(
        AccessForbiddenException,
        as_exception_handler(AccessForbiddenExceptionHandler()),
    )
