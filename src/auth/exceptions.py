"""
Error kinds raised by the token manager and the bearer-header dependencies.

Each kind derives from one of the core exceptions so the registered
handlers map it to an HTTP status: unauthorized kinds to 401, the role
mismatch to 403 and the signing failure to 500.
"""

from typing import Any

from src.core.errors.exceptions import (
    AccessForbiddenException,
    InfrastructureException,
    UnauthorizedException,
)


class TokenSigningException(InfrastructureException):
    default_message = "Failed to sign token"


class InvalidOrExpiredTokenException(UnauthorizedException):
    default_message = "Invalid or expired token"


class TokenInvalidException(UnauthorizedException):
    """Raised by `authorize` when the token itself does not verify."""

    default_message = "Invalid or expired token"

    def __init__(
        self,
        cause: InvalidOrExpiredTokenException,
        message: str | None = None,
        additional_info: dict[str, Any] | None = None,
    ):
        super().__init__(message or cause.message, additional_info)
        self.cause = cause


class ForbiddenRoleException(AccessForbiddenException):
    default_message = "Insufficient permissions"


class MissingTokenException(UnauthorizedException):
    default_message = "Missing authorization token"


class InvalidAuthHeaderException(UnauthorizedException):
    default_message = "Invalid authorization header"
