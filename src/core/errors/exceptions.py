from typing import Any


class CoreException(Exception):
    default_message: str | None = None

    def __init__(
        self, message: str | None = None, additional_info: dict[str, Any] | None = None
    ):
        self.message = message or self.default_message
        self.additional_info = additional_info
        super().__init__(self.message)


class InfrastructureException(CoreException):
    pass


class UnauthorizedException(CoreException):
    pass


class AccessForbiddenException(CoreException):
    pass
