from enum import StrEnum


class UserRole(StrEnum):
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    STUDENT = "STUDENT"
    TEACHER = "TEACHER"

    @classmethod
    def values(cls) -> set[str]:
        return {item.value for item in cls.__members__.values()}


class RolePermission(StrEnum):
    """Named role groups used to guard routes."""

    ADMIN = "admin"
    MANAGER = "manager"
    TEACHER = "teacher"
    STUDENT = "student"
    ANY_AUTHENTICATED = "any_authenticated"
