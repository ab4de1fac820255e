from collections.abc import Callable
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Security
from fastapi.security.api_key import APIKeyHeader

from src.auth.claims import TokenClaims
from src.auth.enums import RolePermission, UserRole
from src.auth.exceptions import InvalidAuthHeaderException, MissingTokenException
from src.auth.permissions import allowed_roles
from src.auth.security import JWTManager
from src.main.config import get_settings

BEARER_PREFIX = "bearer"

bearer_token_header = APIKeyHeader(
    name="Authorization", scheme_name="bearer-token", auto_error=False
)


@lru_cache
def get_jwt_manager() -> JWTManager:
    """Process-wide token manager built from the configured secret."""
    return JWTManager(get_settings().jwt.JWT_SECRET_KEY)


def extract_bearer_token(
    authorization: str | None = Security(bearer_token_header),
) -> str:
    """
    Extract the token from an `Authorization: Bearer <token>` header.

    Raises:
        MissingTokenException: If the header is absent or blank
        InvalidAuthHeaderException: If the header is not a bearer credential
    """
    if authorization is None or not authorization.strip():
        raise MissingTokenException()

    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != BEARER_PREFIX or not token or " " in token:
        raise InvalidAuthHeaderException()

    return token


BearerToken = Annotated[str, Depends(extract_bearer_token)]
TokenManager = Annotated[JWTManager, Depends(get_jwt_manager)]


def get_current_claims(token: BearerToken, manager: TokenManager) -> TokenClaims:
    """Claims of any authenticated bearer, regardless of role."""
    return manager.authorize(token, UserRole)


def require_roles(
    *roles: UserRole,
) -> Callable[[BearerToken, TokenManager], TokenClaims]:
    allowed = frozenset(roles)

    def checker(token: BearerToken, manager: TokenManager) -> TokenClaims:
        return manager.authorize(token, allowed)

    return checker


def require_permission(
    permission: RolePermission,
) -> Callable[[BearerToken, TokenManager], TokenClaims]:
    return require_roles(*allowed_roles(permission))


CurrentClaims = Annotated[TokenClaims, Depends(get_current_claims)]
AdminClaims = Annotated[TokenClaims, Depends(require_permission(RolePermission.ADMIN))]
ManagerClaims = Annotated[
    TokenClaims, Depends(require_permission(RolePermission.MANAGER))
]
TeacherClaims = Annotated[
    TokenClaims, Depends(require_permission(RolePermission.TEACHER))
]
StudentClaims = Annotated[
    TokenClaims, Depends(require_permission(RolePermission.STUDENT))
]
