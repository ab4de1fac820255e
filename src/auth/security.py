from collections.abc import Iterable

import jwt
from pydantic import ValidationError

from loggers import get_logger
from src.auth.claims import TokenClaims
from src.auth.enums import UserRole
from src.auth.exceptions import (
    ForbiddenRoleException,
    InvalidOrExpiredTokenException,
    TokenInvalidException,
    TokenSigningException,
)
from src.core.utils.datetime_utils import get_utc_now, to_timestamp

logger = get_logger(__name__)

ALGORITHM = "HS256"
REQUIRED_CLAIMS = ["exp", "iat"]


class JWTManager:
    """
    Issues and verifies HS256 session tokens with a single shared secret.

    The secret is set once at construction and never mutated, so one
    instance can be shared by every request handler without locking.
    """

    __slots__ = ("_secret_key",)

    def __init__(self, secret_key: str) -> None:
        self._secret_key = secret_key

    @property
    def secret_key(self) -> str:
        return self._secret_key

    def __repr__(self) -> str:
        return f"{type(self).__name__}(algorithm={ALGORITHM!r})"

    def issue(
        self,
        user_id: str,
        user_name: str,
        role: UserRole,
        iap: int | None = None,
        *,
        lifetime_seconds: int,
    ) -> str:
        """
        Create a signed token for the given identity.

        Args:
            user_id: Opaque identity key
            user_name: Display name
            role: Role embedded in the token
            iap: Optional auxiliary identifier
            lifetime_seconds: Added to the issue time to get `exp`; not validated,
                a non-positive value yields an already expired token

        Returns:
            str: Compact three-segment JWT

        Raises:
            TokenSigningException: If the claims cannot be built or encoded
        """
        iat = to_timestamp(get_utc_now())

        try:
            claims = TokenClaims.build(
                user_id, user_name, role, iap, iat, iat + lifetime_seconds
            )
            encoded_jwt = jwt.encode(claims.to_payload(), self._secret_key, ALGORITHM)
        except (ValidationError, jwt.PyJWTError, TypeError, ValueError) as exc:
            raise TokenSigningException(
                "Failed to sign token", additional_info={"user_id": user_id}
            ) from exc

        return str(encoded_jwt)

    def verify(self, token: str) -> TokenClaims:
        """
        Check the signature and expiry of a token and return its claims.

        Bad signature, malformed structure and expiry are all reported as
        InvalidOrExpiredTokenException; the library error is chained.
        `iat` must be present but is not compared with the clock.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[ALGORITHM],
                options={"require": REQUIRED_CLAIMS, "verify_iat": False},
            )
            return TokenClaims.from_payload(payload)
        except jwt.ExpiredSignatureError as exc:
            logger.debug("Token rejected: expired")
            raise InvalidOrExpiredTokenException() from exc
        except (jwt.PyJWTError, ValidationError) as exc:
            logger.debug("Token rejected: %s", type(exc).__name__)
            raise InvalidOrExpiredTokenException() from exc

    def has_role(self, token: str, allowed: Iterable[UserRole]) -> bool:
        # An invalid token and a role outside `allowed` both give False;
        # use `authorize` to tell them apart.
        try:
            claims = self.verify(token)
        except InvalidOrExpiredTokenException:
            return False
        return claims.role in set(allowed)

    def authorize(self, token: str, allowed: Iterable[UserRole]) -> TokenClaims:
        """
        Verify the token and require its role to be one of `allowed`.

        Raises:
            TokenInvalidException: The token is invalid or expired (cause kept on `.cause`)
            ForbiddenRoleException: The token is valid but the role is not allowed
        """
        try:
            claims = self.verify(token)
        except InvalidOrExpiredTokenException as exc:
            raise TokenInvalidException(exc) from exc

        if claims.role not in set(allowed):
            raise ForbiddenRoleException(
                additional_info={"user_id": claims.user_id, "role": claims.role}
            )

        return claims
