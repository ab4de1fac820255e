from datetime import datetime

from src.auth.claims import TokenClaims
from src.auth.enums import RolePermission, UserRole
from src.core.schemas import Base
from src.core.utils.datetime_utils import from_timestamp


class TokenClaimsViewModel(Base):
    user_id: str
    user_name: str
    iap: int | None
    role: UserRole
    issued_at: datetime
    expires_at: datetime

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> "TokenClaimsViewModel":
        return cls(
            user_id=claims.user_id,
            user_name=claims.user_name,
            iap=claims.iap,
            role=claims.role,
            issued_at=from_timestamp(claims.iat),
            expires_at=from_timestamp(claims.exp),
        )


class RolesViewModel(Base):
    roles: list[UserRole]


class PermissionCheckViewModel(Base):
    permission: RolePermission
    granted: bool
