from fastapi import APIRouter

from src.auth.dependencies import BearerToken, CurrentClaims, TokenManager
from src.auth.enums import RolePermission, UserRole
from src.auth.permissions import allowed_roles
from src.auth.schemas import (
    PermissionCheckViewModel,
    RolesViewModel,
    TokenClaimsViewModel,
)

router = APIRouter()


@router.get("/me", response_model=TokenClaimsViewModel)
async def get_token_claims(claims: CurrentClaims) -> TokenClaimsViewModel:
    """
    Returns the claims carried by the caller's bearer token.
    """
    return TokenClaimsViewModel.from_claims(claims)


@router.get("/roles", response_model=RolesViewModel)
async def list_roles() -> RolesViewModel:
    """Lists the roles a token can carry."""
    return RolesViewModel(roles=list(UserRole))


@router.get("/permissions/{permission}", response_model=PermissionCheckViewModel)
async def check_permission(
    permission: RolePermission,
    token: BearerToken,
    manager: TokenManager,
) -> PermissionCheckViewModel:
    # An invalid token is reported as not granted rather than 401
    granted = manager.has_role(token, allowed_roles(permission))
    return PermissionCheckViewModel(permission=permission, granted=granted)
