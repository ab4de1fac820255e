from src.auth.enums import RolePermission, UserRole

ROLE_PERMISSIONS: dict[RolePermission, frozenset[UserRole]] = {
    # Single-role groups
    RolePermission.ADMIN: frozenset({UserRole.ADMIN}),
    RolePermission.MANAGER: frozenset({UserRole.MANAGER}),
    RolePermission.TEACHER: frozenset({UserRole.TEACHER}),
    RolePermission.STUDENT: frozenset({UserRole.STUDENT}),
    # Any bearer with a valid token
    RolePermission.ANY_AUTHENTICATED: frozenset(UserRole),
}


def allowed_roles(permission: RolePermission) -> frozenset[UserRole]:
    return ROLE_PERMISSIONS.get(permission, frozenset())
