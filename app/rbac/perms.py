from app.models.enums import Permission

# lowest to highest
PERMISSION_ORDER: tuple[Permission, ...] = (
    Permission.USER,
    Permission.ADMIN,
    Permission.SUPER_ADMIN,
)

_RANK: dict[Permission, int] = {p: i for i, p in enumerate(PERMISSION_ORDER)}

PERMS: dict[str, Permission] = {
    "users:read": Permission.ADMIN,
    "users:update_permission": Permission.ADMIN,

    "projects:update_roles": Permission.ADMIN,

    "integrations:read": Permission.ADMIN,
    "integrations:slack_test": Permission.ADMIN,

    "settings:manage": Permission.SUPER_ADMIN,
}

def coerce_permission(value: object) -> Permission | None:
    """Map a stored/user-supplied value onto a tier, or None if it isn't one."""
    if isinstance(value, Permission):
        return value
    if isinstance(value, str):
        try:
            return Permission(value)
        except ValueError:
            return None
    return None

def is_at_least(actual: object, threshold: Permission) -> bool:
    # unknown values rank below USER, so they never pass
    p = coerce_permission(actual)
    if p is None:
        return False
    return _RANK[p] >= _RANK[threshold]

def can_assign_permission(actor: object, target: Permission) -> bool:
    # admins can hand out tiers up to their own, never above
    if not is_at_least(actor, Permission.ADMIN):
        return False
    return is_at_least(actor, target)
