from fastapi import Depends

from app.auth.deps import get_current_user
from app.errors import AuthorizationError
from app.models.enums import Permission
from app.models.user import User
from app.rbac.perms import PERMS, is_at_least

def require_permission(threshold: Permission):
    def _checker(user: User = Depends(get_current_user)) -> User:
        if not is_at_least(user.permission, threshold):
            raise AuthorizationError(threshold.value)
        return user

    return _checker

def require_perm(action: str):
    threshold = PERMS.get(action)
    if threshold is None:
        raise RuntimeError(f"unknown permission action: {action}")
    return require_permission(threshold)
