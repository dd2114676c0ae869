from fastapi import APIRouter, Depends, Request

from app.models.user import User
from app.rbac.deps import require_perm
from app.rbac.perms import PERMISSION_ORDER, PERMS

router = APIRouter(prefix="/settings", tags=["settings"])

# settings screens are SUPER_ADMIN only
@router.get("")
def get_settings(
    request: Request,
    actor: User = Depends(require_perm("settings:manage")),
) -> dict:
    s = request.app.state.settings
    return {
        "appEnv": s.app_env,
        "slackConfigured": request.app.state.slack.is_configured(),
        "rateLimitEnabled": s.rate_limit_enabled,
        "permissionTiers": [p.value for p in PERMISSION_ORDER],
        "actions": {action: tier.value for action, tier in sorted(PERMS.items())},
    }
