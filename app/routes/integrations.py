import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from app.config import settings
from app.errors import SecondaryDispatchError
from app.models.user import User
from app.ratelimit import rate_limit
from app.rbac.deps import require_perm
from app.schemas.integrations import SlackTestMessageIn, SlackTestMessageOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/integrations", tags=["integrations"])

@router.get("/slack/status")
def slack_status(
    request: Request,
    actor: User = Depends(require_perm("integrations:read")),
) -> dict:
    return request.app.state.slack.status()

@router.post("/slack/test-message", response_model=SlackTestMessageOut)
def slack_test_message(
    payload: SlackTestMessageIn,
    request: Request,
    actor: User = Depends(require_perm("integrations:slack_test")),
    _: None = Depends(
        rate_limit(
            "integrations:slack_test",
            limit_per_window=settings.rate_limit_slack_test_per_min,
            window_seconds=60,
        )
    ),
) -> SlackTestMessageOut:
    slack = request.app.state.slack
    if not slack.is_configured():
        raise HTTPException(status_code=400, detail="Slack integration is not configured")

    channel_id = payload.channel_id.strip()
    text = payload.text.strip()
    if not channel_id:
        raise HTTPException(status_code=400, detail="Channel is required")
    if not text:
        raise HTTPException(status_code=400, detail="Message text is required")

    # unlike notification DMs, an explicit test send reports its failure
    try:
        slack.post_message(channel_id, text)
    except SecondaryDispatchError as e:
        logger.warning("slack test message to %s failed: %s", channel_id, e)
        raise HTTPException(status_code=502, detail=str(e))

    return SlackTestMessageOut(sent=True)
