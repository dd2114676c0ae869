from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.redis_client import redis_ping

router = APIRouter(tags=["health"])

@router.get("/health")
def health() -> dict:
    return {"status": "ok"}

# readiness probe
@router.get("/ready")
def ready(request: Request):
    state = request.app.state
    checks: dict[str, bool] = {}
    errors: dict[str, str] = {}

    for name, fn in (("db", state.db.ping), ("redis", lambda: redis_ping(state.redis))):
        try:
            checks[name] = bool(fn())
        except Exception as e:
            checks[name] = False
            msg = str(e).strip()
            errors[name] = f"{e.__class__.__name__}{(': ' + msg) if msg else ''}"

    ok = all(checks.values())

    body: dict = {
        "status": "ok" if ok else "unready",
        "checks": checks,
        # informational only, an unconfigured slack never makes us unready
        "slackConfigured": state.slack.is_configured(),
    }
    if errors:
        body["errors"] = errors

    return JSONResponse(status_code=200 if ok else 503, content=body)
