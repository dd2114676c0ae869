"""Secondary channel: forwards notification text as a Slack DM.

The notification service only needs ``is_configured`` and ``send``. ``send``
never raises; every outcome comes back as a ``DispatchResult`` so the caller
decides what to do with a failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from app.errors import SecondaryDispatchError

MAX_MESSAGE_LENGTH = 3000

@dataclass(frozen=True)
class DispatchResult:
    ok: bool
    error: str | None = None

    @classmethod
    def success(cls) -> "DispatchResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: str) -> "DispatchResult":
        return cls(ok=False, error=error)

class SecondaryChannel(Protocol):
    def is_configured(self) -> bool:  # pragma: no cover - Protocol
        ...

    def send(self, recipient_id: str, text: str) -> DispatchResult:  # pragma: no cover - Protocol
        ...

class SlackChannel:
    """Slack Web API client for DMs and the integration status page."""

    def __init__(self, token: str | None, timeout: int = 10, client: WebClient | None = None) -> None:
        self._token = token or None
        self._client = client
        if self._client is None and self._token:
            self._client = WebClient(token=self._token, timeout=timeout)

    def is_configured(self) -> bool:
        return self._client is not None

    def _require_client(self) -> WebClient:
        if self._client is None:
            raise SecondaryDispatchError("SLACK_BOT_TOKEN is not configured")
        return self._client

    def post_message(self, channel_id: str, text: str) -> None:
        """Post ``text`` to a channel or user id. Raises SecondaryDispatchError."""
        client = self._require_client()
        if len(text) > MAX_MESSAGE_LENGTH:
            raise SecondaryDispatchError(f"message is too long (max {MAX_MESSAGE_LENGTH} characters)")

        try:
            resp = client.chat_postMessage(channel=channel_id, text=text)
        except SlackApiError as e:
            raise SecondaryDispatchError(e.response.get("error") or "Slack postMessage failed") from e
        except Exception as e:  # transport errors: timeouts, DNS, TLS
            raise SecondaryDispatchError(f"{e.__class__.__name__}: {e}") from e

        if not resp.get("ok", False):
            raise SecondaryDispatchError(resp.get("error") or "Slack postMessage failed")

    def send(self, recipient_id: str, text: str) -> DispatchResult:
        try:
            self.post_message(recipient_id, text)
        except SecondaryDispatchError as e:
            return DispatchResult.failure(str(e))
        return DispatchResult.success()

    def auth_info(self) -> dict[str, str | None]:
        client = self._require_client()
        resp = client.auth_test()
        return {
            "teamId": resp.get("team_id"),
            "teamName": resp.get("team"),
            "botUserId": resp.get("bot_id"),
            "userId": resp.get("user_id"),
            "url": resp.get("url"),
        }

    def list_users(self) -> list[dict[str, Any]]:
        client = self._require_client()
        members: list[dict[str, Any]] = []
        cursor: str | None = None
        while True:
            resp = client.users_list(cursor=cursor, limit=200)
            members.extend(resp.get("members") or [])
            cursor = ((resp.get("response_metadata") or {}).get("next_cursor") or "").strip()
            if not cursor:
                break
        return [m for m in members if not m.get("deleted") and not m.get("is_bot")]

    def list_channels(self) -> list[dict[str, Any]]:
        client = self._require_client()
        channels: list[dict[str, Any]] = []
        cursor: str | None = None
        while True:
            resp = client.conversations_list(
                types="public_channel,private_channel",
                limit=200,
                exclude_archived=True,
                cursor=cursor,
            )
            channels.extend(resp.get("channels") or [])
            cursor = ((resp.get("response_metadata") or {}).get("next_cursor") or "").strip()
            if not cursor:
                break
        return sorted(
            (c for c in channels if not c.get("is_archived")),
            key=lambda c: c.get("name", "").lower(),
        )

    def status(self) -> dict[str, Any]:
        if not self.is_configured():
            return {
                "configured": False,
                "workspace": None,
                "checks": {
                    "auth": {"ok": False, "details": "SLACK_BOT_TOKEN is not configured"},
                    "usersRead": {"ok": False, "details": "Slack token not configured"},
                    "channelsRead": {"ok": False, "details": "Slack token not configured"},
                    "chatWrite": {"ok": False, "details": "Validate by sending a test message"},
                },
            }

        checks: dict[str, dict[str, Any]] = {}
        workspace = None

        try:
            workspace = self.auth_info()
            checks["auth"] = {"ok": True}
            checks["chatWrite"] = {
                "ok": True,
                "details": "Token is valid. Send a test message to confirm channel-level posting access.",
            }
        except Exception as e:  # noqa: BLE001
            checks["auth"] = {"ok": False, "details": _check_error(e, "auth.test failed")}
            checks["chatWrite"] = {"ok": False, "details": "Authentication failed; cannot validate message sending."}

        try:
            users = self.list_users()
            checks["usersRead"] = {"ok": True, "details": f"{len(users)} users available"}
        except Exception as e:  # noqa: BLE001
            checks["usersRead"] = {"ok": False, "details": _check_error(e, "users.list failed")}

        try:
            channels = self.list_channels()
            checks["channelsRead"] = {"ok": True, "details": f"{len(channels)} channels available"}
        except Exception as e:  # noqa: BLE001
            checks["channelsRead"] = {"ok": False, "details": _check_error(e, "conversations.list failed")}

        return {"configured": True, "workspace": workspace, "checks": checks}

def _check_error(e: Exception, fallback: str) -> str:
    # api errors carry a slack error code; transport errors (URLError, timeouts) only a message
    if isinstance(e, SlackApiError):
        return e.response.get("error") or fallback
    return str(e) or fallback
