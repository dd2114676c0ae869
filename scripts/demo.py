from __future__ import annotations

import os

import requests
from rich import print
from sqlalchemy import select

from app.auth.tokens import issue_access_token
from app.config import settings
from app.db import Database
from app.models.user import User
from scripts.seed import seed

BASE = os.getenv("API_BASE_URL", "http://127.0.0.1:8000")

def _headers(jwt: str) -> dict[str, str]:
    return {"content-type": "application/json", "authorization": f"bearer {jwt}"}

def post(path: str, *, jwt: str, json: dict | None = None) -> requests.Response:
    return requests.post(f"{BASE}{path}", headers=_headers(jwt), json=json, timeout=10)

def get(path: str, *, jwt: str) -> requests.Response:
    return requests.get(f"{BASE}{path}", headers=_headers(jwt), timeout=10)

def token_for(database: Database, email: str) -> str:
    with database.session() as db:
        u = db.scalar(select(User).where(User.email == email))
        if u is None:
            raise RuntimeError(f"user not found: {email}")
        return issue_access_token(u.id)

def main() -> None:
    database = Database(settings.database_url)
    try:
        r = seed(database)
        root_jwt = token_for(database, r.super_admin_email)
        admin_jwt = token_for(database, r.admin_email)
        po_jwt = token_for(database, r.po_email)
    finally:
        database.dispose()

    print("[bold]approvers[/bold]")
    resp = get(f"/projects/{r.project_id}/approvers", jwt=admin_jwt)
    resp.raise_for_status()
    print(resp.json())

    print("[bold]review request[/bold]")
    resp = post(f"/projects/{r.project_id}/review-requests", jwt=admin_jwt, json={"note": "demo run"})
    resp.raise_for_status()
    print(resp.json())

    print("[bold]po inbox[/bold]")
    resp = get("/notifications?unreadOnly=true", jwt=po_jwt)
    resp.raise_for_status()
    print(resp.json())

    resp = post("/notifications/mark-all-read", jwt=po_jwt)
    resp.raise_for_status()
    print(resp.json())
    resp = post("/notifications/mark-all-read", jwt=po_jwt)
    print(f"repeat: {resp.json()}")

    print("[bold]settings (admin, expect 403)[/bold]")
    print(get("/settings", jwt=admin_jwt).status_code)
    print("[bold]settings (super admin)[/bold]")
    print(get("/settings", jwt=root_jwt).json())

if __name__ == "__main__":
    main()
