from sqlalchemy.orm import Session

from app.models.enums import Permission
from conftest import auth, make_user

def test_test_message_requires_admin(client, db_session: Session):
    user = make_user(db_session)
    r = client.post("/integrations/slack/test-message", headers=auth(user), json={"channelId": "C1", "text": "hi"})
    assert r.status_code == 403

def test_test_message_sent(client, db_session: Session, fake_slack):
    admin = make_user(db_session, "admin", Permission.ADMIN)
    r = client.post(
        "/integrations/slack/test-message",
        headers=auth(admin),
        json={"channelId": " C1 ", "text": " hello "},
    )
    assert r.status_code == 200, r.text
    assert r.json() == {"sent": True}
    assert fake_slack.sent == [("C1", "hello")]

def test_test_message_validation(client, db_session: Session, fake_slack):
    admin = make_user(db_session, "admin", Permission.ADMIN)

    r = client.post("/integrations/slack/test-message", headers=auth(admin), json={"channelId": "  ", "text": "hi"})
    assert r.status_code == 400

    r = client.post("/integrations/slack/test-message", headers=auth(admin), json={"channelId": "C1", "text": "x" * 3001})
    assert r.status_code == 422

    fake_slack.configured = False
    r = client.post("/integrations/slack/test-message", headers=auth(admin), json={"channelId": "C1", "text": "hi"})
    assert r.status_code == 400
    assert fake_slack.sent == []
