from datetime import datetime, timezone
from unittest.mock import patch
import uuid

from cerberus_platform.account_service.auth import extract_user_id, get_authorities, verify_password
from cerberus_platform.account_service.models import AccountEvent, UserStatus


def test_login_returns_usable_access_token(client, create_user):
    user = create_user()

    response = client.post("/auth/login", json={"email": "owner@example.com", "password": "Secret123!"})
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert extract_user_id(body["access_token"]) == uuid.UUID(user.id)
    assert get_authorities(body["access_token"]) == ["selfservice.read", "selfservice.write"]

    expires_at = datetime.fromisoformat(body["expires_at"].replace("Z", "+00:00"))
    assert expires_at > datetime.now(timezone.utc)

    me = client.get("/users", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["id"] == user.id


def test_login_email_is_case_insensitive(client, create_user):
    create_user()

    response = client.post("/auth/login", json={"email": "Owner@Example.com", "password": "Secret123!"})
    assert response.status_code == 200


def test_login_with_wrong_password_logs_failure(client, create_user, db_session):
    user = create_user()

    response = client.post("/auth/login", json={"email": "owner@example.com", "password": "wrongpassword"})
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"

    events = db_session.query(AccountEvent).filter(AccountEvent.user_id == user.id).all()
    assert [event.event_type for event in events] == ["login_failure"]


def test_login_with_unknown_email_is_unauthorized(client):
    response = client.post("/auth/login", json={"email": "nobody@example.com", "password": "whatever1"})

    assert response.status_code == 401


def test_login_success_logs_event(client, create_user, db_session):
    user = create_user()

    client.post(
        "/auth/login",
        json={"email": "owner@example.com", "password": "Secret123!"},
        headers={"user-agent": "pytest-agent"},
    )

    event = db_session.query(AccountEvent).filter(AccountEvent.user_id == user.id).one()
    assert event.event_type == "login_success"
    assert event.ip_address is not None
    assert event.user_agent == "pytest-agent"


def test_login_for_deactivated_account_is_forbidden(client, create_user):
    create_user(user_status=UserStatus.DEACTIVATED)

    response = client.post("/auth/login", json={"email": "owner@example.com", "password": "Secret123!"})
    assert response.status_code == 403


def test_login_missing_password_is_bad_request(client):
    response = client.post("/auth/login", json={"email": "owner@example.com"})

    assert response.status_code == 400


def test_login_with_unknown_email_still_verifies_a_password(client):
    target = "cerberus_platform.account_service.services.authentication_service.verify_password"
    with patch(target, wraps=verify_password) as verify:
        response = client.post("/auth/login", json={"email": "nobody@example.com", "password": "whatever1"})

    assert response.status_code == 401
    verify.assert_called_once()
