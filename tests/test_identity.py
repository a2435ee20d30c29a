"""
Tests for the identity bridge: provider sign-in, account mapping and sessions
"""

from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import SQLAlchemyError

from fellowship.core import identity as identity_module
from fellowship.core.config import settings
from fellowship.core.exceptions import InvalidAssertion, ServerError
from fellowship.core.identity import FirebaseIdentityVerifier, IdentityClaims
from fellowship.core.security import create_session, encode_session_cookie, resolve_session
from fellowship.models import User, UserRole, UserSession

from tests.factories import auth_headers, make_user


def sign_in(client, token="good-token", provider="firebase"):
    return client.post(f"/api/auth/{provider}", headers={"Authorization": f"Bearer {token}"})


def test_first_sign_in_creates_unaffiliated_member(client, verifier, db):
    verifier.tokens["good-token"] = IdentityClaims(
        subject="fb-123", email="new@example.com", display_name="Ada Lovelace King", picture="https://img/ada.png"
    )

    response = sign_in(client)

    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "new@example.com"
    assert body["first_name"] == "Ada"
    assert body["last_name"] == "Lovelace King"
    assert body["role"] == "member"
    assert body["tenant_id"] is None
    assert settings.SESSION_COOKIE_NAME in response.cookies

    user = db.query(User).filter(User.external_id == "fb-123").one()
    assert user.profile_image_url == "https://img/ada.png"
    assert db.query(UserSession).filter(UserSession.user_id == user.id).count() == 1


def test_session_cookie_authenticates_follow_up_requests(client, verifier):
    verifier.tokens["good-token"] = IdentityClaims(subject="fb-1", email="a@example.com", display_name="A")
    sign_in(client)

    response = client.get("/api/auth/user")

    assert response.status_code == 200
    assert response.json()["email"] == "a@example.com"


def test_repeat_sign_in_updates_profile_but_keeps_role(client, verifier, db, grace):
    existing = make_user(db, "bob@example.com", role=UserRole.TENANT_ADMIN, tenant_id=grace.id)
    existing.external_id = "fb-bob"
    db.commit()
    verifier.tokens["good-token"] = IdentityClaims(subject="fb-bob", email="bob@example.com", display_name="Robert Builder")

    response = sign_in(client)

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == existing.id
    assert body["first_name"] == "Robert"
    assert body["role"] == "tenant_admin"
    assert body["tenant_id"] == grace.id


def test_account_found_by_email_keeps_its_id(client, verifier, db):
    legacy = User(email="legacy@example.com", role=UserRole.MEMBER)
    db.add(legacy)
    db.commit()
    verifier.tokens["good-token"] = IdentityClaims(subject="fb-new-subject", email="legacy@example.com", display_name="Leg Acy")

    response = sign_in(client)

    assert response.status_code == 200
    assert response.json()["id"] == legacy.id
    db.expire_all()
    assert db.query(User).count() == 1
    assert db.query(User).one().external_id == "fb-new-subject"


def test_invalid_assertion_is_rejected(client):
    response = sign_in(client, token="forged")

    assert response.status_code == 401
    assert response.json()["error"] == "invalid_assertion"


def test_missing_bearer_token_is_rejected(client):
    response = client.post("/api/auth/firebase")

    assert response.status_code == 401
    assert response.json()["error"] == "invalid_assertion"


def test_unknown_provider_is_not_found(client):
    response = sign_in(client, provider="myspace")

    assert response.status_code == 404


def test_current_user_requires_session(client):
    response = client.get("/api/auth/user")

    assert response.status_code == 401
    assert response.json() == {"error": "unauthenticated", "message": "Authentication required"}


def test_logout_destroys_session(client, db, bob):
    headers = auth_headers(db, bob)

    assert client.post("/api/auth/logout", headers=headers).status_code == 200

    assert client.get("/api/auth/user", headers=headers).status_code == 401
    assert db.query(UserSession).count() == 0


def test_deleted_account_loses_session(client, db, bob):
    headers = auth_headers(db, bob)
    db.delete(bob)
    db.commit()

    assert client.get("/api/auth/user", headers=headers).status_code == 401


def test_resolve_session_rejects_tampered_cookie(db, bob):
    cookie = create_session(db, bob, subject="fb-bob")

    assert resolve_session(db, cookie).id == bob.id
    assert resolve_session(db, cookie.rsplit(".", 1)[0] + ".bogus-signature") is None
    assert resolve_session(db, None) is None


def test_resolve_session_rejects_unknown_session_id(db, bob):
    cookie = encode_session_cookie("never-issued", datetime.utcnow() + timedelta(days=1))

    assert resolve_session(db, cookie) is None


def test_resolve_session_honours_server_side_expiry(db, bob):
    issued = datetime.utcnow()
    cookie = create_session(db, bob, subject="fb-bob", now=issued)

    later = issued + timedelta(days=settings.SESSION_TTL_DAYS, seconds=1)
    assert resolve_session(db, cookie, now=later) is None


def test_session_persistence_failure_raises_server_error(bob):
    broken_db = MagicMock()
    broken_db.commit.side_effect = SQLAlchemyError("database unavailable")

    with pytest.raises(ServerError):
        create_session(broken_db, bob, subject="fb-bob")

    broken_db.rollback.assert_called_once()


def test_firebase_verifier_maps_claims(monkeypatch):
    def fake_verify(token, request, audience=None):
        assert audience == "demo-project"
        return {"sub": "uid-1", "email": "x@example.com", "name": "Grace Hopper", "picture": "https://img/g.png"}

    monkeypatch.setattr(identity_module.id_token, "verify_firebase_token", fake_verify)

    claims = FirebaseIdentityVerifier(project_id="demo-project").verify("token")

    assert claims.subject == "uid-1"
    assert claims.first_name == "Grace"
    assert claims.last_name == "Hopper"


def test_firebase_verifier_rejects_bad_tokens(monkeypatch):
    def fake_verify(token, request, audience=None):
        raise ValueError("Token expired")

    monkeypatch.setattr(identity_module.id_token, "verify_firebase_token", fake_verify)

    with pytest.raises(InvalidAssertion):
        FirebaseIdentityVerifier(project_id="demo-project").verify("token")


def test_single_word_display_name_has_no_last_name():
    claims = IdentityClaims(subject="s", display_name="Cher")

    assert claims.first_name == "Cher"
    assert claims.last_name is None
