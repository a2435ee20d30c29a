"""
Tests for invitation issuance, rate limiting, expiry and acceptance
"""

from datetime import datetime, timedelta

import pytest

from fellowship import crud
from fellowship.core.exceptions import RateLimited
from fellowship.core.rate_limit import InvitationRateLimiter
from fellowship.models import Invitation, InvitationStatus, UserRole
from fellowship.services.invitation_service import generate_invitation_token

from tests.conftest import FakeClock
from tests.factories import auth_headers, expire_invitation, make_user


def invite(client, headers, email, role="member"):
    return client.post("/api/invitations", json={"email": email, "role": role}, headers=headers)


@pytest.fixture
def admin_headers(db, grace_admin):
    return auth_headers(db, grace_admin)


def test_issue_invitation(client, db, grace, admin_headers, mailer):
    before = datetime.utcnow()
    response = invite(client, admin_headers, "bob@example.com")

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "pending"
    assert body["tenant_id"] == grace.id
    assert body["role"] == "member"
    assert "token" not in body

    invitation = db.query(Invitation).one()
    assert len(invitation.token) >= 43
    assert before + timedelta(days=7) <= invitation.expires_at <= datetime.utcnow() + timedelta(days=7)
    assert mailer.invitations[0]["email"] == "bob@example.com"
    assert mailer.invitations[0]["token"] == invitation.token
    assert mailer.invitations[0]["tenant_name"] == "Grace Church"


def test_tokens_are_unguessable():
    tokens = {generate_invitation_token() for _ in range(100)}

    assert len(tokens) == 100
    assert all(len(token) >= 43 for token in tokens)


def test_members_cannot_invite(client, db, bob):
    response = invite(client, auth_headers(db, bob), "friend@example.com")

    assert response.status_code == 403


def test_existing_member_cannot_be_invited(client, db, bob, admin_headers):
    response = invite(client, admin_headers, "bob@example.com")

    assert response.status_code == 400
    assert response.json()["error"] == "already_member"


def test_member_of_another_organization_can_be_invited(client, db, hope_member, admin_headers):
    assert invite(client, admin_headers, hope_member.email).status_code == 201


def test_duplicate_pending_invitation_is_rejected(client, admin_headers):
    invite(client, admin_headers, "bob@example.com")

    response = invite(client, admin_headers, "bob@example.com")

    assert response.status_code == 400
    assert response.json()["error"] == "duplicate_invitation"


def test_lapsed_invitation_does_not_block_a_new_one(client, db, admin_headers):
    first = invite(client, admin_headers, "bob@example.com").json()
    expire_invitation(db, first["id"])

    assert invite(client, admin_headers, "bob@example.com").status_code == 201


def test_accept_invitation_end_to_end(client, db, grace, admin_headers):
    invite(client, admin_headers, "bob@example.com")
    token = db.query(Invitation).one().token
    bob = make_user(db, "bob@example.com")
    bob_headers = auth_headers(db, bob)

    response = client.post(f"/api/invitations/accept/{token}", headers=bob_headers)

    assert response.status_code == 200
    assert response.json() == {"tenant_id": grace.id}
    db.expire_all()
    assert bob.role == UserRole.MEMBER
    assert bob.tenant_id == grace.id
    assert db.query(Invitation).one().status == InvitationStatus.ACCEPTED

    again = client.post(f"/api/invitations/accept/{token}", headers=bob_headers)
    assert again.status_code == 400
    assert again.json()["error"] == "already_used"
    db.expire_all()
    assert bob.tenant_id == grace.id


def test_second_accept_leaves_account_untouched(client, db, grace, hope, admin_headers):
    invite(client, admin_headers, "bob@example.com", role="tenant_admin")
    token = db.query(Invitation).one().token
    bob = make_user(db, "bob@example.com")
    headers = auth_headers(db, bob)
    client.post(f"/api/invitations/accept/{token}", headers=headers)

    # Move bob elsewhere, then replay the consumed token
    db.expire_all()
    bob.role = UserRole.MEMBER
    bob.tenant_id = hope.id
    db.commit()

    assert client.post(f"/api/invitations/accept/{token}", headers=headers).status_code == 400
    db.expire_all()
    assert bob.tenant_id == hope.id
    assert bob.role == UserRole.MEMBER


def test_accept_with_different_email_changes_nothing(client, db, admin_headers):
    invite(client, admin_headers, "bob@example.com")
    token = db.query(Invitation).one().token
    mallory = make_user(db, "mallory@example.com")

    response = client.post(f"/api/invitations/accept/{token}", headers=auth_headers(db, mallory))

    assert response.status_code == 403
    assert response.json()["error"] == "email_mismatch"
    db.expire_all()
    assert mallory.tenant_id is None
    assert mallory.role == UserRole.MEMBER
    assert db.query(Invitation).one().status == InvitationStatus.PENDING


def test_email_comparison_is_exact(client, db, admin_headers):
    invite(client, admin_headers, "bob@example.com")
    token = db.query(Invitation).one().token
    shouty = make_user(db, "Bob@example.com")

    response = client.post(f"/api/invitations/accept/{token}", headers=auth_headers(db, shouty))

    assert response.status_code == 403


def test_invited_address_is_kept_as_typed(client, db, grace, admin_headers, mailer):
    response = invite(client, admin_headers, "Bob@Example.COM")

    assert response.status_code == 201
    assert response.json()["email"] == "Bob@Example.COM"
    invitation = db.query(Invitation).one()
    assert invitation.email == "Bob@Example.COM"
    assert mailer.invitations[0]["email"] == "Bob@Example.COM"

    account = make_user(db, "Bob@Example.COM")
    accepted = client.post(f"/api/invitations/accept/{invitation.token}", headers=auth_headers(db, account))

    assert accepted.status_code == 200
    db.expire_all()
    assert account.tenant_id == grace.id


def test_existing_member_lookup_uses_address_as_typed(client, db, grace, admin_headers):
    make_user(db, "Carol@Example.COM", tenant_id=grace.id)

    response = invite(client, admin_headers, "Carol@Example.COM")

    assert response.status_code == 400
    assert response.json()["error"] == "already_member"


def test_malformed_address_is_a_validation_error(client, admin_headers):
    response = invite(client, admin_headers, "not-an-address")

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_expired_invitation_is_marked_on_accept(client, db, admin_headers):
    invitation_id = invite(client, admin_headers, "bob@example.com").json()["id"]
    expire_invitation(db, invitation_id)
    token = db.query(Invitation).one().token
    bob = make_user(db, "bob@example.com")

    response = client.post(f"/api/invitations/accept/{token}", headers=auth_headers(db, bob))

    assert response.status_code == 400
    assert response.json()["error"] == "expired"
    db.expire_all()
    assert db.query(Invitation).one().status == InvitationStatus.EXPIRED
    assert bob.tenant_id is None


def test_unknown_token_is_not_found(client, db, bob):
    assert client.post("/api/invitations/accept/nope", headers=auth_headers(db, bob)).status_code == 404


def test_accept_requires_session(client):
    assert client.post("/api/invitations/accept/whatever").status_code == 401


def test_listing_reports_lapsed_invitations_as_expired(client, db, admin_headers):
    lapsed = invite(client, admin_headers, "old@example.com").json()
    invite(client, admin_headers, "new@example.com")
    expire_invitation(db, lapsed["id"])

    listing = client.get("/api/invitations", headers=admin_headers).json()

    statuses = {item["email"]: item["status"] for item in listing}
    assert statuses == {"old@example.com": "expired", "new@example.com": "pending"}
    # Computed on read; the stored row is untouched until someone uses it
    db.expire_all()
    assert db.query(Invitation).filter(Invitation.id == lapsed["id"]).one().status == InvitationStatus.PENDING


def test_preview_and_decline(client, db, admin_headers):
    invite(client, admin_headers, "bob@example.com")
    token = db.query(Invitation).one().token
    bob = make_user(db, "bob@example.com")
    headers = auth_headers(db, bob)

    preview = client.get(f"/api/invitations/token/{token}", headers=headers)
    assert preview.status_code == 200
    assert preview.json()["tenant_name"] == "Grace Church"
    assert preview.json()["status"] == "pending"

    assert client.post(f"/api/invitations/decline/{token}", headers=headers).status_code == 200
    db.expire_all()
    assert db.query(Invitation).one().status == InvitationStatus.DECLINED
    assert client.post(f"/api/invitations/accept/{token}", headers=headers).status_code == 400


def test_cancel_is_scoped_to_own_organization(client, db, hope_admin, admin_headers):
    invitation_id = invite(client, admin_headers, "bob@example.com").json()["id"]

    assert client.delete(f"/api/invitations/{invitation_id}", headers=auth_headers(db, hope_admin)).status_code == 403
    assert client.delete(f"/api/invitations/{invitation_id}", headers=admin_headers).status_code == 200
    assert db.query(Invitation).count() == 0


def test_concurrent_accept_only_one_transition_wins(db, grace, grace_admin):
    now = datetime.utcnow()
    invitation = Invitation(
        tenant_id=grace.id,
        email="bob@example.com",
        role=UserRole.MEMBER,
        token=generate_invitation_token(),
        status=InvitationStatus.PENDING,
        expires_at=now + timedelta(days=7),
        invited_by=grace_admin.id,
    )
    db.add(invitation)
    db.commit()

    first = crud.invitation.transition_from_pending(db, invitation_id=invitation.id, status=InvitationStatus.ACCEPTED, now=now)
    second = crud.invitation.transition_from_pending(db, invitation_id=invitation.id, status=InvitationStatus.ACCEPTED, now=now)

    assert (first, second) == (True, False)


# Rate limiting


def test_ten_invitations_then_rate_limited(client, admin_headers, clock):
    for i in range(10):
        assert invite(client, admin_headers, f"person{i}@example.com").status_code == 201

    response = invite(client, admin_headers, "eleven@example.com")

    assert response.status_code == 429
    assert response.json()["error"] == "rate_limited"
    assert int(response.headers["Retry-After"]) == 3600


def test_window_slides_past_oldest_invitation(client, admin_headers, clock):
    invite(client, admin_headers, "first@example.com")
    clock.advance(600)
    for i in range(9):
        assert invite(client, admin_headers, f"person{i}@example.com").status_code == 201
    assert invite(client, admin_headers, "blocked@example.com").status_code == 429

    clock.advance(3001)

    assert invite(client, admin_headers, "after-window@example.com").status_code == 201
    assert invite(client, admin_headers, "still-blocked@example.com").status_code == 429


def test_rejected_attempts_do_not_consume_quota(client, db, bob, admin_headers):
    for i in range(9):
        invite(client, admin_headers, f"person{i}@example.com")
    assert invite(client, admin_headers, "bob@example.com").status_code == 400
    assert invite(client, admin_headers, "person0@example.com").status_code == 400

    assert invite(client, admin_headers, "tenth@example.com").status_code == 201
    assert invite(client, admin_headers, "eleventh@example.com").status_code == 429


def test_limits_are_per_account(client, db, grace, grace_admin, admin_headers):
    second_admin = make_user(db, "deacon@grace.example.com", role=UserRole.TENANT_ADMIN, tenant_id=grace.id)
    for i in range(10):
        invite(client, admin_headers, f"person{i}@example.com")

    assert invite(client, auth_headers(db, second_admin), "other@example.com").status_code == 201


def test_rate_limiter_slot_records_only_on_success():
    clock = FakeClock()
    limiter = InvitationRateLimiter(limit=2, window_seconds=60, clock=clock)

    with pytest.raises(ValueError):
        with limiter.slot("a"):
            raise ValueError("duplicate")
    assert limiter.remaining("a") == 2

    with limiter.slot("a"):
        pass
    with limiter.slot("a"):
        pass
    with pytest.raises(RateLimited) as exc_info:
        with limiter.slot("a"):
            pass
    assert exc_info.value.retry_after == 60

    clock.advance(61)
    assert limiter.remaining("a") == 2
