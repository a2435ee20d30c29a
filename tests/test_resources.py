"""
Tenant-scoped resource routes: posts, events, check-ins, teams, media, members, profile
"""

from datetime import datetime, timedelta

import pytest

from fellowship.models import ChannelMessage, CheckIn, Event, MinistryTeam, Post, UserRole

from tests.factories import auth_headers, channel_named, make_user


@pytest.fixture
def bob_headers(db, bob):
    return auth_headers(db, bob)


@pytest.fixture
def grace_headers(db, grace_admin):
    return auth_headers(db, grace_admin)


@pytest.fixture
def hope_headers(db, hope_admin):
    return auth_headers(db, hope_admin)


def make_event(db, tenant, creator, **kwargs) -> Event:
    event = Event(
        tenant_id=tenant.id,
        created_by=creator.id,
        title=kwargs.pop("title", "Sunday service"),
        start_time=kwargs.pop("start_time", datetime.utcnow() + timedelta(days=3)),
        **kwargs,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["database"] == "connected"


def test_other_organization_records_are_forbidden(client, db, grace, hope, hope_admin, bob_headers):
    post = Post(tenant_id=hope.id, author_id=hope_admin.id, title="Hope news", content="Only for Hope")
    team = MinistryTeam(tenant_id=hope.id, name="Choir")
    db.add_all([post, team])
    db.commit()
    event = make_event(db, hope, hope_admin)
    hope_general = channel_named(db, hope.id, "general")

    attempts = [
        client.get(f"/api/posts/{post.id}", headers=bob_headers),
        client.get(f"/api/events/{event.id}", headers=bob_headers),
        client.post(f"/api/events/{event.id}/rsvp", json={"status": "going"}, headers=bob_headers),
        client.get(f"/api/channels/{hope_general.id}/messages", headers=bob_headers),
        client.post(f"/api/channels/{hope_general.id}/messages", json={"content": "hi"}, headers=bob_headers),
        client.get(f"/api/ministry-teams/{team.id}", headers=bob_headers),
        client.get(f"/api/members/{hope_admin.id}", headers=bob_headers),
    ]

    for response in attempts:
        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"


def test_admin_cannot_manage_another_organization(client, db, grace, hope, hope_admin, grace_headers):
    post = Post(tenant_id=hope.id, author_id=hope_admin.id, title="Hope news", content="Only for Hope")
    db.add(post)
    db.commit()

    assert client.patch(f"/api/posts/{post.id}", json={"title": "Grace news"}, headers=grace_headers).status_code == 403
    assert client.delete(f"/api/posts/{post.id}", headers=grace_headers).status_code == 403
    db.expire_all()
    assert db.get(Post, post.id).title == "Hope news"


def test_platform_admin_can_read_any_organization(client, db, hope, hope_admin, platform_admin):
    event = make_event(db, hope, hope_admin)

    response = client.get(f"/api/events/{event.id}", headers=auth_headers(db, platform_admin))

    assert response.status_code == 200


def test_unaffiliated_account_has_no_tenant(client, db, grace):
    drifter = make_user(db, "drifter@example.com")

    response = client.get("/api/channels", headers=auth_headers(db, drifter))

    assert response.status_code == 400
    assert response.json()["error"] == "no_tenant_assigned"


def test_channel_history_follows_insertion_order(client, db, grace, bob_headers):
    general = channel_named(db, grace.id, "general")
    first = client.post(f"/api/channels/{general.id}/messages", json={"content": "first"}, headers=bob_headers).json()
    stored = db.query(ChannelMessage).filter(ChannelMessage.id == first["id"]).one()
    stored.created_at = datetime.utcnow() + timedelta(hours=1)
    db.commit()

    client.post(f"/api/channels/{general.id}/messages", json={"content": "second"}, headers=bob_headers)
    history = client.get(f"/api/channels/{general.id}/messages", headers=bob_headers).json()

    assert [m["content"] for m in history] == ["first", "second"]
    assert history[1]["created_at"] > history[0]["created_at"]


def test_missing_record_is_not_found(client, bob_headers):
    response = client.get("/api/posts/does-not-exist", headers=bob_headers)

    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_posts_pinned_first(client, grace_headers, bob_headers):
    client.post("/api/posts", json={"title": "Old", "content": "a", "is_pinned": True}, headers=grace_headers)
    client.post("/api/posts", json={"title": "Newer", "content": "b"}, headers=grace_headers)
    client.post("/api/posts", json={"title": "Newest", "content": "c"}, headers=grace_headers)

    response = client.get("/api/posts", headers=bob_headers)

    assert [p["title"] for p in response.json()] == ["Old", "Newest", "Newer"]


def test_member_cannot_publish_post(client, bob_headers):
    response = client.post("/api/posts", json={"title": "Mine", "content": "x"}, headers=bob_headers)

    assert response.status_code == 403


def test_invalid_body_is_a_validation_error(client, grace_headers):
    response = client.post("/api/posts", json={"title": ""}, headers=grace_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"
    assert response.json()["errors"]


def test_rsvp_upsert_and_capacity(client, db, grace, grace_admin, bob, bob_headers):
    event = make_event(db, grace, grace_admin, max_attendees=1)
    alice = make_user(db, "alice@example.com", tenant_id=grace.id)
    alice_headers = auth_headers(db, alice)

    first = client.post(f"/api/events/{event.id}/rsvp", json={"status": "maybe"}, headers=bob_headers)
    second = client.post(f"/api/events/{event.id}/rsvp", json={"status": "going"}, headers=bob_headers)
    again = client.post(f"/api/events/{event.id}/rsvp", json={"status": "going"}, headers=bob_headers)
    full = client.post(f"/api/events/{event.id}/rsvp", json={"status": "going"}, headers=alice_headers)
    maybe = client.post(f"/api/events/{event.id}/rsvp", json={"status": "maybe"}, headers=alice_headers)

    assert first.json()["id"] == second.json()["id"] == again.json()["id"]
    assert second.json()["status"] == "going"
    assert full.status_code == 400
    assert full.json()["message"] == "Event is full"
    assert maybe.status_code == 200

    rsvps = client.get(f"/api/events/{event.id}/rsvps", headers=bob_headers).json()
    assert sorted(r["status"] for r in rsvps) == ["going", "maybe"]
    assert [r["event_id"] for r in client.get("/api/events/rsvps", headers=bob_headers).json()] == [event.id]


def test_upcoming_events_skip_past_ones(client, db, grace, grace_admin, bob_headers):
    make_event(db, grace, grace_admin, title="Yesterday", start_time=datetime.utcnow() - timedelta(days=1))
    make_event(db, grace, grace_admin, title="Next month", start_time=datetime.utcnow() + timedelta(days=30))
    make_event(db, grace, grace_admin, title="Tomorrow", start_time=datetime.utcnow() + timedelta(days=1))

    response = client.get("/api/events/upcoming", headers=bob_headers)

    assert [e["title"] for e in response.json()] == ["Tomorrow", "Next month"]


def test_check_in_ownership(client, db, grace, bob, bob_headers, grace_headers):
    alice = make_user(db, "alice@example.com", tenant_id=grace.id)
    alice_headers = auth_headers(db, alice)

    mine = client.post("/api/check-ins", json={"location": "Main hall"}, headers=bob_headers).json()

    assert mine["user_id"] == bob.id
    assert client.patch(f"/api/check-ins/{mine['id']}", json={"notes": "late"}, headers=bob_headers).status_code == 200
    assert client.patch(f"/api/check-ins/{mine['id']}", json={"notes": "hijack"}, headers=alice_headers).status_code == 403
    assert client.patch(f"/api/check-ins/{mine['id']}", json={"notes": "fixed"}, headers=grace_headers).status_code == 200
    assert [c["id"] for c in client.get("/api/check-ins/my-history", headers=bob_headers).json()] == [mine["id"]]
    assert client.get("/api/check-ins/my-history", headers=alice_headers).json() == []


def test_recent_check_ins_are_admin_only(client, db, bob_headers, grace_headers):
    client.post("/api/check-ins", json={}, headers=bob_headers)

    assert client.get("/api/check-ins/recent", headers=bob_headers).status_code == 403
    assert len(client.get("/api/check-ins/recent", headers=grace_headers).json()) == 1
    assert db.query(CheckIn).count() == 1


def test_team_members_must_belong_to_the_organization(client, bob, hope_member, grace_headers, bob_headers):
    team = client.post("/api/ministry-teams", json={"name": "Worship"}, headers=grace_headers).json()

    outsider = client.post(f"/api/ministry-teams/{team['id']}/members", json={"user_id": hope_member.id}, headers=grace_headers)
    added = client.post(
        f"/api/ministry-teams/{team['id']}/members",
        json={"user_id": bob.id, "role": "leader"},
        headers=grace_headers,
    )
    twice = client.post(f"/api/ministry-teams/{team['id']}/members", json={"user_id": bob.id}, headers=grace_headers)

    assert outsider.status_code == 400
    assert added.status_code == 201
    assert added.json()["role"] == "leader"
    assert twice.status_code == 400
    members = client.get(f"/api/ministry-teams/{team['id']}/members", headers=bob_headers).json()
    assert [m["user_id"] for m in members] == [bob.id]

    removed = client.delete(f"/api/ministry-teams/{team['id']}/members/{bob.id}", headers=grace_headers)
    assert removed.status_code == 200
    assert client.get(f"/api/ministry-teams/{team['id']}/members", headers=bob_headers).json() == []


def test_team_directory_lists_teams_with_members(client, db, bob, grace_admin, hope, hope_headers, grace_headers, bob_headers):
    worship = client.post("/api/ministry-teams", json={"name": "Worship"}, headers=grace_headers).json()
    client.post("/api/ministry-teams", json={"name": "Hospitality"}, headers=grace_headers)
    client.post("/api/ministry-teams", json={"name": "Youth"}, headers=hope_headers)
    client.post(f"/api/ministry-teams/{worship['id']}/members", json={"user_id": bob.id, "role": "leader"}, headers=grace_headers)

    response = client.get("/api/ministry-teams/directory", headers=bob_headers)

    assert response.status_code == 200
    teams = response.json()
    assert [t["name"] for t in teams] == ["Hospitality", "Worship"]
    assert teams[0]["members"] == []
    [member] = teams[1]["members"]
    assert member["role"] == "leader"
    assert member["user"]["id"] == bob.id
    assert member["user"]["email"] == "bob@example.com"


def test_team_directory_requires_an_organization(client, db):
    loner = make_user(db, "loner@example.com")

    response = client.get("/api/ministry-teams/directory", headers=auth_headers(db, loner))

    assert response.status_code == 400
    assert response.json()["error"] == "no_tenant_assigned"


def test_media_upload(client, grace, bob, bob_headers, media_storage):
    response = client.post(
        "/api/media/upload",
        files={"file": ("picnic.jpg", b"jpeg-bytes", "image/jpeg")},
        data={"category": "event", "description": "Summer picnic"},
        headers=bob_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["media_type"] == "image"
    assert body["category"] == "event"
    assert body["file_size"] == len(b"jpeg-bytes")
    assert body["uploaded_by"] == bob.id
    assert media_storage.uploads[0]["tenant_id"] == grace.id
    assert media_storage.uploads[0]["data"] == b"jpeg-bytes"

    listed = client.get("/api/media", params={"media_type": "image"}, headers=bob_headers).json()
    assert [m["id"] for m in listed] == [body["id"]]


def test_media_upload_rejects_other_types(client, bob_headers, media_storage):
    response = client.post(
        "/api/media/upload",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=bob_headers,
    )

    assert response.status_code == 400
    assert media_storage.uploads == []


def test_member_directory_is_scoped(client, db, grace, hope, bob, grace_admin, hope_member, bob_headers):
    response = client.get("/api/members", headers=bob_headers)

    ids = {m["id"] for m in response.json()}
    assert ids == {bob.id, grace_admin.id}
    assert hope_member.id not in ids
    assert "email" in response.json()[0]


def test_profile_update(client, db, bob, bob_headers):
    response = client.put("/api/profile", json={"bio": "Builds things", "phone_number": "555-0100"}, headers=bob_headers)

    assert response.status_code == 200
    assert response.json()["bio"] == "Builds things"
    assert response.json()["role"] == UserRole.MEMBER.value


def test_profile_email_cannot_be_changed(client, db, bob, bob_headers):
    response = client.put("/api/profile", json={"email": "new@example.com"}, headers=bob_headers)

    assert response.status_code == 400
    db.expire_all()
    assert bob.email == "bob@example.com"
