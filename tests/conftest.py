"""
Shared fixtures: in-memory database, app with test doubles, signed-in accounts
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["SEND_EMAILS"] = "false"
os.environ["ENVIRONMENT"] = "test"

from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fellowship.api import deps
from fellowship.core.exceptions import InvalidAssertion
from fellowship.core.identity import IdentityClaims, IdentityVerifier
from fellowship.core.media_storage import StoredMedia
from fellowship.core.rate_limit import InvitationRateLimiter
from fellowship.db.database import Base, get_session_factory
from fellowship.main import create_app
from fellowship.models import User, UserRole

from tests.factories import make_approved_tenant, make_user


class FakeVerifier(IdentityVerifier):
    name = "firebase"

    def __init__(self):
        self.tokens: Dict[str, IdentityClaims] = {}

    def verify(self, token: str) -> IdentityClaims:
        if token not in self.tokens:
            raise InvalidAssertion()
        return self.tokens[token]


class FakeMailer:
    def __init__(self):
        self.invitations: List[dict] = []
        self.reviews: List[tuple] = []

    def send_invitation_email(self, **kwargs) -> bool:
        self.invitations.append(kwargs)
        return True

    def send_tenant_review_email(self, email: str, tenant_name: str, approved: bool) -> bool:
        self.reviews.append((email, tenant_name, approved))
        return True


class FakeMediaStorage:
    def __init__(self):
        self.uploads: List[dict] = []

    def upload(self, file_obj, *, file_name: str, resource_type: str, tenant_id: str) -> StoredMedia:
        self.uploads.append({"file_name": file_name, "resource_type": resource_type, "tenant_id": tenant_id, "data": file_obj.read()})
        public_id = f"{tenant_id}/{file_name}"
        return StoredMedia(url=f"https://media.example.com/{public_id}", public_id=public_id)


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def verifier():
    return FakeVerifier()


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def media_storage():
    return FakeMediaStorage()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def app(session_factory, mailer, media_storage):
    app = create_app()
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[deps.get_email_service] = lambda: mailer
    app.dependency_overrides[deps.get_media_storage] = lambda: media_storage
    return app


@pytest.fixture
def client(app, verifier, clock):
    with TestClient(app) as test_client:
        app.state.identity_verifiers = {"firebase": verifier}
        app.state.invitation_rate_limiter = InvitationRateLimiter(limit=10, window_seconds=3600, clock=clock)
        yield test_client


@pytest.fixture
def registry(app, client):
    return app.state.registry


@pytest.fixture
def platform_admin(db):
    return make_user(db, "root@platform.example.com", role=UserRole.PLATFORM_ADMIN, first_name="Platform", last_name="Admin")


@pytest.fixture
def grace(db, platform_admin):
    return make_approved_tenant(db, "Grace Church", "pastor@grace.example.com", platform_admin)


@pytest.fixture
def hope(db, platform_admin):
    return make_approved_tenant(db, "Hope Fellowship", "lead@hope.example.com", platform_admin)


@pytest.fixture
def grace_admin(db, grace):
    return db.query(User).filter(User.id == grace.admin_user_id).one()


@pytest.fixture
def hope_admin(db, hope):
    return db.query(User).filter(User.id == hope.admin_user_id).one()


@pytest.fixture
def bob(db, grace):
    return make_user(db, "bob@example.com", tenant_id=grace.id, first_name="Bob", last_name="Builder")


@pytest.fixture
def hope_member(db, hope):
    return make_user(db, "carol@hope.example.com", tenant_id=hope.id, first_name="Carol", last_name="Singer")


