import os
import tempfile

# Must be set before anything from userauth is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-for-the-suite"
os.environ["SMTP_HOST"] = ""
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="userauth-logs-")

import pytest
from fastapi.testclient import TestClient

from userauth.core.dependencies import get_notifier, get_otp_store, get_token_service
from userauth.core.security import hash_password
from userauth.db.base import Base
from userauth.db.session import engine, SessionLocal
from userauth.main import app
from userauth.models.user import UserRole
from userauth.repositories.user_repository import UserRepository
from userauth.schemas.auth_schemas import TokenClaims
from userauth.services.auth_service import AuthFlow
from userauth.services.otp_store import InMemoryOtpStore
from userauth.utils.email import OutboxNotifier


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def users(db):
    return UserRepository(db)


@pytest.fixture
def otp_store():
    return InMemoryOtpStore()


@pytest.fixture
def notifier():
    return OutboxNotifier()


@pytest.fixture
def token_service():
    return get_token_service()


@pytest.fixture
def flow(users, otp_store, notifier, token_service):
    return AuthFlow(users=users, otp_store=otp_store, notifier=notifier, tokens=token_service)


@pytest.fixture
def client(db, otp_store, notifier):
    app.dependency_overrides[get_otp_store] = lambda: otp_store
    app.dependency_overrides[get_notifier] = lambda: notifier
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(users):
    def _make_user(username="bob", password="secret", email="bob@example.com", role=UserRole.USER):
        return users.insert(
            username=username,
            password=hash_password(password),
            mobile="555",
            email=email,
            role=role,
        )
    return _make_user


@pytest.fixture
def auth_header(token_service):
    def _auth_header(user):
        token = token_service.issue(
            TokenClaims(user_id=user.id, username=user.username, role=user.role)
        )
        return {"Authorization": f"Bearer {token}"}
    return _auth_header


def last_otp(notifier: OutboxNotifier, email: str) -> str:
    """Pull the most recent code sent to *email* out of the outbox"""
    for to, _subject, body in reversed(notifier.outbox):
        if to == email:
            return body.rsplit(": ", 1)[1]
    raise AssertionError(f"no OTP was sent to {email}")


@pytest.fixture
def sent_otp(notifier):
    return lambda email: last_otp(notifier, email)
