"""
Shared fixtures: in-memory SQLite per test, TestClient with DB/settings/mail overridden,
and helpers to register + verify users through the real API.
"""
import os
import re

# Point the app's default engine at an in-memory DB before voidslab is imported.
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from voidslab.api.deps import get_mail_service
from voidslab.config import Settings, get_settings
from voidslab.database import Base, build_engine, get_db
from voidslab.mail import LogMailService
from voidslab.main import app
from voidslab.models.user import User
import voidslab.models  # noqa: F401

ADMIN_CODE = "void-admin-code"
PASSWORD = "pw12345"

_TOKEN_RE = re.compile(r"verify\?token=([A-Za-z0-9_\-]+)")


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        _env_file=None,
        secret_key="test-secret-key",
        admin_code=ADMIN_CODE,
        bcrypt_rounds=4,
        resend_api_key="",
        app_base_url="http://testserver",
        frontend_dir=tmp_path / "frontend",
    )


@pytest.fixture
def session_factory():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def mailer():
    return LogMailService()


@pytest.fixture
def client(session_factory, test_settings, mailer):
    """TestClient with get_db, get_settings and get_mail_service overridden."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_mail_service] = lambda: mailer
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


def token_from_mail(mailer: LogMailService, email: str) -> str:
    """Verification token from the last mail sent to email."""
    for msg in reversed(mailer.outbox):
        if msg["to"] == email:
            m = _TOKEN_RE.search(msg["html"])
            assert m, f"No verification link in {msg['html']!r}"
            return m.group(1)
    raise AssertionError(f"No mail sent to {email}")


def register(client, email, category="junior", admin_code=None, password=PASSWORD, full_name="Test User"):
    body = {"email": email, "password": password, "fullName": full_name, "category": category}
    if admin_code is not None:
        body["adminCode"] = admin_code
    return client.post("/api/register", json=body)


def register_verified(client, mailer, email, category="junior", admin_code=None) -> str:
    """Register, verify through the emailed token, log in; return the bearer token."""
    r = register(client, email, category=category, admin_code=admin_code)
    assert r.status_code == 201, r.text
    r = client.post("/api/verify-email", json={"token": token_from_mail(mailer, email)})
    assert r.status_code == 200, r.text
    r = client.post("/api/login", json={"email": email, "password": PASSWORD})
    assert r.status_code == 200, r.text
    return r.json()["token"]


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def get_user(session_factory, email: str) -> User | None:
    session = session_factory()
    try:
        return session.query(User).filter(User.email == email).first()
    finally:
        session.close()
