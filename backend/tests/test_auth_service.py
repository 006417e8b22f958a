"""Service-level auth flows, including the duplicate-email race resolved by the unique index."""
import pytest

from voidslab.exceptions import DuplicateUser, InvalidCredentials, InvalidToken, UnverifiedAccount
from voidslab.models.user import User
from voidslab.services import auth as auth_service
from voidslab.services.security import PasswordHasher, TokenService


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


def _register(db, hasher, email="r@x.com"):
    return auth_service.register_user(
        db, hasher, email=email, password="pw12345", full_name="R", category="junior"
    )


class _NoMatch:
    """Query stand-in that never finds a row, as if another request inserted after our check."""

    def filter(self, *args, **kwargs):
        return self

    def first(self):
        return None


def test_concurrent_duplicate_maps_to_duplicate_user(db, hasher, monkeypatch):
    _register(db, hasher)
    monkeypatch.setattr(db, "query", lambda *a, **k: _NoMatch())
    with pytest.raises(DuplicateUser):
        _register(db, hasher)
    monkeypatch.undo()
    assert db.query(User).filter(User.email == "r@x.com").count() == 1


def test_verify_then_login(db, hasher):
    user = _register(db, hasher)
    with pytest.raises(UnverifiedAccount):
        auth_service.authenticate(db, hasher, email="r@x.com", password="pw12345")

    auth_service.verify_email(db, user.verification_token)
    token, logged_in = auth_service.login(
        db, hasher, TokenService("s3cret"), email="r@x.com", password="pw12345"
    )
    assert logged_in.id == user.id
    assert TokenService("s3cret").validate(token) == user.id


def test_verify_email_rejects_missing_token(db):
    with pytest.raises(InvalidToken):
        auth_service.verify_email(db, None)


def test_authenticate_unknown_email(db, hasher):
    with pytest.raises(InvalidCredentials):
        auth_service.authenticate(db, hasher, email="ghost@x.com", password="pw12345")


def test_authenticate_unknown_email_still_hashes(db, hasher, monkeypatch):
    calls = []
    monkeypatch.setattr(hasher, "verify_missing", lambda pw: calls.append(pw) or False)
    with pytest.raises(InvalidCredentials):
        auth_service.authenticate(db, hasher, email="ghost@x.com", password="pw12345")
    assert calls == ["pw12345"]
