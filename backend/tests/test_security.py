"""Unit tests for PasswordHasher (bcrypt) and TokenService (JWT)."""
import uuid
from datetime import datetime, timedelta, timezone

import bcrypt
import pytest
from jose import jwt

from voidslab.exceptions import InvalidToken
from voidslab.services.security import BCRYPT_MAX_BYTES, PasswordHasher, TokenService

SECRET = "unit-test-secret"


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens():
    return TokenService(secret_key=SECRET, algorithm="HS256", expire_days=7)


def test_hash_is_not_plaintext_and_verifies(hasher):
    hashed = hasher.hash("pw12345")
    assert hashed != "pw12345"
    assert hashed.startswith("$2")
    assert hasher.verify("pw12345", hashed) is True


def test_hash_is_salted(hasher):
    assert hasher.hash("same") != hasher.hash("same")


def test_verify_wrong_password_returns_false(hasher):
    assert hasher.verify("nope", hasher.hash("pw12345")) is False


def test_verify_malformed_hash_returns_false(hasher):
    assert hasher.verify("pw12345", "not-a-bcrypt-hash") is False
    assert hasher.verify("pw12345", "") is False


def test_hash_none_raises(hasher):
    with pytest.raises(ValueError):
        hasher.hash(None)


def test_password_over_limit_refused(hasher):
    long_pw = "x" * (BCRYPT_MAX_BYTES + 1)
    with pytest.raises(ValueError):
        hasher.hash(long_pw)
    assert hasher.verify(long_pw, hasher.hash("x" * BCRYPT_MAX_BYTES)) is False


def test_every_byte_up_to_limit_counts(hasher):
    pw = "a" * BCRYPT_MAX_BYTES
    hashed = hasher.hash(pw)
    assert hasher.verify(pw, hashed) is True
    assert hasher.verify(pw[:-1] + "Z", hashed) is False
    assert hasher.verify(pw[:-1], hashed) is False


def test_verify_missing_does_bcrypt_work(hasher, monkeypatch):
    calls = []
    real_hashpw = bcrypt.hashpw
    monkeypatch.setattr(bcrypt, "hashpw", lambda pw, salt: calls.append(pw) or real_hashpw(pw, salt))
    assert hasher.verify_missing("pw12345") is False
    assert calls == [b"pw12345"]


def test_issue_and_validate_roundtrip(tokens):
    user_id = uuid.uuid4()
    assert tokens.validate(tokens.issue(user_id)) == user_id


def test_token_expires_after_seven_days(tokens):
    user_id = uuid.uuid4()
    now = datetime.now(timezone.utc)
    token = tokens.issue(user_id, now=now)
    claims = jwt.get_unverified_claims(token)
    assert claims["exp"] - claims["iat"] == 7 * 24 * 3600
    assert claims["sub"] == str(user_id)


def test_expired_token_rejected(tokens):
    token = tokens.issue(uuid.uuid4(), now=datetime.now(timezone.utc) - timedelta(days=8))
    with pytest.raises(InvalidToken):
        tokens.validate(token)


def test_token_signed_with_other_secret_rejected(tokens):
    other = TokenService(secret_key="someone-else", expire_days=7)
    with pytest.raises(InvalidToken):
        tokens.validate(other.issue(uuid.uuid4()))


@pytest.mark.parametrize("bad", ["", "garbage", "a.b.c"])
def test_malformed_token_rejected(tokens, bad):
    with pytest.raises(InvalidToken):
        tokens.validate(bad)


def test_token_without_uuid_subject_rejected(tokens):
    exp = int((datetime.now(timezone.utc) + timedelta(days=1)).timestamp())
    token = jwt.encode({"sub": "not-a-uuid", "exp": exp}, SECRET, algorithm="HS256")
    with pytest.raises(InvalidToken):
        tokens.validate(token)


def test_token_without_exp_rejected(tokens):
    token = jwt.encode({"sub": str(uuid.uuid4())}, SECRET, algorithm="HS256")
    with pytest.raises(InvalidToken):
        tokens.validate(token)


def test_token_service_requires_secret():
    with pytest.raises(ValueError):
        TokenService(secret_key="")
