"""
Password hashing (bcrypt) and JWT issue/validation.
Uses bcrypt directly (no passlib) to avoid passlib/bcrypt version conflicts.
Both classes take their configuration explicitly; see voidslab.api.deps for wiring.
"""
import uuid
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

from voidslab.exceptions import InvalidToken

# bcrypt only reads the first 72 bytes; longer input is refused, never truncated
BCRYPT_MAX_BYTES = 72


def _password_bytes(s: str) -> bytes | None:
    """UTF-8 bytes for bcrypt; None when over BCRYPT_MAX_BYTES."""
    encoded = (s or "").encode("utf-8")
    if len(encoded) > BCRYPT_MAX_BYTES:
        return None
    return encoded


class PasswordHasher:
    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Hash password for storage. ValueError if None or longer than 72 bytes."""
        if password is None:
            raise ValueError("password is required")
        raw = _password_bytes(password)
        if raw is None:
            raise ValueError(f"password must be at most {BCRYPT_MAX_BYTES} bytes")
        return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, plain: str, hashed: str) -> bool:
        if plain is None or not hashed:
            return False
        raw = _password_bytes(plain)
        if raw is None:
            return False
        try:
            return bcrypt.checkpw(raw, hashed.encode("utf-8"))
        except ValueError:
            # Malformed stored hash
            return False

    def verify_missing(self, plain: str) -> bool:
        """Spend one hash worth of time when there is no stored hash; always False."""
        raw = _password_bytes(plain) or b""
        bcrypt.hashpw(raw, bcrypt.gensalt(rounds=self.rounds))
        return False


class TokenService:
    """Signed, self-contained bearer tokens. No server-side state, so no revocation."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_days: int = 7) -> None:
        if not secret_key:
            raise ValueError("secret_key is required")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_days = expire_days

    def issue(self, user_id: uuid.UUID, now: datetime | None = None) -> str:
        issued = now or datetime.now(timezone.utc)
        expire = issued + timedelta(days=self.expire_days)
        # JWT exp/iat must be numeric (Unix timestamp), not datetime
        payload = {"sub": str(user_id), "iat": int(issued.timestamp()), "exp": int(expire.timestamp())}
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def validate(self, token: str) -> uuid.UUID:
        """Return the user id bound in the token; InvalidToken on bad signature, expiry or shape."""
        if not token:
            raise InvalidToken()
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidToken() from e
        sub = payload.get("sub")
        if not sub or "exp" not in payload:
            raise InvalidToken()
        try:
            return uuid.UUID(str(sub))
        except ValueError as e:
            raise InvalidToken() from e
