"""
Auth request/response schemas.
"""
import uuid
from datetime import datetime

from pydantic import EmailStr, field_validator

from voidslab.schemas.base import CamelModel
from voidslab.services.security import BCRYPT_MAX_BYTES


def _password_length(v: str) -> str:
    if len(v.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes (bcrypt limit)")
    return v


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str
    full_name: str
    category: str
    class_level: str | None = None
    school: str | None = None
    location: str | None = None
    admin_code: str | None = None

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        return _password_length(v)


class VerifyEmailRequest(CamelModel):
    token: str | None = None


class LoginRequest(CamelModel):
    """Plain strings: a malformed email or overlong password is just a failed login."""
    email: str
    password: str


class LoginUser(CamelModel):
    """Reduced projection returned with the token."""
    id: uuid.UUID
    email: str
    full_name: str
    category: str
    is_admin: bool
    points: int
    rank: str


class LoginResponse(CamelModel):
    token: str
    user: LoginUser


class UserProfile(LoginUser):
    """GET /api/me: everything except password_hash and verification_token."""
    class_level: str | None = None
    school: str | None = None
    location: str | None = None
    is_verified: bool
    created_at: datetime | None = None
