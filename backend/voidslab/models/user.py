"""
User model: credentials (email + bcrypt hash), profile, verification state, admin flag.
Challenges are scoped by user.category.

The password hash only changes through set_password; saving other fields never
touches it. is_admin is decided once in create_for_registration.
"""
import hmac
import secrets
import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from voidslab.database import Base
from voidslab.models.types import UuidType

DEFAULT_RANK = "TRAINEE"


def new_verification_token() -> str:
    return secrets.token_urlsafe(32)


def admin_code_matches(admin_code: str | None, configured_code: str | None) -> bool:
    """Exact match against the configured secret; an unset secret never matches."""
    if not admin_code or not configured_code:
        return False
    return hmac.compare_digest(admin_code.encode("utf-8"), configured_code.encode("utf-8"))


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UuidType(), primary_key=True, default=uuid.uuid4
    )
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    class_level: Mapped[str | None] = mapped_column(String(100), nullable=True)
    school: Mapped[str | None] = mapped_column(String(255), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    verification_token: Mapped[str | None] = mapped_column(String(128), nullable=True, index=True)
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    rank: Mapped[str] = mapped_column(String(50), nullable=False, default=DEFAULT_RANK)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @classmethod
    def create_for_registration(
        cls,
        *,
        email: str,
        password: str,
        full_name: str,
        category: str,
        hasher,
        class_level: str | None = None,
        school: str | None = None,
        location: str | None = None,
        admin_code: str | None = None,
        configured_admin_code: str | None = None,
    ) -> "User":
        """New unverified user with a fresh verification token and hashed password."""
        user = cls(
            email=email,
            full_name=full_name,
            class_level=class_level,
            school=school,
            location=location,
            category=category,
            is_admin=admin_code_matches(admin_code, configured_admin_code),
            is_verified=False,
            verification_token=new_verification_token(),
            points=0,
            rank=DEFAULT_RANK,
        )
        user.set_password(password, hasher)
        return user

    def set_password(self, plaintext: str, hasher) -> None:
        self.password_hash = hasher.hash(plaintext)

    def check_password(self, plaintext: str, hasher) -> bool:
        return hasher.verify(plaintext, self.password_hash)

    def mark_verified(self) -> None:
        self.is_verified = True
        self.verification_token = None
