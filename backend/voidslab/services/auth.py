"""
Auth flows: register (unverified, verification token), verify email, login (JWT).
Raise voidslab.exceptions errors; routes turn them into HTTP responses.
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from voidslab.mail import MailService
from voidslab.mail.templates import VERIFICATION_SUBJECT, render_verification_email
from voidslab.models.user import User
from voidslab.exceptions import DuplicateUser, InvalidCredentials, InvalidToken, UnverifiedAccount
from voidslab.services.security import PasswordHasher, TokenService

logger = logging.getLogger(__name__)


def register_user(
    db: Session,
    hasher: PasswordHasher,
    *,
    email: str,
    password: str,
    full_name: str,
    category: str,
    class_level: str | None = None,
    school: str | None = None,
    location: str | None = None,
    admin_code: str | None = None,
    configured_admin_code: str | None = None,
) -> User:
    """Create an unverified user. DuplicateUser if the email is taken (pre-check or unique index)."""
    if db.query(User).filter(User.email == email).first():
        raise DuplicateUser()
    user = User.create_for_registration(
        email=email,
        password=password,
        full_name=full_name,
        category=category,
        hasher=hasher,
        class_level=class_level,
        school=school,
        location=location,
        admin_code=admin_code,
        configured_admin_code=configured_admin_code,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        # Lost a race with a concurrent registration for the same email
        logger.warning("Register IntegrityError for %s: %s", email, getattr(e, "orig", e))
        raise DuplicateUser() from e
    db.refresh(user)
    logger.info("Registered user %s (category=%s, admin=%s)", user.id, user.category, user.is_admin)
    return user


def send_verification_email(
    mailer: MailService,
    *,
    to: str,
    token: str,
    base_url: str,
    full_name: str | None = None,
) -> bool:
    """Best effort: never raises. Returns True if the mail service accepted the message."""
    try:
        mailer.send(to, VERIFICATION_SUBJECT, render_verification_email(base_url, token, full_name))
        return True
    except Exception as e:
        logger.warning("Verification email to %s failed: %s", to, e)
        return False


def verify_email(db: Session, token: str | None) -> User:
    """Consume a verification token. InvalidToken if unknown or already used."""
    if not token:
        raise InvalidToken()
    user = db.query(User).filter(User.verification_token == token).first()
    if not user:
        raise InvalidToken()
    user.mark_verified()
    db.commit()
    db.refresh(user)
    logger.info("Verified email for user %s", user.id)
    return user


def authenticate(db: Session, hasher: PasswordHasher, *, email: str, password: str) -> User:
    """Same InvalidCredentials for unknown email and wrong password; UnverifiedAccount after a correct password."""
    user = db.query(User).filter(User.email == email).first()
    if not user:
        # Same bcrypt cost as a wrong password
        hasher.verify_missing(password)
        logger.info("Login failed: invalid credentials")
        raise InvalidCredentials()
    if not user.check_password(password, hasher):
        logger.info("Login failed: invalid credentials")
        raise InvalidCredentials()
    if not user.is_verified:
        logger.info("Login refused for unverified user %s", user.id)
        raise UnverifiedAccount()
    return user


def login(
    db: Session,
    hasher: PasswordHasher,
    tokens: TokenService,
    *,
    email: str,
    password: str,
) -> tuple[str, User]:
    user = authenticate(db, hasher, email=email, password=password)
    token = tokens.issue(user.id)
    logger.info("Issued token for user %s", user.id)
    return token, user
