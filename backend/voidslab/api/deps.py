"""
Shared dependencies: settings-built services and get_current_user from Bearer token.
Routes never read module-level config directly; tests override these.
"""
import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from voidslab.config import Settings, get_settings
from voidslab.database import get_db
from voidslab.exceptions import InvalidToken, Unauthenticated
from voidslab.mail import MailService, build_mail_service
from voidslab.models.user import User
from voidslab.services.security import PasswordHasher, TokenService

security = HTTPBearer(auto_error=False)
logger = logging.getLogger(__name__)


def get_password_hasher(settings: Settings = Depends(get_settings)) -> PasswordHasher:
    return PasswordHasher(rounds=settings.bcrypt_rounds)


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    return TokenService(
        secret_key=settings.secret_key,
        algorithm=settings.jwt_algorithm,
        expire_days=settings.jwt_expire_days,
    )


def get_mail_service(settings: Settings = Depends(get_settings)) -> MailService:
    return build_mail_service(settings)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    tokens: TokenService = Depends(get_token_service),
    db: Session = Depends(get_db),
) -> User:
    """Require valid Bearer token; return User or 401. One lookup per request, no caching."""
    token = (getattr(credentials, "credentials", None) or "").strip() if credentials else ""
    if not token:
        logger.debug("Auth failed: no Bearer token in request")
        raise Unauthenticated()
    try:
        user_id = tokens.validate(token)
    except InvalidToken:
        logger.debug("Auth failed: invalid or expired token")
        raise Unauthenticated()
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        # Indistinguishable from a missing token
        logger.debug("Auth failed: token subject %s not found", user_id)
        raise Unauthenticated()
    return user
