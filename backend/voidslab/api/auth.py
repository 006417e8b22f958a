"""
Auth routes: register (unverified + verification mail), verify-email, login (JWT), GET /api/me.
"""
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from voidslab.api.deps import get_current_user, get_mail_service, get_password_hasher, get_token_service
from voidslab.api.errors import server_error
from voidslab.config import Settings, get_settings
from voidslab.database import get_db
from voidslab.exceptions import AppError
from voidslab.mail import MailService
from voidslab.models.user import User
from voidslab.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LoginUser,
    RegisterRequest,
    UserProfile,
    VerifyEmailRequest,
)
from voidslab.schemas.base import MessageResponse
from voidslab.services import auth as auth_service
from voidslab.services.security import PasswordHasher, TokenService

router = APIRouter(prefix="/api", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(
    data: RegisterRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    mailer: MailService = Depends(get_mail_service),
    settings: Settings = Depends(get_settings),
):
    """Register an unverified user; the verification mail goes out after the response."""
    try:
        user = auth_service.register_user(
            db,
            hasher,
            email=data.email,
            password=data.password,
            full_name=data.full_name,
            category=data.category,
            class_level=data.class_level,
            school=data.school,
            location=data.location,
            admin_code=data.admin_code,
            configured_admin_code=settings.admin_code,
        )
    except AppError:
        raise
    except Exception as e:
        db.rollback()
        raise server_error("Register", e, settings)
    background_tasks.add_task(
        auth_service.send_verification_email,
        mailer,
        to=user.email,
        token=user.verification_token,
        base_url=settings.app_base_url,
        full_name=user.full_name,
    )
    logger.info("Queued verification email for user %s", user.id)
    return MessageResponse(message="User registered. Check email for verification.")


@router.post("/verify-email", response_model=MessageResponse)
def verify_email(
    data: VerifyEmailRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    try:
        auth_service.verify_email(db, data.token)
    except AppError:
        raise
    except Exception as e:
        db.rollback()
        raise server_error("Verify email", e, settings)
    return MessageResponse(message="Email verified successfully")


@router.post("/login", response_model=LoginResponse)
def login(
    data: LoginRequest,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
):
    """Login with email/password; returns JWT and a reduced user projection."""
    try:
        token, user = auth_service.login(db, hasher, tokens, email=data.email, password=data.password)
    except AppError:
        raise
    except Exception as e:
        raise server_error("Login", e, settings)
    return LoginResponse(token=token, user=LoginUser.model_validate(user))


@router.get("/me", response_model=UserProfile)
def me(current_user: User = Depends(get_current_user)):
    return UserProfile.model_validate(current_user)
