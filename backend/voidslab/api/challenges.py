"""
Challenges API: list for the caller's category, create (admin only).
"""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from voidslab.api.deps import get_current_user
from voidslab.api.errors import server_error
from voidslab.config import Settings, get_settings
from voidslab.database import get_db
from voidslab.exceptions import AppError
from voidslab.models.user import User
from voidslab.schemas.challenge import ChallengeCreate, ChallengeResponse
from voidslab.services import challenges as challenge_service

router = APIRouter(prefix="/api/challenges", tags=["challenges"])
logger = logging.getLogger(__name__)


@router.get("", response_model=list[ChallengeResponse])
def list_challenges(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Challenges whose category equals the caller's category."""
    try:
        items = challenge_service.list_for_user(db, current_user)
    except Exception as e:
        raise server_error("List challenges", e, settings)
    logger.debug("Listed %s challenges for category %r", len(items), current_user.category)
    return [ChallengeResponse.model_validate(c) for c in items]


@router.post("", response_model=ChallengeResponse, status_code=status.HTTP_201_CREATED)
def create_challenge(
    data: ChallengeCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    try:
        challenge = challenge_service.create_challenge(db, current_user, data.to_fields())
    except AppError:
        raise
    except Exception as e:
        db.rollback()
        raise server_error("Create challenge", e, settings)
    return ChallengeResponse.model_validate(challenge)
