"""
Challenge access: list for the caller's category, create (admins only).
"""
import logging

from sqlalchemy.orm import Session

from voidslab.exceptions import Forbidden
from voidslab.models.challenge import Challenge
from voidslab.models.user import User

logger = logging.getLogger(__name__)


def list_for_user(db: Session, user: User) -> list[Challenge]:
    """All challenges in user.category, in store order."""
    return db.query(Challenge).filter(Challenge.category == user.category).all()


def create_challenge(db: Session, user: User, fields: dict) -> Challenge:
    """Persist fields as given. No validation beyond column types."""
    if not user.is_admin:
        logger.info("Challenge create refused for non-admin %s", user.id)
        raise Forbidden()
    challenge = Challenge(**fields)
    db.add(challenge)
    db.commit()
    db.refresh(challenge)
    logger.info("Challenge %s created by %s (category=%s)", challenge.id, user.id, challenge.category)
    return challenge
