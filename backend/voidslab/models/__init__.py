"""
SQLAlchemy models. Import here so Alembic and app can use them.
"""
from voidslab.models.user import User
from voidslab.models.challenge import Challenge

__all__ = ["User", "Challenge"]
