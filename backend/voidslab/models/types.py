"""
Column types shared by the users and challenges tables.
"""
import uuid

from sqlalchemy import String, TypeDecorator


class UuidType(TypeDecorator):
    """Primary keys: uuid.UUID in Python, 36-char text in the DB (same on SQLite and PostgreSQL)."""
    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return None if value is None else str(value)

    def process_result_value(self, value, dialect):
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(value)
