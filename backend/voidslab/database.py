"""
Credential and challenge store: one SQLAlchemy engine per process, one session per request.
DATABASE_URL picks the backend; SQLite for local runs and tests, PostgreSQL (via Alembic) in production.
"""
import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from voidslab.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def build_engine(url: str, **kwargs) -> Engine:
    """Engine for url. SQLite sessions cross threads (TestClient, BackgroundTasks), so the thread check is off."""
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        kwargs.setdefault("pool_pre_ping", True)
    return create_engine(url, **kwargs)


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_sqlite_db(bind: Engine | None = None) -> None:
    """Create users/challenges tables on SQLite. No-op elsewhere; run `alembic upgrade head` instead."""
    target = bind if bind is not None else engine
    if target.dialect.name != "sqlite":
        return
    from voidslab.models import challenge, user  # noqa: F401
    Base.metadata.create_all(bind=target)
    logger.info("SQLite schema ready at %s", target.url)


def get_db():
    """Dependency: request-scoped session, closed after the response."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
