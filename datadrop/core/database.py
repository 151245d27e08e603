"""Engine and per-request sessions for the datadrop PostgreSQL database."""

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from datadrop.core.config import settings

# pre_ping drops pooled connections the server closed between uploads.
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.DEBUG,
)

SessionLocal = sessionmaker(bind=engine, autoflush=False)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency: one session per request.

    An upload commits row by row on this session; whatever happens, the
    session is closed and its connection returned to the pool when the
    request ends.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
