from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, scoped_session, sessionmaker

from .config import load_settings
from .models import Base

settings = load_settings()


def _engine_options(database_url: str) -> dict:
    options = {"future": True, "echo": False, "pool_pre_ping": True}
    if database_url.startswith("sqlite"):
        # Concurrent bet placements queue on the SQLite writer lock.
        options["connect_args"] = {"timeout": 30}
    return options


engine = create_engine(settings.database_url, **_engine_options(settings.database_url))
SessionLocal = scoped_session(sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True))


def init_db() -> None:
    """Create the market, player, bet and result tables if they are missing."""
    Base.metadata.create_all(engine)


@contextmanager
def session_scope() -> Iterator[Session]:
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
