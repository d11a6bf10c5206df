"""
Classroom Service - Database Connection
Database Engine, Session Management, and Initialization
"""
import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from config.settings import get_settings
from src.database.models import Base

logger = logging.getLogger("src.database")


def _create_engine(database_url: str, echo: bool = False) -> Engine:
    kwargs = {}
    if database_url.startswith("sqlite") and ":memory:" in database_url:
        # In-memory SQLite lives per connection; share one across the pool
        kwargs["poolclass"] = StaticPool

    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,  # Check connection health before use
        # SQLite specific settings
        connect_args={"check_same_thread": False} if "sqlite" in database_url else {},
        **kwargs
    )


settings = get_settings()

engine = _create_engine(settings.database_url, echo=settings.debug)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def reinitialize_engine(database_url: str) -> Engine:
    """
    Point the module engine and session factory at another database.
    Used by tests and tooling that need a throwaway database.
    """
    global engine
    engine.dispose()
    engine = _create_engine(database_url)
    SessionLocal.configure(bind=engine)
    return engine


def init_db() -> None:
    """
    Create all database tables.
    Call this once at application startup.
    """
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")


def drop_db() -> None:
    """
    Drop all database tables.
    WARNING: This will delete all data!
    """
    Base.metadata.drop_all(bind=engine)
    logger.warning("All database tables dropped")


def get_db() -> Generator[Session, None, None]:
    """
    Dependency injection for FastAPI endpoints.

    Usage:
        @router.get("/items")
        def get_items(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """
    Context manager for database sessions.

    Usage:
        with get_db_context() as db:
            db.query(...)
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
