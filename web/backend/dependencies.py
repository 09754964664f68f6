#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from functools import lru_cache
from typing import Generator

from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from core.app_context import AppContext
from core.config_loader import AppConfig
from database.repository import ScoringRepository
from .config import get_config


class DatabaseManager:
    """Manages database connections and sessions."""

    def __init__(self, url: str):
        # Engine connects on first use, not here
        self.engine = create_engine(
            url,
            pool_pre_ping=True,  # Verify connections before using
        )
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

    def get_session(self) -> Generator[Session, None, None]:
        """
        Get a database session.

        Yields:
            Session: SQLAlchemy database session.
        """
        session = self.SessionLocal()
        try:
            yield session
        finally:
            session.close()


@lru_cache()
def get_db_manager() -> DatabaseManager:
    return DatabaseManager(get_config().database.url)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session.

    Usage:
        @app.get("/endpoint")
        def my_endpoint(db: Session = Depends(get_db)):
            ...

    Yields:
        Session: Database session that will be automatically closed.
    """
    yield from get_db_manager().get_session()


def get_repository(db: Session = Depends(get_db)) -> ScoringRepository:
    return ScoringRepository(db)


def get_app_config() -> AppConfig:
    return get_config()


@lru_cache()
def get_app_context() -> AppContext:
    """Process-wide config wiring. DB sessions and scoring HTTP sessions are opened per request."""
    return AppContext.build(get_config())
