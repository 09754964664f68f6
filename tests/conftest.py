"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

import pytest

from tests import create_session_factory, create_test_engine


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests that use a SQLite database session (deselect with '-m \"not db\"')"
    )


@pytest.fixture
def db_engine():
    """Fresh in-memory database per test."""
    engine = create_test_engine()
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest.fixture
def db_session(session_factory):
    """
    Session bound to the per-test database.

    Tests that go through a unit of work commit for real; the database is
    discarded with the engine afterwards.
    """
    session = session_factory()
    try:
        yield session
    finally:
        session.close()
