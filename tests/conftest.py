# File: tests/conftest.py
"""Pytest configuration and fixtures."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from tests.models import Base

TEST_DATABASE_URL = "sqlite://"


@pytest.fixture(scope="function")
def engine():
    """In-memory database with every test model's table."""
    engine = create_engine(TEST_DATABASE_URL, echo=False)
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine) -> Session:
    """Create fresh DB session for each test."""
    session_maker = sessionmaker(bind=engine, expire_on_commit=False)

    with session_maker() as session:
        yield session
        session.rollback()


@pytest.fixture
def base():
    """A throwaway declarative base, for models defined inside a test."""
    return declarative_base()
