"""Pytest bootstrap for project imports and shared database fixtures."""

import os
from pathlib import Path
import sys

# Ensure project root is on sys.path so `import mentorlink` works without installing
PROJECT_ROOT = Path(__file__).resolve().parents[1]
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

# Settings are read at import time; keep tests off the on-disk database.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mentorlink import models
from mentorlink.database import Base
from mentorlink.services import profile_service


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def make_user(db_session):
    """Insert a user with a default profile, bypassing password hashing."""

    def _make_user(username: str, **profile_fields) -> models.User:
        user = models.User(
            username=username,
            email=f"{username}@x.com",
            password_hash="hash",
        )
        db_session.add(user)
        db_session.flush()
        profile = profile_service.create_profile(db_session, user.id)
        for field, value in profile_fields.items():
            setattr(profile, field, value)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user
