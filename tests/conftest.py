"""Shared fixtures; environment must be set before ``src.core.config`` is imported."""

import os
from datetime import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("POSTGRES_PASSWORD", "test")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_DIRECTORY", "/tmp/penilaian-test-logs")
os.environ.pop("REDIS_HOST", None)


@pytest.fixture
def mock_session():
    """AsyncSession stand-in: only commit/rollback are awaited by services."""
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.execute = AsyncMock()
    return session


def make_repo(session, **methods):
    """Repository mock with ``session`` and the given async methods."""
    repo = MagicMock()
    repo.session = session
    for name, value in methods.items():
        setattr(repo, name, value if isinstance(value, AsyncMock) else AsyncMock(return_value=value))
    return repo


def user(user_id, role, division_id=None, **extra):
    return SimpleNamespace(id=user_id, role=role, division_id=division_id, **extra)


FIXED_NOW = datetime(2025, 3, 10, 12, 0, 0)
