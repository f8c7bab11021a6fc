from __future__ import annotations

import os
import tempfile
import uuid
from pathlib import Path

import pytest

# Must be set before app.core.config is imported anywhere
_DB_DIR = Path(tempfile.mkdtemp(prefix="gigledger-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR / 'test.db'}"
os.environ.setdefault("DEFAULT_CURRENCY", "EUR")


@pytest.fixture
def client():
    """API client authenticated as a fresh user."""
    from fastapi.testclient import TestClient

    from app.core.auth import get_current_user_id
    from app.main import app

    user_id = uuid.uuid4()
    app.dependency_overrides[get_current_user_id] = lambda: user_id
    with TestClient(app) as test_client:
        test_client.user_id = user_id
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client():
    """API client without any auth override."""
    from fastapi.testclient import TestClient

    from app.main import app

    app.dependency_overrides.clear()
    with TestClient(app) as test_client:
        yield test_client
