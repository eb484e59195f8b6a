"""Shared pytest setup: temporary database and log directory, API client."""

import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="nutrition-tests-")
os.environ.setdefault("WRITE_DATABASE_URL", f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}")
os.environ.setdefault("LOG_DIR", os.path.join(_TMP_DIR, "logs"))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402


@pytest.fixture
def client():
    from main import app

    with TestClient(app) as c:
        yield c
