import json

import pytest
from fastapi.testclient import TestClient

from user_store_api.app.core.config import settings
from user_store_api.app.main import app


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point storage at an existing, empty per-test directory."""
    directory = tmp_path / "users"
    directory.mkdir()
    monkeypatch.setattr(settings, "data_dir", str(directory))
    return directory


@pytest.fixture
def client(data_dir):
    """Create a test client (runs the startup hook)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def write_user(data_dir):
    """Write a raw user document straight to disk."""

    def _write(user_id, document):
        path = data_dir / f"{user_id}.json"
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def read_user(data_dir):
    """Load a raw user document straight from disk."""

    def _read(user_id):
        return json.loads((data_dir / f"{user_id}.json").read_text(encoding="utf-8"))

    return _read
