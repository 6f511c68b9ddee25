import json
import shutil

import pytest
from fastapi.testclient import TestClient

from bookstore.config import DEFAULT_DATA_DIR, settings
from bookstore.main import app


API_KEY = "test-key"


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """A private copy of the seed data for each test."""
    for name in ("books.json", "reviews.json"):
        shutil.copy(DEFAULT_DATA_DIR / name, tmp_path / name)
    monkeypatch.setattr(settings, "data_dir", tmp_path)
    monkeypatch.setattr(settings, "api_keys", [API_KEY])
    monkeypatch.setattr(settings, "access_log", "")
    return tmp_path


@pytest.fixture
def client(data_dir):
    return TestClient(app)


@pytest.fixture
def auth_headers():
    return {"X-API-Key": API_KEY}


@pytest.fixture
def read_data(data_dir):
    def _read(name):
        with (data_dir / name).open(encoding="utf-8") as f:
            return json.load(f)

    return _read


@pytest.fixture
def write_data(data_dir):
    def _write(name, payload):
        with (data_dir / name).open("w", encoding="utf-8") as f:
            json.dump(payload, f)

    return _write
