import logging

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from bookstore import log
from bookstore.config import DEFAULT_DATA_DIR, Settings, settings
from bookstore.main import app


def _ours(logger):
    names = (log.CONSOLE_HANDLER, log.ACCESS_HANDLER)
    return [h for h in logger.handlers if h.get_name() in names]


@pytest.fixture
def restore_logging():
    yield
    for logger in (log.access_logger, logging.getLogger("bookstore")):
        for handler in _ours(logger):
            logger.removeHandler(handler)
            handler.close()
    logging.getLogger("bookstore").setLevel(logging.NOTSET)


def test_access_log_written_in_combined_format(data_dir, tmp_path, monkeypatch, restore_logging):
    log_file = tmp_path / "logs" / "access.txt"
    monkeypatch.setattr(settings, "access_log", str(log_file))
    with TestClient(app) as client:
        client.get("/api/books/1?x=1", headers={"User-Agent": "pytest-agent"})
    for handler in _ours(log.access_logger):
        handler.flush()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    line = lines[0]
    assert '"GET /api/books/1?x=1 HTTP/1.1" 200' in line
    assert line.endswith('"-" "pytest-agent"')


def test_configure_logging_does_not_stack_handlers(data_dir, tmp_path, monkeypatch, restore_logging):
    monkeypatch.setattr(settings, "access_log", str(tmp_path / "access.txt"))
    log.configure_logging("DEBUG")
    log.configure_logging("WARNING")
    root = logging.getLogger("bookstore")
    assert [h.get_name() for h in _ours(root)] == [log.CONSOLE_HANDLER]
    assert [h.get_name() for h in _ours(log.access_logger)] == [log.ACCESS_HANDLER]
    assert root.level == logging.WARNING


def test_access_log_can_be_disabled(data_dir, restore_logging):
    log.configure_logging()
    assert _ours(log.access_logger) == []


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("BOOKSTORE_API_KEYS", " one, two ,,")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("BOOKSTORE_DATA_DIR", "/srv/bookstore")
    monkeypatch.setenv("BOOKSTORE_LOG_LEVEL", "debug")
    configured = Settings()
    assert configured.api_keys == ["one", "two"]
    assert configured.port == 8080
    assert str(configured.data_dir) == "/srv/bookstore"
    assert configured.log_level == "DEBUG"


def test_settings_defaults(monkeypatch):
    for name in ("BOOKSTORE_API_KEYS", "PORT", "BOOKSTORE_DATA_DIR", "HOST"):
        monkeypatch.delenv(name, raising=False)
    configured = Settings(_env_file=None)
    assert configured.api_keys == ["amana-secret-key-12345"]
    assert configured.port == 3000
    assert configured.data_dir == DEFAULT_DATA_DIR


def test_settings_reject_bad_port(monkeypatch):
    monkeypatch.setenv("PORT", "eighty")
    with pytest.raises(ValidationError):
        Settings()
