from __future__ import annotations

from datetime import date

import pytest

from src.lecture_tracker.lecture_tracker.container import build_container
from src.lecture_tracker.lecture_tracker.database.json_store import JsonFileDatabase
from src.lecture_tracker.lecture_tracker.main import create_app
from src.lecture_tracker.lecture_tracker.statistics import service as statistics_service


@pytest.fixture
def store():
    """In-memory JSON store (no data dir)."""
    return JsonFileDatabase()


@pytest.fixture
def container():
    return build_container(backend="json", data_dir=None)


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app({"STORAGE_BACKEND": "json", "DATA_DIR": None})


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def fixed_today(monkeypatch):
    today = date(2024, 1, 10)
    monkeypatch.setattr(statistics_service, "today_local", lambda: today)
    return today
