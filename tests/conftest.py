from __future__ import annotations

import time
from datetime import datetime

import pytest

from src.attendance_kiosk.attendance_kiosk.container import assemble_container
from tests.fakes import MONDAY, FakeStore, at


@pytest.fixture
def fixed_now() -> datetime:
    """Monday 2024-01-01 09:05 UTC, inside the default 09:00-09:15 window."""
    return at(MONDAY, 9, 5)


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def container(store: FakeStore):
    return assemble_container(kiosk=store.kiosk(), admin=store.admin(), descriptor_length=4)


@pytest.fixture
def client(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.attendance_kiosk.attendance_kiosk.main import create_app

    app = create_app(container=container)
    return app.test_client()


@pytest.fixture
def new_york_host(monkeypatch):
    """Run the test with the process local timezone set to America/New_York."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
