"""
Pytest fixtures and configuration for Our Anime List tests
"""
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from ouranimelist.app import create_app
from ouranimelist.db import db
from ouranimelist.services import access_control
from ouranimelist.services.catalog_store import BannerData

# 2026-01-05 is a Monday
MONDAY_NOON = datetime(2026, 1, 5, 12, 0, 0, tzinfo=timezone.utc)


class FixedClock:
    """Clock the tests can move by hand"""

    def __init__(self, now=MONDAY_NOON):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def app(tmp_path):
    """App on a throwaway SQLite file, monitor not scheduled"""
    app = create_app(
        {
            "TESTING": True,
            "SECRET_KEY": "test-secret-key",
            "SQLALCHEMY_DATABASE_URI": "sqlite:///" + str(tmp_path / "test.db"),
            "SETTINGS_FILE": str(tmp_path / "settings.yaml"),
            "MONITOR_ENABLED": False,
            "RATELIMIT_ENABLED": False,
        }
    )
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def app_context(app):
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def accounts(app_context):
    """alice and bob are standard accounts, root is an admin"""
    access_control.register("alice", "alice-pw")
    access_control.register("bob", "bob-pw")
    access_control.register("root", "root-pw", is_admin=True)
    return ["alice", "bob", "root"]


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def mock_notifier():
    return MagicMock()


def make_banner(title, release_day="Monday", release_time="18:00", **kwargs):
    return BannerData(title=title, release_day=release_day, release_time=release_time, **kwargs)


def login(client, name, password):
    return client.post("/api/auth/login", json={"name": name, "password": password})
