"""
Shared fixtures: an in-memory database and an HTTP client bound to an
application that uses it.
"""

import pytest
from fastapi.testclient import TestClient

from booking_api.app.core import db as db_module
from booking_api.app.core.config import Settings
from booking_api.app.main import create_app
from tests.fakes import FakeDatabase, FakeMongoClient, connected_connector


@pytest.fixture
def settings():
    return Settings.from_env({})


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def client(settings, fake_db):
    app = create_app(settings, connector=connected_connector(fake_db))
    return TestClient(app)


@pytest.fixture
def fake_mongo(monkeypatch):
    """Route ``AsyncMongoClient`` construction to ``FakeMongoClient``."""
    FakeMongoClient.instances = []
    monkeypatch.setattr(db_module, "AsyncMongoClient", FakeMongoClient)
    return FakeMongoClient
