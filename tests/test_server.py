"""
Tests for the process entry point.

The Uvicorn server is replaced with a recorder so nothing binds a
socket; ``AsyncMongoClient`` is replaced with the in-memory fake.
"""

import logging

import pytest
from uvicorn import Config, Server

from booking_api.app import server as server_module
from booking_api.app.core import db as db_module
from booking_api.app.core.config import Settings
from booking_api.app.server import ApiServer, serve
from tests.fakes import UnreachableMongoClient


class RecordingServer:
    instances = []

    def __init__(self, config):
        self.config = config
        self.served = False
        RecordingServer.instances.append(self)

    async def serve(self):
        self.served = True


@pytest.fixture
def recording_server(monkeypatch):
    RecordingServer.instances = []
    monkeypatch.setattr(server_module, "ApiServer", RecordingServer)
    return RecordingServer


class TestServe:

    @pytest.mark.asyncio
    async def test_default_port(self, fake_mongo, recording_server):
        await serve(Settings.from_env({}))

        server = recording_server.instances[0]
        assert server.served
        assert server.config.port == 5000

    @pytest.mark.asyncio
    async def test_port_from_environment(self, fake_mongo, recording_server):
        await serve(Settings.from_env({"PORT": "8080"}))

        assert recording_server.instances[0].config.port == 8080

    @pytest.mark.asyncio
    async def test_startup_scenario_logs(self, fake_mongo, recording_server, caplog):
        """With no environment set, the default database connection is confirmed in the log."""
        caplog.set_level(logging.INFO)

        await serve(Settings.from_env({}))

        assert "Connected to MongoDB at mongodb://localhost:27017/bookingDB" in caplog.text
        assert recording_server.instances[0].config.host == "0.0.0.0"

    @pytest.mark.asyncio
    async def test_connector_injected_into_app(self, fake_mongo, recording_server):
        await serve(Settings.from_env({}))

        app = recording_server.instances[0].config.app
        connector = app.state.connector
        assert connector.is_connected
        assert connector.database["users"].indexes

    @pytest.mark.asyncio
    async def test_connection_failure_exits_with_status_1(
        self, monkeypatch, recording_server, caplog
    ):
        monkeypatch.setattr(db_module, "AsyncMongoClient", UnreachableMongoClient)

        with pytest.raises(SystemExit) as excinfo:
            await serve(Settings.from_env({}))

        assert excinfo.value.code == 1
        assert "MongoDB Connection Error" in caplog.text
        assert "Connection refused" in caplog.text

    @pytest.mark.asyncio
    async def test_malformed_url_exits_with_status_1(self, recording_server, caplog):
        settings = Settings.from_env({"MONGO_URL": "mongodb://localhost:notaport/bookingDB"})

        with pytest.raises(SystemExit) as excinfo:
            await serve(settings)

        assert excinfo.value.code == 1
        assert "MongoDB Connection Error" in caplog.text
        assert not recording_server.instances

    @pytest.mark.asyncio
    async def test_uvicorn_follows_configured_log_level(self, fake_mongo, recording_server):
        await serve(Settings.from_env({"LOG_LEVEL": "WARNING"}))

        config = recording_server.instances[0].config
        assert config.log_level == "warning"
        assert config.log_config is None


class TestApiServer:
    """The listening confirmation is only logged once the socket is bound."""

    @pytest.fixture
    def api_server(self):
        return ApiServer(Config(app=lambda scope, receive, send: None, port=5000, log_config=None))

    @pytest.mark.asyncio
    async def test_logs_after_successful_startup(self, api_server, monkeypatch, caplog):
        async def bound(self, sockets=None):
            self.started = True

        monkeypatch.setattr(Server, "startup", bound)
        caplog.set_level(logging.INFO)

        await api_server.startup()

        assert "Server running on http://localhost:5000" in caplog.text

    @pytest.mark.asyncio
    async def test_silent_when_startup_aborted(self, api_server, monkeypatch, caplog):
        async def aborted(self, sockets=None):
            self.should_exit = True

        monkeypatch.setattr(Server, "startup", aborted)
        caplog.set_level(logging.INFO)

        await api_server.startup()

        assert "Server running" not in caplog.text

    @pytest.mark.asyncio
    async def test_silent_when_bind_fails(self, api_server, monkeypatch, caplog):
        async def bind_failed(self, sockets=None):
            raise SystemExit(1)

        monkeypatch.setattr(Server, "startup", bind_failed)
        caplog.set_level(logging.INFO)

        with pytest.raises(SystemExit):
            await api_server.startup()

        assert "Server running" not in caplog.text
