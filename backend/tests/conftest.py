import pytest
from fastapi.testclient import TestClient

from duelrelay.connection import Connection
from duelrelay.main import create_app
from duelrelay.relay import RelayCoordinator
from duelrelay.rooms import RoomRegistry


class FakeConnection(Connection):
    """Connection that records everything sent to it."""

    def __init__(self, name=""):
        super().__init__()
        self.name = name
        self.sent = []
        self.terminations = 0
        self.pings = 0

    def __repr__(self):
        return f"<FakeConnection {self.name}>"

    def _deliver(self, payload):
        self.sent.append(payload)

    def _close(self):
        self.terminations += 1

    def _ping(self):
        self.pings += 1

    def pop(self):
        sent, self.sent = self.sent, []
        return sent


@pytest.fixture()
def registry():
    return RoomRegistry()


@pytest.fixture()
def coordinator(registry):
    return RelayCoordinator(registry)


@pytest.fixture()
def make_conn():
    return FakeConnection


@pytest.fixture()
def app():
    return create_app(heartbeat_interval=3600)


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client
