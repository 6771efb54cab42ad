import logging
import os
import sys
import pytest

# Ensure the backend root (containing the `tabletop` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from tabletop import create_app, socketio
from tabletop.services import Lobby, TableSession


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = '*'
    SOCKETIO_NAMESPACE = '/'
    LOG_LEVEL = 'DEBUG'


class RecordingTransport:
    """In-memory stand-in for the Socket.IO transport."""

    def __init__(self):
        self.sent = []
        self.members = {}
        self.closed = []

    def emit(self, event, args, room):
        self.sent.append((event, tuple(args), room))

    def enter(self, player_id, room):
        self.members.setdefault(room, set()).add(player_id)

    def exit(self, player_id, room):
        self.members.get(room, set()).discard(player_id)

    def close(self, room):
        self.closed.append(room)
        self.members.pop(room, None)

    def events(self, name=None):
        return [s for s in self.sent if name is None or s[0] == name]

    def flush(self):
        self.sent = []


@pytest.fixture()
def transport():
    return RecordingTransport()


@pytest.fixture()
def lobby():
    return Lobby()


@pytest.fixture()
def session(lobby, transport):
    return TableSession(lobby, transport, logging.getLogger('tabletop.tests'))


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_sio_client(flask_app):
    created = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        created.append(test_client)
        return test_client

    yield _make
    for test_client in created:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass
