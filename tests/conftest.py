"""
Shared fixtures for the relay tests.
"""

import pytest
from collections import defaultdict
from chess_relay.app import create_app
from chess_relay.coordinator import SessionCoordinator
from chess_relay.gateway import ConnectionGateway
from chess_relay.session_registry import SessionRegistry


class RecordingGateway(ConnectionGateway):
    """Gateway that records every emit and delivers broadcasts to group members."""

    def __init__(self):
        self.groups = {}  # session_id -> list of connection ids
        self.inbox = defaultdict(list)  # connection_id -> [(event, payload)]
        self.sent = []  # (connection_id, event, payload)
        self.broadcasts = []  # (session_id, event, payload)
        self.closed = []

    def send(self, connection_id, event, payload):
        self.sent.append((connection_id, event, payload))
        self.inbox[connection_id].append((event, payload))

    def broadcast(self, session_id, event, payload):
        self.broadcasts.append((session_id, event, payload))
        for connection_id in self.groups.get(session_id, []):
            self.inbox[connection_id].append((event, payload))

    def join_group(self, connection_id, session_id):
        self.groups.setdefault(session_id, []).append(connection_id)

    def close_group(self, session_id):
        self.groups.pop(session_id, None)
        self.closed.append(session_id)

    def received(self, connection_id):
        """Return and forget everything delivered to the connection so far."""
        return self.inbox.pop(connection_id, [])


@pytest.fixture
def gateway():
    return RecordingGateway()


@pytest.fixture
def registry():
    return SessionRegistry()


@pytest.fixture
def coordinator(registry, gateway):
    return SessionCoordinator(registry, gateway)


@pytest.fixture
def app():
    """Create a test Flask application."""
    app, socketio = create_app({'TESTING': True})
    app.socketio = socketio  # Store socketio instance for testing
    return app


@pytest.fixture
def client(app):
    """Create a test client for the Flask application."""
    return app.test_client()
