"""
Outbound side of the transport.

The coordinator never talks to Socket.IO directly; it tells a gateway which
connection or which session group should receive an event.
"""

from abc import ABC, abstractmethod
from typing import Any


class ConnectionGateway(ABC):
    """Emits events to single connections or to a session's group."""

    @abstractmethod
    def send(self, connection_id: str, event: str, payload: Any):
        """Emit ``event`` to one connection only."""

    @abstractmethod
    def broadcast(self, session_id: str, event: str, payload: Any):
        """Emit ``event`` to every connection in the session's group."""

    @abstractmethod
    def join_group(self, connection_id: str, session_id: str):
        """Subscribe a connection to the session's group."""

    @abstractmethod
    def close_group(self, session_id: str):
        """Remove every connection from the session's group."""


class SocketIOGateway(ConnectionGateway):
    """Gateway backed by a Flask-SocketIO server.

    Session groups are Socket.IO rooms named after the session id.  Emits
    are queued per connection by the server, so a slow client does not hold
    up the caller.
    """

    def __init__(self, socketio, namespace: str = '/'):
        self.socketio = socketio
        self.namespace = namespace

    def send(self, connection_id, event, payload):
        self.socketio.emit(event, payload, to=connection_id, namespace=self.namespace)

    def broadcast(self, session_id, event, payload):
        self.socketio.emit(event, payload, to=session_id, namespace=self.namespace)

    def join_group(self, connection_id, session_id):
        self.socketio.server.enter_room(connection_id, session_id, namespace=self.namespace)

    def close_group(self, session_id):
        self.socketio.close_room(session_id, namespace=self.namespace)
