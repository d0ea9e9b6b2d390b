"""
WebSocket event handlers for real-time game communication.

This module binds the Socket.IO events sent by game clients to the session
coordinator.  Handlers only unpack payloads; every decision about what to
emit is made by the coordinator.
"""

from flask import request
from loguru import logger


def _game_id(data):
    """Accept a bare game id or a ``{'gameId': ...}`` payload.

    Returns None when no string id can be found, which no session matches.
    """
    if isinstance(data, dict):
        data = data.get('gameId')
    if isinstance(data, str):
        return data
    return None


def init_socketio_handlers(socketio, coordinator):
    """Initialize WebSocket event handlers."""

    @socketio.on('connect')
    def handle_connect(auth=None):
        """Handle WebSocket connection."""
        logger.info(f"User connected: {request.sid}")

    @socketio.on('disconnect')
    def handle_disconnect(*args):
        """Handle WebSocket disconnection by tearing down the player's games."""
        logger.info(f"User disconnected: {request.sid}")
        coordinator.disconnect(request.sid)

    @socketio.on('createGame')
    def handle_create_game(*args):
        """Handle a request to open a new game."""
        coordinator.create_session(request.sid)

    @socketio.on('joinGame')
    def handle_join_game(data=None):
        """Handle a request to join an existing game as black."""
        coordinator.join_session(request.sid, _game_id(data))

    @socketio.on('moveMade')
    def handle_move_made(data):
        """Handle a move to relay to both players."""
        coordinator.submit_move(
            request.sid,
            data.get('gameId'),
            data.get('newPosition'),
            data.get('newMove'),
            data.get('piece')
        )

    @socketio.on('gameOver')
    def handle_game_over(data):
        """Handle the end of a game."""
        coordinator.end_game(request.sid, data.get('gameId'), data.get('result'))

    @socketio.on_error_default
    def handle_error(e):
        """Report any failure inside an event handler to its sender."""
        coordinator.transport_error(request.sid, e)
