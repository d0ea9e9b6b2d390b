"""
Flask application factory and main application entry point.

This module creates and configures the Flask application instance
with WebSocket support for relaying games between two players.
"""

import os
import sys

from flask import Flask
from flask_socketio import SocketIO
from flask_cors import CORS
from loguru import logger

from .coordinator import SessionCoordinator
from .gateway import SocketIOGateway
from .session_registry import SessionRegistry

DEFAULT_PORT = 3001
DEFAULT_CORS_ORIGIN = 'http://localhost:3000'


def _env_config():
    """Settings that may be overridden from the environment."""
    config = {}
    if 'PORT' in os.environ:
        config['PORT'] = int(os.environ['PORT'])
    for key in ('CORS_ORIGIN', 'SECRET_KEY', 'LOG_LEVEL'):
        if key in os.environ:
            config[key] = os.environ[key]
    return config


def create_app(config=None):
    """
    Create and configure the Flask application.

    Defaults are overridden by environment variables, which are in turn
    overridden by ``config``.

    Args:
        config: Configuration dictionary

    Returns:
        Tuple of the Flask application and its SocketIO instance
    """
    app = Flask(__name__)

    # Default configuration
    app.config.update({
        'SECRET_KEY': 'dev-key-change-in-production',
        'DEBUG': False,
        'PORT': DEFAULT_PORT,
        'CORS_ORIGIN': DEFAULT_CORS_ORIGIN,
        'LOG_LEVEL': 'INFO'
    })
    app.config.update(_env_config())

    if config:
        app.config.update(config)

    # Configure logging
    logger.remove()  # Remove default handler
    logger.add(
        sys.stderr,
        format="{time} | {level} | {message}",
        level=app.config['LOG_LEVEL'],
        colorize=True
    )
    logger.info("Starting chess relay server")

    origin = app.config['CORS_ORIGIN']

    # Enable CORS for HTTP requests from the game client
    CORS(app, origins=[origin])

    # Initialize SocketIO for WebSocket support
    socketio = SocketIO(app, cors_allowed_origins=[origin])

    registry = SessionRegistry()
    app.coordinator = SessionCoordinator(registry, SocketIOGateway(socketio))

    from . import routes
    app.register_blueprint(routes.bp)

    # Initialize WebSocket handlers
    from . import websocket_handlers
    websocket_handlers.init_socketio_handlers(socketio, app.coordinator)

    return app, socketio
