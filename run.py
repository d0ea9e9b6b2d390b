"""
Server entry point.

Run this script to start the relay server with WebSocket support.  The
listen port comes from the PORT environment variable (default 3001).
"""

import sys

from loguru import logger

from chess_relay.app import create_app

if __name__ == '__main__':
    app, socketio = create_app()
    port = app.config['PORT']
    try:
        logger.info(f"Chess server running on port {port}")
        socketio.run(app, debug=app.config['DEBUG'], host='0.0.0.0', port=port,
                     allow_unsafe_werkzeug=True)
    except OSError as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)
