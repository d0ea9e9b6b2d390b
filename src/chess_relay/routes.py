"""
HTTP routes.

Games are played entirely over Socket.IO; these read-only endpoints report
server health and the sessions currently held by the coordinator.
"""

from flask import Blueprint, current_app, jsonify

bp = Blueprint('main', __name__)


@bp.route('/')
def index():
    """Server status."""
    registry = current_app.coordinator.registry
    return jsonify({
        'success': True,
        'data': {
            'message': 'Chess relay server running',
            'active_games': len(registry)
        }
    }), 200


@bp.route('/api/games', methods=['GET'])
def get_all_games():
    """Get information about all active games on the server."""
    registry = current_app.coordinator.registry
    with registry.lock:
        games_list = [session.to_dict() for _, session in registry.items()]

    return jsonify({
        'success': True,
        'data': {
            'games': games_list,
            'total_games': len(games_list)
        }
    }), 200


@bp.route('/api/games/<game_id>', methods=['GET'])
def get_game(game_id):
    """Get information about a specific game."""
    registry = current_app.coordinator.registry
    with registry.lock:
        session = registry.get(game_id)
        if session is None:
            return jsonify({'success': False, 'error': 'Game not found'}), 404
        data = session.to_dict()

    return jsonify({'success': True, 'data': data}), 200
