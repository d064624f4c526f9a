from flask import Blueprint, jsonify, request, current_app
from tabletop import socketio
from tabletop.catalog import list_games
from tabletop.services import settings as svc_settings
from tabletop.services.games import registry


games = Blueprint('games', __name__)


def _broadcast(slug: str) -> None:
    socketio.emit('state_update', {'game': slug}, to=f"game:{slug}", namespace='/ws')


def _saved(slug: str, state):
    _broadcast(slug)
    return jsonify(registry.snapshot(slug, state))


@games.route('', methods=['GET'])
def list_catalog():
    premium = svc_settings.is_premium()
    return jsonify({
        'isPremium': premium,
        'games': list_games(premium, request.args.get('q', '')),
    })


@games.route('/<string:slug>/state', methods=['GET'])
def get_state(slug):
    game = registry.get_game(slug)
    return jsonify(registry.snapshot(slug, registry.load_state(game)))


@games.route('/<string:slug>/state', methods=['DELETE'])
def clear_state(slug):
    game = registry.get_game(slug)
    state = registry.clear_state(game)
    current_app.logger.info(f"[clear] game={slug}")
    return _saved(slug, state)


@games.route('/<string:slug>/players', methods=['POST'])
def add_player(slug):
    game = registry.get_game(slug)
    return _saved(slug, registry.add_player(game)), 201


@games.route('/<string:slug>/players/<int:player_id>', methods=['PATCH'])
def rename_player(slug, player_id):
    data = request.get_json(silent=True) or {}
    if 'name' not in data:
        return jsonify({'error': 'name is required'}), 400
    game = registry.get_game(slug)
    return _saved(slug, registry.rename_player(game, player_id, data['name']))


@games.route('/<string:slug>/players/<int:player_id>', methods=['DELETE'])
def remove_player(slug, player_id):
    game = registry.get_game(slug)
    return _saved(slug, registry.remove_player(game, player_id))


@games.route('/<string:slug>/actions/<string:action>', methods=['POST'])
def run_action(slug, action):
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    game = registry.get_game(slug)
    state = registry.run_action(game, action, data)
    current_app.logger.info(f"[action] game={slug} action={action}")
    return _saved(slug, state)
