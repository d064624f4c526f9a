"""Slug lookup and the load/act/save cycle shared by every stored game.

Game modules expose plain functions. Their leading positional argument is
the decoded state; remaining parameters are filled from the request
payload by name, except for a few runtime values (clock, random source,
configured timeouts) that are always supplied here and cannot be set by
clients.
"""

import inspect
import random
import time
from typing import Any, Dict, Optional

from flask import current_app

from tabletop import storage
from tabletop.errors import GameRuleError, NotFoundError
from . import azul, catan, counter, dice_roller, munchkin, roster, seven_wonders, ticket_to_ride, tic_tac_toe, uno

GAMES = {
    'counter': counter,
    'dice-roller': dice_roller,
    'tic-tac-toe': tic_tac_toe,
    'catan': catan,
    'munchkin': munchkin,
    'seven-wonders': seven_wonders,
    'ticket-to-ride': ticket_to_ride,
    'uno': uno,
    'azul': azul,
}

RUNTIME_ARGS = frozenset({'now_ms', 'rng', 'undo_window_sec', 'auto_save_timeout_ms'})


def get_game(slug: str):
    game = GAMES.get(slug)
    if game is None:
        raise NotFoundError(f'Unknown game: {slug}')
    return game


def storage_keys():
    return [g.STORAGE_KEY for g in GAMES.values()]


def _runtime() -> Dict[str, Any]:
    cfg = current_app.config
    return {
        'now_ms': int(time.time() * 1000),
        'rng': random,
        'undo_window_sec': int(cfg.get('UNDO_WINDOW_SEC', 5)),
        'auto_save_timeout_ms': int(cfg.get('AUTO_SAVE_TIMEOUT_SEC', 1800)) * 1000,
    }


def call(fn, *args, payload: Optional[Dict[str, Any]] = None):
    """Call ``fn(*args, **kwargs)`` with kwargs drawn from runtime values and ``payload``."""
    payload = payload or {}
    runtime = _runtime()
    kwargs = {}
    params = list(inspect.signature(fn).parameters.values())[len(args):]
    for param in params:
        if param.name in RUNTIME_ARGS:
            kwargs[param.name] = runtime[param.name]
        elif param.name in payload:
            kwargs[param.name] = payload[param.name]
        elif param.default is inspect.Parameter.empty:
            raise GameRuleError(f'{param.name} is required')
    return fn(*args, **kwargs)


def load_state(game) -> Dict[str, Any]:
    """Read the stored record, falling back to defaults when absent or malformed."""
    data = storage.load_json(game.STORAGE_KEY)
    if data is None:
        return game.default_state()
    if not isinstance(data, dict) or not isinstance(data.get('players', []), list):
        current_app.logger.error(f"[storage-read] key={game.STORAGE_KEY} has unexpected shape; using defaults")
        return game.default_state()
    normalize = getattr(game, 'normalize', None)
    try:
        if normalize is not None:
            data = call(normalize, data)
        # Records the game cannot read are treated like corrupt ones
        game.summary(data)
    except (KeyError, TypeError, ValueError, AttributeError, IndexError) as exc:
        current_app.logger.error(f"[storage-read] key={game.STORAGE_KEY} could not be read: {exc!r}; using defaults")
        return game.default_state()
    return data


def save_state(game, state: Dict[str, Any]) -> Dict[str, Any]:
    before_save = getattr(game, 'before_save', None)
    if before_save is not None:
        state = call(before_save, state)
    storage.save_json(game.STORAGE_KEY, state)
    return state


def clear_state(game) -> Dict[str, Any]:
    storage.remove_item(game.STORAGE_KEY)
    return game.default_state()


def run_action(game, action: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    fn = game.ACTIONS.get(action)
    if fn is None:
        raise NotFoundError(f'Unknown action: {action}')
    state = call(fn, load_state(game), payload=payload)
    return save_state(game, state)


def _require_roster(game):
    if not hasattr(game, 'add_player'):
        raise NotFoundError('This game has no player list')


def add_player(game) -> Dict[str, Any]:
    _require_roster(game)
    return save_state(game, game.add_player(load_state(game)))


def remove_player(game, player_id) -> Dict[str, Any]:
    _require_roster(game)
    return save_state(game, game.remove_player(load_state(game), player_id))


def rename_player(game, player_id, name) -> Dict[str, Any]:
    _require_roster(game)
    return save_state(game, roster.rename_player(load_state(game), player_id, name))


def snapshot(slug: str, state: Dict[str, Any]) -> Dict[str, Any]:
    return {'game': slug, 'state': state, 'summary': GAMES[slug].summary(state)}
