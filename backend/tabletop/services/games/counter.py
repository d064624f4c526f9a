"""Plain point counter: any number of players, free-form scores."""

import time
from typing import Any, Dict, Optional

from tabletop.errors import GameRuleError
from . import roster

STORAGE_KEY = 'counterGameData'
AUTO_SAVE_TIMEOUT_MS = 30 * 60 * 1000


def new_player(player_id: int, position: int) -> Dict[str, Any]:
    return {'id': player_id, 'name': roster.default_name(player_id), 'score': 0}


def default_state() -> Dict[str, Any]:
    return {'players': [new_player(1, 0), new_player(2, 1)], 'timestamp': None}


def normalize(state: Dict[str, Any], now_ms: Optional[int] = None,
              auto_save_timeout_ms: int = AUTO_SAVE_TIMEOUT_MS) -> Dict[str, Any]:
    """Drop saves older than the auto-save timeout."""
    now_ms = int(time.time() * 1000) if now_ms is None else now_ms
    saved_at = state.get('timestamp')
    if not isinstance(saved_at, (int, float)) or now_ms - saved_at >= auto_save_timeout_ms:
        return default_state()
    return state


def before_save(state: Dict[str, Any], now_ms: Optional[int] = None) -> Dict[str, Any]:
    state['timestamp'] = int(time.time() * 1000) if now_ms is None else now_ms
    return state


def add_player(state):
    return roster.add_player(state, new_player)


def remove_player(state, player_id):
    return roster.remove_player(state, player_id)


def adjust(state, player_id, amount=1):
    player = roster.find_player(state, player_id)
    player['score'] += roster.as_int(amount, 'amount')
    return state


def set_score(state, player_id, score):
    player = roster.find_player(state, player_id)
    try:
        player['score'] = int(str(score).strip())
    except (TypeError, ValueError):
        raise GameRuleError('Score must be a whole number')
    return state


def reset(state):
    for p in state['players']:
        p['score'] = 0
    return state


def summary(state):
    leaders = roster.ranked([{'id': p['id'], 'name': p['name'], 'score': p['score']} for p in state['players']], 'score')
    return {'standings': leaders}


ACTIONS = {
    'adjust': adjust,
    'set_score': set_score,
    'reset': reset,
}
