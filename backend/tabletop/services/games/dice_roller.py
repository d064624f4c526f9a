"""Per-player dice pools with a short roll history."""

import random
import time
from datetime import datetime, timezone

from tabletop.errors import GameRuleError, NotFoundError
from . import roster

STORAGE_KEY = 'diceRollerGameData'
DICE_TYPES = (2, 3, 4, 6, 8, 10, 12, 20, 100)
ROLL_HISTORY = 10


def new_player(player_id, position):
    return {'id': player_id, 'name': roster.default_name(player_id), 'dice': [], 'rolls': []}


def default_state():
    return {'players': [new_player(1, 0)], 'nextId': 2}


def normalize(state):
    # Older saves may lack the dice/rolls lists
    for p in state.get('players') or []:
        p.setdefault('dice', [])
        p.setdefault('rolls', [])
    state.setdefault('players', default_state()['players'])
    state.setdefault('nextId', roster.next_player_id(state['players']))
    return state


def add_player(state):
    pid = int(state.get('nextId') or roster.next_player_id(state['players']))
    state['players'].append(new_player(pid, len(state['players'])))
    state['nextId'] = pid + 1
    return state


def remove_player(state, player_id):
    return roster.remove_player(state, player_id, min_message='At least one player must remain.')


def _next_die_id(state):
    return max((d['id'] for p in state['players'] for d in p['dice']), default=0) + 1


def add_die(state, player_id, sides):
    player = roster.find_player(state, player_id)
    sides = roster.as_int(sides, 'sides')
    if sides not in DICE_TYPES:
        raise GameRuleError(f'Unsupported die: d{sides}')
    player['dice'].append({'id': _next_die_id(state), 'type': sides})
    return state


def remove_die(state, player_id, die_id):
    player = roster.find_player(state, player_id)
    die_id = roster.as_int(die_id, 'die_id')
    if not any(d['id'] == die_id for d in player['dice']):
        raise NotFoundError(f'Die {die_id} not found')
    player['dice'] = [d for d in player['dice'] if d['id'] != die_id]
    return state


def clear_dice(state, player_id):
    roster.find_player(state, player_id)['dice'] = []
    return state


def roll_die(sides, rng=random):
    return rng.randint(1, sides)


def _roll_for(player, rng, now_ms):
    results = [{'diceId': d['id'], 'type': d['type'], 'result': roll_die(d['type'], rng)} for d in player['dice']]
    previous_id = player['rolls'][0]['id'] if player['rolls'] else 0
    roll = {
        'id': max(now_ms, previous_id + 1),
        'timestamp': datetime.fromtimestamp(now_ms / 1000.0, tz=timezone.utc).isoformat(),
        'results': results,
        'total': sum(r['result'] for r in results),
    }
    player['rolls'] = [roll] + player['rolls'][:ROLL_HISTORY - 1]
    return roll


def roll(state, player_id, rng=random, now_ms=None):
    player = roster.find_player(state, player_id)
    if not player['dice']:
        raise GameRuleError('Add some dice first before rolling!')
    _roll_for(player, rng, int(time.time() * 1000) if now_ms is None else now_ms)
    return state


def roll_all(state, rng=random, now_ms=None):
    now_ms = int(time.time() * 1000) if now_ms is None else now_ms
    armed = [p for p in state['players'] if p['dice']]
    if not armed:
        raise GameRuleError('Add dice to at least one player before rolling!')
    for p in armed:
        _roll_for(p, rng, now_ms)
    return state


def clear_rolls(state, player_id):
    roster.find_player(state, player_id)['rolls'] = []
    return state


def clear_all_rolls(state):
    for p in state['players']:
        p['rolls'] = []
    return state


def summary(state):
    return {
        'dice_types': list(DICE_TYPES),
        'latest': [
            {'id': p['id'], 'total': p['rolls'][0]['total'] if p['rolls'] else None}
            for p in state['players']
        ],
    }


ACTIONS = {
    'add_die': add_die,
    'remove_die': remove_die,
    'clear_dice': clear_dice,
    'roll': roll,
    'roll_all': roll_all,
    'clear_rolls': clear_rolls,
    'clear_all_rolls': clear_all_rolls,
}
