"""Ticket to Ride scoring: route claims, tickets and the longest route bonus."""

import copy
import time

from tabletop.errors import GameRuleError
from . import roster

STORAGE_KEY = 'ticketToRideGameData'
PLAYER_COLORS = (
    {'name': 'Blue', 'color': '#0066CC'},
    {'name': 'Red', 'color': '#DC143C'},
    {'name': 'Green', 'color': '#228B22'},
    {'name': 'Yellow', 'color': '#FFD700'},
    {'name': 'Black', 'color': '#333333'},
)
MAX_PLAYERS = 5
DEFAULT_LONGEST_ROUTE_BONUS = 10
UNDO_WINDOW_SEC = 5

# Points by number of trains in the claimed route
ROUTE_POINTS = {1: 1, 2: 2, 3: 4, 4: 7, 5: 10, 6: 15, 7: 18, 8: 21}


def new_player(player_id, position, color=None):
    return {
        'id': player_id,
        'name': roster.default_name(player_id),
        'color': dict(color or PLAYER_COLORS[position % len(PLAYER_COLORS)]),
        'score': 0,
        'longestRoute': False,
    }


def default_state():
    return {
        'players': [new_player(i + 1, i) for i in range(MAX_PLAYERS)],
        'longestRouteBonus': DEFAULT_LONGEST_ROUTE_BONUS,
        'lastAction': None,
    }


def normalize(state):
    state.setdefault('lastAction', None)
    state['longestRouteBonus'] = state.get('longestRouteBonus') or DEFAULT_LONGEST_ROUTE_BONUS
    for p in state.get('players') or []:
        p.setdefault('longestRoute', False)
    return state


def route_points(length) -> int:
    length = roster.as_int(length, 'length')
    if length not in ROUTE_POINTS:
        raise GameRuleError(f'Routes are 1 to 8 trains long, not {length}')
    return ROUTE_POINTS[length]


def available_color(players):
    used = {p['color']['name'] for p in players}
    for color in PLAYER_COLORS:
        if color['name'] not in used:
            return color
    return PLAYER_COLORS[0]


def add_player(state):
    color = available_color(state['players'])
    return roster.add_player(
        state,
        lambda pid, position: new_player(pid, position, color),
        MAX_PLAYERS,
        'Ticket to Ride supports up to 5 players',
    )


def remove_player(state, player_id):
    return roster.remove_player(state, player_id, min_message='You need at least one player!')


def claim_route(state, player_id, length, now_ms=None):
    points = route_points(length)
    player = roster.find_player(state, player_id)
    previous = copy.deepcopy(state['players'])
    player['score'] += points
    state['lastAction'] = {
        'type': 'route',
        'playerId': player['id'],
        'points': points,
        'previousPlayers': previous,
        'at': int(time.time() * 1000) if now_ms is None else now_ms,
    }
    return state


def undo(state, now_ms=None, undo_window_sec=UNDO_WINDOW_SEC):
    """Restore the players as they were before the last route claim."""
    action = state.get('lastAction')
    if not action or action.get('type') != 'route':
        raise GameRuleError('Nothing to undo')
    now_ms = int(time.time() * 1000) if now_ms is None else now_ms
    if now_ms - action['at'] > undo_window_sec * 1000:
        raise GameRuleError('Too late to undo the last route')
    state['players'] = action['previousPlayers']
    state['lastAction'] = None
    return state


def adjust(state, player_id, amount):
    player = roster.find_player(state, player_id)
    player['score'] = max(0, player['score'] + roster.as_int(amount, 'amount'))
    return state


def tickets(state, player_id, points):
    """Destination tickets: completed ones add, failed ones subtract."""
    player = roster.find_player(state, player_id)
    player['score'] += roster.lenient_int(points)
    return state


def toggle_longest_route(state, player_id):
    holder = roster.find_player(state, player_id)
    bonus = state['longestRouteBonus']
    for p in state['players']:
        if p is holder:
            p['score'] += -bonus if p['longestRoute'] else bonus
            p['longestRoute'] = not p['longestRoute']
        elif p['longestRoute']:
            p['longestRoute'] = False
            p['score'] -= bonus
    return state


def set_longest_route_bonus(state, bonus):
    bonus = roster.as_int(bonus, 'bonus')
    if bonus <= 0:
        raise GameRuleError('The bonus must be positive')
    state['longestRouteBonus'] = bonus
    return state


def reset(state):
    for p in state['players']:
        p['score'] = 0
        p['longestRoute'] = False
    state['lastAction'] = None
    return state


def standings(players):
    return roster.ranked([{'id': p['id'], 'name': p['name'], 'score': p['score']} for p in players], 'score')


def summary(state):
    return {'standings': standings(state['players']), 'route_points': ROUTE_POINTS}


ACTIONS = {
    'claim_route': claim_route,
    'undo': undo,
    'adjust': adjust,
    'tickets': tickets,
    'toggle_longest_route': toggle_longest_route,
    'set_longest_route_bonus': set_longest_route_bonus,
    'reset': reset,
}
