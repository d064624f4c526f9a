"""Catan victory point tracker."""

import random

from tabletop.errors import GameRuleError
from . import roster

STORAGE_KEY = 'catanGameData'
PLAYER_COLORS = ('#E74C3C', '#3498DB', '#2ECC71', '#F39C12', '#9B59B6', '#1ABC9C')
MAX_PLAYERS = 6
WINNING_POINTS = 10
COUNTERS = ('settlements', 'cities', 'devCards')


def new_player(player_id, position):
    return {
        'id': player_id,
        'name': roster.default_name(player_id),
        'color': PLAYER_COLORS[position % len(PLAYER_COLORS)],
        'settlements': 0,
        'cities': 0,
        'devCards': 0,
        'hasLongestRoad': False,
        'hasLargestArmy': False,
    }


def default_state():
    return {'players': [new_player(1, 0)]}


def victory_points(player) -> int:
    return (
        player['settlements']
        + player['cities'] * 2
        + player['devCards']
        + (2 if player['hasLongestRoad'] else 0)
        + (2 if player['hasLargestArmy'] else 0)
    )


def find_winner(players):
    """First player in seating order at or above the winning total."""
    for p in players:
        if victory_points(p) >= WINNING_POINTS:
            return p
    return None


def add_player(state):
    return roster.add_player(state, new_player, MAX_PLAYERS, 'Catan supports up to 6 players.')


def remove_player(state, player_id):
    return roster.remove_player(state, player_id)


def adjust(state, player_id, field, amount=1):
    if field not in COUNTERS:
        raise GameRuleError(f'Unknown field: {field}')
    player = roster.find_player(state, player_id)
    player[field] = max(0, player[field] + roster.as_int(amount, 'amount'))
    return state


def _toggle_exclusive(state, player_id, flag):
    holder = roster.find_player(state, player_id)
    taking = not holder[flag]
    for p in state['players']:
        p[flag] = taking if p is holder else False
    return state


def toggle_longest_road(state, player_id):
    return _toggle_exclusive(state, player_id, 'hasLongestRoad')


def toggle_largest_army(state, player_id):
    return _toggle_exclusive(state, player_id, 'hasLargestArmy')


def reset(state):
    for p in state['players']:
        p.update(settlements=0, cities=0, devCards=0, hasLongestRoad=False, hasLargestArmy=False)
    return state


def roll_dice(rng=random):
    dice1, dice2 = rng.randint(1, 6), rng.randint(1, 6)
    return {'dice1': dice1, 'dice2': dice2, 'total': dice1 + dice2}


def summary(state):
    winner = find_winner(state['players'])
    return {
        'points': [{'id': p['id'], 'name': p['name'], 'points': victory_points(p)} for p in state['players']],
        'winner': {'id': winner['id'], 'name': winner['name']} if winner else None,
    }


ACTIONS = {
    'adjust': adjust,
    'toggle_longest_road': toggle_longest_road,
    'toggle_largest_army': toggle_largest_army,
    'reset': reset,
}
