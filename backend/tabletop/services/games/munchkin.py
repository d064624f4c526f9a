"""Munchkin level tracker and combat calculator."""

from tabletop.errors import GameRuleError
from . import roster

STORAGE_KEY = 'munchkinGameData'
MIN_LEVEL = 1
MAX_LEVEL = 10


def new_player(player_id, position):
    return {'id': player_id, 'name': roster.default_name(player_id), 'level': 1, 'gear': 0, 'curses': 0}


def default_state():
    return {'players': [new_player(i, i - 1) for i in range(1, 5)]}


def normalize(state):
    for p in state.get('players') or []:
        if p.get('gear') is None:
            p['gear'] = 0
        if p.get('curses') is None:
            p['curses'] = 0
    if not state.get('players'):
        state['players'] = default_state()['players']
    return state


def add_player(state):
    return roster.add_player(state, new_player)


def remove_player(state, player_id):
    return roster.remove_player(state, player_id, min_message='You need at least one player!')


def change_level(state, player_id, amount=1):
    player = roster.find_player(state, player_id)
    player['level'] = max(MIN_LEVEL, min(MAX_LEVEL, player['level'] + roster.as_int(amount, 'amount')))
    return state


def change_gear(state, player_id, amount=1):
    player = roster.find_player(state, player_id)
    player['gear'] += roster.as_int(amount, 'amount')
    return state


def change_curses(state, player_id, amount=1):
    player = roster.find_player(state, player_id)
    player['curses'] = max(0, player['curses'] + roster.as_int(amount, 'amount'))
    return state


def reset(state):
    for p in state['players']:
        p['level'] = 1
        p['gear'] = 0
    return state


def combat_strength(player) -> int:
    return player['level'] + player['gear']


def _side_total(base, bonuses):
    if bonuses is None:
        return base
    if not isinstance(bonuses, list):
        raise GameRuleError('bonuses must be a list')
    return base + sum(roster.as_int(b, 'bonus') for b in bonuses)


def _entry(value, side):
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise GameRuleError(f'Each {side} entry must be an object')
    return value


def battle(state, heroes, monsters):
    """Resolve a fight.

    ``heroes`` is a list of ``{"player_id", "bonuses"}``; ``monsters`` a
    list of ``{"strength", "bonuses"}``. Bonuses are signed integers.
    The players win only on a strictly higher total.
    """
    heroes = [] if heroes is None else heroes
    monsters = [] if monsters is None else monsters
    if not isinstance(heroes, list) or not isinstance(monsters, list):
        raise GameRuleError('players and monsters must be lists')
    if not heroes:
        raise GameRuleError('At least one player must be in the battle')
    if not monsters:
        raise GameRuleError('At least one monster must be in the battle')

    hero_rows = []
    seen = set()
    for entry in heroes:
        entry = _entry(entry, 'player')
        player = roster.find_player(state, entry.get('player_id'))
        if player['id'] in seen:
            raise GameRuleError(f"{player['name']} is already in this battle")
        seen.add(player['id'])
        hero_rows.append({
            'player_id': player['id'],
            'name': player['name'],
            'base': combat_strength(player),
            'total': _side_total(combat_strength(player), entry.get('bonuses')),
        })

    monster_rows = []
    for entry in monsters:
        entry = _entry(entry, 'monster')
        strength = roster.lenient_int(entry.get('strength'))
        if strength <= 0:
            raise GameRuleError('Please enter a valid monster strength')
        monster_rows.append({'base': strength, 'total': _side_total(strength, entry.get('bonuses'))})

    heroes_total = sum(r['total'] for r in hero_rows)
    monsters_total = sum(r['total'] for r in monster_rows)
    return {
        'players': hero_rows,
        'monsters': monster_rows,
        'players_total': heroes_total,
        'monsters_total': monsters_total,
        'outcome': 'players' if heroes_total > monsters_total else 'monsters',
    }


def summary(state):
    champions = [p for p in state['players'] if p['level'] >= MAX_LEVEL]
    return {
        'strength': [{'id': p['id'], 'name': p['name'], 'strength': combat_strength(p)} for p in state['players']],
        'winner': {'id': champions[0]['id'], 'name': champions[0]['name']} if champions else None,
    }


ACTIONS = {
    'level': change_level,
    'gear': change_gear,
    'curses': change_curses,
    'reset': reset,
}
