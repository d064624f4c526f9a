"""7 Wonders end-of-game score sheet."""

from tabletop.errors import GameRuleError
from . import roster

STORAGE_KEY = 'sevenWondersGameData'
PLAYER_COLORS = ('#E74C3C', '#3498DB', '#2ECC71', '#F39C12', '#9B59B6', '#1ABC9C', '#E67E22')
MAX_PLAYERS = 7
CATEGORIES = ('military', 'treasury', 'wonder', 'civilian', 'commerce', 'guilds')
SYMBOLS = ('compass', 'gear', 'tablet')


def new_player(player_id, position):
    player = {
        'id': player_id,
        'name': roster.default_name(player_id),
        'color': PLAYER_COLORS[position % len(PLAYER_COLORS)],
    }
    player.update({c: 0 for c in CATEGORIES})
    player['science'] = {s: 0 for s in SYMBOLS}
    return player


def default_state():
    return {'players': [new_player(1, 0)]}


def science_points(compass: int, gear: int, tablet: int) -> int:
    """Squares of each symbol count plus 7 per complete set of three."""
    return compass * compass + gear * gear + tablet * tablet + 7 * min(compass, gear, tablet)


def treasury_points(coins: int) -> int:
    return coins // 3


def breakdown(player):
    science = player['science']
    return {
        'military': player['military'],
        'treasury': treasury_points(player['treasury']),
        'wonder': player['wonder'],
        'civilian': player['civilian'],
        'science': science_points(science['compass'], science['gear'], science['tablet']),
        'commerce': player['commerce'],
        'guilds': player['guilds'],
    }


def total_score(player) -> int:
    return sum(breakdown(player).values())


def add_player(state):
    return roster.add_player(state, new_player, MAX_PLAYERS, '7 Wonders supports up to 7 players.')


def remove_player(state, player_id):
    return roster.remove_player(state, player_id)


def _check_category(category):
    if category not in CATEGORIES:
        raise GameRuleError(f'Unknown category: {category}')


def _check_symbol(symbol):
    if symbol not in SYMBOLS:
        raise GameRuleError(f'Unknown science symbol: {symbol}')


def adjust(state, player_id, category, amount=1):
    _check_category(category)
    player = roster.find_player(state, player_id)
    player[category] = max(0, player[category] + roster.as_int(amount, 'amount'))
    return state


def set_value(state, player_id, category, value):
    _check_category(category)
    player = roster.find_player(state, player_id)
    player[category] = max(0, roster.lenient_int(value))
    return state


def adjust_science(state, player_id, symbol, amount=1):
    _check_symbol(symbol)
    science = roster.find_player(state, player_id)['science']
    science[symbol] = max(0, science[symbol] + roster.as_int(amount, 'amount'))
    return state


def set_science(state, player_id, symbol, value):
    _check_symbol(symbol)
    science = roster.find_player(state, player_id)['science']
    science[symbol] = max(0, roster.lenient_int(value))
    return state


def reset(state):
    for p in state['players']:
        p.update({c: 0 for c in CATEGORIES})
        p['science'] = {s: 0 for s in SYMBOLS}
    return state


def results(players):
    rows = [
        {'id': p['id'], 'name': p['name'], 'breakdown': breakdown(p), 'total': total_score(p)}
        for p in players
    ]
    return roster.ranked(rows, 'total')


def summary(state):
    return {'results': results(state['players'])}


ACTIONS = {
    'adjust': adjust,
    'set': set_value,
    'adjust_science': adjust_science,
    'set_science': set_science,
    'reset': reset,
}
