"""Player list helpers shared by the roster-based games.

State operations in this package take the decoded game record (a plain
dict), change it in place and return it. Callers that need the previous
value keep their own copy.
"""

from typing import Any, Callable, Dict, List, Optional

from tabletop.errors import GameRuleError, NotFoundError

Player = Dict[str, Any]


def as_int(value: Any, name: str, default: Optional[int] = None) -> int:
    if value is None or value == '':
        if default is None:
            raise GameRuleError(f'{name} is required')
        return default
    if isinstance(value, bool):
        raise GameRuleError(f'{name} must be a whole number')
    if isinstance(value, float) and not value.is_integer():
        raise GameRuleError(f'{name} must be a whole number')
    try:
        return int(value)
    except (TypeError, ValueError):
        raise GameRuleError(f'{name} must be a whole number')


def lenient_int(value: Any) -> int:
    """Parse user-typed numbers the forgiving way: blanks and junk count as 0."""
    if isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        try:
            return int(float(value))
        except (TypeError, ValueError):
            return 0


def next_player_id(players: List[Player]) -> int:
    return max((p['id'] for p in players), default=0) + 1


def default_name(player_id: int) -> str:
    return f'Player {player_id}'


def find_player(state: Dict[str, Any], player_id: Any) -> Player:
    pid = as_int(player_id, 'player_id')
    for p in state['players']:
        if p['id'] == pid:
            return p
    raise NotFoundError(f'Player {pid} not found')


def add_player(state: Dict[str, Any], make_player: Callable[[int, int], Player],
               max_players: Optional[int] = None, max_message: str = '') -> Dict[str, Any]:
    """Append ``make_player(new_id, position)`` unless the table is full."""
    players = state['players']
    if max_players is not None and len(players) >= max_players:
        raise GameRuleError(max_message or f'This game supports up to {max_players} players.')
    players.append(make_player(next_player_id(players), len(players)))
    return state


def remove_player(state: Dict[str, Any], player_id: Any, min_players: int = 1,
                  min_message: str = 'You must have at least one player.') -> Dict[str, Any]:
    player = find_player(state, player_id)
    if len(state['players']) <= min_players:
        raise GameRuleError(min_message)
    state['players'] = [p for p in state['players'] if p['id'] != player['id']]
    return state


def rename_player(state: Dict[str, Any], player_id: Any, name: Any) -> Dict[str, Any]:
    player = find_player(state, player_id)
    player['name'] = str(name if name is not None else '')
    return state


def ranked(rows: List[Dict[str, Any]], key: str) -> List[Dict[str, Any]]:
    """Sort rows by ``key`` descending; ties keep their original order."""
    return sorted(rows, key=lambda row: row[key], reverse=True)
