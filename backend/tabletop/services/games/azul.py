"""Azul wall scoring.

Players mark tiles on their 5x5 wall as they place them; placement points
accumulate in ``roundScore`` and are banked (with the floor penalty) at
the end of each round. The game ends after the round in which any player
completes a horizontal row, and end-game bonuses are added.
"""

from typing import Dict, List

from tabletop.errors import GameRuleError
from . import roster

STORAGE_KEY = 'azulGameData'
PLAYER_COLORS = ('#E74C3C', '#3498DB', '#2ECC71', '#F39C12')
MAX_PLAYERS = 4
SIZE = 5

TILE_COLORS = ('blue', 'yellow', 'red', 'black', 'cyan')

# Each row is the previous one shifted right by one
WALL_PATTERN = tuple(
    tuple(TILE_COLORS[(col - row) % SIZE] for col in range(SIZE))
    for row in range(SIZE)
)

FLOOR_PENALTIES = (-1, -1, -2, -2, -2, -3, -3)

ROW_BONUS = 2
COLUMN_BONUS = 7
COLOR_BONUS = 10

Wall = List[List[bool]]


def empty_wall() -> Wall:
    return [[False] * SIZE for _ in range(SIZE)]


def new_player(player_id, position):
    return {
        'id': player_id,
        'name': roster.default_name(player_id),
        'color': PLAYER_COLORS[position % len(PLAYER_COLORS)],
        'wall': empty_wall(),
        'floorTiles': 0,
        'score': 0,
        'roundScore': 0,
        'tilesPlacedThisRound': [],
    }


def default_state():
    return {'players': [new_player(1, 0)], 'currentRound': 1, 'results': None}


def normalize(state):
    state['currentRound'] = state.get('currentRound') or 1
    state.setdefault('results', None)
    for p in state.get('players') or []:
        p.setdefault('tilesPlacedThisRound', [])
        p.setdefault('floorTiles', 0)
        p.setdefault('roundScore', 0)
        p.setdefault('score', 0)
    return state


def placement_points(wall: Wall, row: int, col: int) -> int:
    """Points for the tile at (row, col), which must already be marked."""
    horizontal = 1
    c = col - 1
    while c >= 0 and wall[row][c]:
        horizontal += 1
        c -= 1
    c = col + 1
    while c < SIZE and wall[row][c]:
        horizontal += 1
        c += 1

    vertical = 1
    r = row - 1
    while r >= 0 and wall[r][col]:
        vertical += 1
        r -= 1
    r = row + 1
    while r < SIZE and wall[r][col]:
        vertical += 1
        r += 1

    if horizontal > 1 and vertical > 1:
        return horizontal + vertical
    if horizontal > 1:
        return horizontal
    if vertical > 1:
        return vertical
    return 1


def floor_penalty(floor_tiles: int) -> int:
    return sum(FLOOR_PENALTIES[:max(0, min(floor_tiles, len(FLOOR_PENALTIES)))])


def completions(wall: Wall) -> Dict[str, int]:
    rows = sum(1 for row in wall if all(row))
    cols = sum(1 for col in range(SIZE) if all(wall[row][col] for row in range(SIZE)))
    colors = sum(
        1 for color in TILE_COLORS
        if all(wall[row][WALL_PATTERN[row].index(color)] for row in range(SIZE))
    )
    return {'rows': rows, 'cols': cols, 'colors': colors}


def end_game_bonus(wall: Wall) -> int:
    done = completions(wall)
    return done['rows'] * ROW_BONUS + done['cols'] * COLUMN_BONUS + done['colors'] * COLOR_BONUS


def has_complete_row(players) -> bool:
    return any(all(row) for p in players for row in p['wall'])


def add_player(state):
    return roster.add_player(state, new_player, MAX_PLAYERS, 'Azul supports 2-4 players.')


def remove_player(state, player_id):
    return roster.remove_player(state, player_id)


def _require_in_progress(state):
    if state.get('results') is not None:
        raise GameRuleError('The game is over. Reset to play again.')


def _cell(value, name):
    index = roster.as_int(value, name)
    if not 0 <= index < SIZE:
        raise GameRuleError(f'{name} must be between 0 and {SIZE - 1}')
    return index


def toggle_tile(state, player_id, row, col):
    """Place a tile, or take back one placed this round."""
    _require_in_progress(state)
    player = roster.find_player(state, player_id)
    row, col = _cell(row, 'row'), _cell(col, 'col')
    wall = player['wall']
    placed_rows = player['tilesPlacedThisRound']

    if not wall[row][col]:
        if row in placed_rows:
            raise GameRuleError(
                'You can only place one tile per row each round. '
                'Remove the existing tile first if you want to change it.'
            )
        wall[row][col] = True
        player['roundScore'] += placement_points(wall, row, col)
        placed_rows.append(row)
        return state

    if row not in placed_rows:
        raise GameRuleError('Tiles from previous rounds cannot be removed')
    player['roundScore'] -= placement_points(wall, row, col)
    wall[row][col] = False
    player['tilesPlacedThisRound'] = [r for r in placed_rows if r != row]
    return state


def adjust_floor(state, player_id, amount=1):
    _require_in_progress(state)
    player = roster.find_player(state, player_id)
    player['floorTiles'] = max(0, min(len(FLOOR_PENALTIES), player['floorTiles'] + roster.as_int(amount, 'amount')))
    return state


def banked_score(player) -> int:
    return max(0, player['score'] + player['roundScore'] + floor_penalty(player['floorTiles']))


def final_results(players):
    rows = []
    for p in players:
        bonus = end_game_bonus(p['wall'])
        rows.append({
            'id': p['id'],
            'name': p['name'],
            'currentScore': p['score'],
            'endGameBonus': bonus,
            'completions': completions(p['wall']),
            'finalScore': p['score'] + bonus,
        })
    return roster.ranked(rows, 'finalScore')


def end_round(state):
    _require_in_progress(state)
    game_over = has_complete_row(state['players'])
    for p in state['players']:
        p['score'] = banked_score(p)
        p['roundScore'] = 0
        p['floorTiles'] = 0
        p['tilesPlacedThisRound'] = []
    if game_over:
        state['results'] = final_results(state['players'])
    else:
        state['currentRound'] += 1
    return state


def finish(state):
    """End the game now, banking the round in progress."""
    _require_in_progress(state)
    for p in state['players']:
        p['score'] = banked_score(p)
        p['roundScore'] = 0
        p['floorTiles'] = 0
        p['tilesPlacedThisRound'] = []
    state['results'] = final_results(state['players'])
    return state


def reset(state):
    for p in state['players']:
        p.update(wall=empty_wall(), floorTiles=0, score=0, roundScore=0, tilesPlacedThisRound=[])
    state['currentRound'] = 1
    state['results'] = None
    return state


def summary(state):
    return {
        'final_round': has_complete_row(state['players']),
        'players': [
            {
                'id': p['id'],
                'name': p['name'],
                'floorPenalty': floor_penalty(p['floorTiles']),
                'endGameBonus': end_game_bonus(p['wall']),
                'completions': completions(p['wall']),
            }
            for p in state['players']
        ],
    }


ACTIONS = {
    'toggle_tile': toggle_tile,
    'adjust_floor': adjust_floor,
    'end_round': end_round,
    'finish': finish,
    'reset': reset,
}
