"""UNO round-by-round scoring.

Two win conditions are supported. With ``lowest`` every player adds their
own round points and the game ends once anyone reaches the target; the
lowest total then wins. With ``highest`` the round winner (the player who
went out, entered as 0 or left blank) collects everyone else's points and
the first to the target wins.
"""

from tabletop.errors import GameRuleError
from . import roster

STORAGE_KEY = 'unoGameData'
WIN_CONDITIONS = ('lowest', 'highest')
DEFAULT_TARGET = '500'
MIN_PLAYERS = 2


def new_player(player_id, position=0):
    return {'id': player_id, 'name': roster.default_name(player_id), 'totalScore': 0, 'roundScore': ''}


def default_state():
    return {
        'gameStarted': False,
        'winCondition': 'lowest',
        'targetScore': DEFAULT_TARGET,
        'players': [new_player(1), new_player(2)],
        'nextId': 3,
        'currentRound': 1,
        'winner': None,
    }


def normalize(state):
    defaults = default_state()
    for key, value in defaults.items():
        if state.get(key) in (None, '') and key != 'winner':
            state[key] = value
    state.setdefault('winner', None)
    return state


def _parse_target(value) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return 0


def _target(state) -> int:
    return _parse_target(state['targetScore'])


def _require_started(state):
    if not state['gameStarted']:
        raise GameRuleError('Start the game before scoring rounds')


def add_player(state):
    pid = int(state['nextId'])
    state['players'].append(new_player(pid))
    state['nextId'] = pid + 1
    return state


def remove_player(state, player_id):
    return roster.remove_player(state, player_id, MIN_PLAYERS, 'You need at least 2 players!')


def configure(state, win_condition=None, target_score=None):
    if win_condition is not None:
        if win_condition not in WIN_CONDITIONS:
            raise GameRuleError(f'Win condition must be one of {", ".join(WIN_CONDITIONS)}')
        state['winCondition'] = win_condition
    if target_score is not None:
        if _parse_target(target_score) <= 0:
            raise GameRuleError('Please enter a valid target score')
        state['targetScore'] = str(target_score).strip()
    return state


def start(state):
    if _target(state) <= 0:
        raise GameRuleError('Please enter a valid target score')
    state['gameStarted'] = True
    return state


def set_round_score(state, player_id, score):
    _require_started(state)
    roster.find_player(state, player_id)['roundScore'] = '' if score is None else str(score)
    return state


def round_winners(players):
    """Players who went out this round: blank or zero round score."""
    return [p for p in players if roster.lenient_int(p['roundScore']) == 0]


def find_winner(players, win_condition, target):
    reached = [p for p in players if p['totalScore'] >= target]
    if not reached:
        return None
    if win_condition == 'lowest':
        return min(players, key=lambda p: p['totalScore'])
    return max(reached, key=lambda p: p['totalScore'])


def next_round(state, winner_id=None):
    _require_started(state)
    players = state['players']
    if state['winCondition'] == 'highest':
        candidates = round_winners(players)
        if not candidates:
            raise GameRuleError('At least one player must have 0 points for this round (leave empty or enter 0)')
        if winner_id is None:
            if len(candidates) > 1:
                raise GameRuleError('Multiple players have 0 points. Who won this round?')
            round_winner = candidates[0]
        else:
            round_winner = roster.find_player(state, winner_id)
            if round_winner not in candidates:
                raise GameRuleError(f"{round_winner['name']} did not go out this round")
        pot = sum(roster.lenient_int(p['roundScore']) for p in players if p is not round_winner)
        round_winner['totalScore'] += pot
    else:
        for p in players:
            p['totalScore'] += roster.lenient_int(p['roundScore'])

    for p in players:
        p['roundScore'] = ''
    state['currentRound'] += 1

    winner = find_winner(players, state['winCondition'], _target(state))
    state['winner'] = {'id': winner['id'], 'name': winner['name'], 'totalScore': winner['totalScore']} if winner else None
    return state


def reset(state):
    state['gameStarted'] = False
    for p in state['players']:
        p['totalScore'] = 0
        p['roundScore'] = ''
    state['currentRound'] = 1
    state['winner'] = None
    return state


def summary(state):
    order = state['winCondition'] == 'highest'
    rows = sorted(
        ({'id': p['id'], 'name': p['name'], 'totalScore': p['totalScore']} for p in state['players']),
        key=lambda row: row['totalScore'],
        reverse=order,
    )
    return {'standings': rows, 'target': _target(state), 'winner': state.get('winner')}


ACTIONS = {
    'configure': configure,
    'start': start,
    'set_round_score': set_round_score,
    'next_round': next_round,
    'reset': reset,
}
