"""Two-player tic-tac-toe with a running tally of wins and draws."""

from typing import List, Optional

from tabletop.errors import GameRuleError
from . import roster

STORAGE_KEY = 'ticTacToeGameData'

LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),             # diagonals
)


def empty_board() -> List[Optional[str]]:
    return [None] * 9


def default_state():
    return {'board': empty_board(), 'xIsNext': True, 'scores': {'X': 0, 'O': 0, 'draws': 0}}


def winning_line(board):
    for a, b, c in LINES:
        if board[a] and board[a] == board[b] == board[c]:
            return [a, b, c]
    return None


def winner(board) -> Optional[str]:
    line = winning_line(board)
    return board[line[0]] if line else None


def is_draw(board) -> bool:
    return winner(board) is None and all(cell is not None for cell in board)


def play(state, cell):
    cell = roster.as_int(cell, 'cell')
    board = state['board']
    if not 0 <= cell < 9:
        raise GameRuleError('Cell must be between 0 and 8')
    if winner(board) or is_draw(board):
        raise GameRuleError('This round is over. Start a new round.')
    if board[cell]:
        raise GameRuleError('That cell is already taken')
    mark = 'X' if state['xIsNext'] else 'O'
    board[cell] = mark
    state['xIsNext'] = not state['xIsNext']
    if winner(board):
        state['scores'][mark] += 1
    elif is_draw(board):
        state['scores']['draws'] += 1
    return state


def new_round(state):
    state['board'] = empty_board()
    state['xIsNext'] = True
    return state


def reset(state):
    return default_state()


def summary(state):
    board = state['board']
    return {
        'winner': winner(board),
        'winning_line': winning_line(board),
        'draw': is_draw(board),
        'next': 'X' if state['xIsNext'] else 'O',
    }


ACTIONS = {
    'play': play,
    'new_round': new_round,
    'reset': reset,
}
