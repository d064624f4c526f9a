"""Pick a random first player from everyone touching the screen."""

import random

from tabletop.errors import GameRuleError

MIN_PARTICIPANTS = 2


def select(participants, rng=random):
    participants = [p for p in (participants or []) if p is not None and p != '']
    unique = list(dict.fromkeys(str(p) for p in participants))
    if len(unique) < MIN_PARTICIPANTS:
        raise GameRuleError('Waiting for more players...')
    return {'participants': unique, 'selected': rng.choice(unique)}
