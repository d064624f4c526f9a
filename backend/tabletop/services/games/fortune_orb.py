import random

ANSWERS = {
    'positive': (
        'Absolutely',
        'The stars align in favor',
        'Fortune smiles upon you',
        'All signs say yes',
        'Destiny approves',
        'The cosmos agree',
        'A clear yes',
        'Fate is on your side',
        'The path is open',
        'Go for it',
    ),
    'uncertain': (
        'The mists are unclear',
        'Seek wisdom elsewhere',
        'The answer hides for now',
        'Patience is needed',
        'Ask once more',
    ),
    'negative': (
        'The fates say otherwise',
        'Not in the cards',
        'Stars advise against it',
        'Unlikely to happen',
        'The orb says no',
    ),
}

ALL_ANSWERS = tuple((category, text) for category, texts in ANSWERS.items() for text in texts)


def ask(question=None, rng=random):
    category, answer = rng.choice(ALL_ANSWERS)
    return {'question': question, 'answer': answer, 'category': category}
