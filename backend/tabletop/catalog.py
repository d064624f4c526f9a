"""Games shown on the home screen, in display order."""

from flask import current_app

GAMES = [
    {
        'name': 'Player Selector',
        'description': 'Put thumbs on screen to randomly select a player',
        'route': 'PlayerSelector',
        'endpoint': '/api/tools/player-selector',
    },
    {
        'name': 'Fortune Orb',
        'description': 'Shake or tap to get answers to your questions',
        'route': 'FortuneOrb',
        'endpoint': '/api/tools/fortune-orb',
    },
    {
        'name': 'Counter',
        'description': 'Fast-paced counting game',
        'route': 'Counter',
        'endpoint': '/api/games/counter/state',
    },
    {
        'name': 'Dice Roller',
        'description': 'Roll multiple dice types for players and track results',
        'route': 'DiceRoller',
        'endpoint': '/api/games/dice-roller/state',
    },
    {
        'name': 'Tic Tac Toe',
        'description': 'Classic strategy game - get three in a row to win',
        'route': 'TicTacToe',
        'endpoint': '/api/games/tic-tac-toe/state',
    },
    {
        'name': 'Catan',
        'description': 'Settle the island - track victory points, roll dice, and compete for longest road',
        'route': 'Catan',
        'endpoint': '/api/games/catan/state',
    },
    {
        'name': 'Munchkin',
        'description': 'Satirical dungeon-crawling card game with backstabbing fun',
        'route': 'Munchkin',
        'endpoint': '/api/games/munchkin/state',
    },
    {
        'name': '7 Wonders',
        'description': 'Build your civilization and track points across all categories',
        'route': 'SevenWonders',
        'endpoint': '/api/games/seven-wonders/state',
    },
    {
        'name': 'Ticket to Ride',
        'description': 'Build railway routes across North America',
        'route': 'TicketToRide',
        'endpoint': '/api/games/ticket-to-ride/state',
    },
    {
        'name': 'UNO',
        'description': "Classic card-matching game - don't forget to say UNO!",
        'route': 'Uno',
        'endpoint': '/api/games/uno/state',
    },
    {
        'name': 'Azul',
        'description': 'Beautiful tile-laying game - score walls, avoid penalties',
        'route': 'Azul',
        'endpoint': '/api/games/azul/state',
    },
]


def list_games(premium: bool, query: str = ''):
    """Catalog entries matching ``query``; entries past the free tier are locked without premium."""
    free = int(current_app.config.get('FREE_GAMES_COUNT', 5))
    needle = (query or '').strip().lower()
    entries = []
    for index, game in enumerate(GAMES):
        if needle and needle not in game['name'].lower() and needle not in game['description'].lower():
            continue
        entries.append(dict(game, locked=not premium and index >= free))
    return entries
