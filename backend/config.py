import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///tabletop.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Comma-separated list of front-end origins allowed by CORS and Socket.IO
    CORS_ORIGINS = [o.strip() for o in os.environ.get(
        'CORS_ORIGINS',
        'http://localhost:5173,http://127.0.0.1:5173,http://localhost:8081,http://127.0.0.1:8081',
    ).split(',') if o.strip()]
    # Background time after which all per-game data is dropped (seconds)
    SESSION_TIMEOUT_SEC = int(os.environ.get('SESSION_TIMEOUT_SEC', '1800'))
    # Counter saves older than this are ignored on load (seconds)
    AUTO_SAVE_TIMEOUT_SEC = int(os.environ.get('AUTO_SAVE_TIMEOUT_SEC', '1800'))
    # Ticket to Ride route claims can be undone for this long (seconds)
    UNDO_WINDOW_SEC = int(os.environ.get('UNDO_WINDOW_SEC', '5'))
    # Number of catalog entries reachable without premium
    FREE_GAMES_COUNT = int(os.environ.get('FREE_GAMES_COUNT', '5'))
