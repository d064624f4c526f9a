from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('CORS_ORIGINS') or Config.CORS_ORIGINS

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from tabletop.errors import register_error_handlers
    register_error_handlers(flask_app)

    # Import and register blueprints here
    from tabletop.main import main
    flask_app.register_blueprint(main)

    from tabletop.api.games import games
    flask_app.register_blueprint(games, url_prefix='/api/games')

    from tabletop.api.tools import tools
    flask_app.register_blueprint(tools, url_prefix='/api/tools')

    from tabletop.api.settings import settings
    flask_app.register_blueprint(settings, url_prefix='/api/settings')

    # Register Socket.IO event handlers
    from tabletop.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    @click.command('storage-reset')
    @click.option('--keep-settings', is_flag=True, help='Only drop per-game data.')
    def storage_reset_command(keep_settings):
        """Drops per-game data (and optionally settings) from the store."""
        from tabletop import storage
        from tabletop.services.games.registry import storage_keys
        with flask_app.app_context():
            if keep_settings:
                storage.multi_remove(storage_keys())
            else:
                db.drop_all()
                db.create_all()
            print('Storage has been reset!')

    flask_app.cli.add_command(storage_reset_command)

    return flask_app
