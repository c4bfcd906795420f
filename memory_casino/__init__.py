from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One GameService per app; sessions live in its registry
    from memory_casino.services.players import PlayerStore
    from memory_casino.services.games.registry import SessionRegistry
    from memory_casino.services.games.service import GameService
    flask_app.extensions['memory_casino'] = GameService(
        store=PlayerStore(),
        registry=SessionRegistry(stripes=int(flask_app.config.get('LOCK_STRIPES', 64))),
        default_difficulty=flask_app.config.get('DEFAULT_DIFFICULTY', 'medium'),
    )

    # Import and register blueprints here
    from memory_casino.main import main
    flask_app.register_blueprint(main)

    from memory_casino.api.players import players
    flask_app.register_blueprint(players, url_prefix='/players')

    from memory_casino.api.games import games
    flask_app.register_blueprint(games, url_prefix='/game')

    from memory_casino.errors import GameError

    @flask_app.errorhandler(GameError)
    def handle_game_error(exc):
        return jsonify(exc.to_dict()), exc.status

    from memory_casino.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    from memory_casino.services.games.scheduler import start_expiry_sweeper
    start_expiry_sweeper(flask_app)

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from memory_casino.models import Player
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            db.session.add(Player(name='Player 1', coins=flask_app.config['STARTING_COINS']))
            db.session.commit()
            print('Database has been reset and seeded!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app


def get_game_service():
    from flask import current_app
    return current_app.extensions['memory_casino']
