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

    allowed_origins = flask_app.config.get('ALLOWED_ORIGINS') or []

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    # Only the game client talks to the JSON ingress from another origin
    CORS(flask_app, resources={r'/backend/*': {'origins': allowed_origins}})

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from leaderboard.errors import register_error_handlers
    register_error_handlers(flask_app)

    # Import and register blueprints here
    from leaderboard.main import main
    flask_app.register_blueprint(main)

    from leaderboard.api.ingress import ingress
    flask_app.register_blueprint(ingress, url_prefix='/backend')

    from leaderboard.api.claims import claims
    flask_app.register_blueprint(claims, url_prefix='/claim')

    # Register Socket.IO event handlers on the initialized socketio instance
    from leaderboard.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the score tables."""
        import leaderboard.models  # noqa: F401
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            print('Database has been reset!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app
