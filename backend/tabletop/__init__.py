from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config
from tabletop.services.lobby import Lobby

socketio = SocketIO(async_mode=None)
# Rooms and player directory shared by every connection in this process
lobby = Lobby()


def _parse_origins(value):
    if isinstance(value, (list, tuple)):
        return list(value)
    origins = [o.strip() for o in (value or '').split(',') if o.strip()]
    if origins == ['*']:
        return '*'
    return origins


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = _parse_origins(flask_app.config.get('CORS_ORIGINS'))
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # A fresh app starts from an empty table
    from tabletop.services.session import TableSession
    from tabletop.transport import SocketIOTransport
    lobby.reset()
    flask_app.extensions['tabletop'] = TableSession(lobby, SocketIOTransport(namespace), flask_app.logger)

    from tabletop.routes import main
    flask_app.register_blueprint(main)

    from tabletop.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api/rooms')

    # Importing here ensures the handlers bind to the initialized socketio instance
    from tabletop.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace)

    return flask_app
