"""
CardParty - A real-time party card game played in shared rooms.
Main Flask application entry point focusing on app creation, dependency injection, and service wiring.
"""

from flask import Flask
from flask_socketio import SocketIO
import os
import logging
import atexit
import sys
import yaml

from src.card_source import ContentValidationError
from container import configure_container, get_container
from config_factory import load_config, ConfigurationFactory

# Initialize Flask app
app = Flask(__name__)

# Load and apply configuration
app_config = load_config()
config_factory = ConfigurationFactory()
app.config.update(config_factory.get_flask_config())

# Configure logging
logging.basicConfig(level=getattr(logging, app_config.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)

# Cross-process fan-out goes through Redis when pub/sub is enabled
message_queue = app_config.message_queue_url
if message_queue:
    logger.info(f"Using Socket.IO message queue at {message_queue}")

# Initialize Socket.IO with environment-aware CORS
# In production, restrict to explicitly allowed origins from env var SOCKETIO_CORS_ALLOWED_ORIGINS (comma-separated)
allowed_origins_env = os.environ.get('SOCKETIO_CORS_ALLOWED_ORIGINS', '')
if app_config.is_production:
    _cors_allowed = [o.strip() for o in allowed_origins_env.split(',') if o.strip()]
    socketio = SocketIO(app, cors_allowed_origins=_cors_allowed or [], async_mode='eventlet',
                        message_queue=message_queue)
else:
    # Development/testing: permissive for local workflows
    socketio = SocketIO(app, cors_allowed_origins="*", async_mode='eventlet', message_queue=message_queue)

# Configure service container with dependencies
container = configure_container(socketio=socketio, config=config_factory.to_dict())

# Load the card pack on startup
try:
    card_pack = container.get('CardPack')
    logger.info(f"Loaded {len(card_pack.black)} black and {len(card_pack.white)} white cards")
except (FileNotFoundError, yaml.YAMLError, ContentValidationError) as e:
    logger.critical(f"FATAL: Card pack validation failed, which is critical for game play. Server shutting down. Error: {e}")
    sys.exit(1)

# Register REST endpoints
from src.routes.api import create_api_blueprint
api_blueprint = create_api_blueprint()
app.register_blueprint(api_blueprint)

# Register Socket.IO handlers
from src.handlers.socket_handlers import register_socket_handlers
register_socket_handlers(socketio)


def cleanup_on_exit():
    """Tear down every room so no round clock outlives the server."""
    logger.info("Shutting down CardParty server...")
    container = get_container()
    if not container.has_service('RoomManager'):
        return
    room_manager = container.get('RoomManager')
    for room_id in room_manager.get_all_rooms():
        room_manager.delete_room(room_id)


atexit.register(cleanup_on_exit)

if __name__ == '__main__':
    logger.info(f"Starting CardParty server on {app_config.host}:{app_config.port}")
    try:
        socketio.run(app, host=app_config.host, port=app_config.port, debug=app_config.debug)
    except KeyboardInterrupt:
        logger.info("Received interrupt signal")
    finally:
        cleanup_on_exit()
