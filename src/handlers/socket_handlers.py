"""
Socket.IO event handlers for the CardParty game.

This module provides the registration function and the connection/disconnection
handlers, wiring the handler classes through the event router.
"""

import logging
import os
from flask import request
from flask_socketio import emit

from container import get_container
from .socket_event_router import setup_router
from .room_connection_handler import RoomConnectionHandler
from .game_action_handler import GameActionHandler

logger = logging.getLogger(__name__)


def register_socket_handlers(socketio_instance):
    """Register all socket handlers with the SocketIO instance."""
    router = setup_router(socketio_instance)

    room_handler = RoomConnectionHandler()
    game_handler = GameActionHandler()

    # Connection events bypass the router, they carry no payload
    socketio_instance.on_event('connect', handle_connect)
    socketio_instance.on_event('disconnect', handle_disconnect)

    router.register_route('join_room', room_handler.handle_join_room)
    router.register_route('join_as_spectator', room_handler.handle_join_as_spectator)
    router.register_route('leave_room', room_handler.handle_leave_room)
    router.register_route('get_room_state', room_handler.handle_get_room_state)

    router.register_route('start_game', game_handler.handle_start_game)
    router.register_route('pick_card', game_handler.handle_pick_card)

    router.register_with_socketio()

    logger.info(f"Registered {len(router.get_registered_events())} socket event handlers")
    return router


def handle_connect(auth=None):
    """Handle client connection with optional Origin enforcement in production."""
    app_config = get_container().get_app_config()
    allowed_origins_env = os.environ.get('SOCKETIO_CORS_ALLOWED_ORIGINS', '')

    origin = request.headers.get('Origin')
    if app_config.is_production and allowed_origins_env:
        allowed = {o.strip() for o in allowed_origins_env.split(',') if o.strip()}
        if origin and origin not in allowed:
            logger.warning(f'Rejecting connection from disallowed Origin: {origin}')
            return False
    logger.info(f'Client connected: {request.sid} from Origin: {origin}')
    emit('connected', {'status': 'Connected to CardParty server'})


def handle_disconnect(reason=None):
    """A dropped connection leaves its room, exactly like leave_room."""
    container = get_container()
    session_service = container.get('SessionService')
    room_manager = container.get('RoomManager')

    logger.info(f'Client disconnected: {request.sid}')

    session_info = session_service.remove_session(request.sid)
    if not session_info:
        return

    room_id = session_info['room_id']
    player_id = session_info['player_id']
    try:
        room_manager.leave(room_id, player_id)
        logger.info(f"{session_info['role'].capitalize()} {session_info['player_name']} ({player_id}) "
                    f"disconnected from room {room_id}")
    except Exception as e:
        logger.error(f'Error removing {player_id} from room {room_id} on disconnect: {e}')
