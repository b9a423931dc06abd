"""
Broadcast Service - Centralized Socket.IO message broadcasting.

This service handles all Socket.IO emissions in a centralized way:
- Room-wide broadcasts
- Individual player messages

When the server runs with a message queue, the injected SocketIO instance
publishes every emission through it so clients connected to other worker
processes receive it too.
"""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class BroadcastService:
    """Centralized service for all Socket.IO broadcasting operations."""

    def __init__(self, socketio):
        """Initialize the broadcast service.

        Args:
            socketio: Flask-SocketIO instance for emitting messages
        """
        self.socketio = socketio

    def emit_to_room(self, event: str, data: Any, room_id: str):
        """Emit an event to all clients in a room."""
        try:
            self.socketio.emit(event, data, to=room_id)
            logger.debug(f'Emitted {event} to room {room_id}')
        except Exception as e:
            logger.error(f'Error emitting {event} to room {room_id}: {e}')

    def emit_to_player(self, event: str, data: Any, socket_id: str):
        """Emit an event to a specific client."""
        try:
            self.socketio.emit(event, data, to=socket_id)
            logger.debug(f'Emitted {event} to player {socket_id}')
        except Exception as e:
            logger.error(f'Error emitting {event} to player {socket_id}: {e}')

