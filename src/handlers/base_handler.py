"""
Base Handler Classes

This module provides base classes for Socket.IO handlers with common patterns
for validation, session management, and response formatting.
"""

import logging
from abc import ABC
from typing import Any, Dict, Optional
from flask import request
from flask_socketio import emit, join_room, leave_room

from container import get_container
from src.core.errors import ErrorCode, ValidationError

logger = logging.getLogger(__name__)


class BaseHandler(ABC):
    """
    Abstract base class for all Socket.IO handlers.

    Provides common functionality like service access, session management,
    validation patterns, and standardized response formatting.
    """

    @property
    def _container(self):
        # Resolved per call so a reconfigured container is picked up
        return get_container()

    @property
    def room_manager(self):
        """Get the room manager service."""
        return self._container.get('RoomManager')

    @property
    def validation_service(self):
        """Get the validation service."""
        return self._container.get('ValidationService')

    @property
    def error_response_factory(self):
        """Get the error response factory service."""
        return self._container.get('ErrorResponseFactory')

    @property
    def session_service(self):
        """Get the session service."""
        return self._container.get('SessionService')

    def get_current_session(self) -> Optional[Dict[str, Any]]:
        """Get the current session info for the requesting client."""
        return self.session_service.get_session(request.sid)  # type: ignore[attr-defined]

    def require_session(self) -> Dict[str, Any]:
        """
        Get the current session info, raising an error if not in a room.

        Returns:
            Session info dictionary

        Raises:
            ValidationError: If the client is not in a room
        """
        session_info = self.get_current_session()
        if not session_info:
            raise ValidationError(
                ErrorCode.NOT_IN_ROOM,
                'You are not currently in a room'
            )
        return session_info

    def require_no_session(self) -> None:
        if self.session_service.has_session(request.sid):  # type: ignore[attr-defined]
            raise ValidationError(
                ErrorCode.ALREADY_IN_ROOM,
                'You are already in a room. Leave it first.'
            )

    def emit_success(self, event_name: str, data: Optional[Dict[str, Any]] = None) -> None:
        """
        Emit a success response to the requesting client.

        Args:
            event_name: The name of the event to emit
            data: Optional data to include in the response
        """
        response = self.error_response_factory.create_success_response(data or {})
        emit(event_name, response)

    def log_handler_start(self, handler_name: str, data: Any = None) -> None:
        """Log the start of handler execution."""
        logger.info(f'{handler_name} called by client: {request.sid}')  # type: ignore[attr-defined]
        if data:
            logger.debug(f'{handler_name} data: {data}')

    def log_handler_success(self, handler_name: str, message: Optional[str] = None) -> None:
        """Log successful handler completion."""
        log_msg = f'{handler_name} completed successfully for client: {request.sid}'  # type: ignore[attr-defined]
        if message:
            log_msg += f' - {message}'
        logger.info(log_msg)


class RoomHandlerMixin:
    """
    Mixin for handlers that deal with room operations.

    Joins and leaves the Socket.IO rooms that room broadcasts are addressed to.
    """

    def join_socketio_room(self, room_id: str) -> None:
        """Join a Socket.IO room for broadcasting."""
        join_room(room_id)
        logger.debug(f'Client {request.sid} joined Socket.IO room: {room_id}')  # type: ignore[attr-defined]

    def leave_socketio_room(self, room_id: str) -> None:
        """Leave a Socket.IO room."""
        leave_room(room_id)
        logger.debug(f'Client {request.sid} left Socket.IO room: {room_id}')  # type: ignore[attr-defined]


class ValidationHandlerMixin:
    """
    Mixin for handlers that need common validation patterns.
    """

    # Provided by BaseHandler
    validation_service: Any

    def validate_room_join_data(self, data: Any) -> tuple[str, str]:
        """
        Validate room join data and extract room_id and player_name.

        Returns:
            Tuple of (room_id, player_name)

        Raises:
            ValidationError: If validation fails
        """
        validated_data = self.validation_service.validate_socket_data(data, ['room_id', 'player_name'])
        room_id = self.validation_service.validate_room_id(validated_data['room_id'])
        player_name = self.validation_service.validate_player_name(validated_data['player_name'])
        return room_id, player_name

    def validate_pick_card_data(self, data: Any) -> int:
        validated_data = self.validation_service.validate_socket_data(data, ['card'])
        return self.validation_service.validate_card(validated_data['card'])


class BaseRoomHandler(BaseHandler, RoomHandlerMixin, ValidationHandlerMixin):
    """Base class for handlers that deal with room operations."""
    pass


class BaseGameHandler(BaseHandler, ValidationHandlerMixin):
    """Base class for handlers that deal with game operations."""

    def require_game_session(self):
        """
        Resolve the requester's session info and the game session of their room.

        Raises:
            ValidationError: If the client is not in a room or the room is gone
        """
        session_info = self.require_session()
        game_session = self.room_manager.get_session(session_info['room_id'])
        if game_session is None:
            raise ValidationError(
                ErrorCode.ROOM_NOT_FOUND,
                f"Room {session_info['room_id']} not found"
            )
        return session_info, game_session
