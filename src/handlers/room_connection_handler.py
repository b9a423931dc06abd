"""
Room Connection Handler

This module handles Socket.IO events related to room connections,
including joining as a player or spectator, leaving, and getting room state.
"""

import logging
from flask import request

from src.card_source import CardPoolExhaustedError
from src.core.errors import ErrorCode, ValidationError
from src.game_session import GameEvents
from src.services.error_response_factory import with_error_handling
from src.services.session_service import PLAYER_ROLE, SPECTATOR_ROLE
from .base_handler import BaseRoomHandler

logger = logging.getLogger(__name__)


class RoomConnectionHandler(BaseRoomHandler):
    """Handler for room connection operations like join, spectate, leave, and state retrieval."""

    @with_error_handling
    def handle_join_room(self, data):
        """
        Handle player joining a room. The first player creates the room and hosts it.

        Expected data format:
        {
            'room_id': 'room_name',
            'player_name': 'display_name'
        }
        """
        self.log_handler_start('handle_join_room', data)

        room_id, player_name = self.validate_room_join_data(data)
        self.require_no_session()

        # Join the Socket.IO room first so the join broadcast reaches this client too
        self.join_socketio_room(room_id)
        try:
            game_session, participant = self.room_manager.join_as_player(room_id, player_name, request.sid)
        except CardPoolExhaustedError as e:
            self.leave_socketio_room(room_id)
            raise ValidationError(
                ErrorCode.CARD_POOL_EXHAUSTED,
                'Not enough cards left to deal a hand',
                {'requested': e.requested, 'available': e.available}
            )
        except Exception:
            self.leave_socketio_room(room_id)
            raise

        self.session_service.create_session(request.sid, room_id, participant.player_id, player_name, PLAYER_ROLE)

        self.log_handler_success(
            'handle_join_room',
            f'Player {player_name} ({participant.player_id}) joined room {room_id}'
        )

        self.emit_success('room_joined', {
            'room_id': room_id,
            'player_id': participant.player_id,
            'player_name': player_name,
            'is_host': game_session.room.host_id == participant.player_id,
            'message': f'Successfully joined room {room_id}'
        })

    @with_error_handling
    def handle_join_as_spectator(self, data):
        """
        Handle a client watching an existing room.

        Expected data format:
        {
            'room_id': 'room_name',
            'player_name': 'display_name'
        }
        """
        self.log_handler_start('handle_join_as_spectator', data)

        room_id, spectator_name = self.validate_room_join_data(data)
        self.require_no_session()

        game_session, participant = self.room_manager.join_as_spectator(room_id, spectator_name, request.sid)

        self.join_socketio_room(room_id)
        self.session_service.create_session(request.sid, room_id, participant.player_id, spectator_name,
                                            SPECTATOR_ROLE)

        self.log_handler_success(
            'handle_join_as_spectator',
            f'Spectator {spectator_name} ({participant.player_id}) joined room {room_id}'
        )

        self.emit_success('spectator_joined', {
            'room_id': room_id,
            'spectator_id': participant.player_id,
            'message': f'Now watching room {room_id}'
        })

    @with_error_handling
    def handle_leave_room(self, data=None):
        """Handle a player or spectator leaving their current room."""
        self.log_handler_start('handle_leave_room', data)

        session_info = self.require_session()

        room_id = session_info['room_id']
        player_id = session_info['player_id']
        player_name = session_info['player_name']

        # Stop receiving room broadcasts before the departure is announced
        self.leave_socketio_room(room_id)
        self.session_service.remove_session(request.sid)

        if not self.room_manager.leave(room_id, player_id):
            raise ValidationError(
                ErrorCode.LEAVE_FAILED,
                'Failed to leave room'
            )

        self.log_handler_success(
            'handle_leave_room',
            f'{session_info["role"].capitalize()} {player_name} ({player_id}) left room {room_id}'
        )

        self.emit_success('room_left', {
            'message': f'Successfully left room {room_id}'
        })

    @with_error_handling
    def handle_get_room_state(self, data=None):
        """Send the current room state privately to the requesting client."""
        self.log_handler_start('handle_get_room_state', data)

        session_info = self.require_session()
        room_id = session_info['room_id']

        game_session = self.room_manager.get_session(room_id)
        if game_session is None:
            raise ValidationError(ErrorCode.ROOM_NOT_FOUND, f'Room {room_id} not found')

        game_session.room.broadcast_service.emit_to_player(
            GameEvents.STATE_CHANGED, game_session.get_state(), request.sid
        )

        self.log_handler_success('handle_get_room_state')
