"""
Game Action Handler

This module handles Socket.IO events that carry player commands:
starting the game and picking a card.
"""

import logging

from src.core.errors import ErrorCode, ValidationError
from src.core.game_stages import GameCommand
from src.services.error_response_factory import with_error_handling
from src.services.session_service import PLAYER_ROLE
from .base_handler import BaseGameHandler

logger = logging.getLogger(__name__)


class GameActionHandler(BaseGameHandler):
    """Handler forwarding player commands to the game session of their room."""

    @with_error_handling
    def handle_start_game(self, data=None):
        """
        Handle request to start the game.

        Only the host can start, and only while waiting to start; any other
        request is acknowledged and ignored.
        """
        self.log_handler_start('handle_start_game', data)

        session_info, game_session = self.require_game_session()

        accepted = game_session.handle_command(session_info['player_id'], GameCommand.START_GAME)

        self.log_handler_success(
            'handle_start_game',
            f'start_game in room {session_info["room_id"]} {"applied" if accepted else "ignored"}'
        )

        self.emit_success('start_game_received', {
            'accepted': accepted
        })

    @with_error_handling
    def handle_pick_card(self, data):
        """
        Handle a player picking a card from their hand.

        Expected data format:
        {
            'card': 12
        }
        """
        self.log_handler_start('handle_pick_card', data)

        session_info, game_session = self.require_game_session()
        if session_info['role'] != PLAYER_ROLE:
            raise ValidationError(ErrorCode.NOT_A_PLAYER, 'Spectators cannot pick cards')

        card = self.validate_pick_card_data(data)

        accepted = game_session.handle_command(session_info['player_id'], GameCommand.PICK_CARD, {'card': card})

        self.log_handler_success(
            'handle_pick_card',
            f'Player {session_info["player_id"]} picked card {card} in room {session_info["room_id"]}'
        )

        self.emit_success('pick_card_received', {
            'card': card,
            'accepted': accepted
        })
