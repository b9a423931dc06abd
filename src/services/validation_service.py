"""
Validation Service for the CardParty game

Provides input validation and sanitization for socket payloads,
separated from error response handling.
"""

import html
import logging
import re
from typing import Any, Dict, Optional

from src.core.errors import ErrorCode, ValidationError

logger = logging.getLogger(__name__)


class ValidationService:
    """Service responsible for input validation and sanitization."""

    # Validation constants
    MAX_ROOM_ID_LENGTH = 50
    MAX_PLAYER_NAME_LENGTH = 20

    # Room ID pattern: alphanumeric, hyphens, underscores
    ROOM_ID_PATTERN = re.compile(r'^[a-zA-Z0-9_-]+$')

    def validate_socket_data(self, data: Any, required_fields: Optional[list] = None) -> Dict:
        """
        Validate that socket data is a dictionary holding the required fields.

        Raises:
            ValidationError: If validation fails
        """
        if not isinstance(data, dict):
            raise ValidationError(
                ErrorCode.INVALID_DATA,
                "Invalid data format - expected dictionary"
            )

        for field in required_fields or []:
            if field in data:
                continue
            if field == 'room_id':
                raise ValidationError(ErrorCode.MISSING_ROOM_ID, "Room ID is required")
            if field == 'player_name':
                raise ValidationError(ErrorCode.MISSING_PLAYER_NAME, "Player name is required")
            if field == 'card':
                raise ValidationError(ErrorCode.MISSING_CARD, "Card is required")
            raise ValidationError(ErrorCode.INVALID_DATA, f"Missing required field: {field}")

        return data

    def validate_room_id(self, room_id: str) -> str:
        """
        Validate and sanitize room ID.

        Returns:
            Lower-cased room ID

        Raises:
            ValidationError: If room ID is invalid
        """
        if not room_id or not isinstance(room_id, str):
            raise ValidationError(
                ErrorCode.MISSING_ROOM_ID,
                "Room ID is required"
            )

        room_id = room_id.strip()

        if not room_id:
            raise ValidationError(
                ErrorCode.MISSING_ROOM_ID,
                "Room ID cannot be empty"
            )

        if len(room_id) > self.MAX_ROOM_ID_LENGTH:
            raise ValidationError(
                ErrorCode.INVALID_ROOM_ID,
                f"Room ID must be {self.MAX_ROOM_ID_LENGTH} characters or less",
                {"max_length": self.MAX_ROOM_ID_LENGTH, "actual_length": len(room_id)}
            )

        if not self.ROOM_ID_PATTERN.match(room_id):
            raise ValidationError(
                ErrorCode.INVALID_ROOM_ID,
                "Room ID can only contain letters, numbers, hyphens, and underscores"
            )

        # Normalize to lowercase to prevent case sensitivity issues
        return room_id.lower()

    def validate_player_name(self, player_name: str) -> str:
        """
        Validate and sanitize player name.

        Returns:
            HTML-escaped, stripped player name

        Raises:
            ValidationError: If player name is invalid
        """
        if not player_name or not isinstance(player_name, str):
            raise ValidationError(
                ErrorCode.MISSING_PLAYER_NAME,
                "Player name is required"
            )

        player_name = player_name.strip()

        if not player_name:
            raise ValidationError(
                ErrorCode.MISSING_PLAYER_NAME,
                "Player name cannot be empty"
            )

        if len(player_name) > self.MAX_PLAYER_NAME_LENGTH:
            raise ValidationError(
                ErrorCode.PLAYER_NAME_TOO_LONG,
                f"Player name must be {self.MAX_PLAYER_NAME_LENGTH} characters or less",
                {"max_length": self.MAX_PLAYER_NAME_LENGTH, "actual_length": len(player_name)}
            )

        return html.escape(player_name)

    def validate_card(self, card: Any) -> int:
        """
        Validate a card id sent by a client.

        Raises:
            ValidationError: If the card is not a non-negative integer
        """
        if card is None:
            raise ValidationError(ErrorCode.MISSING_CARD, "Card is required")

        # bool is an int subclass
        if isinstance(card, bool) or not isinstance(card, int):
            raise ValidationError(ErrorCode.INVALID_CARD, "Card must be an integer id")

        if card < 0:
            raise ValidationError(ErrorCode.INVALID_CARD, "Card id cannot be negative")

        return card
