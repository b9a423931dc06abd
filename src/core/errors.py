"""
Core error definitions for the CardParty server

Provides error codes and exceptions that don't depend on other services.
"""

from enum import Enum
from typing import Dict, Optional


class ErrorCode(Enum):
    """Standardized error codes for the application."""

    # Connection and Authentication Errors
    INVALID_DATA = "INVALID_DATA"
    MISSING_ROOM_ID = "MISSING_ROOM_ID"
    MISSING_PLAYER_NAME = "MISSING_PLAYER_NAME"
    INVALID_ROOM_ID = "INVALID_ROOM_ID"
    PLAYER_NAME_TOO_LONG = "PLAYER_NAME_TOO_LONG"
    ALREADY_IN_ROOM = "ALREADY_IN_ROOM"
    PLAYER_NAME_TAKEN = "PLAYER_NAME_TAKEN"
    NOT_IN_ROOM = "NOT_IN_ROOM"

    # Room Management Errors
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    LEAVE_FAILED = "LEAVE_FAILED"
    ROOM_FULL = "ROOM_FULL"
    ALREADY_A_PLAYER = "ALREADY_A_PLAYER"
    NOT_A_PLAYER = "NOT_A_PLAYER"

    # Card Errors
    MISSING_CARD = "MISSING_CARD"
    INVALID_CARD = "INVALID_CARD"
    CARD_POOL_EXHAUSTED = "CARD_POOL_EXHAUSTED"

    # System Errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ValidationError(Exception):
    """Custom exception for validation errors."""

    def __init__(self, code: ErrorCode, message: str, details: Optional[Dict] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class MembershipError(Exception):
    """Raised when a participant cannot hold the requested role in a session."""
    pass
