"""
Session Service - Manages socket session data.

This service handles:
- Session creation and cleanup for players and spectators
- Socket ID to participant mapping
- Session retrieval
"""

import logging
import threading
from typing import Dict, Optional

logger = logging.getLogger(__name__)

PLAYER_ROLE = 'player'
SPECTATOR_ROLE = 'spectator'


class SessionService:
    """Maps Socket.IO connections to the room and participant they belong to."""

    def __init__(self):
        """Initialize the session service."""
        # socket_id -> session info
        self._player_sessions: Dict[str, Dict[str, str]] = {}
        self._lock = threading.Lock()
        logger.info("SessionService initialized")

    def create_session(self, socket_id: str, room_id: str, player_id: str, player_name: str,
                       role: str = PLAYER_ROLE) -> None:
        """Create or update a session.

        Args:
            socket_id: Socket.IO connection ID
            room_id: Room the participant is in
            player_id: Participant identity
            player_name: Display name
            role: 'player' or 'spectator'
        """
        with self._lock:
            self._player_sessions[socket_id] = {
                'room_id': room_id,
                'player_id': player_id,
                'player_name': player_name,
                'role': role
            }
        logger.debug(f"Created {role} session for {player_name} ({player_id}) in room {room_id}")

    def get_session(self, socket_id: str) -> Optional[Dict[str, str]]:
        """Get session information by socket ID.

        Returns:
            Dict with session info or None if not found
        """
        with self._lock:
            session_info = self._player_sessions.get(socket_id)
            return dict(session_info) if session_info else None

    def has_session(self, socket_id: str) -> bool:
        with self._lock:
            return socket_id in self._player_sessions

    def remove_session(self, socket_id: str) -> Optional[Dict[str, str]]:
        """Remove a session.

        Returns:
            The removed session info or None if not found
        """
        with self._lock:
            session_info = self._player_sessions.pop(socket_id, None)
        if session_info:
            logger.debug(f"Removed session for {session_info['player_name']} ({session_info['player_id']})")
        return session_info

    def get_sessions_by_room(self, room_id: str) -> Dict[str, Dict[str, str]]:
        """Get all sessions for a specific room.

        Returns:
            Dictionary mapping socket_id to session info for the room
        """
        with self._lock:
            return {socket_id: dict(info) for socket_id, info in self._player_sessions.items()
                    if info['room_id'] == room_id}

    def get_sessions_count(self) -> int:
        with self._lock:
            return len(self._player_sessions)

    def clear(self) -> None:
        """Drop every session (tests and shutdown)."""
        with self._lock:
            self._player_sessions.clear()
