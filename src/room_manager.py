"""
Room Manager for the CardParty game

Keeps the registry of hosted rooms and their game sessions. Rooms are
created by their first player, who becomes the host, and disposed once
nobody is left in them.
"""

import logging
import threading
import uuid
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from src.card_source import CardPack, CardSource
from src.config.game_settings import get_game_settings
from src.core.errors import ErrorCode, ValidationError
from src.game_session import GameSession
from src.hosted_room import HostedRoom, Participant
from src.services.concurrency_control_service import ConcurrencyControlService

logger = logging.getLogger(__name__)


class RoomManager:
    """Manages hosted rooms and their lifecycle with thread-safe operations."""

    def __init__(self, broadcast_service, card_pack: CardPack, game_settings=None, scheduler=None):
        """
        Args:
            broadcast_service: Emission service shared by all rooms
            card_pack: Card pack every new session deals from
            game_settings: Game settings handed to every session
            scheduler: Optional tick scheduler for round clocks (tests use a manual one)
        """
        self.broadcast_service = broadcast_service
        self.card_pack = card_pack
        self.game_settings = game_settings or get_game_settings()
        self.scheduler = scheduler
        self.concurrency_control = ConcurrencyControlService()

        self._rooms: Dict[str, GameSession] = {}
        self._created_at: Dict[str, datetime] = {}
        self._rooms_lock = threading.RLock()

    # Room Lifecycle Operations

    def create_room(self, room_id: str, host: Participant) -> GameSession:
        """
        Create a new room hosted by the given participant.

        Raises:
            ValueError: If room already exists
        """
        with self._rooms_lock:
            if room_id in self._rooms:
                raise ValueError(f"Room {room_id} already exists")

            room = HostedRoom(room_id, host, self.broadcast_service)
            session = GameSession(
                room,
                CardSource(self.card_pack),
                self.game_settings,
                lock=self.concurrency_control.get_room_lock(room_id),
                scheduler=self.scheduler
            )
            self._rooms[room_id] = session
            self._created_at[room_id] = datetime.now()
            logger.info(f"Created room {room_id} hosted by {host.name} ({host.player_id})")
            return session

    def delete_room(self, room_id: str) -> bool:
        """
        Dispose of a room: tear its session down and drop its lock.

        Returns:
            True if room was deleted, False if room didn't exist
        """
        with self.concurrency_control.room_operation(room_id):
            with self._rooms_lock:
                session = self._rooms.pop(room_id, None)
                self._created_at.pop(room_id, None)

            if session is None:
                return False

            session.teardown()
            self.concurrency_control.cleanup_room_lock(room_id)
            logger.info(f"Deleted room {room_id}")
            return True

    def room_exists(self, room_id: str) -> bool:
        with self._rooms_lock:
            return room_id in self._rooms

    def get_session(self, room_id: str) -> Optional[GameSession]:
        with self._rooms_lock:
            return self._rooms.get(room_id)

    def get_all_rooms(self) -> List[str]:
        """
        Get list of all active room IDs.

        Returns:
            List of room ID strings
        """
        with self._rooms_lock:
            return list(self._rooms.keys())

    def get_room_summaries(self) -> List[Dict]:
        """Public overview of every room for the REST API."""
        summaries = []
        for room_id in self.get_all_rooms():
            session = self.get_session(room_id)
            if session is None:
                continue
            with self.concurrency_control.room_operation(room_id):
                summaries.append({
                    'room_id': room_id,
                    'stage': session.stage.value,
                    'player_count': session.membership.active_count(),
                    'spectator_count': len(session.membership.spectator_ids()),
                    'max_players': self.game_settings.max_players_per_room,
                    'created_at': self._created_at.get(room_id, datetime.now()).isoformat()
                })
        return summaries

    # Membership Operations

    def join_as_player(self, room_id: str, player_name: str, socket_id: str) -> Tuple[GameSession, Participant]:
        """
        Add a player to a room, creating the room (with the player as host) if needed.

        A name belonging to a player who left earlier reclaims that player's
        identity, score and hand.

        Raises:
            ValidationError: If the name is taken or the room is full
            CardPoolExhaustedError: If no hand can be dealt
        """
        with self.concurrency_control.room_operation(room_id):
            session = self.get_session(room_id)
            created = False
            if session is None:
                participant = Participant(str(uuid.uuid4()), player_name, socket_id)
                session = self.create_room(room_id, participant)
                created = True
            else:
                participant = self._resolve_player(session, player_name, socket_id)

            try:
                if not session.can_player_join(participant.player_id):
                    raise ValidationError(
                        ErrorCode.ROOM_FULL,
                        f"Room {room_id} is full",
                        {'max_players': self.game_settings.max_players_per_room}
                    )
                session.player_joined(participant)
            except Exception:
                if created:
                    self.delete_room(room_id)
                raise

            return session, participant

    def join_as_spectator(self, room_id: str, spectator_name: str, socket_id: str) -> Tuple[GameSession, Participant]:
        """
        Attach a spectator to an existing room.

        Raises:
            ValidationError: If the room doesn't exist or the name belongs to one of its players
        """
        with self.concurrency_control.room_operation(room_id):
            session = self.get_session(room_id)
            if session is None:
                raise ValidationError(ErrorCode.ROOM_NOT_FOUND, f"Room {room_id} not found", {'room_id': room_id})

            participant = self._resolve_spectator(session, spectator_name, socket_id)
            if not session.spectator_joined(participant):
                raise ValidationError(ErrorCode.ALREADY_A_PLAYER, f"{spectator_name} is already playing in room {room_id}")
            return session, participant

    def leave(self, room_id: str, player_id: str) -> bool:
        """
        Remove a player or spectator from a room; the room is disposed once empty.

        Returns:
            True if the room existed
        """
        with self.concurrency_control.room_operation(room_id):
            session = self.get_session(room_id)
            if session is None:
                return False

            session.player_left(player_id)
            if session.is_empty():
                logger.info(f"Room {room_id} is empty, disposing")
                self.delete_room(room_id)
            return True

    def _resolve_player(self, session: GameSession, player_name: str, socket_id: str) -> Participant:
        existing = session.membership.find_player_by_name(player_name)
        if existing is None:
            return Participant(str(uuid.uuid4()), player_name, socket_id)

        if existing.active:
            raise ValidationError(
                ErrorCode.PLAYER_NAME_TAKEN,
                f"Player name '{player_name}' is already taken in room {session.room.room_id}"
            )

        return Participant(existing.player_id, player_name, socket_id)

    def _resolve_spectator(self, session: GameSession, spectator_name: str, socket_id: str) -> Participant:
        # A player's name keeps the player's identity, which the session refuses as a spectator
        existing = session.membership.find_player_by_name(spectator_name)
        player_id = existing.player_id if existing is not None else str(uuid.uuid4())
        return Participant(player_id, spectator_name, socket_id)
