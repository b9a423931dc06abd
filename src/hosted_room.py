"""
Hosted Room for the CardParty game

The transport-facing side of a room: who hosts it, how to reach everyone
in it and how to reach a single participant privately.
"""

import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class Participant:
    """A connected client: stable identity, display name and private address."""
    player_id: str
    name: str
    socket_id: str


class HostedRoom:
    """Room collaborator used by a game session to emit events."""

    def __init__(self, room_id: str, host: Participant, broadcast_service):
        """
        Args:
            room_id: Room identifier, also the Socket.IO room name
            host: Participant allowed to start the game
            broadcast_service: Service performing the actual emissions
        """
        self.room_id = room_id
        self.host = host
        self.broadcast_service = broadcast_service

    @property
    def host_id(self) -> str:
        return self.host.player_id

    def send(self, event: str, data: Any):
        """Emit an event to everyone in the room."""
        self.broadcast_service.emit_to_room(event, data, self.room_id)

    def send_to(self, participant: Participant, event: str, data: Any):
        """Emit an event to a single participant."""
        self.broadcast_service.emit_to_player(event, data, participant.socket_id)

    def __repr__(self) -> str:
        return f"HostedRoom(room_id={self.room_id!r}, host={self.host.name!r})"
