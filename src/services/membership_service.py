"""
Membership Service for the CardParty game

Tracks who takes part in one game session: players (with soft leave and
rejoin) and spectators, plus the capacity rule.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from src.core.errors import MembershipError
from src.hosted_room import Participant

logger = logging.getLogger(__name__)


@dataclass
class PlayerState:
    """Everything the session keeps about one player, present or not."""
    participant: Participant
    hand: List[int] = field(default_factory=list)
    score: int = 0
    picked_card: Optional[int] = None
    active: bool = True

    @property
    def player_id(self) -> str:
        return self.participant.player_id

    @property
    def name(self) -> str:
        return self.participant.name


@dataclass
class SpectatorState:
    """A read-only observer of the session."""
    participant: Participant

    @property
    def player_id(self) -> str:
        return self.participant.player_id


class MembershipService:
    """Manages player and spectator records of a single session."""

    def __init__(self, max_players: int):
        self.max_players = max_players
        # Insertion ordered, records are never removed
        self._players: Dict[str, PlayerState] = {}
        self._spectators: Dict[str, SpectatorState] = {}

    # Players

    def add_player(self, participant: Participant,
                   hand_factory: Callable[[], List[int]]) -> Tuple[PlayerState, bool]:
        """
        Add a player or bring a soft-left one back.

        Args:
            participant: Joining participant
            hand_factory: Called only for new players to deal their starting hand

        Returns:
            Tuple of (player state, created) where created is False on rejoin

        Raises:
            MembershipError: If the identity is currently a spectator
        """
        player_id = participant.player_id
        if player_id in self._spectators:
            raise MembershipError(f"{participant.name} ({player_id}) is spectating and cannot join as a player")

        existing = self._players.get(player_id)
        if existing is not None:
            existing.active = True
            existing.participant = participant
            logger.info(f"Player {participant.name} ({player_id}) rejoined with preserved score {existing.score}")
            return existing, False

        # Deal before recording so a failed deal leaves no trace
        state = PlayerState(participant=participant, hand=list(hand_factory()))
        self._players[player_id] = state
        logger.info(f"New player {participant.name} ({player_id}) joined")
        return state, True

    def deactivate_player(self, player_id: str) -> bool:
        """Mark a player as left; score and hand are kept for a rejoin."""
        player = self._players.get(player_id)
        if player is None:
            return False

        player.active = False
        logger.info(f"Player {player.name} ({player_id}) left, record kept")
        return True

    def get_player(self, player_id: str) -> Optional[PlayerState]:
        return self._players.get(player_id)

    def is_player(self, player_id: str) -> bool:
        return player_id in self._players

    def active_players(self) -> List[PlayerState]:
        return [player for player in self._players.values() if player.active]

    def active_player_ids(self) -> List[str]:
        return [player.player_id for player in self._players.values() if player.active]

    def active_count(self, excluding: Optional[str] = None) -> int:
        """Count active players, optionally leaving one identity out."""
        return sum(1 for player_id, player in self._players.items()
                   if player.active and player_id != excluding)

    def can_player_join(self, player_id: str) -> bool:
        """True iff the other active players leave room below the cap."""
        return self.active_count(excluding=player_id) < self.max_players

    def find_player_by_name(self, name: str) -> Optional[PlayerState]:
        for player in self._players.values():
            if player.name == name:
                return player
        return None

    # Spectators

    def add_spectator(self, participant: Participant) -> bool:
        """
        Record a spectator.

        Returns:
            False if the identity is a known player, True otherwise
        """
        player_id = participant.player_id
        if player_id in self._players:
            logger.info(f"Rejected spectator {participant.name} ({player_id}): already a player")
            return False

        self._spectators[player_id] = SpectatorState(participant=participant)
        logger.info(f"Spectator {participant.name} ({player_id}) joined")
        return True

    def remove_spectator(self, player_id: str) -> bool:
        spectator = self._spectators.pop(player_id, None)
        if spectator is None:
            return False

        logger.info(f"Spectator {spectator.participant.name} ({player_id}) left")
        return True

    def is_spectator(self, player_id: str) -> bool:
        return player_id in self._spectators

    def spectator_ids(self) -> List[str]:
        return list(self._spectators.keys())

    # Whole session

    def is_empty(self) -> bool:
        """No active player and no spectator left."""
        return self.active_count() == 0 and not self._spectators

    def snapshot(self) -> List[PlayerState]:
        """All known players in join order, soft-left ones included."""
        return list(self._players.values())
