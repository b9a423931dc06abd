"""
State Projector - Builds the externally visible game state.

Pure transformation of session data into the ``state_changed`` payload,
applying the stage-dependent visibility rules. Keys that must stay hidden
are left out of the payload entirely rather than sent as null.
"""

import logging
from typing import Any, Dict, List, Optional

from src.core.game_stages import GameStage

logger = logging.getLogger(__name__)


class StateProjector:
    """Centralized transformation of session state for client broadcasts."""

    def project(self, stage: GameStage, players, black_card: Optional[int],
                host_id: str, time_remaining: int) -> Dict[str, Any]:
        """Create the view state shared by every observer.

        Args:
            stage: Current game stage
            players: Player records in join order (PlayerState-like objects)
            black_card: Current round's black card id
            host_id: Identity of the room host
            time_remaining: Current countdown value

        Returns:
            Dict with stage, time, gameInfo and players
        """
        game_info: Dict[str, Any] = {}
        if stage.shows_black_card and black_card is not None:
            game_info['blackCard'] = black_card

        return {
            'stage': stage.value,
            'time': time_remaining,
            'gameInfo': game_info,
            'players': self.create_player_list(stage, players, host_id)
        }

    def create_player_list(self, stage: GameStage, players, host_id: str) -> List[Dict[str, Any]]:
        """Create the player entries, revealing picks only when the stage allows."""
        player_list = []

        for player in players:
            entry: Dict[str, Any] = {
                'name': player.name,
                'id': player.player_id,
                'score': player.score
            }
            if player.player_id == host_id:
                entry['host'] = True
            if stage.reveals_picked_cards:
                entry['card'] = player.picked_card

            player_list.append(entry)

        return player_list
