"""
Game Stage Enumeration

Defines the round lifecycle stages and the per-stage rules that drive the
session: countdown length, successor on expiry and what is visible.
"""

from enum import Enum
from typing import Dict, Optional


class GameStage(Enum):
    """Game stage enumeration."""
    WAITING_TO_START = "waiting_to_start"
    STARTING_ROUND = "starting_round"
    PICKING_CARDS = "picking_cards"
    PICKING_WINNER = "picking_winner"

    @property
    def next_on_expiry(self) -> Optional['GameStage']:
        """Stage entered when this stage's countdown runs out."""
        return NEXT_STAGE_ON_EXPIRY[self]

    @property
    def broadcasts_timer(self) -> bool:
        """Whether countdown ticks are emitted to the room in this stage."""
        return TIMER_BROADCAST_STAGES[self]

    @property
    def shows_black_card(self) -> bool:
        return BLACK_CARD_VISIBLE_STAGES[self]

    @property
    def reveals_picked_cards(self) -> bool:
        return PICKED_CARD_VISIBLE_STAGES[self]


class GameCommand(Enum):
    """Commands a player can send to the game session."""
    START_GAME = "start_game"
    PICK_CARD = "pick_card"


# Default countdown per stage in seconds; None means no timer.
DEFAULT_STAGE_DURATIONS: Dict[GameStage, Optional[int]] = {
    GameStage.WAITING_TO_START: None,
    GameStage.STARTING_ROUND: 10,
    GameStage.PICKING_CARDS: 90,
    GameStage.PICKING_WINNER: 45,
}

NEXT_STAGE_ON_EXPIRY: Dict[GameStage, Optional[GameStage]] = {
    GameStage.WAITING_TO_START: None,
    GameStage.STARTING_ROUND: GameStage.PICKING_CARDS,
    GameStage.PICKING_CARDS: GameStage.PICKING_WINNER,
    # TODO: route PICKING_WINNER back to a fresh round once judging is implemented
    GameStage.PICKING_WINNER: None,
}

TIMER_BROADCAST_STAGES: Dict[GameStage, bool] = {
    GameStage.WAITING_TO_START: False,
    GameStage.STARTING_ROUND: True,
    GameStage.PICKING_CARDS: True,
    GameStage.PICKING_WINNER: False,
}

BLACK_CARD_VISIBLE_STAGES: Dict[GameStage, bool] = {
    GameStage.WAITING_TO_START: False,
    GameStage.STARTING_ROUND: True,
    GameStage.PICKING_CARDS: True,
    GameStage.PICKING_WINNER: False,
}

PICKED_CARD_VISIBLE_STAGES: Dict[GameStage, bool] = {
    GameStage.WAITING_TO_START: False,
    GameStage.STARTING_ROUND: False,
    GameStage.PICKING_CARDS: False,
    GameStage.PICKING_WINNER: True,
}


def _check_stage_tables() -> None:
    """Refuse to load if a stage is missing from any rule table."""
    tables = {
        'DEFAULT_STAGE_DURATIONS': DEFAULT_STAGE_DURATIONS,
        'NEXT_STAGE_ON_EXPIRY': NEXT_STAGE_ON_EXPIRY,
        'TIMER_BROADCAST_STAGES': TIMER_BROADCAST_STAGES,
        'BLACK_CARD_VISIBLE_STAGES': BLACK_CARD_VISIBLE_STAGES,
        'PICKED_CARD_VISIBLE_STAGES': PICKED_CARD_VISIBLE_STAGES,
    }
    for name, table in tables.items():
        missing = set(GameStage) - set(table)
        if missing:
            raise RuntimeError(f"{name} has no entry for: {sorted(s.value for s in missing)}")

    for stage, successor in NEXT_STAGE_ON_EXPIRY.items():
        if successor is not None and DEFAULT_STAGE_DURATIONS[stage] is None:
            raise RuntimeError(f"{stage.value} has a successor but no countdown")


_check_stage_tables()
