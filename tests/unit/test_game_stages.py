"""
Game Stage Unit Tests
Tests for the stage rule tables driving the session.
"""

import pytest

from src.core.game_stages import (
    GameStage, GameCommand, DEFAULT_STAGE_DURATIONS, NEXT_STAGE_ON_EXPIRY
)


class TestGameStages:
    """Per-stage rules"""

    def test_stage_values_are_wire_names(self):
        assert [stage.value for stage in GameStage] == [
            'waiting_to_start', 'starting_round', 'picking_cards', 'picking_winner'
        ]

    def test_every_stage_has_every_rule(self):
        for stage in GameStage:
            # Raises KeyError if a table is incomplete
            stage.next_on_expiry
            stage.broadcasts_timer
            stage.shows_black_card
            stage.reveals_picked_cards
            assert stage in DEFAULT_STAGE_DURATIONS

    def test_expiry_chain(self):
        assert GameStage.WAITING_TO_START.next_on_expiry is None
        assert GameStage.STARTING_ROUND.next_on_expiry is GameStage.PICKING_CARDS
        assert GameStage.PICKING_CARDS.next_on_expiry is GameStage.PICKING_WINNER
        assert GameStage.PICKING_WINNER.next_on_expiry is None

    def test_default_durations(self):
        assert DEFAULT_STAGE_DURATIONS == {
            GameStage.WAITING_TO_START: None,
            GameStage.STARTING_ROUND: 10,
            GameStage.PICKING_CARDS: 90,
            GameStage.PICKING_WINNER: 45,
        }

    def test_stages_with_successor_have_a_countdown(self):
        for stage, successor in NEXT_STAGE_ON_EXPIRY.items():
            if successor is not None:
                assert DEFAULT_STAGE_DURATIONS[stage] is not None

    @pytest.mark.parametrize("stage,expected", [
        (GameStage.WAITING_TO_START, False),
        (GameStage.STARTING_ROUND, True),
        (GameStage.PICKING_CARDS, True),
        (GameStage.PICKING_WINNER, False),
    ])
    def test_timer_broadcast_and_black_card_visibility(self, stage, expected):
        assert stage.broadcasts_timer is expected
        assert stage.shows_black_card is expected

    def test_picked_cards_only_revealed_while_picking_winner(self):
        revealing = [stage for stage in GameStage if stage.reveals_picked_cards]
        assert revealing == [GameStage.PICKING_WINNER]


class TestGameCommand:

    def test_known_commands(self):
        assert GameCommand('start_game') is GameCommand.START_GAME
        assert GameCommand('pick_card') is GameCommand.PICK_CARD

    def test_unknown_command_rejected(self):
        with pytest.raises(ValueError):
            GameCommand('judge')
