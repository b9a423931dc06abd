"""
State Projector Unit Tests
"""

from src.core.game_stages import GameStage
from src.services.membership_service import PlayerState
from src.services.state_projector import StateProjector
from tests.helpers.socket_mocks import make_participant


def make_players():
    host = PlayerState(make_participant('Host'), hand=[1, 2], score=2, picked_card=5)
    guest = PlayerState(make_participant('Guest'), hand=[3], score=0, active=False)
    return [host, guest]


class TestStateProjector:

    def setup_method(self):
        self.projector = StateProjector()

    def test_waiting_state(self):
        state = self.projector.project(GameStage.WAITING_TO_START, make_players(), None, 'host-id', 0)

        assert state == {
            'stage': 'waiting_to_start',
            'time': 0,
            'gameInfo': {},
            'players': [
                {'name': 'Host', 'id': 'host-id', 'score': 2, 'host': True},
                {'name': 'Guest', 'id': 'guest-id', 'score': 0},
            ]
        }

    def test_black_card_visible_while_round_runs(self):
        for stage in (GameStage.STARTING_ROUND, GameStage.PICKING_CARDS):
            state = self.projector.project(stage, make_players(), 4, 'host-id', 10)
            assert state['gameInfo'] == {'blackCard': 4}
            assert state['time'] == 10

    def test_black_card_hidden_otherwise(self):
        for stage in (GameStage.WAITING_TO_START, GameStage.PICKING_WINNER):
            state = self.projector.project(stage, make_players(), 4, 'host-id', 0)
            assert 'blackCard' not in state['gameInfo']

    def test_picked_cards_revealed_only_while_picking_winner(self):
        state = self.projector.project(GameStage.PICKING_WINNER, make_players(), 4, 'host-id', 45)
        assert [player['card'] for player in state['players']] == [5, None]

        for stage in (GameStage.WAITING_TO_START, GameStage.STARTING_ROUND, GameStage.PICKING_CARDS):
            state = self.projector.project(stage, make_players(), 4, 'host-id', 0)
            assert all('card' not in player for player in state['players'])

    def test_hands_never_projected(self):
        state = self.projector.project(GameStage.PICKING_CARDS, make_players(), 4, 'host-id', 90)
        assert all('hand' not in player for player in state['players'])

    def test_same_view_for_every_observer(self):
        players = make_players()
        first = self.projector.project(GameStage.PICKING_CARDS, players, 1, 'host-id', 30)
        second = self.projector.project(GameStage.PICKING_CARDS, players, 1, 'host-id', 30)
        assert first == second
