"""
Broadcast Service Unit Tests
"""

from src.hosted_room import HostedRoom
from src.services.broadcast_service import BroadcastService
from tests.helpers.socket_mocks import create_mock_socketio, make_participant


class TestBroadcastService:

    def setup_method(self):
        self.mock_socketio = create_mock_socketio()
        self.broadcast_service = BroadcastService(self.mock_socketio)

    def test_emit_to_room(self):
        self.broadcast_service.emit_to_room('state_changed', {'stage': 'x'}, 'room1')

        self.mock_socketio.emit.assert_called_once_with('state_changed', {'stage': 'x'}, to='room1')

    def test_emit_to_player(self):
        self.broadcast_service.emit_to_player('update_hand', [1, 2], 'sid-1')

        self.mock_socketio.emit.assert_called_once_with('update_hand', [1, 2], to='sid-1')

    def test_emission_failures_are_swallowed(self):
        self.mock_socketio.emit.side_effect = RuntimeError("queue down")

        self.broadcast_service.emit_to_room('timer', 5, 'room1')
        self.broadcast_service.emit_to_player('timer', 5, 'sid-1')

        assert self.mock_socketio.emit.call_count == 2


class TestHostedRoom:

    def setup_method(self):
        self.mock_socketio = create_mock_socketio()
        self.host = make_participant('Host')
        self.room = HostedRoom('room1', self.host, BroadcastService(self.mock_socketio))

    def test_host_id(self):
        assert self.room.host_id == 'host-id'

    def test_send_goes_to_room(self):
        self.room.send('timer', 3)

        self.mock_socketio.emit.assert_called_once_with('timer', 3, to='room1')

    def test_send_to_uses_socket_id(self):
        self.room.send_to(make_participant('Guest'), 'update_hand', [4])

        self.mock_socketio.emit.assert_called_once_with('update_hand', [4], to='guest-sid')
