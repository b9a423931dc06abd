"""
Session Service Unit Tests
Tests for the socket session management service.
"""

from src.services.session_service import SessionService, PLAYER_ROLE, SPECTATOR_ROLE


class TestSessionService:
    """Test SessionService basic functionality"""

    def setup_method(self):
        """Setup test fixtures for each test"""
        self.session_service = SessionService()

    def test_initialization(self):
        assert self.session_service._player_sessions == {}
        assert self.session_service.get_sessions_count() == 0

    def test_create_session_success(self):
        self.session_service.create_session("socket123", "room456", "player789", "TestPlayer")

        session = self.session_service.get_session("socket123")
        assert session == {
            'room_id': "room456",
            'player_id': "player789",
            'player_name': "TestPlayer",
            'role': PLAYER_ROLE
        }
        assert self.session_service.has_session("socket123")

    def test_spectator_session(self):
        self.session_service.create_session("socket1", "room1", "spec1", "Watcher", SPECTATOR_ROLE)

        assert self.session_service.get_session("socket1")['role'] == SPECTATOR_ROLE

    def test_create_session_update_existing(self):
        self.session_service.create_session("socket123", "room1", "player1", "Name1")
        self.session_service.create_session("socket123", "room2", "player2", "Name2")

        assert self.session_service.get_sessions_count() == 1
        session = self.session_service.get_session("socket123")
        assert session['room_id'] == "room2"
        assert session['player_id'] == "player2"

    def test_get_session_returns_copy(self):
        self.session_service.create_session("socket1", "room1", "player1", "Name1")

        self.session_service.get_session("socket1")['room_id'] = "tampered"

        assert self.session_service.get_session("socket1")['room_id'] == "room1"

    def test_get_missing_session(self):
        assert self.session_service.get_session("missing") is None
        assert not self.session_service.has_session("missing")

    def test_remove_session(self):
        self.session_service.create_session("socket1", "room1", "player1", "Name1")

        removed = self.session_service.remove_session("socket1")

        assert removed['player_id'] == "player1"
        assert self.session_service.get_session("socket1") is None
        assert self.session_service.remove_session("socket1") is None

    def test_get_sessions_by_room(self):
        self.session_service.create_session("s1", "room1", "p1", "A")
        self.session_service.create_session("s2", "room1", "p2", "B")
        self.session_service.create_session("s3", "room2", "p3", "C")

        room1 = self.session_service.get_sessions_by_room("room1")

        assert set(room1) == {"s1", "s2"}
        assert self.session_service.get_sessions_by_room("room3") == {}

    def test_clear(self):
        self.session_service.create_session("s1", "room1", "p1", "A")
        self.session_service.clear()

        assert self.session_service.get_sessions_count() == 0
