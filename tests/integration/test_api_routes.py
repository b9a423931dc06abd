"""
Integration tests for the REST API.
"""

import pytest


@pytest.fixture
def http(app, app_container):
    return app.test_client()


class TestApiRoutes:

    def test_health(self, http):
        response = http.get('/api/health')

        assert response.status_code == 200
        assert response.get_json() == {'status': 'ok', 'rooms': 0}

    def test_rooms_empty(self, http):
        assert http.get('/api/rooms').get_json() == {'rooms': []}

    def test_rooms_listed(self, http, app_container):
        app_container.get('RoomManager').join_as_player('party', 'Alice', 'sid-a')

        rooms = http.get('/api/rooms').get_json()['rooms']

        assert len(rooms) == 1
        assert rooms[0]['room_id'] == 'party'
        assert rooms[0]['stage'] == 'waiting_to_start'
        assert rooms[0]['player_count'] == 1
        assert rooms[0]['max_players'] == 8

    def test_cards(self, http, app_container):
        cards = http.get('/api/cards').get_json()

        pack = app_container.get('CardPack')
        assert cards['black'] == pack.black
        assert cards['white'] == pack.white

    def test_rooms_error_returns_empty_list(self, http, app_container):
        room_manager = app_container.get('RoomManager')
        room_manager.get_room_summaries = lambda: 1 / 0

        response = http.get('/api/rooms')

        assert response.status_code == 500
        assert response.get_json() == {'rooms': []}
