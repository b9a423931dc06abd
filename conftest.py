"""
Global pytest configuration and fixtures.
Provides service fixtures for proper dependency injection in tests.
"""

import pytest
import os
from unittest.mock import Mock

# Ensure testing environment
os.environ.setdefault('FLASK_ENV', 'testing')

from tests.helpers.manual_scheduler import ManualTickScheduler


@pytest.fixture
def tick_scheduler():
    """Manual scheduler: round clocks only tick when the test advances it."""
    return ManualTickScheduler()


@pytest.fixture(scope="function", autouse=True)
def reset_global_container():
    """Reset global configuration singletons so tests never share state."""
    from container import reset_container
    from src.config.game_settings import reset_game_settings

    reset_game_settings()
    yield
    reset_container()
    reset_game_settings()


@pytest.fixture(scope="session")
def app():
    """Create Flask app for testing."""
    from app import app as flask_app
    return flask_app


@pytest.fixture(scope="session")
def socketio():
    """Create SocketIO instance for testing."""
    from app import socketio as socketio_instance
    return socketio_instance


@pytest.fixture
def app_container(app, socketio, tick_scheduler):
    """Container wired to the real app's SocketIO with a manual tick scheduler."""
    from container import configure_container
    from config_factory import ConfigurationFactory

    config_factory = ConfigurationFactory()
    config_factory.load_from_environment()
    config = config_factory.to_dict()
    config['pubsub_enabled'] = False
    container = configure_container(socketio=socketio, config=config, scheduler=tick_scheduler)
    yield container
    room_manager = container.get('RoomManager')
    for room_id in room_manager.get_all_rooms():
        room_manager.delete_room(room_id)


@pytest.fixture
def container(tick_scheduler):
    """Service container backed by a mock SocketIO."""
    from container import configure_container

    mock_socketio = Mock()
    return configure_container(socketio=mock_socketio, config={'environment': 'testing'}, scheduler=tick_scheduler)


@pytest.fixture
def room_manager(container):
    """Provide RoomManager service through dependency injection."""
    return container.get('RoomManager')


@pytest.fixture
def session_service(container):
    """Provide SessionService through dependency injection."""
    return container.get('SessionService')


@pytest.fixture
def broadcast_service(container):
    """Provide BroadcastService through dependency injection."""
    return container.get('BroadcastService')


@pytest.fixture
def validation_service(container):
    """Provide ValidationService through dependency injection."""
    return container.get('ValidationService')


@pytest.fixture
def error_response_factory(container):
    """Provide ErrorResponseFactory through dependency injection."""
    return container.get('ErrorResponseFactory')
