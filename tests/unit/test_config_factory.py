"""
Configuration Factory Unit Tests
"""

import pytest

from config_factory import AppConfig, ConfigError, ConfigurationFactory, Environment
from src.config.game_settings import GameSettings
from src.core.game_stages import GameStage

ENV_VARS = [
    'FLASK_ENV', 'SECRET_KEY', 'PUBSUB_ENABLED', 'REDIS_IP', 'REDIS_PORT', 'REDIS_URL',
    'HAND_SIZE', 'PICKING_CARDS_DURATION', 'TICK_INTERVAL_SECONDS', 'MAX_PLAYERS_PER_ROOM',
]


@pytest.fixture
def factory(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv('FLASK_ENV', 'testing')
    factory = ConfigurationFactory()
    factory.reset()
    yield factory
    factory.reset()
    factory.load_from_dict({'environment': 'testing'})


class TestConfigurationFactory:

    def test_defaults(self, factory):
        config = factory.load_from_environment()

        assert config.environment is Environment.TESTING
        assert config.max_players_per_room == 8
        assert config.hand_size == 10
        assert config.cards_file == 'cards.yaml'
        assert config.pubsub_enabled is False
        assert config.message_queue_url is None

    def test_singleton(self):
        assert ConfigurationFactory() is ConfigurationFactory()

    def test_redis_host_and_port(self, factory, monkeypatch):
        monkeypatch.setenv('PUBSUB_ENABLED', 'true')
        monkeypatch.setenv('REDIS_IP', 'cache.internal')
        monkeypatch.setenv('REDIS_PORT', '6380')

        config = factory.load_from_environment()

        assert config.message_queue_url == 'redis://cache.internal:6380'

    def test_redis_url_overrides_host(self, factory, monkeypatch):
        monkeypatch.setenv('PUBSUB_ENABLED', '1')
        monkeypatch.setenv('REDIS_IP', 'ignored')
        monkeypatch.setenv('REDIS_URL', 'redis://:secret@redis:6379/2')

        assert factory.load_from_environment().message_queue_url == 'redis://:secret@redis:6379/2'

    def test_pubsub_defaults_on_in_production(self, factory, monkeypatch):
        monkeypatch.setenv('FLASK_ENV', 'production')
        monkeypatch.setenv('SECRET_KEY', 'not-the-default')

        config = factory.load_from_environment()

        assert config.is_production
        assert config.message_queue_url == 'redis://localhost:6379'

    def test_production_requires_secret_key(self, factory, monkeypatch):
        monkeypatch.setenv('FLASK_ENV', 'production')

        with pytest.raises(ConfigError):
            factory.load_from_environment()

    def test_game_values_from_environment(self, factory, monkeypatch):
        monkeypatch.setenv('HAND_SIZE', '7')
        monkeypatch.setenv('PICKING_CARDS_DURATION', '60')
        monkeypatch.setenv('TICK_INTERVAL_SECONDS', '0.5')

        config = factory.load_from_environment()

        assert config.hand_size == 7
        assert config.picking_cards_duration == 60
        assert config.tick_interval_seconds == 0.5

    def test_invalid_integer_falls_back(self, factory, monkeypatch):
        monkeypatch.setenv('MAX_PLAYERS_PER_ROOM', 'lots')

        assert factory.load_from_environment().max_players_per_room == 8

    def test_load_from_dict(self, factory):
        source = {'environment': 'testing', 'hand_size': 5}
        config = factory.load_from_dict(source)

        assert config.hand_size == 5
        assert config.environment is Environment.TESTING
        assert source['environment'] == 'testing'
        assert factory.to_dict()['environment'] == 'testing'

    def test_override_setting_revalidates(self, factory):
        factory.load_from_environment()
        factory.override_setting('hand_size', 12)
        assert factory.get_config().hand_size == 12

        with pytest.raises(ConfigError):
            factory.override_setting('hand_size', 0)

    def test_get_config_before_load(self, factory):
        with pytest.raises(ConfigError):
            factory.get_config()

    def test_flask_config(self, factory):
        factory.load_from_environment()
        flask_config = factory.get_flask_config()

        assert flask_config['HAND_SIZE'] == 10
        assert flask_config['CARDS_FILE'] == 'cards.yaml'


class TestAppConfigValidation:

    @pytest.mark.parametrize("overrides", [
        {'port': 0},
        {'hand_size': 0},
        {'max_players_per_room': 0},
        {'starting_round_duration': 0},
        {'tick_interval_seconds': 0},
        {'redis_port': 70000},
    ])
    def test_invalid_values(self, overrides):
        with pytest.raises(ConfigError):
            AppConfig(**overrides)


class TestGameSettings:

    def test_values_follow_app_config(self):
        settings = GameSettings(AppConfig(picking_cards_duration=30, hand_size=4, tick_interval_seconds=0.25))

        assert settings.stage_durations == {
            GameStage.WAITING_TO_START: None,
            GameStage.STARTING_ROUND: 10,
            GameStage.PICKING_CARDS: 30,
            GameStage.PICKING_WINNER: 45,
        }
        assert settings.hand_size == 4
        assert settings.tick_interval == 0.25
        assert settings.max_players_per_room == 8
