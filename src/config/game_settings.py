"""
Game Settings Configuration Module

Provides centralized access to game-specific configuration values,
replacing hardcoded constants throughout the codebase.
"""

import logging
from typing import Dict, Optional
from src.core.game_stages import GameStage, DEFAULT_STAGE_DURATIONS

logger = logging.getLogger(__name__)


class GameSettings:
    """Centralized game settings management."""

    def __init__(self, app_config=None):
        """
        Initialize game settings.

        Args:
            app_config: Application configuration instance from config_factory
        """
        self._config = app_config
        if app_config is None:
            try:
                from config_factory import get_config
                self._config = get_config()
            except Exception as e:
                logger.warning(f"Could not load configuration: {e}, using defaults")
                self._config = None

    @property
    def stage_durations(self) -> Dict[GameStage, Optional[int]]:
        """
        Get countdown length for every stage in seconds.

        Returns:
            Dictionary mapping each game stage to its duration, None for untimed stages
        """
        if self._config is None:
            return dict(DEFAULT_STAGE_DURATIONS)

        return {
            GameStage.WAITING_TO_START: None,
            GameStage.STARTING_ROUND: self._config.starting_round_duration,
            GameStage.PICKING_CARDS: self._config.picking_cards_duration,
            GameStage.PICKING_WINNER: self._config.picking_winner_duration,
        }

    @property
    def max_players_per_room(self) -> int:
        """
        Get maximum active players per room.

        Returns:
            Maximum number of players allowed per room
        """
        if self._config is None:
            return 8  # Fallback default

        return self._config.max_players_per_room

    @property
    def hand_size(self) -> int:
        """Number of cards each player holds."""
        if self._config is None:
            return 10

        return self._config.hand_size

    @property
    def tick_interval(self) -> float:
        """Seconds between two countdown ticks."""
        if self._config is None:
            return 1.0

        return self._config.tick_interval_seconds


# Global instance for easy access
_game_settings_instance = None


def get_game_settings(app_config=None) -> GameSettings:
    """
    Get or create the global game settings instance.

    Args:
        app_config: Optional app config to use

    Returns:
        GameSettings instance
    """
    global _game_settings_instance

    if _game_settings_instance is None or app_config is not None:
        _game_settings_instance = GameSettings(app_config)

    return _game_settings_instance


def reset_game_settings():
    """Reset the global game settings instance (mainly for testing)."""
    global _game_settings_instance
    _game_settings_instance = None
