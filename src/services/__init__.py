"""
Services package for the CardParty game

Contains the single-responsibility services shared by rooms and handlers.
"""

from .broadcast_service import BroadcastService
from .concurrency_control_service import ConcurrencyControlService
from .membership_service import MembershipService
from .round_clock import RoundClock, ThreadingTickScheduler
from .session_service import SessionService
from .state_projector import StateProjector
from .validation_service import ValidationService

__all__ = [
    'BroadcastService',
    'ConcurrencyControlService',
    'MembershipService',
    'RoundClock',
    'ThreadingTickScheduler',
    'SessionService',
    'StateProjector',
    'ValidationService'
]
