"""
Game Session for the CardParty game

Owns the stage, membership and round data of one room. Player commands,
membership changes and clock expiry all go through this object under the
room lock, so the session behaves as a single actor.
"""

import logging
import threading
from typing import Any, Dict, Optional, Union

from src.card_source import CardSource
from src.config.game_settings import GameSettings, get_game_settings
from src.core.game_stages import GameCommand, GameStage
from src.hosted_room import HostedRoom, Participant
from src.services.membership_service import MembershipService
from src.services.round_clock import RoundClock, ThreadingTickScheduler
from src.services.state_projector import StateProjector

logger = logging.getLogger(__name__)


class GameEvents:
    """Outbound event names."""
    STATE_CHANGED = 'state_changed'
    TIMER = 'timer'
    UPDATE_HAND = 'update_hand'


class GameSession:
    """Stage-driven state machine for one hosted room."""

    def __init__(self, room: HostedRoom, card_source: CardSource,
                 game_settings: Optional[GameSettings] = None, lock=None, scheduler=None):
        """
        Args:
            room: Room collaborator (host identity and emission)
            card_source: Card supplier for this session
            game_settings: Durations, capacity and hand size
            lock: Room lock shared with the rest of the server; a private RLock if omitted
            scheduler: Tick scheduler for the round clock
        """
        self.room = room
        self.card_source = card_source
        self.game_settings = game_settings or get_game_settings()
        self._lock = lock or threading.RLock()

        self.stage = GameStage.WAITING_TO_START
        self.black_card: Optional[int] = None
        self.membership = MembershipService(self.game_settings.max_players_per_room)
        self.projector = StateProjector()
        self.clock = RoundClock(
            scheduler or ThreadingTickScheduler(),
            self._lock,
            on_tick=self._broadcast_timer,
            on_expire=self.advance_on_expiry,
            should_broadcast=lambda: self.stage.broadcasts_timer,
            interval=self.game_settings.tick_interval
        )
        self._torn_down = False

    # - Commands

    def handle_command(self, sender_id: str, command: Union[GameCommand, str],
                       payload: Optional[Dict[str, Any]] = None) -> bool:
        """
        Dispatch a player command.

        Rejected and unknown commands are no-ops, never errors.

        Returns:
            True if the command changed the session
        """
        with self._lock:
            if self._torn_down:
                return False

            try:
                command = GameCommand(command)
            except ValueError:
                logger.debug(f"Ignoring unknown command {command!r} from {sender_id} in room {self.room.room_id}")
                return False

            if command is GameCommand.START_GAME:
                if sender_id != self.room.host_id or self.stage is not GameStage.WAITING_TO_START:
                    logger.debug(f"Ignoring start_game from {sender_id} in room {self.room.room_id} "
                                 f"(stage {self.stage.value})")
                    return False
                self._start_game()
                return True

            if command is GameCommand.PICK_CARD:
                # TODO: record the pick and score it once the judging round is implemented
                logger.debug(f"pick_card from {sender_id} in room {self.room.room_id} accepted without effect")
                return False

            return False

    def _start_game(self):
        logger.info(f"Starting game in room {self.room.room_id}")
        self._new_round()

    def _new_round(self):
        self.black_card = self.card_source.draw_black_card()

        hand_size = self.game_settings.hand_size
        for player in self.membership.active_players():
            missing = hand_size - len(player.hand)
            if missing > 0:
                player.hand.extend(self.card_source.draw_hand(missing))
            self._send_player_hand(player.participant)

        self.set_stage(GameStage.STARTING_ROUND)

    # - Stage machine

    def set_stage(self, stage: GameStage):
        """Enter a stage: arm its countdown, then broadcast the new state."""
        with self._lock:
            previous = self.stage
            self.stage = stage
            logger.info(f"Room {self.room.room_id} stage {previous.value} -> {stage.value}")

            duration = self.game_settings.stage_durations[stage]
            if duration is None:
                self.clock.cancel()
            else:
                self.clock.arm(duration)

            self.broadcast_state()

    def advance_on_expiry(self):
        """Move to the stage that follows the current one when its countdown ends."""
        with self._lock:
            if self._torn_down:
                return

            next_stage = self.stage.next_on_expiry
            if next_stage is None:
                logger.debug(f"Countdown ended in room {self.room.room_id} at final stage {self.stage.value}")
                return

            self.set_stage(next_stage)

    # - Projection and emission

    def get_state(self) -> Dict[str, Any]:
        """Current view state, identical for every observer."""
        with self._lock:
            return self.projector.project(
                self.stage,
                self.membership.snapshot(),
                self.black_card,
                self.room.host_id,
                self.clock.remaining
            )

    def broadcast_state(self):
        with self._lock:
            if self._torn_down:
                return
            self.room.send(GameEvents.STATE_CHANGED, self.get_state())

    def _broadcast_timer(self, remaining: int):
        if not self._torn_down:
            self.room.send(GameEvents.TIMER, remaining)

    def _send_player_hand(self, participant: Participant):
        player = self.membership.get_player(participant.player_id)
        self.room.send_to(participant, GameEvents.UPDATE_HAND, list(player.hand))

    # - Player management

    def player_joined(self, participant: Participant):
        """
        Add a new player or reactivate a returning one.

        New players get a fresh hand; returning players keep theirs.

        Raises:
            CardPoolExhaustedError: If no full hand can be dealt to a new player
            MembershipError: If the identity is spectating this session
        """
        with self._lock:
            if self._torn_down:
                logger.debug(f"Ignoring join of {participant.player_id} to torn down room {self.room.room_id}")
                return
            self.membership.add_player(
                participant,
                lambda: self.card_source.draw_hand(self.game_settings.hand_size)
            )
            self._send_player_hand(participant)
            self.broadcast_state()

    def player_left(self, player_id: str):
        """Soft-remove a player or drop a spectator, then broadcast."""
        with self._lock:
            if self._torn_down:
                return
            if not self.membership.deactivate_player(player_id):
                self.membership.remove_spectator(player_id)
            self.broadcast_state()

    def can_player_join(self, player_id: str) -> bool:
        with self._lock:
            return self.membership.can_player_join(player_id)

    # - Spectators

    def spectator_joined(self, participant: Participant) -> bool:
        """
        Attach a spectator and send them the current state.

        Only the spectator receives the state; the room is not notified.

        Returns:
            Whether a spectator record was created
        """
        with self._lock:
            if self._torn_down:
                return False
            created = self.membership.add_spectator(participant)
            if created:
                self.room.send_to(participant, GameEvents.STATE_CHANGED, self.get_state())
            return created

    # - Lifecycle

    def is_empty(self) -> bool:
        with self._lock:
            return self.membership.is_empty()

    def teardown(self):
        """Release the clock; the session emits nothing afterwards."""
        with self._lock:
            self.clock.cancel()
            if not self._torn_down:
                logger.info(f"Game session for room {self.room.room_id} torn down")
            self._torn_down = True
