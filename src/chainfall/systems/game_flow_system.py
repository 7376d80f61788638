"""High-level coordinator for game lifecycle transitions."""
from __future__ import annotations

import logging

from esper import World

from chainfall.components.game_state import GameMode
from chainfall.components.intent import Intent
from chainfall.components.piece import Piece
from chainfall.events.bus import (
    EVENT_GAME_OVER,
    EVENT_GAME_STARTED,
    EVENT_INTENT,
    EVENT_NEW_GAME_REQUEST,
    EVENT_PAUSE_TOGGLED,
    EVENT_SPAWN_BLOCKED,
    EventBus,
)
from chainfall.systems.state_utils import (
    get_board,
    get_drop_timer,
    get_game_state,
    get_or_create_chain_state,
    get_progression,
)
from chainfall.utils.deferred import cancel_pending_steps
from chainfall.utils.game_state import set_game_mode

logger = logging.getLogger(__name__)


class GameFlowSystem:
    """Owns new game, pause and game over.

    New game and game over both bump the generation and drop every pending
    continuation, so nothing scheduled for the old board can run.
    """

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_NEW_GAME_REQUEST, self._on_new_game_request)
        self.event_bus.subscribe(EVENT_SPAWN_BLOCKED, self._on_spawn_blocked)
        self.event_bus.subscribe(EVENT_INTENT, self._on_intent)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_new_game_request(self, sender, **payload) -> None:
        self.new_game()

    def _on_spawn_blocked(self, sender, **payload) -> None:
        self.game_over()

    def _on_intent(self, sender, **payload) -> None:
        if payload.get("intent") == Intent.TOGGLE_PAUSE:
            self.toggle_pause()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def new_game(self) -> int:
        """Reset every piece of game state to its defaults and start playing."""
        state = get_game_state(self.world)
        self._invalidate_pending()
        for entity, _ in list(self.world.get_component(Piece)):
            self.world.delete_entity(entity, immediate=True)
        get_board(self.world).reset()
        get_progression(self.world).reset()
        get_or_create_chain_state(self.world).reset()
        get_drop_timer(self.world).reset()
        state.final_score = None
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
        logger.info("New game started (generation %d)", state.generation)
        self.event_bus.emit(EVENT_GAME_STARTED, generation=state.generation)
        return state.generation

    def game_over(self) -> None:
        state = get_game_state(self.world)
        if state.mode == GameMode.GAME_OVER:
            return
        self._invalidate_pending()
        chain = get_or_create_chain_state(self.world)
        chain.is_chain_clearing = False
        chain.is_gravity_animating = False
        progression = get_progression(self.world)
        state.final_score = progression.score
        set_game_mode(self.world, self.event_bus, GameMode.GAME_OVER)
        logger.info(
            "Game over: score %d, level %d, lines %d",
            progression.score,
            progression.level,
            progression.lines_cleared,
        )
        self.event_bus.emit(
            EVENT_GAME_OVER,
            final_score=progression.score,
            level=progression.level,
            lines_cleared=progression.lines_cleared,
        )

    def toggle_pause(self) -> bool:
        """Flip between playing and paused; ignored in any other mode."""
        state = get_game_state(self.world)
        if state.mode == GameMode.PLAYING:
            set_game_mode(self.world, self.event_bus, GameMode.PAUSED)
        elif state.mode == GameMode.PAUSED:
            set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
        else:
            return False
        paused = state.mode == GameMode.PAUSED
        logger.info("Game %s", "paused" if paused else "resumed")
        self.event_bus.emit(EVENT_PAUSE_TOGGLED, paused=paused)
        return True

    def _invalidate_pending(self) -> None:
        state = get_game_state(self.world)
        state.generation += 1
        cancel_pending_steps(self.world)
