"""Lock -> clear -> settle -> re-clear state machine with combo accounting."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from esper import World

from chainfall.components.chain_state import ChainPhase, ChainState
from chainfall.components.game_state import GameMode
from chainfall.constants import (
    CHAIN_START_DELAY,
    CHAIN_STEP_DELAY,
    COMBO_DISPLAY_PAUSE,
    GRAVITY_STEP_DELAY,
    NO_CLEAR_SETTLE_DELAY,
)
from chainfall.events.bus import (
    EventBus,
    EVENT_CHAIN_COMPLETE,
    EVENT_COMBO_RESET,
    EVENT_GRAVITY_SETTLED,
    EVENT_GRAVITY_STEP,
    EVENT_PIECE_LOCKED,
    EVENT_ROWS_CLEARED,
    EVENT_TICK,
)
from chainfall.systems.board_ops import clear_rows, find_full_rows, settle_step
from chainfall.systems.state_utils import get_board, get_game_state, get_or_create_chain_state
from chainfall.utils.deferred import cancel_pending_steps, pending_steps, pop_due_steps, schedule_step

logger = logging.getLogger(__name__)

STEP_SETTLE = "settle"
STEP_COMBO_RESET = "combo_reset"


@dataclass(slots=True)
class ChainPacing:
    """Cosmetic delays (seconds) between chain steps; zero means next tick."""
    start_delay: float = CHAIN_START_DELAY
    no_clear_delay: float = NO_CLEAR_SETTLE_DELAY
    gravity_step_delay: float = GRAVITY_STEP_DELAY
    chain_step_delay: float = CHAIN_STEP_DELAY
    combo_display_pause: float = COMBO_DISPLAY_PAUSE

    @classmethod
    def immediate(cls) -> "ChainPacing":
        return cls(0.0, 0.0, 0.0, 0.0, 0.0)


class ChainResolverSystem:
    """Resolves a lock into clears, settle passes and chain clears.

    Flow:
      - EVENT_PIECE_LOCKED: combo resets, full rows clear at once. A clear
        sets combo to 1. Either way a settle pass is queued.
      - Each queued settle step moves floating cells down one row and queues
        the next step while anything moved.
      - Once stable, full rows found now are a chain clear: combo += 1,
        rows clear with the combo multiplier, settling starts over.
      - No rows: EVENT_CHAIN_COMPLETE fires. A combo above 1 stays visible
        for the display pause before it resets.
    Continuations are PendingStep entities advanced on EVENT_TICK; the game
    generation tag keeps them from touching a board that was reset.
    """

    def __init__(self, world: World, event_bus: EventBus, *, pacing: ChainPacing | None = None):
        self.world = world
        self.event_bus = event_bus
        self.pacing = pacing or ChainPacing()
        self.event_bus.subscribe(EVENT_PIECE_LOCKED, self.on_piece_locked)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    @property
    def state(self) -> ChainState:
        return get_or_create_chain_state(self.world)

    def on_piece_locked(self, sender, **payload):
        state = self.state
        if state.settling:
            # The running settle loop already rescans the board for full rows.
            logger.warning("Piece %s locked while settling; left to the running chain", payload.get("kind"))
            return
        # A lock during the combo display pause starts a fresh chain.
        cancel_pending_steps(self.world, kinds=[STEP_COMBO_RESET])
        state.reset()
        state.phase = ChainPhase.SETTLING
        state.is_chain_clearing = True
        if find_full_rows(get_board(self.world)):
            state.combo_count = 1
            self._clear_full_rows(chain=False)
            self._schedule(STEP_SETTLE, self.pacing.start_delay)
        else:
            self._schedule(STEP_SETTLE, self.pacing.no_clear_delay)

    def on_tick(self, sender, **payload):
        if get_game_state(self.world).mode != GameMode.PLAYING:
            return
        dt = float(payload.get("dt", 0.0))
        for step in pop_due_steps(self.world, dt):
            # An earlier step may have ended the game within this same tick.
            if step.generation != get_game_state(self.world).generation:
                break
            self._run_step(step.kind)

    def flush(self, max_steps: int | None = None) -> int:
        """Run every queued continuation now, ignoring pacing delays.

        Returns how many steps ran. Bounded by ``max_steps`` (defaults to a
        limit derived from the board height, which settling never exceeds).
        """
        board = get_board(self.world)
        limit = max_steps if max_steps is not None else (board.rows + 2) * (board.rows + 2)
        ran = 0
        while ran < limit:
            queued = pending_steps(self.world)
            if not queued:
                break
            generation = get_game_state(self.world).generation
            entity, step = queued[0]
            self.world.delete_entity(entity, immediate=True)
            if step.generation != generation:
                continue
            self._run_step(step.kind)
            ran += 1
        return ran

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _run_step(self, kind: str) -> None:
        if kind == STEP_SETTLE:
            self._settle()
        elif kind == STEP_COMBO_RESET:
            self._reset_combo()

    def _settle(self) -> None:
        state = self.state
        if state.phase != ChainPhase.SETTLING:
            return
        board = get_board(self.world)
        if settle_step(board):
            state.is_gravity_animating = True
            state.settle_steps += 1
            self.event_bus.emit(EVENT_GRAVITY_STEP, step=state.settle_steps)
            self._schedule(STEP_SETTLE, self.pacing.gravity_step_delay)
            return
        state.is_gravity_animating = False
        self.event_bus.emit(EVENT_GRAVITY_SETTLED, steps=state.settle_steps)
        if find_full_rows(board):
            state.combo_count += 1
            logger.debug("Chain clear, combo x%d", state.combo_count)
            self._clear_full_rows(chain=True)
            self._schedule(STEP_SETTLE, self.pacing.chain_step_delay)
            return
        self._finish_chain()

    def _finish_chain(self) -> None:
        state = self.state
        state.phase = ChainPhase.RESOLVED
        state.is_chain_clearing = False
        combo = state.combo_count
        if combo > 1:
            logger.info("Chain finished with combo x%d", combo)
            self._schedule(STEP_COMBO_RESET, self.pacing.combo_display_pause)
        else:
            state.combo_count = 0
            state.phase = ChainPhase.IDLE
        self.event_bus.emit(EVENT_CHAIN_COMPLETE, combo=combo, clears=state.clears)

    def _reset_combo(self) -> None:
        state = self.state
        if state.phase != ChainPhase.RESOLVED:
            return
        state.combo_count = 0
        state.phase = ChainPhase.IDLE
        self.event_bus.emit(EVENT_COMBO_RESET)

    def _clear_full_rows(self, *, chain: bool) -> int:
        board = get_board(self.world)
        rows = find_full_rows(board)
        if not rows:
            return 0
        count = clear_rows(board, rows)
        state = self.state
        state.clears += 1
        self.event_bus.emit(
            EVENT_ROWS_CLEARED,
            rows=rows,
            count=count,
            combo=state.combo_count,
            chain=chain,
        )
        return count

    def _schedule(self, kind: str, delay: float) -> None:
        schedule_step(self.world, kind, delay)
