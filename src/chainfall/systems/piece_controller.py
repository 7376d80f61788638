import logging
import random

from esper import World

from chainfall.components.game_state import GameMode
from chainfall.components.intent import Intent
from chainfall.components.piece import ActivePiece, Piece, QueuedPiece
from chainfall.constants import HARD_DROP_POINTS_PER_ROW, SOFT_DROP_POINTS
from chainfall.events.bus import (
    EventBus,
    EVENT_CHAIN_COMPLETE,
    EVENT_DROP_DUE,
    EVENT_DROP_SCORED,
    EVENT_GAME_STARTED,
    EVENT_INTENT,
    EVENT_PIECE_LOCKED,
    EVENT_PIECE_MOVED,
    EVENT_PIECE_ROTATED,
    EVENT_PIECE_SPAWNED,
    EVENT_SPAWN_BLOCKED,
)
from chainfall.factories.pieces import create_piece
from chainfall.systems.board_ops import is_valid_position, stamp
from chainfall.systems.state_utils import (
    get_active_piece,
    get_board,
    get_game_state,
    get_or_create_chain_state,
    get_queued_piece,
)

logger = logging.getLogger(__name__)


class PieceControllerSystem:
    """Owns the active and queued pieces and applies player intents.

    Spawning waits for EVENT_CHAIN_COMPLETE, so no active piece exists while
    the chain resolver is settling the board.
    """
    def __init__(self, world: World, event_bus: EventBus, *, rng: random.Random | None = None):
        self.world = world
        self.event_bus = event_bus
        self._rng = rng or getattr(world, "random", None) or random.Random()
        self.event_bus.subscribe(EVENT_INTENT, self.on_intent)
        self.event_bus.subscribe(EVENT_DROP_DUE, self.on_drop_due)
        self.event_bus.subscribe(EVENT_CHAIN_COMPLETE, self.on_chain_complete)
        self.event_bus.subscribe(EVENT_GAME_STARTED, self.on_game_started)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def on_intent(self, sender, **payload):
        intent = payload.get("intent")
        if intent is None or intent == Intent.TOGGLE_PAUSE:
            return
        if not self._accepting_intents():
            return
        if intent == Intent.MOVE_LEFT:
            self.move(-1, 0)
        elif intent == Intent.MOVE_RIGHT:
            self.move(1, 0)
        elif intent == Intent.SOFT_DROP:
            if self.move(0, 1):
                self.event_bus.emit(EVENT_DROP_SCORED, points=SOFT_DROP_POINTS, reason="soft_drop")
        elif intent == Intent.ROTATE:
            self.rotate()
        elif intent == Intent.HARD_DROP:
            if get_active_piece(self.world) is None:
                return
            self.hard_drop()
            self.lock()

    def on_drop_due(self, sender, **payload):
        if get_game_state(self.world).mode != GameMode.PLAYING:
            return
        if get_active_piece(self.world) is None:
            return
        if not self.move(0, 1):
            self.lock()

    def on_chain_complete(self, sender, **payload):
        if get_game_state(self.world).mode != GameMode.PLAYING:
            return
        if get_active_piece(self.world) is None:
            self.spawn()

    def on_game_started(self, sender, **payload):
        self.spawn()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def spawn(self) -> Piece | None:
        """Promote the queued piece (creating one if needed) and queue a new one.

        Returns the new active piece, or None when it collides at its spawn
        position; EVENT_SPAWN_BLOCKED is emitted in that case.
        """
        board = get_board(self.world)
        queued = get_queued_piece(self.world)
        if queued is None:
            entity = self.world.create_entity(create_piece(self._rng, board.cols))
        else:
            entity = queued[0]
            self.world.remove_component(entity, QueuedPiece)
        self.world.add_component(entity, ActivePiece())
        piece = self.world.component_for_entity(entity, Piece)
        next_piece = create_piece(self._rng, board.cols)
        self.world.create_entity(next_piece, QueuedPiece())
        if not is_valid_position(board, piece):
            logger.info("Spawn of %s blocked at (%d, %d)", piece.kind, piece.x, piece.y)
            self.event_bus.emit(EVENT_SPAWN_BLOCKED, entity=entity, kind=piece.kind)
            return None
        self.event_bus.emit(EVENT_PIECE_SPAWNED, entity=entity, kind=piece.kind, queued_kind=next_piece.kind)
        return piece

    def move(self, dx: int, dy: int) -> bool:
        active = get_active_piece(self.world)
        if active is None:
            return False
        _, piece = active
        if not is_valid_position(get_board(self.world), piece, dx, dy):
            return False
        piece.x += dx
        piece.y += dy
        self.event_bus.emit(EVENT_PIECE_MOVED, dx=dx, dy=dy, x=piece.x, y=piece.y)
        return True

    def rotate(self) -> bool:
        """Rotate clockwise in place; no wall kicks, so blocked rotations just fail."""
        active = get_active_piece(self.world)
        if active is None:
            return False
        _, piece = active
        candidate = piece.rotated()
        if not is_valid_position(get_board(self.world), candidate):
            return False
        piece.shape = candidate.shape
        self.event_bus.emit(EVENT_PIECE_ROTATED, shape=[row[:] for row in piece.shape])
        return True

    def hard_drop(self) -> int:
        """Drop the active piece as far as it goes; each row is worth two points."""
        if get_active_piece(self.world) is None:
            return 0
        rows = get_board(self.world).rows
        dropped = 0
        while dropped <= rows and self.move(0, 1):
            dropped += 1
        if dropped:
            self.event_bus.emit(
                EVENT_DROP_SCORED,
                points=dropped * HARD_DROP_POINTS_PER_ROW,
                reason="hard_drop",
            )
        return dropped

    def lock(self) -> bool:
        """Stamp the active piece into the board and hand over to the chain resolver."""
        active = get_active_piece(self.world)
        if active is None:
            return False
        entity, piece = active
        cells = stamp(get_board(self.world), piece)
        self.world.delete_entity(entity, immediate=True)
        logger.debug("Locked %s at (%d, %d)", piece.kind, piece.x, piece.y)
        self.event_bus.emit(EVENT_PIECE_LOCKED, kind=piece.kind, cells=cells)
        return True

    def _accepting_intents(self) -> bool:
        if get_game_state(self.world).mode != GameMode.PLAYING:
            return False
        return not get_or_create_chain_state(self.world).settling
