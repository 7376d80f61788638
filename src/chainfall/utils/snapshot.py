from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from esper import World

from chainfall.components.chain_state import ChainPhase
from chainfall.components.game_state import GameMode
from chainfall.components.piece import Piece
from chainfall.systems.board_ops import ghost_offset, is_valid_position
from chainfall.systems.state_utils import (
    get_active_piece,
    get_board,
    get_game_state,
    get_or_create_chain_state,
    get_progression,
    get_queued_piece,
)

Color = Tuple[int, int, int]


@dataclass(frozen=True, slots=True)
class PieceView:
    kind: str
    shape: Tuple[Tuple[int, ...], ...]
    color: Color
    x: int
    y: int

    @classmethod
    def from_piece(cls, piece: Piece) -> "PieceView":
        return cls(
            kind=piece.kind,
            shape=tuple(tuple(row) for row in piece.shape),
            color=piece.color,
            x=piece.x,
            y=piece.y,
        )


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    """Read-only copy of everything a presentation layer may observe."""
    rows: int
    cols: int
    cells: Tuple[Tuple[Optional[Color], ...], ...]
    active: Optional[PieceView]
    queued: Optional[PieceView]
    ghost_y: Optional[int]
    score: int
    level: int
    lines_cleared: int
    drop_interval_ms: int
    combo_count: int
    phase: ChainPhase
    is_chain_clearing: bool
    is_gravity_animating: bool
    mode: GameMode
    final_score: Optional[int]

    @property
    def paused(self) -> bool:
        return self.mode == GameMode.PAUSED

    @property
    def game_over(self) -> bool:
        return self.mode == GameMode.GAME_OVER


def build_snapshot(world: World) -> GameSnapshot:
    board = get_board(world)
    progression = get_progression(world)
    chain = get_or_create_chain_state(world)
    state = get_game_state(world)
    active = get_active_piece(world)
    queued = get_queued_piece(world)
    ghost_y: Optional[int] = None
    active_view: Optional[PieceView] = None
    if active is not None:
        piece = active[1]
        active_view = PieceView.from_piece(piece)
        if is_valid_position(board, piece):
            ghost_y = piece.y + ghost_offset(board, piece)
    return GameSnapshot(
        rows=board.rows,
        cols=board.cols,
        cells=tuple(tuple(row) for row in board.cells),
        active=active_view,
        queued=PieceView.from_piece(queued[1]) if queued is not None else None,
        ghost_y=ghost_y,
        score=progression.score,
        level=progression.level,
        lines_cleared=progression.lines_cleared,
        drop_interval_ms=progression.drop_interval_ms,
        combo_count=chain.combo_count,
        phase=chain.phase,
        is_chain_clearing=chain.is_chain_clearing,
        is_gravity_animating=chain.is_gravity_animating,
        mode=state.mode,
        final_score=state.final_score,
    )
