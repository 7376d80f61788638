from __future__ import annotations

from typing import Iterable, List, Tuple

from chainfall.components.board import Board
from chainfall.components.piece import Piece

Position = Tuple[int, int]


def is_valid_position(board: Board, piece: Piece, dx: int = 0, dy: int = 0) -> bool:
    """Return True if every occupied cell of ``piece`` shifted by (dx, dy) fits.

    Cells above the top edge (row < 0) are only checked horizontally, so a
    piece may overlap the spawn area above the board.
    """
    for row, col in piece.occupied(dx, dy):
        if col < 0 or col >= board.cols or row >= board.rows:
            return False
        if row >= 0 and board.cells[row][col] is not None:
            return False
    return True


def stamp(board: Board, piece: Piece) -> List[Position]:
    """Write the piece color into the grid; cells above the top are dropped."""
    stamped: List[Position] = []
    for row, col in piece.occupied():
        if row < 0:
            continue
        assert row < board.rows and 0 <= col < board.cols, f"stamp outside board at {(row, col)}"
        board.cells[row][col] = piece.color
        stamped.append((row, col))
    return stamped


def find_full_rows(board: Board) -> List[int]:
    """Indices of rows without any empty cell, top to bottom."""
    return [index for index, row in enumerate(board.cells) if all(cell is not None for cell in row)]


def clear_rows(board: Board, rows: Iterable[int]) -> int:
    """Remove ``rows`` and insert as many empty rows at the top.

    Remaining rows keep their relative order. Returns the number removed.
    """
    doomed = {row for row in rows if 0 <= row < board.rows}
    if not doomed:
        return 0
    kept = [row for index, row in enumerate(board.cells) if index not in doomed]
    board.cells = [[None] * board.cols for _ in range(len(doomed))] + kept
    return len(doomed)


def settle_step(board: Board) -> bool:
    """Move every floating cell down by exactly one row.

    Rows are scanned bottom-to-top so a cell that just moved is never moved
    twice in one pass, while a whole floating stack drops together.
    """
    moved = False
    cells = board.cells
    for row in range(board.rows - 2, -1, -1):
        upper = cells[row]
        lower = cells[row + 1]
        for col in range(board.cols):
            if upper[col] is not None and lower[col] is None:
                lower[col] = upper[col]
                upper[col] = None
                moved = True
    return moved


def settle_all(board: Board) -> int:
    """Apply settle steps until the board is stable; returns steps that moved."""
    steps = 0
    while settle_step(board):
        steps += 1
    return steps


def ghost_offset(board: Board, piece: Piece) -> int:
    """How many rows the piece can still fall before it rests."""
    offset = 0
    while is_valid_position(board, piece, 0, offset + 1):
        offset += 1
    return offset


def filled_count(board: Board) -> int:
    return sum(1 for row in board.cells for cell in row if cell is not None)
