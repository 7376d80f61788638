from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:
    from chainfall.ui.layout import BoardGeometry
    from chainfall.utils.snapshot import GameSnapshot, PieceView

GRID_COLOR = (255, 255, 255, 25)
CELL_OUTLINE = (51, 51, 51)
HIGHLIGHT = (255, 255, 255, 76)
GHOST_COLOR = (255, 255, 255, 51)
BOARD_BACKGROUND = (12, 14, 30)


class BoardRenderer:
    def render(self, arcade, snapshot: "GameSnapshot", geometry: "BoardGeometry") -> None:
        arcade.draw_lbwh_rectangle_filled(geometry.left, geometry.bottom, geometry.width, geometry.height, BOARD_BACKGROUND)
        self._draw_grid(arcade, geometry)
        for row, cells in enumerate(snapshot.cells):
            for col, color in enumerate(cells):
                if color is not None:
                    self._draw_cell(arcade, geometry, row, col, color)
        active = snapshot.active
        if active is None:
            return
        if snapshot.ghost_y is not None and snapshot.ghost_y > active.y:
            self._draw_piece(arcade, geometry, active, snapshot.ghost_y, ghost=True)
        self._draw_piece(arcade, geometry, active, active.y, ghost=False)

    def _draw_grid(self, arcade, geometry: "BoardGeometry") -> None:
        for col in range(geometry.cols + 1):
            x = geometry.left + col * geometry.cell_size
            arcade.draw_line(x, geometry.bottom, x, geometry.top, GRID_COLOR, 1)
        for row in range(geometry.rows + 1):
            y = geometry.bottom + row * geometry.cell_size
            arcade.draw_line(geometry.left, y, geometry.left + geometry.width, y, GRID_COLOR, 1)

    def _draw_piece(self, arcade, geometry: "BoardGeometry", piece: "PieceView", origin_y: int, *, ghost: bool) -> None:
        for r, row in enumerate(piece.shape):
            for c, value in enumerate(row):
                board_row = origin_y + r
                if not value or board_row < 0:
                    continue
                if ghost:
                    left, bottom = geometry.cell_origin(board_row, piece.x + c)
                    size = geometry.cell_size
                    arcade.draw_lbwh_rectangle_filled(left, bottom, size, size, GHOST_COLOR)
                else:
                    self._draw_cell(arcade, geometry, board_row, piece.x + c, piece.color)

    def _draw_cell(self, arcade, geometry: "BoardGeometry", row: int, col: int, color: Tuple[int, int, int]) -> None:
        left, bottom = geometry.cell_origin(row, col)
        size = geometry.cell_size
        arcade.draw_lbwh_rectangle_filled(left, bottom, size, size, color)
        arcade.draw_lbwh_rectangle_outline(left, bottom, size, size, CELL_OUTLINE, 1)
        # Bevel highlight along the left and top edges.
        arcade.draw_lbwh_rectangle_filled(left, bottom, size / 4, size, HIGHLIGHT)
        arcade.draw_lbwh_rectangle_filled(left, bottom + size * 3 / 4, size, size / 4, HIGHLIGHT)
