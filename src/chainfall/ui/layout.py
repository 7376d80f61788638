from dataclasses import dataclass

from chainfall.constants import (
    BOARD_MAX_HEIGHT_PCT,
    BOARD_MAX_WIDTH_PCT,
    BOTTOM_MARGIN,
    CELL_SIZE,
    SIDE_GAP,
    SIDE_PANEL_WIDTH,
)


@dataclass(slots=True)
class BoardGeometry:
    cell_size: int
    left: float
    bottom: float
    rows: int
    cols: int

    @property
    def width(self) -> float:
        return self.cell_size * self.cols

    @property
    def height(self) -> float:
        return self.cell_size * self.rows

    @property
    def top(self) -> float:
        return self.bottom + self.height

    @property
    def panel_left(self) -> float:
        return self.left + self.width + SIDE_GAP

    def cell_origin(self, row: int, col: int) -> tuple[float, float]:
        """Bottom-left pixel of a board cell; row 0 is the top row."""
        return self.left + col * self.cell_size, self.bottom + (self.rows - 1 - row) * self.cell_size


def compute_board_geometry(window_width: int, window_height: int, rows: int, cols: int) -> BoardGeometry:
    """Fit the board into the window, leaving room for the side panel.

    Cell size never exceeds CELL_SIZE and never drops below 8 pixels.
    """
    max_board_w = min(window_width * BOARD_MAX_WIDTH_PCT, window_width - SIDE_PANEL_WIDTH - SIDE_GAP)
    max_board_h = (window_height - BOTTOM_MARGIN) * BOARD_MAX_HEIGHT_PCT
    cell_size = int(min(max_board_w / cols, max_board_h / rows, CELL_SIZE))
    if cell_size < 8:
        cell_size = 8
    total_width = cols * cell_size + SIDE_GAP + SIDE_PANEL_WIDTH
    left = max(0.0, (window_width - total_width) / 2)
    return BoardGeometry(cell_size=cell_size, left=left, bottom=BOTTOM_MARGIN, rows=rows, cols=cols)
