from dataclasses import dataclass, field
from typing import List, Optional, Tuple

Color = Tuple[int, int, int]
Cell = Optional[Color]


@dataclass(slots=True)
class Board:
    """Fixed-size playfield grid.

    ``cells[row][col]`` is ``None`` when empty, otherwise the color of the
    piece that was stamped there. Row 0 is the top of the board.
    """
    rows: int
    cols: int
    cells: List[List[Cell]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"Board dimensions must be positive, got {self.rows}x{self.cols}")
        if not self.cells:
            self.cells = [[None] * self.cols for _ in range(self.rows)]

    @classmethod
    def empty(cls, rows: int, cols: int) -> "Board":
        return cls(rows=rows, cols=cols)

    def is_filled(self, row: int, col: int) -> bool:
        return self.cells[row][col] is not None

    def reset(self) -> None:
        self.cells = [[None] * self.cols for _ in range(self.rows)]
