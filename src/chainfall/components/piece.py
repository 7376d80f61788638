from dataclasses import dataclass
from typing import List, Tuple

Shape = List[List[int]]


def rotate_clockwise(shape: Shape) -> Shape:
    """Return a new matrix rotated 90 degrees clockwise (transpose + row reverse)."""
    return [list(row) for row in zip(*shape[::-1])]


@dataclass(slots=True)
class Piece:
    """A falling piece: occupancy matrix, color and board-relative origin."""
    kind: str
    shape: Shape
    color: Tuple[int, int, int]
    x: int = 0
    y: int = 0

    @property
    def width(self) -> int:
        return len(self.shape[0]) if self.shape else 0

    @property
    def height(self) -> int:
        return len(self.shape)

    def occupied(self, dx: int = 0, dy: int = 0) -> List[Tuple[int, int]]:
        """Board (row, col) pairs covered by the piece shifted by (dx, dy)."""
        cells: List[Tuple[int, int]] = []
        for r, row in enumerate(self.shape):
            for c, value in enumerate(row):
                if value:
                    cells.append((self.y + r + dy, self.x + c + dx))
        return cells

    def rotated(self) -> "Piece":
        return Piece(kind=self.kind, shape=rotate_clockwise(self.shape), color=self.color, x=self.x, y=self.y)


@dataclass(slots=True)
class ActivePiece:
    """Marker for the piece currently controlled by the player."""
    pass


@dataclass(slots=True)
class QueuedPiece:
    """Marker for the next piece shown in the preview."""
    pass
