from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, List, Tuple

from chainfall.components.piece import Piece, Shape


@dataclass(frozen=True, slots=True)
class PieceDefinition:
    kind: str
    shape: Tuple[Tuple[int, ...], ...]
    color: Tuple[int, int, int]

    def fresh_shape(self) -> Shape:
        return [list(row) for row in self.shape]


PIECE_DEFINITIONS: Tuple[PieceDefinition, ...] = (
    PieceDefinition("I", ((1, 1, 1, 1),), (0, 245, 255)),     # #00F5FF
    PieceDefinition("O", ((1, 1), (1, 1)), (255, 255, 0)),    # #FFFF00
    PieceDefinition("T", ((0, 1, 0), (1, 1, 1)), (128, 0, 128)),  # #800080
    PieceDefinition("S", ((0, 1, 1), (1, 1, 0)), (0, 255, 0)),    # #00FF00
    PieceDefinition("Z", ((1, 1, 0), (0, 1, 1)), (255, 0, 0)),    # #FF0000
    PieceDefinition("J", ((1, 0, 0), (1, 1, 1)), (0, 0, 255)),    # #0000FF
    PieceDefinition("L", ((0, 0, 1), (1, 1, 1)), (255, 140, 0)),  # #FF8C00
)

_BY_KIND: Dict[str, PieceDefinition] = {definition.kind: definition for definition in PIECE_DEFINITIONS}


def piece_kinds() -> List[str]:
    return [definition.kind for definition in PIECE_DEFINITIONS]


def get_definition(kind: str) -> PieceDefinition:
    try:
        return _BY_KIND[kind]
    except KeyError as exc:
        raise KeyError(f"Piece kind '{kind}' is not defined") from exc


def spawn_origin(shape_width: int, cols: int) -> Tuple[int, int]:
    """Centered spawn column on the top row."""
    return cols // 2 - shape_width // 2, 0


def create_piece_by_kind(kind: str, cols: int) -> Piece:
    definition = get_definition(kind)
    shape = definition.fresh_shape()
    x, y = spawn_origin(len(shape[0]), cols)
    return Piece(kind=definition.kind, shape=shape, color=definition.color, x=x, y=y)


def create_piece(rng: random.Random | None, cols: int) -> Piece:
    """Pick a random definition and return a new piece positioned for spawning."""
    chooser = rng or random
    definition = chooser.choice(PIECE_DEFINITIONS)
    return create_piece_by_kind(definition.kind, cols)
