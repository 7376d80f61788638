from __future__ import annotations

import random
from types import SimpleNamespace
from typing import Iterable, List

from esper import World

from chainfall.components.board import Board
from chainfall.events.bus import EventBus
from chainfall.factories.pieces import get_definition
from chainfall.systems.chain_resolver import ChainPacing, ChainResolverSystem
from chainfall.systems.game_flow_system import GameFlowSystem
from chainfall.systems.piece_controller import PieceControllerSystem
from chainfall.systems.progression_system import ProgressionSystem
from chainfall.systems.scheduler import SchedulerSystem
from chainfall.systems.state_utils import get_active_piece
from chainfall.world import create_world

GREY = (128, 128, 128)


class DummyWindow:
    def __init__(self, width=640, height=700):
        self.width = width
        self.height = height


def build_game(*, rows: int = 20, cols: int = 10, seed: int = 0, pacing: ChainPacing | None = None, start: bool = True):
    """Wire the core systems the way the window does; returns (bus, world, systems)."""
    bus = EventBus()
    world = create_world(bus, rows=rows, cols=cols, rng=random.Random(seed))
    systems = SimpleNamespace(
        flow=GameFlowSystem(world, bus),
        progression=ProgressionSystem(world, bus),
        resolver=ChainResolverSystem(world, bus, pacing=pacing or ChainPacing.immediate()),
        controller=PieceControllerSystem(world, bus),
        scheduler=SchedulerSystem(world, bus),
    )
    if start:
        systems.flow.new_game()
    return bus, world, systems


def drive(bus: EventBus, ticks: int, dt: float = 0.05) -> None:
    for _ in range(ticks):
        bus.emit('tick', dt=dt)


def capture(bus: EventBus, event: str) -> List[dict]:
    received: List[dict] = []
    bus.subscribe(event, lambda sender, **payload: received.append(payload))
    return received


def fill_row(board: Board, row: int, skip: Iterable[int] = (), color=GREY) -> None:
    skipped = set(skip)
    for col in range(board.cols):
        board.cells[row][col] = None if col in skipped else color


def place_active(world: World, kind: str, x: int, y: int, shape=None):
    """Turn the current active piece into ``kind`` at (x, y)."""
    active = get_active_piece(world)
    assert active is not None, "Expected an active piece"
    _, piece = active
    definition = get_definition(kind)
    piece.kind = kind
    piece.shape = [list(row) for row in shape] if shape is not None else definition.fresh_shape()
    piece.color = definition.color
    piece.x = x
    piece.y = y
    return piece
