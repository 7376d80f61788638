import random

from esper import World
from .events.bus import EventBus
from chainfall.components.board import Board
from chainfall.components.chain_state import ChainState
from chainfall.components.drop_timer import DropTimer
from chainfall.components.game_state import GameMode, GameState
from chainfall.components.progression import Progression
from chainfall.constants import BOARD_COLS, BOARD_ROWS


def create_world(
    event_bus: EventBus,
    initial_mode: GameMode = GameMode.READY,
    *,
    rows: int = BOARD_ROWS,
    cols: int = BOARD_COLS,
    rng: random.Random | None = None,
) -> World:
    """Build one game session: every piece of mutable state lives on entities here."""
    world = World()
    setattr(world, "random", rng or random.Random())

    # Global game state resource (mode + cancellation generation).
    world.create_entity(GameState(mode=initial_mode))
    world.create_entity(Board.empty(rows, cols))
    world.create_entity(Progression(), DropTimer())
    world.create_entity(ChainState())
    return world
