from __future__ import annotations

from typing import Tuple, Type, TypeVar

from esper import World

from chainfall.components.board import Board
from chainfall.components.chain_state import ChainState
from chainfall.components.drop_timer import DropTimer
from chainfall.components.game_state import GameState
from chainfall.components.piece import ActivePiece, Piece, QueuedPiece
from chainfall.components.progression import Progression

T = TypeVar("T")


def _singleton(world: World, component_type: Type[T]) -> T:
    for _, component in world.get_component(component_type):
        return component
    raise RuntimeError(f"{component_type.__name__} component not found; was the world built with create_world()?")


def get_board(world: World) -> Board:
    return _singleton(world, Board)


def get_game_state(world: World) -> GameState:
    return _singleton(world, GameState)


def get_progression(world: World) -> Progression:
    return _singleton(world, Progression)


def get_drop_timer(world: World) -> DropTimer:
    return _singleton(world, DropTimer)


def get_or_create_chain_state(world: World) -> ChainState:
    """Return the shared ChainState component, creating it if absent."""
    existing = list(world.get_component(ChainState))
    if existing:
        return existing[0][1]
    world.create_entity(ChainState())
    return list(world.get_component(ChainState))[0][1]


def get_active_piece(world: World) -> Tuple[int, Piece] | None:
    for entity, (piece, _) in world.get_components(Piece, ActivePiece):
        return entity, piece
    return None


def get_queued_piece(world: World) -> Tuple[int, Piece] | None:
    for entity, (piece, _) in world.get_components(Piece, QueuedPiece):
        return entity, piece
    return None
