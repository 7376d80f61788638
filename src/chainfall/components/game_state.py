"""Game state resource describing the active high-level mode."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class GameMode(Enum):
    """High-level game modes that drive which systems run."""
    READY = auto()
    PLAYING = auto()
    PAUSED = auto()
    GAME_OVER = auto()


@dataclass
class GameState:
    """Singleton component storing the current mode and cancellation epoch.

    ``generation`` is bumped on every new game and on game over; deferred
    work tagged with an older generation must not touch the board.
    """
    mode: GameMode = GameMode.READY
    generation: int = 0
    final_score: Optional[int] = None
