from dataclasses import dataclass
from enum import Enum, auto


class ChainPhase(Enum):
    IDLE = auto()
    SETTLING = auto()
    RESOLVED = auto()


@dataclass(slots=True)
class ChainState:
    """Tracks the lock -> clear -> settle -> re-clear loop.

    ``combo_count`` is 0 outside a chain, becomes 1 on the clear caused by a
    lock and only grows on clears found after a settle pass.
    """
    phase: ChainPhase = ChainPhase.IDLE
    combo_count: int = 0
    is_chain_clearing: bool = False
    is_gravity_animating: bool = False
    clears: int = 0
    settle_steps: int = 0

    @property
    def settling(self) -> bool:
        return self.phase == ChainPhase.SETTLING

    def reset(self) -> None:
        self.phase = ChainPhase.IDLE
        self.combo_count = 0
        self.is_chain_clearing = False
        self.is_gravity_animating = False
        self.clears = 0
        self.settle_steps = 0
