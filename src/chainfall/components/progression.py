from dataclasses import dataclass

from chainfall.constants import BASE_DROP_INTERVAL_MS


@dataclass(slots=True)
class Progression:
    score: int = 0
    level: int = 1
    lines_cleared: int = 0
    drop_interval_ms: int = BASE_DROP_INTERVAL_MS

    def reset(self) -> None:
        self.score = 0
        self.level = 1
        self.lines_cleared = 0
        self.drop_interval_ms = BASE_DROP_INTERVAL_MS
