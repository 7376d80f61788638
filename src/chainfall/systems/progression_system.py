"""Score, level and drop-speed bookkeeping."""
from __future__ import annotations

import logging
import math

from esper import World

from chainfall.constants import (
    BASE_DROP_INTERVAL_MS,
    COMBO_MULTIPLIER_STEP,
    DROP_INTERVAL_STEP_MS,
    LINE_CLEAR_SCORES,
    LINES_PER_LEVEL,
    MIN_DROP_INTERVAL_MS,
)
from chainfall.events.bus import (
    EVENT_DROP_SCORED,
    EVENT_LEVEL_CHANGED,
    EVENT_ROWS_CLEARED,
    EVENT_SCORE_CHANGED,
    EventBus,
)
from chainfall.systems.state_utils import get_progression

logger = logging.getLogger(__name__)


def line_clear_points(rows: int, level: int, combo: int = 0) -> int:
    """Points for clearing ``rows`` at ``level`` while the chain is at ``combo``.

    Combos above 1 add half the base per extra step. Passes that clear more
    than four rows (possible after a settle) use the four-row entry.
    """
    if rows <= 0:
        return 0
    index = min(rows, len(LINE_CLEAR_SCORES) - 1)
    base = LINE_CLEAR_SCORES[index] * level
    if combo > 1:
        base *= 1 + (combo - 1) * COMBO_MULTIPLIER_STEP
    return math.floor(base)


def level_for_lines(lines_cleared: int) -> int:
    return lines_cleared // LINES_PER_LEVEL + 1


def drop_interval_for_level(level: int) -> int:
    return max(MIN_DROP_INTERVAL_MS, BASE_DROP_INTERVAL_MS - (level - 1) * DROP_INTERVAL_STEP_MS)


class ProgressionSystem:
    """Applies clear and drop rewards to the Progression component.

    Level and drop interval are recomputed right after every clear, including
    chain clears, not only once a chain ends.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_ROWS_CLEARED, self.on_rows_cleared)
        self.event_bus.subscribe(EVENT_DROP_SCORED, self.on_drop_scored)

    def on_rows_cleared(self, sender, **payload):
        count = int(payload.get("count", 0))
        if count <= 0:
            return
        combo = int(payload.get("combo", 0))
        progression = get_progression(self.world)
        delta = line_clear_points(count, progression.level, combo)
        progression.lines_cleared += count
        self._add_score(delta)
        new_level = level_for_lines(progression.lines_cleared)
        if new_level != progression.level:
            progression.level = new_level
            progression.drop_interval_ms = drop_interval_for_level(new_level)
            logger.info("Level %d reached, drop interval %dms", new_level, progression.drop_interval_ms)
            self.event_bus.emit(
                EVENT_LEVEL_CHANGED,
                level=new_level,
                drop_interval_ms=progression.drop_interval_ms,
            )

    def on_drop_scored(self, sender, **payload):
        points = int(payload.get("points", 0))
        if points > 0:
            self._add_score(points)

    def _add_score(self, delta: int) -> None:
        if delta <= 0:
            return
        progression = get_progression(self.world)
        progression.score += delta
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=progression.score, delta=delta)
