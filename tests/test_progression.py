import pytest

from chainfall.events.bus import EVENT_LEVEL_CHANGED, EVENT_ROWS_CLEARED, EVENT_SCORE_CHANGED, EventBus
from chainfall.systems.progression_system import (
    ProgressionSystem,
    drop_interval_for_level,
    level_for_lines,
    line_clear_points,
)
from chainfall.systems.state_utils import get_progression
from chainfall.world import create_world

from tests.helpers import capture


@pytest.mark.parametrize(
    "rows,level,combo,expected",
    [
        (0, 1, 0, 0),
        (1, 1, 0, 100),
        (2, 1, 1, 300),
        (3, 2, 0, 1000),
        (4, 2, 0, 1600),
        (1, 1, 2, 150),
        (2, 1, 2, 450),
        (1, 3, 3, 600),
        (6, 1, 0, 800),
    ],
)
def test_line_clear_points(rows, level, combo, expected):
    assert line_clear_points(rows, level, combo) == expected


def test_long_combo_multiplier_stays_integral():
    # Combo 4 adds three half steps: 100 * 2.5.
    assert line_clear_points(1, 1, 4) == 250
    assert isinstance(line_clear_points(1, 1, 2), int)


def test_level_and_drop_interval_formulas():
    assert level_for_lines(0) == 1
    assert level_for_lines(9) == 1
    assert level_for_lines(10) == 2
    assert level_for_lines(25) == 3
    assert drop_interval_for_level(1) == 1000
    assert drop_interval_for_level(3) == 900
    assert drop_interval_for_level(19) == 100
    assert drop_interval_for_level(40) == 50


def test_clear_uses_level_before_update_and_levels_up_immediately():
    bus = EventBus()
    world = create_world(bus)
    ProgressionSystem(world, bus)
    levels = capture(bus, EVENT_LEVEL_CHANGED)
    scores = capture(bus, EVENT_SCORE_CHANGED)
    progression = get_progression(world)
    progression.lines_cleared = 9

    bus.emit(EVENT_ROWS_CLEARED, rows=[18, 19], count=2, combo=1, chain=False)

    assert progression.score == 300
    assert progression.lines_cleared == 11
    assert progression.level == 2
    assert progression.drop_interval_ms == 950
    assert levels == [{"level": 2, "drop_interval_ms": 950}]
    assert scores == [{"score": 300, "delta": 300}]


def test_twenty_five_lines_reach_level_three():
    bus = EventBus()
    world = create_world(bus)
    ProgressionSystem(world, bus)
    for _ in range(25):
        bus.emit(EVENT_ROWS_CLEARED, rows=[19], count=1, combo=1, chain=False)
    progression = get_progression(world)
    assert progression.lines_cleared == 25
    assert progression.level == 3
    assert progression.drop_interval_ms == 900
