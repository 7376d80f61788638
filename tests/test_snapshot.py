from dataclasses import replace

import pytest

from chainfall.components.chain_state import ChainPhase
from chainfall.components.game_state import GameMode
from chainfall.rendering.hud import STATUS_FALLING, STATUS_STABLE, hud_lines, status_label
from chainfall.systems.state_utils import get_board, get_progression
from chainfall.utils.snapshot import build_snapshot

from tests.helpers import GREY, build_game, place_active


def test_snapshot_exposes_pieces_and_counters():
    bus, world, systems = build_game()
    place_active(world, "O", 4, 0)
    get_progression(world).score = 77
    snapshot = build_snapshot(world)
    assert (snapshot.rows, snapshot.cols) == (20, 10)
    assert snapshot.active.kind == "O"
    assert (snapshot.active.x, snapshot.active.y) == (4, 0)
    assert snapshot.queued is not None
    assert snapshot.ghost_y == 18
    assert snapshot.score == 77
    assert snapshot.level == 1
    assert snapshot.mode == GameMode.PLAYING
    assert snapshot.phase == ChainPhase.IDLE
    assert not snapshot.paused and not snapshot.game_over


def test_snapshot_is_detached_from_live_state():
    bus, world, systems = build_game()
    piece = place_active(world, "T", 4, 0)
    snapshot = build_snapshot(world)
    get_board(world).cells[19][0] = GREY
    piece.x = 0
    piece.shape[0][0] = 1
    assert snapshot.cells[19][0] is None
    assert snapshot.active.x == 4
    assert snapshot.active.shape[0] == (0, 1, 0)
    with pytest.raises(AttributeError):
        snapshot.score = 5


def test_snapshot_without_game_has_no_pieces():
    bus, world, systems = build_game(start=False)
    snapshot = build_snapshot(world)
    assert snapshot.active is None
    assert snapshot.queued is None
    assert snapshot.ghost_y is None
    assert snapshot.mode == GameMode.READY


def test_status_label_prefers_combo_over_gravity():
    bus, world, systems = build_game()
    snapshot = build_snapshot(world)
    assert status_label(snapshot) == STATUS_STABLE
    assert status_label(replace(snapshot, is_gravity_animating=True)) == STATUS_FALLING
    assert status_label(replace(snapshot, combo_count=1, is_gravity_animating=True)) == "Combo x1"
    assert status_label(replace(snapshot, combo_count=3)) == "Combo x3"


def test_hud_lines_show_counters():
    bus, world, systems = build_game()
    progression = get_progression(world)
    progression.score = 450
    progression.level = 2
    progression.lines_cleared = 12
    assert hud_lines(build_snapshot(world)) == ["Score 450", "Level 2", "Lines 12"]
