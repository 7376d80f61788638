from chainfall.components.chain_state import ChainPhase
from chainfall.components.intent import Intent
from chainfall.components.pending_step import PendingStep
from chainfall.events.bus import (
    EVENT_CHAIN_COMPLETE,
    EVENT_COMBO_RESET,
    EVENT_GRAVITY_SETTLED,
    EVENT_GRAVITY_STEP,
    EVENT_INTENT,
    EVENT_PIECE_LOCKED,
    EVENT_ROWS_CLEARED,
)
from chainfall.systems.board_ops import filled_count
from chainfall.systems.chain_resolver import ChainPacing
from chainfall.systems.state_utils import (
    get_active_piece,
    get_board,
    get_game_state,
    get_or_create_chain_state,
    get_progression,
)

from tests.helpers import GREY, build_game, capture, drive, fill_row, place_active


def _setup_two_step_chain(world):
    """6x4 board where locking an I on row 4 clears it and gravity fills row 5.

    row 2: . . . X
    row 3: . . . .
    row 4: I I I I   <- locked piece
    row 5: X X X .
    """
    board = get_board(world)
    board.cells[2][3] = GREY
    fill_row(board, 5, skip=(3,))
    place_active(world, "I", 0, 4)


def test_single_clear_keeps_combo_at_one():
    bus, world, systems = build_game()
    cleared = capture(bus, EVENT_ROWS_CLEARED)
    complete = capture(bus, EVENT_CHAIN_COMPLETE)
    board = get_board(world)
    fill_row(board, 19, skip=(0, 1, 2, 3))
    place_active(world, "I", 0, 19)

    systems.controller.lock()
    assert get_or_create_chain_state(world).combo_count == 1
    systems.resolver.flush()

    assert len(cleared) == 1
    assert cleared[0]["count"] == 1
    assert cleared[0]["combo"] == 1
    assert cleared[0]["chain"] is False
    assert complete == [{"combo": 1, "clears": 1}]
    state = get_or_create_chain_state(world)
    assert state.combo_count == 0
    assert state.phase == ChainPhase.IDLE
    assert filled_count(board) == 0
    progression = get_progression(world)
    assert progression.score == 100
    assert progression.lines_cleared == 1


def test_two_step_chain_reaches_combo_two_with_multiplier():
    bus, world, systems = build_game(rows=6, cols=4)
    _setup_two_step_chain(world)
    cleared = capture(bus, EVENT_ROWS_CLEARED)
    steps = capture(bus, EVENT_GRAVITY_STEP)
    settled = capture(bus, EVENT_GRAVITY_SETTLED)
    complete = capture(bus, EVENT_CHAIN_COMPLETE)
    resets = capture(bus, EVENT_COMBO_RESET)

    systems.controller.lock()
    systems.resolver.flush()

    assert [(c["count"], c["combo"], c["chain"]) for c in cleared] == [(1, 1, False), (1, 2, True)]
    assert [s["step"] for s in steps] == [1, 2]
    assert len(settled) == 2
    assert complete == [{"combo": 2, "clears": 2}]
    assert len(resets) == 1
    progression = get_progression(world)
    # 100 for the lock clear, 100 * 1.5 for the chain clear.
    assert progression.score == 250
    assert progression.lines_cleared == 2
    assert filled_count(get_board(world)) == 0
    assert get_or_create_chain_state(world).combo_count == 0


def test_no_active_piece_while_settling():
    bus, world, systems = build_game(rows=6, cols=4, pacing=ChainPacing())
    _setup_two_step_chain(world)
    systems.controller.lock()
    state = get_or_create_chain_state(world)
    assert state.settling
    assert state.is_chain_clearing
    assert get_active_piece(world) is None
    drive(bus, 3)
    assert get_active_piece(world) is None
    drive(bus, 40)
    assert not state.settling
    assert get_active_piece(world) is not None


def test_pacing_delays_each_step_and_holds_combo_display():
    bus, world, systems = build_game(rows=6, cols=4, pacing=ChainPacing())
    _setup_two_step_chain(world)
    steps = capture(bus, EVENT_GRAVITY_STEP)
    complete = capture(bus, EVENT_CHAIN_COMPLETE)
    systems.controller.lock()

    # Start delay is 0.2s; nothing falls before it elapses.
    drive(bus, 2, dt=0.05)
    assert steps == []
    drive(bus, 3, dt=0.05)
    assert len(steps) == 1
    state = get_or_create_chain_state(world)
    assert state.is_gravity_animating

    drive(bus, 15, dt=0.05)
    assert complete and complete[0]["combo"] == 2
    # Combo stays visible during the display pause.
    assert state.combo_count == 2
    assert state.phase == ChainPhase.RESOLVED
    drive(bus, 25, dt=0.05)
    assert state.combo_count == 0
    assert state.phase == ChainPhase.IDLE


def test_lock_without_clear_still_settles_and_completes():
    bus, world, systems = build_game()
    complete = capture(bus, EVENT_CHAIN_COMPLETE)
    cleared = capture(bus, EVENT_ROWS_CLEARED)
    place_active(world, "O", 0, 18)
    systems.controller.lock()
    systems.resolver.flush()
    assert cleared == []
    assert complete == [{"combo": 0, "clears": 0}]
    assert filled_count(get_board(world)) == 4


def test_new_game_cancels_pending_chain_steps():
    bus, world, systems = build_game(rows=6, cols=4, pacing=ChainPacing())
    _setup_two_step_chain(world)
    steps = capture(bus, EVENT_GRAVITY_STEP)
    old_generation = get_game_state(world).generation
    systems.controller.lock()
    assert list(world.get_component(PendingStep))

    systems.flow.new_game()
    drive(bus, 40)

    assert get_game_state(world).generation > old_generation
    assert steps == []
    assert filled_count(get_board(world)) == 0
    assert get_progression(world).score == 0
    state = get_or_create_chain_state(world)
    assert state.combo_count == 0
    assert not state.is_chain_clearing


def test_stale_generation_step_is_dropped():
    bus, world, systems = build_game(rows=6, cols=4, pacing=ChainPacing())
    _setup_two_step_chain(world)
    steps = capture(bus, EVENT_GRAVITY_STEP)
    systems.controller.lock()
    # Simulate a reset that forgot to cancel the queue.
    get_game_state(world).generation += 1
    drive(bus, 40)
    assert steps == []
    assert not list(world.get_component(PendingStep))


def test_paused_game_does_not_advance_chain():
    bus, world, systems = build_game(rows=6, cols=4, pacing=ChainPacing())
    _setup_two_step_chain(world)
    steps = capture(bus, EVENT_GRAVITY_STEP)
    systems.controller.lock()
    systems.flow.toggle_pause()
    drive(bus, 40)
    assert steps == []
    systems.flow.toggle_pause()
    drive(bus, 40)
    assert steps


def test_hard_dropped_i_piece_completes_bottom_row():
    bus, world, systems = build_game()
    cleared = capture(bus, EVENT_ROWS_CLEARED)
    fill_row(get_board(world), 19, skip=(0, 1, 2, 3))
    place_active(world, "I", 0, 0)
    bus.emit(EVENT_INTENT, intent=Intent.HARD_DROP)
    systems.resolver.flush()
    assert [c["rows"] for c in cleared] == [[19]]
    progression = get_progression(world)
    assert progression.lines_cleared == 1
    # 19 rows of hard drop at two points each, plus one single clear.
    assert progression.score == 19 * 2 + 100
    assert get_active_piece(world) is not None


def test_lock_while_settling_leaves_running_chain_alone():
    bus, world, systems = build_game(rows=6, cols=4, pacing=ChainPacing())
    _setup_two_step_chain(world)
    complete = capture(bus, EVENT_CHAIN_COMPLETE)
    systems.controller.lock()
    state = get_or_create_chain_state(world)
    assert state.settling
    queued = [step.kind for _, step in world.get_component(PendingStep)]

    bus.emit(EVENT_PIECE_LOCKED, kind="O", cells=[])

    assert [step.kind for _, step in world.get_component(PendingStep)] == queued
    assert state.combo_count == 1
    assert state.clears == 1
    drive(bus, 25)
    assert complete == [{"combo": 2, "clears": 2}]
