from esper import World

from chainfall.components.game_state import GameMode
from chainfall.events.bus import (
    EVENT_GAME_OVER,
    EVENT_GAME_STARTED,
    EVENT_GRAVITY_STEP,
    EVENT_PAUSE_TOGGLED,
    EVENT_PIECE_SPAWNED,
    EVENT_ROWS_CLEARED,
    EVENT_TICK,
    EventBus,
)
from chainfall.rendering.board_renderer import BoardRenderer
from chainfall.rendering.hud import HudRenderer
from chainfall.systems.state_utils import get_game_state
from chainfall.ui.layout import BoardGeometry, compute_board_geometry
from chainfall.utils.snapshot import GameSnapshot, build_snapshot


class RenderSystem:
    """Presentation adapter: observes snapshots, never mutates game state.

    The snapshot is rebuilt on every tick while a game runs, after every
    settle step, clear and spawn, and on pause and game over, so each
    intermediate board and every overlay can be drawn.
    """

    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_GRAVITY_STEP, self.on_board_changed)
        self.event_bus.subscribe(EVENT_ROWS_CLEARED, self.on_board_changed)
        self.event_bus.subscribe(EVENT_GAME_STARTED, self.on_board_changed)
        self.event_bus.subscribe(EVENT_GAME_OVER, self.on_board_changed)
        self.event_bus.subscribe(EVENT_PAUSE_TOGGLED, self.on_board_changed)
        self.event_bus.subscribe(EVENT_PIECE_SPAWNED, self.on_board_changed)
        self._board_renderer = BoardRenderer()
        self._hud_renderer = HudRenderer()
        self.snapshot: GameSnapshot = build_snapshot(self.world)
        self.frames_observed = 0

    def on_tick(self, sender, **kwargs):
        if get_game_state(self.world).mode != GameMode.PLAYING:
            return
        self.refresh()

    def on_board_changed(self, sender, **kwargs):
        self.refresh()

    def refresh(self) -> GameSnapshot:
        self.snapshot = build_snapshot(self.world)
        self.frames_observed += 1
        return self.snapshot

    def geometry(self) -> BoardGeometry:
        return compute_board_geometry(self.window.width, self.window.height, self.snapshot.rows, self.snapshot.cols)

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        try:
            arcade.get_window()
        except Exception:
            # No active window (unit tests); nothing to draw into.
            return
        snapshot = self.snapshot
        geometry = self.geometry()
        self._board_renderer.render(arcade, snapshot, geometry)
        self._hud_renderer.render(arcade, snapshot, geometry)
        self._hud_renderer.render_overlay(arcade, snapshot, geometry)
