from esper import World

from chainfall.components.game_state import GameMode
from chainfall.events.bus import EventBus, EVENT_DROP_DUE, EVENT_PIECE_SPAWNED, EVENT_TICK
from chainfall.systems.state_utils import (
    get_active_piece,
    get_drop_timer,
    get_game_state,
    get_or_create_chain_state,
    get_progression,
)


class SchedulerSystem:
    """Fixed-interval drop timer driven by per-frame EVENT_TICK.

    Time only accumulates while playing with an active piece and no chain
    settling; paused or finished games do not advance the timer at all.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_PIECE_SPAWNED, self.on_piece_spawned)

    def on_tick(self, sender, **kwargs):
        if not self._drop_enabled():
            return
        dt = float(kwargs.get("dt", 0.0))
        timer = get_drop_timer(self.world)
        timer.elapsed_ms += dt * 1000.0
        if timer.elapsed_ms > get_progression(self.world).drop_interval_ms:
            timer.reset()
            self.event_bus.emit(EVENT_DROP_DUE)

    def on_piece_spawned(self, sender, **kwargs):
        get_drop_timer(self.world).reset()

    def _drop_enabled(self) -> bool:
        if get_game_state(self.world).mode != GameMode.PLAYING:
            return False
        if get_or_create_chain_state(self.world).settling:
            return False
        return get_active_piece(self.world) is not None
