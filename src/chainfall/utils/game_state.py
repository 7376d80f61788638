from __future__ import annotations

from esper import World

from chainfall.components.game_state import GameMode
from chainfall.events.bus import EVENT_GAME_MODE_CHANGED, EventBus
from chainfall.systems.state_utils import get_game_state


def set_game_mode(world: World, event_bus: EventBus, mode: GameMode) -> None:
    """Update the global game mode and emit a change event when it differs."""

    state = get_game_state(world)
    previous_mode = state.mode
    if previous_mode == mode:
        return
    state.mode = mode
    event_bus.emit(
        EVENT_GAME_MODE_CHANGED,
        previous_mode=previous_mode,
        new_mode=mode,
    )
