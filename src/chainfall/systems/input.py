from typing import Dict

from chainfall.components.intent import Intent
from chainfall.events.bus import (
    EventBus,
    EVENT_INTENT,
    EVENT_KEY_PRESS,
    EVENT_NEW_GAME_REQUEST,
)

# arcade.key values; kept literal so headless code never imports arcade.
KEY_LEFT = 65361
KEY_UP = 65362
KEY_RIGHT = 65363
KEY_DOWN = 65364
KEY_SPACE = 32
KEY_P = 112
KEY_R = 114

KEY_BINDINGS: Dict[int, Intent] = {
    KEY_LEFT: Intent.MOVE_LEFT,
    KEY_RIGHT: Intent.MOVE_RIGHT,
    KEY_DOWN: Intent.SOFT_DROP,
    KEY_UP: Intent.ROTATE,
    KEY_SPACE: Intent.HARD_DROP,
    KEY_P: Intent.TOGGLE_PAUSE,
}

RESTART_KEYS = (KEY_R,)


class InputSystem:
    """Decodes raw key presses into intents; the core never sees key codes."""
    def __init__(self, event_bus: EventBus, bindings: Dict[int, Intent] | None = None):
        self.event_bus = event_bus
        self.bindings = dict(bindings) if bindings is not None else dict(KEY_BINDINGS)
        self.event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)

    def on_key_press(self, sender, **kwargs):
        symbol = kwargs.get('symbol')
        if symbol is None:
            return
        if symbol in RESTART_KEYS:
            self.event_bus.emit(EVENT_NEW_GAME_REQUEST)
            return
        intent = self.bindings.get(symbol)
        if intent is not None:
            self.event_bus.emit(EVENT_INTENT, intent=intent)
