from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems that are not stored anywhere else alive.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                          # payload: dt=float (seconds)
EVENT_DROP_DUE = "drop_due"                  # payload: None


# ============================================================================
# INPUT
# ============================================================================
EVENT_KEY_PRESS = "key_press"                # payload: symbol=int, modifiers=int
EVENT_INTENT = "intent"                      # payload: intent=Intent


# ============================================================================
# PIECES
# ============================================================================
EVENT_PIECE_SPAWNED = "piece_spawned"        # payload: entity=int, kind=str, queued_kind=str
EVENT_SPAWN_BLOCKED = "spawn_blocked"        # payload: entity=int, kind=str
EVENT_PIECE_MOVED = "piece_moved"            # payload: dx=int, dy=int, x=int, y=int
EVENT_PIECE_ROTATED = "piece_rotated"        # payload: shape=list[list[int]]
EVENT_PIECE_LOCKED = "piece_locked"          # payload: kind=str, cells=list[(row, col)]
EVENT_DROP_SCORED = "drop_scored"            # payload: points=int, reason=str


# ============================================================================
# CHAIN RESOLUTION
# ============================================================================
EVENT_ROWS_CLEARED = "rows_cleared"          # payload: rows=list[int], count=int, combo=int, chain=bool
EVENT_GRAVITY_STEP = "gravity_step"          # payload: step=int
EVENT_GRAVITY_SETTLED = "gravity_settled"    # payload: steps=int
EVENT_CHAIN_COMPLETE = "chain_complete"      # payload: combo=int, clears=int
EVENT_COMBO_RESET = "combo_reset"            # payload: None


# ============================================================================
# SCORING & PROGRESSION
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"        # payload: score=int, delta=int
EVENT_LEVEL_CHANGED = "level_changed"        # payload: level=int, drop_interval_ms=int


# ============================================================================
# GAME FLOW & STATE
# ============================================================================
EVENT_NEW_GAME_REQUEST = "new_game_request"  # payload: None
EVENT_GAME_STARTED = "game_started"          # payload: generation=int
EVENT_PAUSE_TOGGLED = "pause_toggled"        # payload: paused=bool
EVENT_GAME_OVER = "game_over"                # payload: final_score=int, level=int, lines_cleared=int
EVENT_GAME_MODE_CHANGED = "game_mode_changed"  # payload: previous_mode=GameMode, new_mode=GameMode
