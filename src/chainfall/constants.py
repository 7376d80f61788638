BOARD_ROWS = 20
BOARD_COLS = 10
CELL_SIZE = 30
PREVIEW_CELL_SIZE = 20
BOTTOM_MARGIN = 20

# Board maximum footprint relative to window (percentage of window width/height).
BOARD_MAX_WIDTH_PCT = 0.60
BOARD_MAX_HEIGHT_PCT = 0.92
# Side panel (next piece, score, status) sits right of the board.
SIDE_GAP = 30
SIDE_PANEL_WIDTH = 200

# ============================================================================
# SCORING & PROGRESSION
# ============================================================================
# Points per clear indexed by rows cleared in one pass (multiplied by level).
LINE_CLEAR_SCORES = (0, 100, 300, 500, 800)
# Each combo step beyond the first adds this fraction of the base score.
COMBO_MULTIPLIER_STEP = 0.5
HARD_DROP_POINTS_PER_ROW = 2
SOFT_DROP_POINTS = 1
LINES_PER_LEVEL = 10

# Drop interval: 1s at level 1, 50ms faster per level, never below 50ms.
BASE_DROP_INTERVAL_MS = 1000
DROP_INTERVAL_STEP_MS = 50
MIN_DROP_INTERVAL_MS = 50

# ============================================================================
# CHAIN PACING (seconds)
# ============================================================================
CHAIN_START_DELAY = 0.2        # after the lock clear, before the first settle step
NO_CLEAR_SETTLE_DELAY = 0.05   # lock without a clear still runs one settle pass
GRAVITY_STEP_DELAY = 0.1       # between two settle steps
CHAIN_STEP_DELAY = 0.3         # after a chain clear, before settling again
COMBO_DISPLAY_PAUSE = 1.0      # combo stays visible this long once a chain > 1 ends

# Fixed update rate of the window loop (seconds per tick).
DEFAULT_DT = 1 / 60
