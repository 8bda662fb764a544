"""
settings.py - Game constants for Adaptive Snake.

All configurable values live here so they're easy to tweak
and easy to reference from any module.
"""

# ── Board ─────────────────────────────────────────────────
GRID_SIZE = 20                 # cells per side (square board)
TILE_SIZE = 24                 # pixels per cell
SNAKE_START = (10, 10)

# ── Screen ────────────────────────────────────────────────
PANEL_WIDTH = 240              # right-hand AI status panel
BOARD_PIXELS = GRID_SIZE * TILE_SIZE
SCREEN_WIDTH = BOARD_PIXELS + PANEL_WIDTH
SCREEN_HEIGHT = BOARD_PIXELS
FPS = 60
TITLE = "Adaptive Snake – AI-Tuned Difficulty"
BG_COLOR = (20, 20, 24)

# ── Colors (R, G, B) ─────────────────────────────────────
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
GRID_LINE = (34, 34, 40)
SNAKE_HEAD = (90, 230, 120)
SNAKE_BODY = (40, 170, 80)
FOOD_RANDOM = (220, 50, 50)    # food placed uniformly at random
FOOD_SMART = (255, 160, 40)    # food placed by the director
HINT_FILL = (255, 255, 0, 76)  # translucent prediction cell
HINT_BORDER = (255, 255, 0)
AI_INDICATOR = (0, 255, 255)
YELLOW = (255, 220, 60)

# ── Timing ────────────────────────────────────────────────
BASE_MOVE_INTERVAL_MS = 150    # interval at difficulty 0
MIN_MOVE_INTERVAL_MS = 50      # fastest allowed tick
DIFFICULTY_SPEED_SCALE_MS = 100

# ── Scoring ───────────────────────────────────────────────
FOOD_SCORE = 10

# ── AI engine defaults ────────────────────────────────────
INITIAL_DIFFICULTY = 0.3
MOVE_HISTORY_SIZE = 10         # last N moves kept for pattern analysis

# ── Simulation (headless bot games) ───────────────────────
SIM_MAX_TICKS = 3000           # hard cap per simulated game
SIM_REACTION_MS = (120, 650)   # bot reaction-time range
SIM_MISTAKE_CHANCE = 0.04      # chance the bot picks a random legal turn

# ── Font ──────────────────────────────────────────────────
FONT_SIZE = 22
