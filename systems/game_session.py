"""
game_session.py – Base Snake rules wired to the adaptive engine.

Headless: owns the snake, food, score and game state, and calls the
engine at the narrow interface points:

    accepted direction input  →  record_move(direction, reaction_ms)
    wall / self collision     →  record_collision()
    food eaten                →  record_food_collection(), place_food()
    every tick                →  adjust_difficulty()

Engine failures never stop the game: each call is guarded and falls
back (uniform random food, no hint, difficulty unchanged).
"""

from __future__ import annotations

import logging
import random

from ai.adaptive_director import AdaptiveDirector
from ai.directions import Direction, Position
from ai.food_placement import RandomSource, free_cells, uniform_choice
from ai.stats import SessionStats
from entities.snake import Snake
from settings import FOOD_SCORE, GRID_SIZE

logger = logging.getLogger(__name__)


class GameSession:
    """One Snake board plus its game-state machine.

    States: "IDLE" → "PLAYING" ⇄ "PAUSED" → "GAME_OVER"

    Usage:
        session = GameSession(AdaptiveDirector())
        session.handle_direction("up", now_ms)   # first input starts the game
        session.tick(now_ms)                     # every frame
    """

    def __init__(
        self,
        director: AdaptiveDirector | None = None,
        grid_size: int = GRID_SIZE,
        rng: RandomSource | None = None,
        stats: SessionStats | None = None,
    ):
        self.director = director or AdaptiveDirector()
        self.grid_size = grid_size
        self._rng: RandomSource = rng or random.Random()
        self.stats = stats
        self.start_cell = (grid_size // 2, grid_size // 2)

        self.snake = Snake(self.start_cell)
        self.food: Position | None = None
        self.score = 0
        self.game_state = "IDLE"
        self.won = False

        self._last_move_time = 0.0
        self._last_update_time = 0.0

        self.food = self._random_food()

    # ── State queries ─────────────────────────────────────

    @property
    def running(self) -> bool:
        return self.game_state in ("PLAYING", "PAUSED")

    @property
    def paused(self) -> bool:
        return self.game_state == "PAUSED"

    @property
    def game_over(self) -> bool:
        return self.game_state == "GAME_OVER"

    @property
    def move_interval_ms(self) -> float:
        return self.director.move_interval_ms

    # ══════════════════════════════════════════════════════
    #  Lifecycle
    # ══════════════════════════════════════════════════════

    def start(self, now_ms: float = 0.0):
        """Begin a new game on a fresh board."""
        self.snake = Snake(self.start_cell, Direction.RIGHT)
        self.score = 0
        self.won = False
        self.game_state = "PLAYING"
        self._last_move_time = now_ms
        self._last_update_time = 0.0
        self.director.reset()
        if self.stats is not None:
            self.stats.start_game()
        self.food = self._spawn_food()
        logger.info("Game started (%dx%d)", self.grid_size, self.grid_size)

    def reset(self):
        """Back to the idle screen with a fresh board."""
        self.snake = Snake(self.start_cell)
        self.score = 0
        self.won = False
        self.game_state = "IDLE"
        self.director.reset()
        self.food = self._random_food()

    def toggle_pause(self):
        if self.game_state == "PLAYING":
            self.game_state = "PAUSED"
        elif self.game_state == "PAUSED":
            self.game_state = "PLAYING"
            self._last_update_time = 0.0

    def end(self, outcome: str):
        """Finish the current game with *outcome* ("crash", "win" or "timeout")."""
        self.game_state = "GAME_OVER"
        self.won = outcome == "win"
        logger.info("Game over (%s) – score %d", outcome, self.score)
        if self.stats is not None:
            self.stats.end_game(self.score, outcome)

    # ══════════════════════════════════════════════════════
    #  Input
    # ══════════════════════════════════════════════════════

    def handle_direction(self, direction: Direction | str, now_ms: float) -> bool:
        """Apply a direction input; returns True if it was accepted as a move.

        The first input on the idle screen only starts the game.
        """
        if self.game_state == "IDLE":
            self.start(now_ms)
            return False
        if self.game_state != "PLAYING":
            return False

        if not self.snake.request_direction(direction):
            return False

        try:
            self.director.record_move(direction, now_ms - self._last_move_time)
        except Exception:
            logger.warning("AI movement analysis failed", exc_info=True)
        self._last_move_time = now_ms
        return True

    # ══════════════════════════════════════════════════════
    #  Simulation
    # ══════════════════════════════════════════════════════

    def tick(self, now_ms: float) -> bool:
        """Advance one step if the engine-driven interval has elapsed."""
        if self.game_state != "PLAYING":
            return False
        if now_ms - self._last_update_time < self.move_interval_ms:
            return False
        self.update()
        self._last_update_time = now_ms
        return True

    def update(self):
        """Move the snake one cell and resolve collisions and food."""
        if self.game_state != "PLAYING":
            return

        new_head = self.snake.next_head()
        hit_wall = not (0 <= new_head.x < self.grid_size and 0 <= new_head.y < self.grid_size)
        if hit_wall or self.snake.occupies(new_head):
            self._safe_engine_call(self.director.record_collision, "collision recording")
            self.end("crash")
            return

        ate = new_head == self.food
        self.snake.advance(grow=ate)

        if ate:
            self.score += FOOD_SCORE
            self._safe_engine_call(self.director.record_food_collection, "food recording")
            self.food = self._spawn_food()
            if self.food is None:
                self.end("win")
                return

        self._safe_engine_call(self.director.adjust_difficulty, "difficulty adjustment")
        if self.stats is not None:
            self.stats.record_tick(self.director.get_status())

    def prediction_hint(self) -> Direction | None:
        """Engine's guess at the next move, or None if unavailable."""
        if self.game_state != "PLAYING":
            return None
        try:
            return self.director.predict_next(self.snake.heading)
        except Exception:
            logger.warning("AI prediction failed – skipping hint", exc_info=True)
            return None

    # ── Food ──────────────────────────────────────────────

    def _spawn_food(self) -> Position | None:
        segments = self.snake.segments
        try:
            food = self.director.place_food(segments, self.grid_size)
        except Exception:
            logger.warning("AI food placement failed, using random placement", exc_info=True)
            return self._random_food()

        if food is not None and self.snake.occupies(food):
            logger.warning("AI placed food on the snake, using random placement")
            return self._random_food()
        return food

    def _random_food(self) -> Position | None:
        cells = free_cells(self.snake.segments, self.grid_size)
        if not cells:
            return None
        return uniform_choice(cells, self._rng)

    def _safe_engine_call(self, fn, what: str):
        try:
            fn()
        except Exception:
            logger.warning("AI %s failed – skipping", what, exc_info=True)
