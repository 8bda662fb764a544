"""
adaptive_director.py – The adaptive-gameplay engine.

Owns the BehaviorModel and turns what it learns into two outputs for
the game loop:

  - a recommended food cell (strategy-scored, see food_placement)
  - a smoothed difficulty scalar in [0.1, 1.0]

Strategy is re-evaluated after every collision or food event, in
priority order:

  struggling  (collisions > 3 or avg reaction > 800ms)  →  encouraging
  excelling   (skill >= 4 and avg reaction < 250ms)     →  challenging
  repetitive  (last 3 moves repeat the 3 before)        →  pattern-breaking
  otherwise                                              →  learning

Difficulty eases toward a skill-implied target with a first-order
low-pass filter, so one lucky or unlucky round never causes a jump.

Every call is synchronous and independently atomic; there are no
timers or background work.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from ai.ai_settings import AISettings
from ai.behavior_model import BehaviorModel, PlayerStats
from ai.directions import Direction, Position
from ai.food_placement import PlacementConfig, RandomSource, Strategy, choose_food_position
from settings import (
    BASE_MOVE_INTERVAL_MS, DIFFICULTY_SPEED_SCALE_MS,
    INITIAL_DIFFICULTY, MIN_MOVE_INTERVAL_MS,
)

logger = logging.getLogger(__name__)


def move_interval_ms(difficulty: float) -> float:
    """Milliseconds between snake steps; higher difficulty = faster."""
    return max(MIN_MOVE_INTERVAL_MS,
               BASE_MOVE_INTERVAL_MS - difficulty * DIFFICULTY_SPEED_SCALE_MS)


# ══════════════════════════════════════════════════════════
#  Configuration
# ══════════════════════════════════════════════════════════

@dataclass
class DirectorConfig:
    """Tunable knobs for strategy selection and difficulty."""

    # Difficulty targets indexed by skill_level - 1
    difficulty_targets: tuple[float, ...] = (0.2, 0.35, 0.5, 0.7, 0.9)
    fallback_target: float = 0.3
    initial_difficulty: float = INITIAL_DIFFICULTY
    min_difficulty: float = 0.1
    max_difficulty: float = 1.0

    # Struggling
    struggle_collisions: int = 3          # strictly more than this
    struggle_reaction_ms: float = 800.0

    # Excelling
    excel_skill_level: int = 4
    excel_reaction_ms: float = 250.0

    placement: PlacementConfig = field(default_factory=PlacementConfig)


# ══════════════════════════════════════════════════════════
#  Engine state & status snapshot
# ══════════════════════════════════════════════════════════

@dataclass
class DirectorState:
    """Session-scoped decisions made by the director."""

    current_difficulty: float = INITIAL_DIFFICULTY
    current_strategy: Strategy = Strategy.LEARNING
    predicted_next_move: Direction | None = None
    last_food_placement: Position | None = None


@dataclass(frozen=True)
class AIStatus:
    """Read-only snapshot for UI display."""

    difficulty_percent: int
    strategy: Strategy
    prediction: Direction | None
    skill_level: int
    total_moves: int
    success_rate_percent: int

    def as_dict(self) -> dict:
        return {
            "difficulty_percent":   self.difficulty_percent,
            "strategy":             self.strategy.value,
            "prediction":           self.prediction.value if self.prediction else None,
            "skill_level":          self.skill_level,
            "total_moves":          self.total_moves,
            "success_rate_percent": self.success_rate_percent,
        }


def _percent(fraction: float) -> int:
    # half-up rounding
    return int(math.floor(fraction * 100 + 0.5))


# ══════════════════════════════════════════════════════════
#  Adaptive Director
# ══════════════════════════════════════════════════════════

class AdaptiveDirector:
    """Adaptive food placement and difficulty for one game session.

    Usage:
        director = AdaptiveDirector()
        # per accepted input:
        director.record_move("up", reaction_ms)
        # terminal events:
        director.record_food_collection()
        director.record_collision()
        # per tick:
        director.adjust_difficulty()
        food = director.place_food(snake_segments, grid_size)
        status = director.get_status()
    """

    def __init__(
        self,
        settings: AISettings | None = None,
        config: DirectorConfig | None = None,
        rng: RandomSource | None = None,
    ):
        self.cfg = config or DirectorConfig()
        self._settings = settings or AISettings()
        self._rng: RandomSource = rng or random.Random()
        self._model = BehaviorModel()
        self._state = self._fresh_state()

    def _fresh_state(self) -> DirectorState:
        return DirectorState(current_difficulty=self.cfg.initial_difficulty)

    # ── Properties ────────────────────────────────────────

    @property
    def settings(self) -> AISettings:
        return self._settings

    @property
    def state(self) -> DirectorState:
        return self._state

    @property
    def model(self) -> BehaviorModel:
        return self._model

    @property
    def player_stats(self) -> PlayerStats:
        return self._model.stats

    @property
    def current_difficulty(self) -> float:
        return self._state.current_difficulty

    @property
    def current_strategy(self) -> Strategy:
        return self._state.current_strategy

    @property
    def move_interval_ms(self) -> float:
        return move_interval_ms(self._state.current_difficulty)

    # ══════════════════════════════════════════════════════
    #  Event Recording
    # ══════════════════════════════════════════════════════

    def record_move(self, direction: Direction | str, reaction_time_ms: float):
        """Player changed (or re-confirmed) direction."""
        self._model.record_move(direction, reaction_time_ms)

    def record_collision(self):
        """Snake died on a wall or itself."""
        self._model.record_collision()
        self.update_strategy()

    def record_food_collection(self):
        """Snake ate the food."""
        self._model.record_food_collection()
        self.update_strategy()

    # ══════════════════════════════════════════════════════
    #  Strategy
    # ══════════════════════════════════════════════════════

    def update_strategy(self) -> Strategy:
        """Re-evaluate the placement strategy from the current stats."""
        cfg = self.cfg
        s = self._model.stats

        struggling = (s.collision_count > cfg.struggle_collisions
                      or s.average_reaction_time > cfg.struggle_reaction_ms)
        excelling = (s.skill_level >= cfg.excel_skill_level
                     and s.average_reaction_time < cfg.excel_reaction_ms)

        if struggling:
            strategy = Strategy.ENCOURAGING
        elif excelling:
            strategy = Strategy.CHALLENGING
        elif self._model.is_repetitive():
            strategy = Strategy.PATTERN_BREAKING
        else:
            strategy = Strategy.LEARNING

        if strategy != self._state.current_strategy:
            logger.debug("Strategy %s → %s (skill=%d, avg_rt=%.0fms, collisions=%d)",
                         self._state.current_strategy.value, strategy.value,
                         s.skill_level, s.average_reaction_time, s.collision_count)
        self._state.current_strategy = strategy
        return strategy

    # ══════════════════════════════════════════════════════
    #  Queries
    # ══════════════════════════════════════════════════════

    def predict_next(self, current_direction: Direction | str) -> Direction | None:
        """Advisory guess at the player's next move (None when hints are off)."""
        if not self._settings.show_predictions:
            return None
        prediction = self._model.predict_next(current_direction)
        self._state.predicted_next_move = prediction
        return prediction

    def place_food(self, snake: Sequence[Sequence[int]], grid_size: int) -> Position | None:
        """Free cell for the next food, or None when the board is full."""
        position = choose_food_position(
            snake,
            grid_size,
            strategy=self._state.current_strategy,
            preferred_direction=self._model.most_preferred_direction(),
            rng=self._rng,
            smart=self._settings.smart_food_placement,
            cfg=self.cfg.placement,
        )
        if position is None:
            logger.debug("No free cell on a %dx%d board", grid_size, grid_size)
            return None

        self._state.last_food_placement = position
        return position

    def target_difficulty(self) -> float:
        targets = self.cfg.difficulty_targets
        index = self._model.stats.skill_level - 1
        if 0 <= index < len(targets):
            return targets[index]
        return self.cfg.fallback_target

    def adjust_difficulty(self) -> float:
        """Ease the difficulty one step toward the skill target (per tick)."""
        if self._settings.adaptive_difficulty:
            cfg = self.cfg
            current = self._state.current_difficulty
            current += (self.target_difficulty() - current) * self._settings.difficulty_adjustment_rate
            self._state.current_difficulty = max(cfg.min_difficulty,
                                                 min(cfg.max_difficulty, current))
        return self._state.current_difficulty

    def get_status(self) -> AIStatus:
        s = self._model.stats
        return AIStatus(
            difficulty_percent=_percent(self._state.current_difficulty),
            strategy=self._state.current_strategy,
            prediction=self._state.predicted_next_move,
            skill_level=s.skill_level,
            total_moves=s.total_moves,
            success_rate_percent=_percent(s.success_rate),
        )

    # ══════════════════════════════════════════════════════
    #  Settings & Reset
    # ══════════════════════════════════════════════════════

    def update_settings(self, changes: Mapping[str, Any] | None = None, **kwargs: Any) -> AISettings:
        """Apply recognised setting keys; unknown keys are ignored."""
        self._settings = self._settings.merged(changes, **kwargs)
        return self._settings

    def reset(self):
        """Fresh state for a new game. Settings are kept."""
        self._model.reset()
        self._state = self._fresh_state()
