"""
behavior_model.py – Per-game player behaviour model.

Records every accepted move and every terminal event (collision, food)
and keeps rolling statistics the director reads:

  - running mean of reaction time (incremental, not windowed)
  - per-direction histogram
  - the last 10 moves (oldest → newest)
  - a 3-gram pattern table keyed by compact one-letter codes ("rrd")
  - a 1–5 skill estimate from success rate and reaction time

Nothing here persists across games; reset() wipes it all.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from functools import reduce

from ai.directions import Direction
from settings import MOVE_HISTORY_SIZE

PATTERN_LENGTH = 3

# (min success rate, max avg reaction ms, skill) – first match wins,
# both comparisons strict.
_SKILL_THRESHOLDS = (
    (0.8, 200.0, 5),
    (0.6, 300.0, 4),
    (0.4, 500.0, 3),
    (0.2, float("inf"), 2),
)


def _empty_histogram() -> dict[Direction, int]:
    return {d: 0 for d in Direction}


def _empty_history() -> deque[Direction]:
    return deque(maxlen=MOVE_HISTORY_SIZE)


def pattern_key(moves) -> str:
    """Encode consecutive directions as a compact key, oldest first."""
    return "".join(Direction(m).initial for m in moves)


# ══════════════════════════════════════════════════════════
#  Player Stats
# ══════════════════════════════════════════════════════════

@dataclass
class PlayerStats:
    """Observed statistics for the current game."""

    total_moves: int = 0
    average_reaction_time: float = 0.0
    preferred_directions: dict[Direction, int] = field(default_factory=_empty_histogram)
    last_moves: deque[Direction] = field(default_factory=_empty_history)
    skill_level: int = 1
    collision_count: int = 0
    food_collected: int = 0

    @property
    def success_rate(self) -> float:
        """Food per terminal event (denominator floored at 1)."""
        return self.food_collected / max(1, self.collision_count + self.food_collected)


# ══════════════════════════════════════════════════════════
#  Behavior Model
# ══════════════════════════════════════════════════════════

class BehaviorModel:
    """Observes the player and summarises what it sees.

    Usage:
        model = BehaviorModel()
        model.record_move("right", 240.0)
        model.record_food_collection()
        model.stats.skill_level
        model.predict_next("right")
    """

    def __init__(self):
        self._stats = PlayerStats()
        self._patterns: dict[str, int] = {}

    @property
    def stats(self) -> PlayerStats:
        return self._stats

    @property
    def patterns(self) -> dict[str, int]:
        """Pattern key → observation count, in first-seen order."""
        return self._patterns

    # ══════════════════════════════════════════════════════
    #  Recording
    # ══════════════════════════════════════════════════════

    def record_move(self, direction: Direction | str, reaction_time_ms: float):
        """Record one accepted directional input."""
        s = self._stats
        direction = Direction(direction)

        s.total_moves += 1
        s.average_reaction_time += (reaction_time_ms - s.average_reaction_time) / s.total_moves
        s.preferred_directions[direction] += 1
        s.last_moves.append(direction)

        if len(s.last_moves) >= PATTERN_LENGTH:
            key = pattern_key(list(s.last_moves)[-PATTERN_LENGTH:])
            self._patterns[key] = self._patterns.get(key, 0) + 1

        self._update_skill_level()

    def record_collision(self):
        self._stats.collision_count += 1
        self._update_skill_level()

    def record_food_collection(self):
        self._stats.food_collected += 1
        self._update_skill_level()

    def _update_skill_level(self):
        s = self._stats
        rate = s.success_rate
        skill = 1
        for min_rate, max_reaction, level in _SKILL_THRESHOLDS:
            if rate > min_rate and s.average_reaction_time < max_reaction:
                skill = level
                break
        s.skill_level = max(1, min(5, skill))

    # ══════════════════════════════════════════════════════
    #  Queries
    # ══════════════════════════════════════════════════════

    def predict_next(self, current_direction: Direction | str) -> Direction:
        """Most frequent follower of the last two moves.

        Falls back to *current_direction* with fewer than two moves or
        when no recorded 3-gram starts with that context. Ties go to
        the pattern that was seen first.
        """
        current = Direction(current_direction)
        history = self._stats.last_moves
        if len(history) < PATTERN_LENGTH - 1:
            return current

        prefix = pattern_key(list(history)[-(PATTERN_LENGTH - 1):])
        best, best_count = current, 0
        for key, count in self._patterns.items():
            if key.startswith(prefix) and count > best_count:
                best_count = count
                best = Direction.from_initial(key[-1])
        return best

    def is_repetitive(self) -> bool:
        """True when the last three moves repeat the three before them."""
        history = list(self._stats.last_moves)
        if len(history) < 2 * PATTERN_LENGTH:
            return False
        return history[-6:-3] == history[-3:]

    def most_preferred_direction(self) -> Direction:
        """Direction with the highest count; ties resolve to the later one."""
        prefs = self._stats.preferred_directions
        return reduce(lambda a, b: a if prefs[a] > prefs[b] else b, prefs)

    # ══════════════════════════════════════════════════════
    #  Reset
    # ══════════════════════════════════════════════════════

    def reset(self):
        """Clear all observations (new game)."""
        self._stats = PlayerStats()
        self._patterns.clear()
