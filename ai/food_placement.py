"""
food_placement.py – Strategy-driven food placement.

Every free cell is scored for the current strategy, the best ~30% are
kept and one of them is drawn with weights 0.8**rank (rank 0 = best).
When smart placement is off a free cell is drawn uniformly instead.

All randomness comes from an injected RandomSource so tests can script
exact outcomes.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, Sequence

import numpy as np

from ai.directions import Direction, Position, direction_to, heading_of, manhattan


class RandomSource(Protocol):
    """Anything with a uniform draw in [0, 1) – ``random.Random`` fits."""

    def random(self) -> float: ...


class Strategy(str, Enum):
    LEARNING = "learning"
    CHALLENGING = "challenging"
    ENCOURAGING = "encouraging"
    PATTERN_BREAKING = "pattern-breaking"


# ══════════════════════════════════════════════════════════
#  Configuration
# ══════════════════════════════════════════════════════════

@dataclass
class PlacementConfig:
    """Tunables for scoring and candidate selection."""

    top_fraction: float = 0.30
    rank_decay: float = 0.8

    # learning: peak score at this distance from the head
    learning_peak_distance: int = 5
    learning_slope: float = 10.0

    challenging_per_cell: float = 5.0
    challenging_turn_bonus: float = 30.0

    encouraging_slope: float = 15.0

    pattern_break_bonus: float = 50.0
    pattern_break_noise: float = 20.0

    # body segments closer than this (Manhattan) cost body_penalty each
    body_penalty_radius: int = 2
    body_penalty: float = 50.0


# ══════════════════════════════════════════════════════════
#  Board helpers
# ══════════════════════════════════════════════════════════

def free_cells(snake: Sequence[Sequence[int]], grid_size: int) -> list[Position]:
    """All cells of the grid not covered by a snake segment.

    Ordered column by column (x outer, y inner).
    """
    occupied = np.zeros((grid_size, grid_size), dtype=bool)
    for x, y in snake:
        if 0 <= x < grid_size and 0 <= y < grid_size:
            occupied[x, y] = True
    return [Position(int(x), int(y)) for x, y in np.argwhere(~occupied)]


def uniform_choice(cells: Sequence[Position], rng: RandomSource) -> Position:
    index = min(int(rng.random() * len(cells)), len(cells) - 1)
    return cells[index]


def requires_direction_change(position: Sequence[int], snake: Sequence[Sequence[int]]) -> bool:
    """True if heading straight for *position* means leaving the current heading."""
    return heading_of(snake) != direction_to(snake[0], position)


# ══════════════════════════════════════════════════════════
#  Scoring
# ══════════════════════════════════════════════════════════

def score_position(
    position: Sequence[int],
    snake: Sequence[Sequence[int]],
    strategy: Strategy,
    preferred_direction: Direction,
    rng: RandomSource,
    cfg: PlacementConfig | None = None,
) -> float:
    """Desirability of *position* as the next food cell."""
    cfg = cfg or PlacementConfig()
    head = snake[0]
    distance = manhattan(position, head)
    score = 0.0

    if strategy == Strategy.LEARNING:
        score = 100 - abs(distance - cfg.learning_peak_distance) * cfg.learning_slope

    elif strategy == Strategy.CHALLENGING:
        score = distance * cfg.challenging_per_cell
        if requires_direction_change(position, snake):
            score += cfg.challenging_turn_bonus

    elif strategy == Strategy.ENCOURAGING:
        score = 100 - distance * cfg.encouraging_slope

    elif strategy == Strategy.PATTERN_BREAKING:
        if direction_to(head, position) != preferred_direction:
            score += cfg.pattern_break_bonus
        score += rng.random() * cfg.pattern_break_noise

    # Keep food away from the body
    for segment in snake[1:]:
        if manhattan(position, segment) < cfg.body_penalty_radius:
            score -= cfg.body_penalty

    return score


def weighted_top_choice(
    ranked: Sequence[Position],
    rng: RandomSource,
    cfg: PlacementConfig | None = None,
) -> Position:
    """Pick from the top slice of *ranked* (best first) with decaying weights."""
    cfg = cfg or PlacementConfig()
    top_n = max(1, math.ceil(len(ranked) * cfg.top_fraction))
    top = ranked[:top_n]

    weights = cfg.rank_decay ** np.arange(top_n, dtype=float)
    remaining = rng.random() * float(weights.sum())
    for candidate, weight in zip(top, weights):
        remaining -= weight
        if remaining <= 0:
            return candidate

    # Float rounding left a sliver of weight unused
    return top[0]


def choose_food_position(
    snake: Sequence[Sequence[int]],
    grid_size: int,
    strategy: Strategy,
    preferred_direction: Direction,
    rng: RandomSource | None = None,
    smart: bool = True,
    cfg: PlacementConfig | None = None,
) -> Position | None:
    """Free cell for the next food, or None when the board is full."""
    rng = rng or random.Random()
    cells = free_cells(snake, grid_size)
    if not cells:
        return None
    if not smart or not snake:
        return uniform_choice(cells, rng)

    scored = [
        (cell, score_position(cell, snake, strategy, preferred_direction, rng, cfg))
        for cell in cells
    ]
    # sort() stays stable with reverse=True: equal scores keep board order
    scored.sort(key=lambda item: item[1], reverse=True)
    return weighted_top_choice([cell for cell, _ in scored], rng, cfg)
