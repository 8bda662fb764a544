"""
directions.py – Grid geometry shared by the engine and the game layer.

Directions are string enums so they compare equal to the plain names
("up", "down", "left", "right") the input layer produces.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Sequence


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def initial(self) -> str:
        """One-letter code used for compact pattern keys."""
        return self.value[0]

    @classmethod
    def from_initial(cls, code: str) -> "Direction":
        return _BY_INITIAL[code]


_BY_INITIAL = {d.initial: d for d in Direction}


class Position(NamedTuple):
    x: int
    y: int


DIRECTION_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

OPPOSITE: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def manhattan(a: Sequence[int], b: Sequence[int]) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def step(position: Sequence[int], direction: Direction) -> Position:
    """Return the neighbouring cell of *position* in *direction*."""
    dx, dy = DIRECTION_OFFSETS[direction]
    return Position(position[0] + dx, position[1] + dy)


def heading_of(snake: Sequence[Sequence[int]]) -> Direction:
    """Infer the snake's heading from head vs. neck (``right`` if too short)."""
    if len(snake) < 2:
        return Direction.RIGHT

    head, neck = snake[0], snake[1]
    if head[0] > neck[0]:
        return Direction.RIGHT
    if head[0] < neck[0]:
        return Direction.LEFT
    if head[1] > neck[1]:
        return Direction.DOWN
    return Direction.UP


def direction_to(origin: Sequence[int], target: Sequence[int]) -> Direction:
    """Direction of the straight line origin → target.

    The axis with the larger absolute delta wins; ties go to the y-axis.
    """
    dx = target[0] - origin[0]
    dy = target[1] - origin[1]

    if abs(dx) > abs(dy):
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP
