"""
snake.py – The snake body on the grid.

Pure data + movement rules: no rendering, no input, no AI.
Segments are stored head-first.
"""

from __future__ import annotations

from collections import deque

from ai.directions import OPPOSITE, Direction, Position, step
from settings import SNAKE_START


class Snake:
    """Head-first list of grid cells plus the current heading."""

    def __init__(self, start: tuple[int, int] = SNAKE_START,
                 heading: Direction = Direction.RIGHT):
        self.body: deque[Position] = deque([Position(*start)])
        self.heading: Direction = heading

    # ── Accessors ─────────────────────────────────────────

    @property
    def head(self) -> Position:
        return self.body[0]

    @property
    def segments(self) -> list[Position]:
        return list(self.body)

    def __len__(self) -> int:
        return len(self.body)

    def occupies(self, cell: tuple[int, int]) -> bool:
        return Position(*cell) in self.body

    # ── Commands ──────────────────────────────────────────

    def request_direction(self, direction: Direction | str) -> bool:
        """Turn toward *direction* unless it would reverse the snake.

        Returns True when the request was accepted (re-confirming the
        current heading counts as accepted).
        """
        direction = Direction(direction)
        if direction == OPPOSITE[self.heading]:
            return False
        self.heading = direction
        return True

    def next_head(self) -> Position:
        return step(self.head, self.heading)

    def advance(self, grow: bool = False) -> Position:
        """Move one cell along the heading; keep the tail when *grow*."""
        new_head = self.next_head()
        self.body.appendleft(new_head)
        if not grow:
            self.body.pop()
        return new_head
