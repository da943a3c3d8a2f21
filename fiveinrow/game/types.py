from __future__ import annotations

import enum
from typing import NamedTuple

EMPTY = 0


class Player(enum.Enum):
    BLACK = 1
    WHITE = -1

    @property
    def other(self) -> Player:
        return Player(-self.value)

    def __str__(self) -> str:
        return self.name.capitalize()


class Point(NamedTuple):
    row: int  # 0-indexed, 0 = top
    col: int  # 0-indexed, 0 = left


Direction = tuple[int, int]

# Four line axes; each also covers its negation
DIRECTIONS: list[Direction] = [(1, 0), (0, 1), (1, 1), (1, -1)]
