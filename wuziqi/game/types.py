from __future__ import annotations

import enum
from typing import NamedTuple


class Player(enum.Enum):
    BLACK = 1
    WHITE = 2

    @property
    def other(self) -> Player:
        return Player.WHITE if self is Player.BLACK else Player.BLACK

    def __str__(self) -> str:
        return self.name.capitalize()


class Point(NamedTuple):
    row: int  # 0-indexed, 0 = top
    col: int  # 0-indexed, 0 = left


# The four line axes. Reverse directions are covered by negation.
DIRECTIONS: tuple[tuple[int, int], ...] = ((0, 1), (1, 0), (1, 1), (1, -1))
