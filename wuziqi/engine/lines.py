"""Line windows: a player-relative view of one axis through a cell."""

from __future__ import annotations

import enum

from wuziqi.game.board import Board
from wuziqi.game.types import Player, Point

# Evaluation windows look this many cells to each side of the origin
LINE_RADIUS = 5


class LineCell(enum.Enum):
    SELF = "S"
    EMPTY = "E"
    BLOCKED = "B"  # opponent stone or off the board

    def __repr__(self) -> str:
        return self.value


def scan_line(
    board: Board,
    origin: Point,
    direction: tuple[int, int],
    player: Player,
    radius: int = LINE_RADIUS,
) -> tuple[LineCell, ...]:
    """Return the 2*radius+1 cells through `origin` along `direction`.

    The origin is always SELF: callers evaluate "what if `player` played
    here". Off-board cells are BLOCKED, so shapes touching the edge are
    never open.
    """
    dr, dc = direction
    cells: list[LineCell] = []
    for step in range(-radius, radius + 1):
        if step == 0:
            cells.append(LineCell.SELF)
            continue
        p = Point(origin.row + dr * step, origin.col + dc * step)
        if not board.is_on_grid(p):
            cells.append(LineCell.BLOCKED)
            continue
        value = board.get(p)
        if value is None:
            cells.append(LineCell.EMPTY)
        elif value is player:
            cells.append(LineCell.SELF)
        else:
            cells.append(LineCell.BLOCKED)
    return tuple(cells)


def count_run(
    board: Board,
    origin: Point,
    direction: tuple[int, int],
    player: Player,
) -> tuple[int, int]:
    """Return (run_length, open_ends) of `player`'s run through `origin`.

    The origin counts as `player`. An end is open when the cell just past
    the run is on the board and empty.
    """
    dr, dc = direction
    count = 1
    open_ends = 0
    for sign in (1, -1):
        r, c = origin.row + sign * dr, origin.col + sign * dc
        while True:
            p = Point(r, c)
            if not board.is_on_grid(p) or board.get(p) is not player:
                break
            count += 1
            r += sign * dr
            c += sign * dc
        end = Point(r, c)
        if board.is_on_grid(end) and board.get(end) is None:
            open_ends += 1
    return count, open_ends
