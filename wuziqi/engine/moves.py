"""Candidate generation, immediate wins and the opening heuristic."""

from __future__ import annotations

import random
from typing import Optional

from wuziqi.game.board import Board, check_win
from wuziqi.game.types import Player, Point

from .config import NEIGHBOR_RADIUS, OPENING_RADIUS


def has_neighbor(board: Board, point: Point, radius: int = NEIGHBOR_RADIUS) -> bool:
    """True if any stone lies within Chebyshev distance `radius` of `point`."""
    for r in range(max(0, point.row - radius), min(board.size, point.row + radius + 1)):
        for c in range(max(0, point.col - radius), min(board.size, point.col + radius + 1)):
            if not board.is_empty(Point(r, c)):
                return True
    return False


def generate_candidates(board: Board, radius: int = NEIGHBOR_RADIUS) -> list[Point]:
    """Return empty cells near existing stones, in row-major order."""
    return [p for p in board.empty_points() if has_neighbor(board, p, radius)]


def find_winning_move(board: Board, player: Player) -> Optional[Point]:
    """Return the first empty cell (row-major) where `player` makes five."""
    for point in board.empty_points():
        if check_win(board, point, player).won:
            return point
    return None


def get_opening_move(board: Board, stone_count: int, rng: random.Random) -> Point:
    """Pick one of the first moves of the game.

    Empty board: the center. One stone: the center, or a cell orthogonally
    next to it when it is taken. Otherwise a random empty cell near the
    center.
    """
    center = board.center

    if stone_count == 0:
        return center

    if stone_count == 1:
        if board.is_empty(center):
            return center
        options = [
            p for p in (
                Point(center.row - 1, center.col),
                Point(center.row + 1, center.col),
                Point(center.row, center.col - 1),
                Point(center.row, center.col + 1),
            )
            if board.is_on_grid(p) and board.is_empty(p)
        ]
        if options:
            return rng.choice(options)

    candidates = [
        Point(r, c)
        for r in range(center.row - OPENING_RADIUS, center.row + OPENING_RADIUS + 1)
        for c in range(center.col - OPENING_RADIUS, center.col + OPENING_RADIUS + 1)
        if board.is_on_grid(Point(r, c)) and board.is_empty(Point(r, c))
    ]
    if candidates:
        return rng.choice(candidates)
    return center
