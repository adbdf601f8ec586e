"""Threat detection: forcing shapes (open four, four, open three)."""

from __future__ import annotations

import enum
from typing import Optional

from wuziqi.game.board import Board
from wuziqi.game.types import DIRECTIONS, Player, Point

from .lines import count_run
from .moves import generate_candidates


class Threat(enum.Enum):
    OPEN_FOUR = ("Open Four", 10_000)
    FOUR = ("Four", 1_000)
    OPEN_THREE = ("Open Three", 500)

    def __init__(self, label: str, score: int) -> None:
        self.label = label
        self.score = score

    def __str__(self) -> str:
        return self.label


def _classify_run(count: int, open_ends: int) -> Optional[Threat]:
    if count >= 4:
        if open_ends == 2:
            return Threat.OPEN_FOUR
        if open_ends == 1:
            return Threat.FOUR
        return None
    if count == 3 and open_ends == 2:
        return Threat.OPEN_THREE
    return None


def classify_threat(board: Board, point: Point, player: Player) -> Optional[Threat]:
    """Strongest threat `player` would make by playing `point`, or None."""
    best: Optional[Threat] = None
    for direction in DIRECTIONS:
        threat = _classify_run(*count_run(board, point, direction, player))
        if threat is not None and (best is None or threat.score > best.score):
            best = threat
    return best


def _best_threat_cell(board: Board, player: Player) -> Optional[Point]:
    best_point: Optional[Point] = None
    best_score = 0
    for point in generate_candidates(board):
        threat = classify_threat(board, point, player)
        if threat is not None and threat.score > best_score:
            best_score = threat.score
            best_point = point
    return best_point


def find_threat_move(board: Board, player: Player, opponent: Player) -> Optional[Point]:
    """Create the strongest threat for `player`, else deny `opponent`'s.

    Ties go to the first cell in row-major order. Returns None when neither
    side can make a threat.
    """
    attack = _best_threat_cell(board, player)
    if attack is not None:
        return attack
    return _best_threat_cell(board, opponent)
