"""Pattern-based evaluation of moves and positions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from wuziqi.game.board import WIN_LENGTH, Board
from wuziqi.game.types import DIRECTIONS, Player, Point

from .config import DEFENSE_WEIGHT, WIN_SCORE
from .lines import LineCell, count_run, scan_line

S = LineCell.SELF
E = LineCell.EMPTY
B = LineCell.BLOCKED

# Width of the sub-window slid across a line
PATTERN_WIDTH = 6


@dataclass(frozen=True)
class Pattern:
    name: str
    score: int
    template: tuple[LineCell, ...]

    def matches(self, segment: Sequence[LineCell]) -> bool:
        """True if `segment` starts with this template."""
        n = len(self.template)
        return len(segment) >= n and tuple(segment[:n]) == self.template


# ---------------------------------------------------------------------------
# Pattern table, highest priority first. Several shapes share a score, so the
# order (not the magnitude) decides which one counts at an offset.
# ---------------------------------------------------------------------------

PATTERNS: tuple[Pattern, ...] = (
    Pattern("five", WIN_SCORE, (S, S, S, S, S)),
    Pattern("open four", 10_000, (E, S, S, S, S, E)),
    Pattern("closed four (left)", 1_000, (B, S, S, S, S, E)),
    Pattern("closed four (right)", 1_000, (E, S, S, S, S, B)),
    Pattern("open three", 1_000, (E, S, S, S, E, E)),
    Pattern("open three (shifted)", 1_000, (E, E, S, S, S, E)),
    Pattern("split three", 800, (E, S, S, E, S, E)),
    Pattern("split three (mirrored)", 800, (E, S, E, S, S, E)),
    Pattern("closed three (left)", 100, (B, S, S, S, E, E)),
    Pattern("closed three (right)", 100, (E, E, S, S, S, B)),
    Pattern("open two", 100, (E, E, S, S, E, E)),
    Pattern("split two", 80, (E, S, E, S, E, E)),
    Pattern("split two (mirrored)", 80, (E, E, S, E, S, E)),
    Pattern("open one", 10, (E, E, S, E, E, E)),
)

# Run scores for the static board evaluation: (run_length, open_ends) -> score
RUN_SCORES: dict[tuple[int, int], int] = {
    (4, 2): 10_000,   # open four
    (4, 1): 1_000,    # closed four
    (3, 2): 1_000,    # open three
    (3, 1): 100,      # closed three
    (2, 2): 100,      # open two
    (2, 1): 10,       # closed two
    (1, 2): 10,
    (1, 1): 1,
}


def match_pattern(segment: Sequence[LineCell]) -> Optional[Pattern]:
    """Return the highest-priority pattern matching `segment`, if any."""
    for pattern in PATTERNS:
        if pattern.matches(segment):
            return pattern
    return None


def evaluate_line(window: Sequence[LineCell]) -> int:
    """Score a player-relative line window against the pattern table.

    Slides a 6-wide sub-window along the line (the last offset sees only 5
    cells, which is enough for a five). At most one pattern counts per
    offset.
    """
    score = 0
    for i in range(len(window) - WIN_LENGTH + 1):
        pattern = match_pattern(window[i:i + PATTERN_WIDTH])
        if pattern is not None:
            score += pattern.score
    return score


def run_score(count: int, open_ends: int) -> int:
    """Look up score for a consecutive group with given open ends."""
    if count >= WIN_LENGTH:
        return WIN_SCORE
    return RUN_SCORES.get((count, open_ends), 0)


def center_bonus(board: Board, point: Point) -> int:
    """Bonus that shrinks with Chebyshev distance from the center, floor zero."""
    center = board.center
    distance = max(abs(point.row - center.row), abs(point.col - center.col))
    return max(0, 5 - distance) * 2


def evaluate_move(board: Board, point: Point, player: Player, opponent: Player) -> float:
    """Desirability of `player` playing the empty cell `point`.

    Offense counts in full; the shapes `opponent` would get by playing there
    instead count at DEFENSE_WEIGHT.
    """
    total: float = center_bonus(board, point)
    for direction in DIRECTIONS:
        total += evaluate_line(scan_line(board, point, direction, player))
        total += DEFENSE_WEIGHT * evaluate_line(scan_line(board, point, direction, opponent))
    return total


def evaluate_board(board: Board, player: Player, opponent: Player) -> float:
    """Static evaluation from `player`'s viewpoint (leaf score for the search)."""
    score: float = 0
    for point, owner in board.stones():
        if owner is player:
            for direction in DIRECTIONS:
                score += run_score(*count_run(board, point, direction, player))
        elif owner is opponent:
            for direction in DIRECTIONS:
                score -= DEFENSE_WEIGHT * run_score(*count_run(board, point, direction, opponent))
    return score
