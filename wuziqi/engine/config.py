"""Engine constants and per-difficulty search settings."""

from __future__ import annotations

import enum
from dataclasses import dataclass

# Score for a completed five, also the +/- bound returned by the search
# when a simulated placement wins.
WIN_SCORE = 100_000

# Candidate moves must have a stone within this Chebyshev distance
NEIGHBOR_RADIUS = 2

# Opening moves after the second stone are drawn from this box around center
OPENING_RADIUS = 3

# Blocking value relative to building value
DEFENSE_WEIGHT = 0.9

# Heuristic ranking: play the best move outright when it beats the runner-up
# by this factor, otherwise pick among the top few.
DECISIVE_RATIO = 1.5
TOP_MOVES = 3


class Difficulty(enum.Enum):
    MEDIUM = "Medium"
    HARD = "Hard"
    EXPERT = "Expert"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DifficultyProfile:
    depth: int
    use_alpha_beta: bool = False
    use_threat_search: bool = False
    max_root_candidates: int = 24
    max_inner_candidates: int = 12


PROFILES: dict[Difficulty, DifficultyProfile] = {
    Difficulty.MEDIUM: DifficultyProfile(depth=1),
    Difficulty.HARD: DifficultyProfile(
        depth=2, use_alpha_beta=True, max_root_candidates=30, max_inner_candidates=20,
    ),
    Difficulty.EXPERT: DifficultyProfile(
        depth=3, use_alpha_beta=True, use_threat_search=True,
        max_root_candidates=20, max_inner_candidates=12,
    ),
}
