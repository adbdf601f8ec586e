"""Move selection: immediate wins/blocks, threat search, minimax with
alpha-beta pruning and heuristic ranking, composed per difficulty tier.

The caller's board is never touched. ``find_best_move`` takes one private
copy and every trial placement is a place/remove pair on that copy.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Optional

from wuziqi.game.board import Board, check_win, format_point
from wuziqi.game.types import DIRECTIONS, Player, Point

from .config import DECISIVE_RATIO, PROFILES, TOP_MOVES, WIN_SCORE, Difficulty
from .lines import count_run
from .moves import find_winning_move, generate_candidates, get_opening_move
from .patterns import evaluate_board, evaluate_move, run_score
from .threats import find_threat_move

logger = logging.getLogger(__name__)

INF = math.inf

# Shared source for the opening and top-3 picks when no rng is injected
_default_rng = random.Random()


# ---------------------------------------------------------------------------
# Move ordering
# ---------------------------------------------------------------------------

def _quick_score(board: Board, move: Point, player: Player, opponent: Player) -> int:
    """Fast ordering heuristic: runs `move` would extend for either side."""
    score = 0
    for direction in DIRECTIONS:
        score += run_score(*count_run(board, move, direction, player))
        score += run_score(*count_run(board, move, direction, opponent))
    return score


def order_moves(
    board: Board,
    candidates: list[Point],
    player: Player,
    opponent: Player,
    limit: Optional[int] = None,
) -> list[Point]:
    """Sort candidates best-first for better pruning; keep at most `limit`.

    The sort is stable, so equal scores stay in generation order.
    """
    ordered = sorted(
        candidates,
        key=lambda m: _quick_score(board, m, player, opponent),
        reverse=True,
    )
    if limit is not None:
        ordered = ordered[:limit]
    return ordered


# ---------------------------------------------------------------------------
# Minimax with alpha-beta
# ---------------------------------------------------------------------------

def minimax(
    board: Board,
    depth: int,
    alpha: float,
    beta: float,
    maximizing: bool,
    computer: Player,
    human: Player,
    limit: Optional[int] = None,
    prune: bool = True,
) -> float:
    """Minimax value of `board` from `computer`'s viewpoint.

    A node where the side to move can complete five scores +/-WIN_SCORE
    without further search. With ``prune=False`` no cutoffs are taken, which
    gives plain minimax over the same candidates.
    """
    if depth == 0:
        return evaluate_board(board, computer, human)

    to_move = computer if maximizing else human
    candidates = generate_candidates(board)
    if not candidates:
        return evaluate_board(board, computer, human)

    for move in candidates:
        if check_win(board, move, to_move).won:
            return WIN_SCORE if maximizing else -WIN_SCORE

    candidates = order_moves(board, candidates, to_move, to_move.other, limit)

    if maximizing:
        best = -INF
        for move in candidates:
            board.place(move, computer)
            score = minimax(board, depth - 1, alpha, beta, False, computer, human, limit, prune)
            board.remove(move)
            best = max(best, score)
            alpha = max(alpha, score)
            if prune and beta <= alpha:
                break
        return best

    best = INF
    for move in candidates:
        board.place(move, human)
        score = minimax(board, depth - 1, alpha, beta, True, computer, human, limit, prune)
        board.remove(move)
        best = min(best, score)
        beta = min(beta, score)
        if prune and beta <= alpha:
            break
    return best


def root_candidates(
    board: Board,
    computer: Player,
    human: Player,
    limit: Optional[int] = None,
) -> list[Point]:
    """Candidates searched at the root, in row-major generation order.

    When there are more than `limit`, the best `limit` by ``evaluate_move``
    are kept; their order is still row-major so ties resolve the same way.
    """
    candidates = generate_candidates(board)
    if limit is None or len(candidates) <= limit:
        return candidates
    ranked = sorted(
        candidates,
        key=lambda m: evaluate_move(board, m, computer, human),
        reverse=True,
    )
    keep = set(ranked[:limit])
    return [m for m in candidates if m in keep]


def search_scores(
    board: Board,
    computer: Player,
    human: Player,
    depth: int,
    root_limit: Optional[int] = None,
    inner_limit: Optional[int] = None,
    prune: bool = True,
) -> list[tuple[Point, float]]:
    """Minimax score of every root candidate, each searched with a full window."""
    scored: list[tuple[Point, float]] = []
    for move in root_candidates(board, computer, human, root_limit):
        board.place(move, computer)
        score = minimax(board, depth - 1, -INF, INF, False, computer, human, inner_limit, prune)
        board.remove(move)
        scored.append((move, score))
    return scored


def alpha_beta_search(
    board: Board,
    computer: Player,
    human: Player,
    depth: int,
    root_limit: Optional[int] = None,
    inner_limit: Optional[int] = None,
    prune: bool = True,
) -> Optional[Point]:
    """Return the root move with the highest minimax score (first wins ties)."""
    best_score = -INF
    best_move: Optional[Point] = None
    for move, score in search_scores(
        board, computer, human, depth, root_limit, inner_limit, prune
    ):
        if score > best_score:
            best_score = score
            best_move = move
    return best_move


# ---------------------------------------------------------------------------
# Heuristic ranking
# ---------------------------------------------------------------------------

def rank_moves(board: Board, computer: Player, human: Player) -> list[tuple[Point, float]]:
    """Score every candidate with ``evaluate_move``, best first (stable)."""
    scored = [(m, evaluate_move(board, m, computer, human)) for m in generate_candidates(board)]
    scored.sort(key=lambda item: item[1], reverse=True)
    return scored


def pick_ranked_move(
    scored: list[tuple[Point, float]],
    rng: random.Random,
) -> Optional[Point]:
    """Play a clear best move outright, otherwise a random one of the top few."""
    if not scored:
        return None
    top = scored[:TOP_MOVES]
    if len(top) == 1 or top[0][1] > top[1][1] * DECISIVE_RATIO:
        return top[0][0]
    return rng.choice(top)[0]


def _fallback_move(board: Board) -> Optional[Point]:
    if board.is_empty(board.center):
        return board.center
    return next(board.empty_points(), None)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def find_best_move(
    board: Board,
    computer: Player,
    human: Player,
    difficulty: Difficulty = Difficulty.MEDIUM,
    rng: Optional[random.Random] = None,
) -> Optional[Point]:
    """Choose `computer`'s next move, or None when the board is full."""
    assert computer is not human, "Computer and human must be different players"
    rng = rng if rng is not None else _default_rng
    profile = PROFILES[difficulty]
    board = board.copy()

    if board.is_full():
        return None

    stones = board.occupied_count
    if stones <= 2:
        move = get_opening_move(board, stones, rng)
        logger.debug("Opening move %s (%d stones)", format_point(move), stones)
        return move

    move = find_winning_move(board, computer)
    if move is not None:
        logger.debug("Winning move %s", format_point(move))
        return move

    move = find_winning_move(board, human)
    if move is not None:
        logger.debug("Blocking move %s", format_point(move))
        return move

    if profile.use_threat_search:
        move = find_threat_move(board, computer, human)
        if move is not None:
            logger.debug("Threat move %s", format_point(move))
            return move

    if profile.use_alpha_beta:
        move = alpha_beta_search(
            board, computer, human, profile.depth,
            root_limit=profile.max_root_candidates,
            inner_limit=profile.max_inner_candidates,
        )
        if move is not None:
            logger.debug("Search move %s (depth %d)", format_point(move), profile.depth)
            return move

    move = pick_ranked_move(rank_moves(board, computer, human), rng)
    if move is not None:
        logger.debug("Ranked move %s", format_point(move))
        return move

    move = _fallback_move(board)
    logger.debug("Fallback move %s", format_point(move) if move is not None else None)
    return move
