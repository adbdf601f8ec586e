"""Tests for minimax/alpha-beta and the move selector."""

from __future__ import annotations

import random

import pytest

from wuziqi.engine.config import PROFILES, WIN_SCORE, Difficulty
from wuziqi.engine.patterns import evaluate_board
from wuziqi.engine.search import (
    INF,
    alpha_beta_search,
    find_best_move,
    minimax,
    order_moves,
    pick_ranked_move,
    rank_moves,
    root_candidates,
    search_scores,
)
from wuziqi.game.board import Board
from wuziqi.game.types import Player, Point

ALL_DIFFICULTIES = list(Difficulty)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_board(black=(), white=(), size=15) -> Board:
    b = Board(size)
    for r, c in black:
        b.place(Point(r, c), Player.BLACK)
    for r, c in white:
        b.place(Point(r, c), Player.WHITE)
    return b


def full_board(size: int = 3) -> Board:
    b = Board(size)
    for r in range(size):
        for c in range(size):
            b.place(Point(r, c), Player.BLACK if (r + c) % 2 == 0 else Player.WHITE)
    return b


# ---------------------------------------------------------------------------
# Difficulty profiles
# ---------------------------------------------------------------------------

class TestProfiles:
    def test_depths(self):
        assert PROFILES[Difficulty.MEDIUM].depth == 1
        assert PROFILES[Difficulty.HARD].depth == 2
        assert PROFILES[Difficulty.EXPERT].depth == 3

    def test_strategies(self):
        assert not PROFILES[Difficulty.MEDIUM].use_alpha_beta
        assert PROFILES[Difficulty.HARD].use_alpha_beta
        assert not PROFILES[Difficulty.HARD].use_threat_search
        assert PROFILES[Difficulty.EXPERT].use_alpha_beta
        assert PROFILES[Difficulty.EXPERT].use_threat_search

    def test_difficulty_from_label(self):
        assert Difficulty("Expert") is Difficulty.EXPERT
        assert str(Difficulty.HARD) == "Hard"


# ---------------------------------------------------------------------------
# Minimax
# ---------------------------------------------------------------------------

class TestMinimax:
    def test_depth_zero_is_static_eval(self):
        b = make_board(black=[(7, 7), (7, 8)], white=[(6, 6)])
        score = minimax(b, 0, -INF, INF, True, Player.BLACK, Player.WHITE)
        assert score == evaluate_board(b, Player.BLACK, Player.WHITE)

    def test_win_for_maximizer(self):
        b = make_board(black=[(7, 3), (7, 4), (7, 5), (7, 6)], white=[(0, 0), (0, 1), (0, 2)])
        score = minimax(b, 2, -INF, INF, True, Player.BLACK, Player.WHITE)
        assert score == WIN_SCORE

    def test_win_for_minimizer(self):
        b = make_board(white=[(7, 3), (7, 4), (7, 5), (7, 6)], black=[(0, 0), (0, 1), (0, 2)])
        score = minimax(b, 2, -INF, INF, False, Player.BLACK, Player.WHITE)
        assert score == -WIN_SCORE

    def test_no_candidates_falls_back_to_static_eval(self):
        b = full_board(3)
        score = minimax(b, 3, -INF, INF, True, Player.BLACK, Player.WHITE)
        assert score == evaluate_board(b, Player.BLACK, Player.WHITE)

    def test_board_restored_after_search(self):
        b = make_board(black=[(3, 3), (3, 4)], white=[(4, 4)], size=7)
        before = b.rows()
        minimax(b, 2, -INF, INF, True, Player.BLACK, Player.WHITE)
        assert b.rows() == before


class TestPruningEquivalence:
    """Alpha-beta changes how much is searched, never the scores."""

    @pytest.mark.parametrize(
        "black, white",
        [
            ([(3, 3), (3, 4)], [(2, 3), (4, 4)]),
            ([(2, 2), (3, 3), (4, 2)], [(2, 3), (4, 4)]),
            ([(1, 1), (5, 5)], [(3, 3), (3, 2), (2, 4)]),
        ],
    )
    def test_depth_two_scores_match(self, black, white):
        b = make_board(black=black, white=white, size=7)
        pruned = search_scores(b, Player.BLACK, Player.WHITE, 2, prune=True)
        plain = search_scores(b, Player.BLACK, Player.WHITE, 2, prune=False)
        assert [m for m, _ in pruned] == [m for m, _ in plain]
        for (_, a), (_, p) in zip(pruned, plain):
            assert a == pytest.approx(p)

    def test_depth_three_scores_match(self):
        b = make_board(black=[(2, 2), (2, 3)], white=[(3, 3), (1, 4)], size=6)
        pruned = search_scores(b, Player.BLACK, Player.WHITE, 3, inner_limit=6, prune=True)
        plain = search_scores(b, Player.BLACK, Player.WHITE, 3, inner_limit=6, prune=False)
        for (_, a), (_, p) in zip(pruned, plain):
            assert a == pytest.approx(p)

    def test_same_move_selected(self):
        b = make_board(black=[(3, 3), (3, 4)], white=[(2, 3), (4, 4)], size=7)
        assert alpha_beta_search(b, Player.BLACK, Player.WHITE, 2, prune=True) == \
            alpha_beta_search(b, Player.BLACK, Player.WHITE, 2, prune=False)


class TestAlphaBetaSearch:
    def test_first_best_move_wins_ties(self):
        b = make_board(black=[(3, 3), (3, 4)], white=[(2, 3), (4, 4)], size=7)
        scored = search_scores(b, Player.BLACK, Player.WHITE, 2)
        best = max(score for _, score in scored)
        first_best = next(m for m, score in scored if score == best)
        assert alpha_beta_search(b, Player.BLACK, Player.WHITE, 2) == first_best

    def test_no_candidates_returns_none(self):
        assert alpha_beta_search(Board(), Player.BLACK, Player.WHITE, 2) is None

    def test_takes_win_over_development(self):
        b = make_board(
            black=[(7, 3), (7, 4), (7, 5), (7, 6)],
            white=[(8, 3), (8, 4), (8, 5)],
        )
        move = alpha_beta_search(b, Player.BLACK, Player.WHITE, 2, root_limit=20, inner_limit=10)
        # A completed five outweighs every other leaf evaluation
        assert move in (Point(7, 2), Point(7, 7))


class TestCandidateOrdering:
    def test_root_candidates_keep_row_major_order(self):
        b = make_board(black=[(7, 7), (7, 8)], white=[(8, 8)])
        kept = root_candidates(b, Player.BLACK, Player.WHITE, limit=5)
        assert len(kept) == 5
        assert kept == sorted(kept)

    def test_root_candidates_uncapped(self):
        b = make_board(black=[(7, 7)])
        assert len(root_candidates(b, Player.BLACK, Player.WHITE)) == 24

    def test_order_moves_puts_win_first(self):
        b = make_board(black=[(7, 3), (7, 4), (7, 5), (7, 6)], white=[(0, 0)])
        candidates = [Point(5, 5), Point(7, 7), Point(9, 9)]
        ordered = order_moves(b, candidates, Player.BLACK, Player.WHITE)
        assert ordered[0] == Point(7, 7)

    def test_order_moves_limit(self):
        b = make_board(black=[(7, 7)])
        candidates = [Point(6, 6), Point(7, 8), Point(9, 9)]
        assert len(order_moves(b, candidates, Player.BLACK, Player.WHITE, limit=2)) == 2


# ---------------------------------------------------------------------------
# Heuristic ranking
# ---------------------------------------------------------------------------

class TestRanking:
    def test_rank_moves_sorted(self):
        b = make_board(black=[(7, 7), (7, 8)], white=[(8, 8)])
        scored = rank_moves(b, Player.BLACK, Player.WHITE)
        scores = [s for _, s in scored]
        assert scores == sorted(scores, reverse=True)

    def test_decisive_best_is_played(self):
        scored = [(Point(1, 1), 100.0), (Point(2, 2), 50.0), (Point(3, 3), 40.0)]
        for seed in range(10):
            assert pick_ranked_move(scored, random.Random(seed)) == Point(1, 1)

    def test_close_scores_pick_from_top_three(self):
        scored = [
            (Point(1, 1), 100.0),
            (Point(2, 2), 90.0),
            (Point(3, 3), 80.0),
            (Point(4, 4), 70.0),
        ]
        picks = {pick_ranked_move(scored, random.Random(seed)) for seed in range(50)}
        assert picks <= {Point(1, 1), Point(2, 2), Point(3, 3)}
        assert len(picks) > 1

    def test_single_move(self):
        assert pick_ranked_move([(Point(1, 1), 0.0)], random.Random(0)) == Point(1, 1)

    def test_nothing_to_pick(self):
        assert pick_ranked_move([], random.Random(0)) is None


# ---------------------------------------------------------------------------
# find_best_move
# ---------------------------------------------------------------------------

class TestFindBestMove:
    def test_empty_board_plays_center(self):
        assert find_best_move(Board(), Player.BLACK, Player.WHITE) == Point(7, 7)

    @pytest.mark.parametrize("seed", range(5))
    def test_second_stone_next_to_center(self, seed):
        b = make_board(black=[(7, 7)])
        move = find_best_move(b, Player.WHITE, Player.BLACK, rng=random.Random(seed))
        assert move in (Point(6, 7), Point(8, 7), Point(7, 6), Point(7, 8))

    @pytest.mark.parametrize("difficulty", ALL_DIFFICULTIES)
    def test_full_board_has_no_move(self, difficulty):
        assert find_best_move(full_board(3), Player.BLACK, Player.WHITE, difficulty) is None

    @pytest.mark.parametrize("difficulty", ALL_DIFFICULTIES)
    def test_last_empty_cell(self, difficulty):
        b = full_board(3)
        b.remove(Point(2, 2))
        move = find_best_move(b, Player.BLACK, Player.WHITE, difficulty, random.Random(0))
        assert move == Point(2, 2)

    @pytest.mark.parametrize("difficulty", ALL_DIFFICULTIES)
    def test_completes_open_four(self, difficulty):
        b = make_board(
            black=[(7, 4), (7, 5), (7, 6), (7, 7)],
            white=[(2, 2), (2, 12), (12, 2)],
        )
        move = find_best_move(b, Player.BLACK, Player.WHITE, difficulty, random.Random(0))
        assert move in (Point(7, 3), Point(7, 8))

    @pytest.mark.parametrize("difficulty", ALL_DIFFICULTIES)
    def test_win_beats_block(self, difficulty):
        b = make_board(
            black=[(3, 3), (3, 4), (3, 5), (3, 6)],
            white=[(10, 3), (10, 4), (10, 5), (10, 6)],
        )
        move = find_best_move(b, Player.BLACK, Player.WHITE, difficulty, random.Random(0))
        assert move in (Point(3, 2), Point(3, 7))

    @pytest.mark.parametrize("difficulty", ALL_DIFFICULTIES)
    def test_blocks_human_five(self, difficulty):
        b = make_board(
            black=[(2, 2), (2, 12), (12, 2)],
            white=[(7, 4), (7, 5), (7, 6), (7, 7)],
        )
        move = find_best_move(b, Player.BLACK, Player.WHITE, difficulty, random.Random(0))
        assert move in (Point(7, 3), Point(7, 8))

    @pytest.mark.parametrize("difficulty", ALL_DIFFICULTIES)
    def test_blocks_split_four(self, difficulty):
        b = make_board(
            black=[(2, 2), (2, 12), (12, 2)],
            white=[(7, 4), (7, 5), (7, 7), (7, 8)],
        )
        assert find_best_move(b, Player.BLACK, Player.WHITE, difficulty) == Point(7, 6)

    def test_expert_blocks_open_three(self):
        b = make_board(
            black=[(2, 2), (2, 12), (12, 12)],
            white=[(7, 5), (7, 6), (7, 7)],
        )
        move = find_best_move(b, Player.BLACK, Player.WHITE, Difficulty.EXPERT)
        assert move in (Point(7, 4), Point(7, 8))

    def test_expert_attacks_before_defending(self):
        b = make_board(
            black=[(3, 5), (3, 6), (3, 7)],
            white=[(9, 5), (9, 6), (9, 7)],
        )
        move = find_best_move(b, Player.BLACK, Player.WHITE, Difficulty.EXPERT)
        assert move in (Point(3, 4), Point(3, 8))

    @pytest.mark.parametrize("difficulty", ALL_DIFFICULTIES)
    def test_returns_empty_cell(self, difficulty):
        b = make_board(
            black=[(7, 7), (8, 8), (6, 9)],
            white=[(7, 8), (8, 7), (9, 9)],
        )
        move = find_best_move(b, Player.WHITE, Player.BLACK, difficulty, random.Random(3))
        assert move is not None
        assert b.is_on_grid(move)
        assert b.is_empty(move)

    @pytest.mark.parametrize("difficulty", ALL_DIFFICULTIES)
    def test_does_not_mutate_board(self, difficulty):
        b = make_board(
            black=[(7, 7), (8, 8), (6, 9)],
            white=[(7, 8), (8, 7), (9, 9)],
        )
        before = b.rows()
        find_best_move(b, Player.BLACK, Player.WHITE, difficulty, random.Random(1))
        assert b.rows() == before
        assert b.occupied_count == 6

    def test_seeded_medium_is_reproducible(self):
        b = make_board(black=[(7, 7), (8, 8)], white=[(7, 8), (6, 6)])
        first = find_best_move(b, Player.BLACK, Player.WHITE, Difficulty.MEDIUM, random.Random(7))
        second = find_best_move(b, Player.BLACK, Player.WHITE, Difficulty.MEDIUM, random.Random(7))
        assert first == second

    def test_same_player_twice_rejected(self):
        with pytest.raises(AssertionError):
            find_best_move(Board(), Player.BLACK, Player.BLACK)
