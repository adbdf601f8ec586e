"""Computer opponent: plays the engine's move for the side to move."""

from __future__ import annotations

import logging
import random
from typing import Optional

from wuziqi.engine.config import Difficulty
from wuziqi.engine.search import find_best_move
from wuziqi.game.board import GomokuGameState, format_point
from wuziqi.game.types import Point

from .base import Agent

logger = logging.getLogger(__name__)


class ComputerAgent(Agent):
    def __init__(
        self,
        difficulty: Difficulty = Difficulty.MEDIUM,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.difficulty = difficulty
        self.rng = rng

    @property
    def name(self) -> str:
        return f"Computer({self.difficulty})"

    def select_move(self, game_state: GomokuGameState) -> Optional[Point]:
        if game_state.is_over:
            return None
        player = game_state.current_player
        move = find_best_move(
            game_state.board, player, player.other, self.difficulty, self.rng
        )
        if move is None:
            logger.info("%s has no move left", self.name)
        else:
            logger.info("%s plays %s for %s", self.name, format_point(move), player)
        return move
