from __future__ import annotations

import abc
from typing import Optional

from wuziqi.game.board import GomokuGameState
from wuziqi.game.types import Point


class Agent(abc.ABC):
    @abc.abstractmethod
    def select_move(self, game_state: GomokuGameState) -> Optional[Point]:
        """Return the point where this agent wants to play, or None if none is left."""

    @property
    def name(self) -> str:
        return self.__class__.__name__
