from __future__ import annotations

import random
from typing import Optional

from fiveinrow.engine.config import DEFAULT_CONFIG, EngineConfig
from fiveinrow.game.board import Board
from fiveinrow.game.types import Player, Point

from .base import Agent
from .greedy_agent import GreedyAgent


class RandomAgent(Agent):
    """Plays a random empty cell, occasionally the full-board greedy move."""

    def __init__(
        self,
        computer: Player = Player.WHITE,
        config: EngineConfig = DEFAULT_CONFIG,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(computer, config)
        self.rng = rng or random.Random()
        self._fallback = GreedyAgent(computer, config)

    def select_move(self, board: Board) -> Point:
        moves = board.empty_points()
        if not moves:
            return board.center
        if (
            len(moves) <= self.config.easy_best_move_max_empty
            or self.rng.random() < self.config.easy_best_move_chance
        ):
            return self._fallback.select_move(board)
        return self.rng.choice(moves)
