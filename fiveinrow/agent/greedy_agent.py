"""Single-ply agents: score every reachable empty cell once and take the best."""

from __future__ import annotations

from typing import Optional

from fiveinrow.engine.config import DEFAULT_CONFIG, EngineConfig
from fiveinrow.engine.evaluator import best_greedy_cell
from fiveinrow.engine.patterns import find_winning_move
from fiveinrow.game.board import Board
from fiveinrow.game.types import EMPTY, Player, Point

from .base import Agent


def reference_stone(board: Board) -> Optional[Point]:
    """Last occupied cell in row-major order, used as the window anchor."""
    for point in reversed(list(board.points())):
        if board.get(point) != EMPTY:
            return point
    return None


class GreedyAgent(Agent):
    """Best single-ply cell by attack + block value.

    With `window` set, only cells within that Chebyshev radius of the
    reference stone are scored, using `config.window_weights`, and `fallback`
    plays when the window holds no empty cell. Without it, the whole board is
    scored with `config.greedy_weights` after taking any immediate win and
    blocking any immediate loss.
    """

    def __init__(
        self,
        computer: Player = Player.WHITE,
        config: EngineConfig = DEFAULT_CONFIG,
        window: Optional[int] = None,
        fallback: Optional[Agent] = None,
    ) -> None:
        super().__init__(computer, config)
        self.window = window
        self.fallback = fallback

    @property
    def name(self) -> str:
        if self.window is None:
            return "GreedyAgent"
        return f"GreedyAgent(window={self.window})"

    def select_move(self, board: Board) -> Point:
        if self.window is not None:
            return self._select_in_window(board)

        for player in (self.computer, self.computer.other):
            move = find_winning_move(board, player)
            if move is not None:
                return move
        move = best_greedy_cell(board, self.computer, self.config)
        return move if move is not None else board.center

    def _select_in_window(self, board: Board) -> Point:
        around = reference_stone(board) or board.center
        attack_weight, defense_weight = self.config.window_weights
        move = best_greedy_cell(
            board,
            self.computer,
            self.config,
            attack_weight=attack_weight,
            defense_weight=defense_weight,
            around=around,
            radius=self.window,
        )
        if move is not None:
            return move
        if self.fallback is not None:
            return self.fallback.select_move(board)
        move = best_greedy_cell(board, self.computer, self.config)
        return move if move is not None else board.center
