"""Expert agent: layered pattern heuristics with a minimax search stage.

Stages run in order and the first one that produces a move wins:

  1. Opening book      - center, mirror of the first stone, then beside center
  2. Win               - complete own five
  3. Block             - stop the opponent's five
  4. Block jump four   - fill the gap of an opponent X_XX / XX_X / XX_XX
  5. Jump four         - fill the gap of an own gapped four
  6. Fork              - own double open three
  7. Block open three  - cap an opponent open three
  8. Block fork        - opponent double three, then four-three
  9. Special pattern   - own split twos / threes / fours
 10. Search            - alpha-beta minimax while the board is sparse enough
 11. Attack            - extend own runs
 12. Defense           - cap opponent fours and open threes
 13. Strategic         - best placement score over the whole board

Blocking an open three runs before the computer's own split shapes, and the
fork stages are part of the pipeline; both are deliberate departures from a
plain "own shapes first" order.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from fiveinrow.engine.evaluator import best_strategic_cell
from fiveinrow.engine.patterns import (
    ScoreMap,
    find_attack_moves,
    find_defense_moves,
    find_double_threats,
    find_four_three_threat,
    find_jump_four_threats,
    find_open_three_threats,
    find_special_patterns,
    find_winning_move,
    select_best,
)
from fiveinrow.engine.search import search_best_move, search_depth
from fiveinrow.game.board import BOARD_SIZE, Board
from fiveinrow.game.types import EMPTY, Point

from .base import Agent

logger = logging.getLogger(__name__)

Stage = Callable[[Board], Optional[Point]]


class ExpertAgent(Agent):
    """Heuristic pipeline backed by alpha-beta search."""

    def stages(self) -> list[tuple[str, Stage]]:
        me, opponent, cfg = self.computer, self.computer.other, self.config
        return [
            ("opening", self._opening_move),
            ("win", lambda b: find_winning_move(b, me)),
            ("block", lambda b: find_winning_move(b, opponent)),
            ("block jump four", lambda b: self._best(b, find_jump_four_threats(b, opponent, me, cfg))),
            ("jump four", lambda b: self._best(b, find_jump_four_threats(b, me, me, cfg))),
            ("fork", lambda b: self._best(b, find_double_threats(b, me, cfg))),
            ("block open three", lambda b: self._best(b, find_open_three_threats(b, opponent, cfg))),
            ("block fork", self._block_fork),
            ("special pattern", lambda b: self._best(b, find_special_patterns(b, me, cfg))),
            ("search", self._search_move),
            ("attack", lambda b: self._best(b, find_attack_moves(b, me, cfg))),
            ("defense", lambda b: self._best(b, find_defense_moves(b, me, cfg))),
            ("strategic", lambda b: best_strategic_cell(b, me, cfg)),
        ]

    def select_move(self, board: Board) -> Point:
        for stage_name, stage in self.stages():
            move = stage(board)
            if move is not None:
                logger.debug("%s chose %s at stage %r", self.name, move, stage_name)
                return move
        return board.center

    def _best(self, board: Board, scores: ScoreMap) -> Optional[Point]:
        if not scores:
            return None
        return select_best(board, scores, self.computer, self.config)

    def _opening_move(self, board: Board) -> Optional[Point]:
        stones = board.count_stones()
        if stones >= self.config.opening_stones:
            return None
        center = board.center
        move = Point(center.row, center.col - 1)
        if stones == 0:
            move = center
        elif stones == 1:
            stone = next(p for p in board.points() if board.get(p) != EMPTY)
            mirror = Point(BOARD_SIZE - 1 - stone.row, BOARD_SIZE - 1 - stone.col)
            if board.is_empty(mirror):
                move = mirror
        return move if board.is_empty(move) else None

    def _block_fork(self, board: Board) -> Optional[Point]:
        opponent = self.computer.other
        move = self._best(board, find_double_threats(board, opponent, self.config))
        if move is None:
            move = find_four_three_threat(board, opponent)
        return move

    def _search_move(self, board: Board) -> Optional[Point]:
        depth = search_depth(board.count_stones(), self.config)
        if depth is None:
            return None
        move, _ = search_best_move(board, depth, self.computer, self.config)
        return move
