"""Depth-limited minimax with alpha-beta pruning over ranked candidate moves."""

from __future__ import annotations

import logging
import math
from typing import Optional

from fiveinrow.game.board import BOARD_SIZE, Board, find_five
from fiveinrow.game.types import Player, Point

from .config import DEFAULT_CONFIG, EngineConfig
from .evaluator import evaluate_board
from .lines import center_distance, count_adjacent, gap_potential, player_line_score
from .patterns import has_open_three

logger = logging.getLogger(__name__)

INF = math.inf


# ---------------------------------------------------------------------------
# Candidate generation
# ---------------------------------------------------------------------------

def _early_game_candidates(board: Board, config: EngineConfig) -> list[Point]:
    center = board.center
    radius = config.early_game_radius
    scored: list[tuple[Point, int]] = []
    for dr in range(-radius, radius + 1):
        for dc in range(-radius, radius + 1):
            p = Point(center.row + dr, center.col + dc)
            if board.in_bounds(p) and board.is_empty(p):
                score = config.candidate_center_weight * (BOARD_SIZE - center_distance(p))
                scored.append((p, score))
    scored.sort(key=lambda item: item[1], reverse=True)
    return [p for p, _ in scored[: config.early_candidate_limit]]


def candidate_score(
    board: Board,
    point: Point,
    player: Player,
    computer: Player,
    config: EngineConfig = DEFAULT_CONFIG,
) -> int:
    """Ordering heuristic: center, neighbourhood activity and line potential."""
    score = config.candidate_center_weight * (BOARD_SIZE - center_distance(point))
    score += config.candidate_adjacency_weight * count_adjacent(board, point)
    score += player_line_score(board, point, player, config)
    if player is computer:
        score += gap_potential(board, point, computer, config)
    return score


def generate_candidates(
    board: Board,
    player: Player,
    computer: Player = Player.WHITE,
    config: EngineConfig = DEFAULT_CONFIG,
) -> list[Point]:
    """Empty cells worth searching for `player`, best first, capped in number."""
    if board.count_stones() < config.early_game_stones:
        return _early_game_candidates(board, config)

    scored = [
        (p, candidate_score(board, p, player, computer, config)) for p in board.empty_points()
    ]
    scored.sort(key=lambda item: item[1], reverse=True)
    return [p for p, _ in scored[: config.candidate_limit]]


# ---------------------------------------------------------------------------
# Minimax with alpha-beta
# ---------------------------------------------------------------------------

def minimax(
    board: Board,
    depth: int,
    maximizing: bool,
    alpha: float,
    beta: float,
    computer: Player = Player.WHITE,
    config: EngineConfig = DEFAULT_CONFIG,
    *,
    prune: bool = True,
) -> float:
    """Score `board` from the computer's side, searching `depth` plies.

    `maximizing` is True when the computer is to move. Finished games score
    the static evaluation shifted by the remaining depth so that faster wins
    and slower losses are preferred. With `prune=False` every candidate is
    searched, which gives the same score at a higher cost.
    """
    opponent = computer.other
    winner = find_five(board)
    if winner is computer:
        return evaluate_board(board, computer, config) + depth * config.depth_bonus
    if winner is opponent:
        return evaluate_board(board, computer, config) - depth * config.depth_bonus
    if depth == 0:
        return evaluate_board(board, computer, config)
    if has_open_three(board, opponent):
        return -config.open_three_penalty

    mover = computer if maximizing else opponent
    candidates = generate_candidates(board, mover, computer, config)
    if not candidates:
        return evaluate_board(board, computer, config)

    if maximizing:
        best = -INF
        for move in candidates:
            with board.hypothetical(move, mover.value):
                score = minimax(board, depth - 1, False, alpha, beta, computer, config, prune=prune)
            best = max(best, score)
            if prune:
                alpha = max(alpha, best)
                if beta <= alpha:
                    break
        return best

    best = INF
    for move in candidates:
        with board.hypothetical(move, mover.value):
            score = minimax(board, depth - 1, True, alpha, beta, computer, config, prune=prune)
        best = min(best, score)
        if prune:
            beta = min(beta, best)
            if beta <= alpha:
                break
    return best


def search_best_move(
    board: Board,
    depth: int,
    computer: Player = Player.WHITE,
    config: EngineConfig = DEFAULT_CONFIG,
) -> tuple[Optional[Point], float]:
    """Return the computer's best candidate at `depth` and its score.

    Ties keep the earlier (better ordered) candidate.
    """
    best_move: Optional[Point] = None
    best_score = -INF
    for move in generate_candidates(board, computer, computer, config):
        with board.hypothetical(move, computer.value):
            score = minimax(board, depth - 1, False, best_score, INF, computer, config)
        if score > best_score:
            best_move, best_score = move, score
    logger.debug("search depth=%d best=%s score=%s", depth, best_move, best_score)
    return best_move, best_score


def search_depth(stone_count: int, config: EngineConfig = DEFAULT_CONFIG) -> Optional[int]:
    """Search depth for a position with `stone_count` stones, or None when
    the board is too full for searching to pay off."""
    if stone_count >= config.search_stone_limit:
        return None
    for limit, depth in config.depth_schedule:
        if stone_count < limit:
            return depth
    return config.max_depth
