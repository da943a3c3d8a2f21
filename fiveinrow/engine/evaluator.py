"""Static evaluation of single cells and whole boards."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from fiveinrow.game.board import BOARD_SIZE, WIN_LENGTH, Board
from fiveinrow.game.types import DIRECTIONS, Direction, Player, Point

from .config import DEFAULT_CONFIG, EngineConfig
from .lines import analyze_line, center_distance, count_adjacent, gap_potential, player_line_score


@lru_cache(maxsize=None)
def _pattern_table(config: EngineConfig) -> dict[tuple[int, int], int]:
    return config.pattern_scores()


def line_score(count: int, open_ends: int, config: EngineConfig = DEFAULT_CONFIG) -> int:
    """Look up score for a consecutive group with given open ends."""
    if count >= WIN_LENGTH:
        return config.win_score
    return _pattern_table(config).get((count, open_ends), 0)


def evaluate_line(
    board: Board,
    point: Point,
    direction: Direction,
    player: Player,
    config: EngineConfig = DEFAULT_CONFIG,
) -> int:
    """Score the run of `player` through `point` on one axis."""
    run = analyze_line(board, point, direction, player)
    return line_score(run.length, run.open_end_count, config)


def center_bonus(point: Point, config: EngineConfig = DEFAULT_CONFIG) -> int:
    return (BOARD_SIZE - center_distance(point)) * config.center_bonus // BOARD_SIZE


def evaluate_position(
    board: Board, point: Point, player: Player, config: EngineConfig = DEFAULT_CONFIG
) -> int:
    """Value of a `player` stone at `point`: line scores on all four axes plus
    a bonus for being close to the center."""
    with board.hypothetical(point, player.value):
        score = sum(evaluate_line(board, point, d, player, config) for d in DIRECTIONS)
    return score + center_bonus(point, config)


def evaluate_board(
    board: Board, computer: Player = Player.WHITE, config: EngineConfig = DEFAULT_CONFIG
) -> float:
    """Whole-board score from the computer's side.

    Opponent stones weigh more than the computer's own so that threats
    against the computer register before its own chances.
    """
    score = 0.0
    for point in board.points():
        value = board.get(point)
        if value == computer.value:
            score += evaluate_position(board, point, computer, config) * config.attack_weight
        elif value == computer.other.value:
            score -= evaluate_position(board, point, computer.other, config) * config.defense_weight
    return score


def position_score(
    board: Board, point: Point, computer: Player = Player.WHITE, config: EngineConfig = DEFAULT_CONFIG
) -> int:
    """Strategic value of an empty cell, weighted towards attack."""
    own, other, centrality, adjacency, gap = config.strategic_weights
    return (
        player_line_score(board, point, computer, config) * own
        + player_line_score(board, point, computer.other, config) * other
        + (BOARD_SIZE - center_distance(point)) * centrality
        + count_adjacent(board, point) * adjacency
        + gap_potential(board, point, computer, config) * gap
    )


def best_strategic_cell(
    board: Board, computer: Player = Player.WHITE, config: EngineConfig = DEFAULT_CONFIG
) -> Optional[Point]:
    best: Optional[Point] = None
    best_score = None
    for point in board.empty_points():
        score = position_score(board, point, computer, config)
        if best_score is None or score > best_score:
            best, best_score = point, score
    return best


def _window(board: Board, around: Point, radius: int) -> list[Point]:
    return [
        Point(r, c)
        for r in range(around.row - radius, around.row + radius + 1)
        for c in range(around.col - radius, around.col + radius + 1)
        if board.in_bounds(Point(r, c))
    ]


def best_greedy_cell(
    board: Board,
    computer: Player = Player.WHITE,
    config: EngineConfig = DEFAULT_CONFIG,
    *,
    attack_weight: Optional[float] = None,
    defense_weight: Optional[float] = None,
    around: Optional[Point] = None,
    radius: Optional[int] = None,
) -> Optional[Point]:
    """Single-ply best empty cell by combined attack and block value.

    Weights default to `config.greedy_weights`. With `around` and `radius`
    only the square window around that point is considered. Returns None when
    no empty cell is in range.
    """
    if attack_weight is None or defense_weight is None:
        attack_weight, defense_weight = config.greedy_weights
    if around is not None and radius is not None:
        cells = _window(board, around, radius)
    else:
        cells = list(board.points())

    best: Optional[Point] = None
    best_score = None
    for point in cells:
        if not board.is_empty(point):
            continue
        attack = evaluate_position(board, point, computer, config)
        block = evaluate_position(board, point, computer.other, config)
        score = int(attack * attack_weight + block * defense_weight)
        if best_score is None or score > best_score:
            best, best_score = point, score
    return best
