"""Line walking primitives shared by the heuristics, evaluator and search."""

from __future__ import annotations

from typing import NamedTuple

from fiveinrow.game.board import BOARD_SIZE, Board
from fiveinrow.game.types import DIRECTIONS, EMPTY, Direction, Player, Point

from .config import DEFAULT_CONFIG, EngineConfig


class LineRun(NamedTuple):
    length: int
    open_ends: tuple[Point, ...]
    open_end_count: int


def _offset(point: Point, direction: Direction, step: int) -> Point:
    return Point(point.row + direction[0] * step, point.col + direction[1] * step)


def analyze_line(board: Board, start: Point, direction: Direction, player: Player) -> LineRun:
    """Measure the run of `player` through `start` along one axis.

    The first non-matching cell on each side is an open end when it is on the
    board and empty. `start` itself is counted whatever it holds.
    """
    value = player.value
    length = 1
    open_ends: list[Point] = []
    for sign in (1, -1):
        step = 1
        while True:
            p = _offset(start, direction, sign * step)
            if not board.in_bounds(p):
                break
            cell = board.get(p)
            if cell != value:
                if cell == EMPTY:
                    open_ends.append(p)
                break
            length += 1
            step += 1
    return LineRun(length, tuple(open_ends), len(open_ends))


def is_run_head(board: Board, point: Point, direction: Direction, player: Player) -> bool:
    """True when the cell before `point` on this axis is not `player`'s."""
    prev = _offset(point, direction, -1)
    return not (board.in_bounds(prev) and board.get(prev) == player.value)


def run_heads(board: Board, player: Player):
    """Yield (point, direction) for every run head of `player`, row-major."""
    value = player.value
    for point in board.points():
        if board.get(point) != value:
            continue
        for direction in DIRECTIONS:
            if is_run_head(board, point, direction, player):
                yield point, direction


def check_direction(
    board: Board, point: Point, direction: Direction, player: Player, target_count: int
) -> bool:
    """True once `target_count` consecutive stones of `player` span `point`."""
    value = player.value
    count = 1
    for sign in (1, -1):
        step = 1
        while True:
            p = _offset(point, direction, sign * step)
            if not board.in_bounds(p) or board.get(p) != value:
                break
            count += 1
            if count >= target_count:
                return True
            step += 1
    return count >= target_count


def player_line_score(
    board: Board, point: Point, player: Player, config: EngineConfig = DEFAULT_CONFIG
) -> int:
    """Score the runs of `player` that a stone at `point` would join."""
    table = dict(config.placement_line_scores)
    value = player.value
    total = 0
    for direction in DIRECTIONS:
        count = 1
        ends_open = 0
        for sign in (1, -1):
            step = 1
            while True:
                p = _offset(point, direction, sign * step)
                if not board.in_bounds(p) or board.get(p) != value:
                    break
                count += 1
                step += 1
            if board.in_bounds(p) and board.get(p) == EMPTY:
                ends_open += 1
        if ends_open and count in table:
            both, one = table[count]
            total += both if ends_open == 2 else one
    return total


def gap_potential(
    board: Board, point: Point, player: Player, config: EngineConfig = DEFAULT_CONFIG
) -> int:
    """Bonus for `point` sitting in a gap of `player`'s stones."""
    value = player.value

    def owns(p: Point) -> bool:
        return board.in_bounds(p) and board.get(p) == value

    potential = 0
    for direction in DIRECTIONS:
        before = _offset(point, direction, -1)
        after = _offset(point, direction, 1)
        if owns(before) and owns(after):
            potential += config.gap_score
            if owns(_offset(point, direction, -2)):
                potential += config.gap_extension_score
    return potential


def count_adjacent(board: Board, point: Point) -> int:
    count = 0
    for dr in (-1, 0, 1):
        for dc in (-1, 0, 1):
            if dr == 0 and dc == 0:
                continue
            p = Point(point.row + dr, point.col + dc)
            if board.in_bounds(p) and board.get(p) != EMPTY:
                count += 1
    return count


def center_distance(point: Point) -> int:
    """Manhattan distance from `point` to the board center."""
    center = BOARD_SIZE // 2
    return abs(point.row - center) + abs(point.col - center)
