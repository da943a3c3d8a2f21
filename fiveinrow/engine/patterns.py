"""Full-board scans for tactically significant shapes.

Each finder returns a score map (Point -> int) whose insertion order is the
row-major, direction-by-direction order in which matches were found; repeated
matches on one cell accumulate. Scores come from the EngineConfig passed in.
"""

from __future__ import annotations

from typing import Optional

from fiveinrow.game.board import BOARD_SIZE, WIN_LENGTH, Board
from fiveinrow.game.types import DIRECTIONS, EMPTY, Player, Point

from .config import DEFAULT_CONFIG, EngineConfig
from .lines import (
    analyze_line,
    center_distance,
    check_direction,
    gap_potential,
    player_line_score,
    run_heads,
)

ScoreMap = dict[Point, int]


def _add(scores: ScoreMap, point: Point, amount: int) -> None:
    scores[point] = scores.get(point, 0) + amount


class _Line:
    """Read cells at signed offsets from an anchor along one axis."""

    __slots__ = ("board", "anchor", "dr", "dc")

    def __init__(self, board: Board, anchor: Point, direction: tuple[int, int]) -> None:
        self.board = board
        self.anchor = anchor
        self.dr, self.dc = direction

    def at(self, step: int) -> Point:
        return Point(self.anchor.row + self.dr * step, self.anchor.col + self.dc * step)

    def cell(self, step: int) -> Optional[int]:
        """Cell value at `step`, or None off the board."""
        p = self.at(step)
        if not self.board.in_bounds(p):
            return None
        return self.board.get(p)

    def matches(self, steps: tuple[int, ...], value: int) -> bool:
        return all(self.cell(s) == value for s in steps)


# ---------------------------------------------------------------------------
# Immediate wins
# ---------------------------------------------------------------------------

def find_winning_move(board: Board, player: Player) -> Optional[Point]:
    """First empty cell (row-major) where `player` would make five in a row."""
    for point in board.points():
        if not board.is_empty(point):
            continue
        with board.hypothetical(point, player.value):
            if any(check_direction(board, point, d, player, WIN_LENGTH) for d in DIRECTIONS):
                return point
    return None


# ---------------------------------------------------------------------------
# Gapped fours
# ---------------------------------------------------------------------------

def find_jump_four_threats(
    board: Board,
    player: Player,
    computer: Player = Player.WHITE,
    config: EngineConfig = DEFAULT_CONFIG,
) -> ScoreMap:
    """Empty cells that fill the gap of a four: X_XX, XX_X or XX_XX.

    X_XX and XX_X need an empty flank beyond the pattern to still be alive.
    """
    value = player.value
    side = 0 if player is computer else 1
    jump_score = config.jump_four_scores[side]
    split_score = config.split_four_scores[side]
    threats: ScoreMap = {}

    for point in board.points():
        if not board.is_empty(point):
            continue
        for direction in DIRECTIONS:
            line = _Line(board, point, direction)
            # X_XX
            if line.matches((-1, 1, 2), value) and EMPTY in (line.cell(-2), line.cell(3)):
                _add(threats, point, jump_score)
            # XX_X
            if line.matches((-2, -1, 1), value) and EMPTY in (line.cell(-3), line.cell(2)):
                _add(threats, point, jump_score)
            # XX_XX
            if line.matches((-2, -1, 1, 2), value):
                _add(threats, point, split_score)
    return threats


# ---------------------------------------------------------------------------
# Threes and forks
# ---------------------------------------------------------------------------

def find_open_three_threats(
    board: Board, opponent: Player = Player.BLACK, config: EngineConfig = DEFAULT_CONFIG
) -> ScoreMap:
    """Both open ends of every open three of `opponent`."""
    threats: ScoreMap = {}
    for point, direction in run_heads(board, opponent):
        run = analyze_line(board, point, direction, opponent)
        if run.length == 3 and run.open_end_count == 2:
            for end in run.open_ends:
                _add(threats, end, config.open_three_block_score)
    return threats


def has_open_three(board: Board, player: Player) -> bool:
    for point, direction in run_heads(board, player):
        run = analyze_line(board, point, direction, player)
        if run.length == 3 and run.open_end_count == 2:
            return True
    return False


def find_double_threats(
    board: Board, player: Player, config: EngineConfig = DEFAULT_CONFIG
) -> ScoreMap:
    """Empty cells where `player` would make two or more open threes at once."""
    threats: ScoreMap = {}
    for point in board.points():
        if not board.is_empty(point):
            continue
        with board.hypothetical(point, player.value):
            open_threes = 0
            for direction in DIRECTIONS:
                run = analyze_line(board, point, direction, player)
                if run.length == 3 and run.open_end_count == 2:
                    open_threes += 1
        if open_threes >= 2:
            threats[point] = config.double_threat_score
    return threats


def find_four_three_threat(board: Board, player: Player) -> Optional[Point]:
    """First empty cell where `player` would make a live four and an open three."""
    for point in board.points():
        if not board.is_empty(point):
            continue
        has_four = has_three = False
        with board.hypothetical(point, player.value):
            for direction in DIRECTIONS:
                run = analyze_line(board, point, direction, player)
                if run.length >= 4 and run.open_end_count > 0:
                    has_four = True
                if run.length == 3 and run.open_end_count == 2:
                    has_three = True
        if has_four and has_three:
            return point
    return None


# ---------------------------------------------------------------------------
# Computer's gapped shapes
# ---------------------------------------------------------------------------

def find_special_patterns(
    board: Board, computer: Player = Player.WHITE, config: EngineConfig = DEFAULT_CONFIG
) -> ScoreMap:
    """Gap cells inside the computer's split shapes.

    X__X scores its two gaps; X_XX and XX_X score the gap; X_XXX scores the
    gap only while both outer flanks are empty.
    """
    value = computer.value
    first_gap, second_gap = config.split_two_scores
    moves: ScoreMap = {}

    for point in board.points():
        cell = board.get(point)
        for direction in DIRECTIONS:
            line = _Line(board, point, direction)
            if cell == EMPTY:
                # X__X with this cell as the second gap
                if line.cell(-2) == value and line.cell(-1) == EMPTY and line.cell(1) == value:
                    _add(moves, line.at(-1), first_gap)
                    _add(moves, point, second_gap)
                continue
            if cell != value:
                continue
            # X_XX ending at this stone
            if line.cell(-3) == value and line.cell(-2) == EMPTY and line.cell(-1) == value:
                _add(moves, line.at(-2), config.split_three_score)
            # XX_X starting at this stone
            if line.cell(1) == value and line.cell(2) == EMPTY and line.cell(3) == value:
                _add(moves, line.at(2), config.split_three_score)
            # X_XXX ending at this stone, open on both outer flanks
            if (
                line.matches((-4, -2, -1), value)
                and line.cell(-3) == EMPTY
                and line.cell(-5) == EMPTY
                and line.cell(1) == EMPTY
            ):
                _add(moves, line.at(-3), config.split_four_score)
    return moves


# ---------------------------------------------------------------------------
# General attack / defense scan
# ---------------------------------------------------------------------------

def find_potential_moves(
    board: Board, player: Player, attack: bool, config: EngineConfig = DEFAULT_CONFIG
) -> ScoreMap:
    """Score the open ends of `player`'s runs.

    Defense mode only reacts to fours and open threes; half-open threats are
    left to the other stages.
    """
    attack_three, defense_three = config.potential_open_three_scores
    moves: ScoreMap = {}
    for point, direction in run_heads(board, player):
        run = analyze_line(board, point, direction, player)
        if run.length == 4 and run.open_end_count > 0:
            amount = config.potential_four_score
        elif run.length == 3 and run.open_end_count == 2:
            amount = attack_three if attack else defense_three
        elif attack and run.length == 3 and run.open_end_count == 1:
            amount = config.potential_half_three_score
        elif attack and run.length == 2 and run.open_end_count == 2:
            amount = config.potential_open_two_score
        else:
            continue
        for end in run.open_ends:
            _add(moves, end, amount)
    return moves


def find_attack_moves(
    board: Board, computer: Player = Player.WHITE, config: EngineConfig = DEFAULT_CONFIG
) -> ScoreMap:
    return find_potential_moves(board, computer, True, config)


def find_defense_moves(
    board: Board, computer: Player = Player.WHITE, config: EngineConfig = DEFAULT_CONFIG
) -> ScoreMap:
    return find_potential_moves(board, computer.other, False, config)


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

def tie_break_score(
    board: Board, point: Point, computer: Player = Player.WHITE, config: EngineConfig = DEFAULT_CONFIG
) -> int:
    own, other, centrality, gap = config.tie_break_weights
    return (
        player_line_score(board, point, computer, config) * own
        + player_line_score(board, point, computer.other, config) * other
        + (BOARD_SIZE - center_distance(point)) * centrality
        + gap_potential(board, point, computer, config) * gap
    )


def select_best(
    board: Board, scores: ScoreMap, computer: Player = Player.WHITE, config: EngineConfig = DEFAULT_CONFIG
) -> Point:
    """Highest-scoring point; ties go to the best tie-break score, then to
    encounter order."""
    assert scores, "No scored positions"
    top = max(scores.values())
    tied = [p for p, s in scores.items() if s == top]
    if len(tied) == 1:
        return tied[0]
    best, best_score = tied[0], tie_break_score(board, tied[0], computer, config)
    for point in tied[1:]:
        score = tie_break_score(board, point, computer, config)
        if score > best_score:
            best, best_score = point, score
    return best
