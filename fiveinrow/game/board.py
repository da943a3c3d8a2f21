from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

from .types import DIRECTIONS, EMPTY, Player, Point

BOARD_SIZE = 13
WIN_LENGTH = 5

# Column labels: A-M for 13x13
COL_LABELS = "ABCDEFGHIJKLM"

CELL_VALUES = (Player.WHITE.value, EMPTY, Player.BLACK.value)


class BoardFormatError(ValueError):
    """Raised when raw board data has the wrong shape or cell codes."""


def parse_coordinate(text: str) -> Optional[Point]:
    """Parse a coordinate string like 'E5' or 'H12' into a Point.

    Column is a letter A-M, row is a number 1-13 counted from the top.
    Returns None if the string is invalid.
    """
    text = text.strip().upper()
    if len(text) < 2 or len(text) > 3:
        return None
    col_char = text[0]
    row_str = text[1:]
    if col_char not in COL_LABELS:
        return None
    try:
        row = int(row_str)
    except ValueError:
        return None
    if not (1 <= row <= BOARD_SIZE):
        return None
    return Point(row - 1, COL_LABELS.index(col_char))


def format_point(point: Point) -> str:
    """Format a Point as a coordinate string like 'E5'."""
    return f"{COL_LABELS[point.col]}{point.row + 1}"


class Board:
    """13x13 board of signed cell values: 1 black, -1 white, 0 empty."""

    size = BOARD_SIZE

    def __init__(self) -> None:
        self._grid: list[list[int]] = [[EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> Board:
        """Build a board from a 13x13 matrix, rejecting bad shapes or values."""
        if len(rows) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in rows):
            raise BoardFormatError(f"Board must be {BOARD_SIZE}x{BOARD_SIZE}")
        board = cls()
        for r, row in enumerate(rows):
            for c, value in enumerate(row):
                if value not in CELL_VALUES:
                    raise BoardFormatError(f"Invalid board value: {value}")
                board._grid[r][c] = int(value)
        return board

    def to_rows(self) -> list[list[int]]:
        return [list(row) for row in self._grid]

    def copy(self) -> Board:
        board = Board()
        board._grid = self.to_rows()
        return board

    def in_bounds(self, point: Point) -> bool:
        return 0 <= point.row < BOARD_SIZE and 0 <= point.col < BOARD_SIZE

    def get(self, point: Point) -> int:
        return self._grid[point.row][point.col]

    def set(self, point: Point, value: int) -> None:
        self._grid[point.row][point.col] = value

    def is_empty(self, point: Point) -> bool:
        return self._grid[point.row][point.col] == EMPTY

    def count_stones(self) -> int:
        return sum(1 for row in self._grid for v in row if v != EMPTY)

    def points(self) -> Iterator[Point]:
        """All points in row-major order."""
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                yield Point(r, c)

    def empty_points(self) -> list[Point]:
        return [p for p in self.points() if self.is_empty(p)]

    @property
    def center(self) -> Point:
        return Point(BOARD_SIZE // 2, BOARD_SIZE // 2)

    @property
    def is_full(self) -> bool:
        return all(v != EMPTY for row in self._grid for v in row)

    @contextmanager
    def hypothetical(self, point: Point, value: int) -> Iterator[Board]:
        """Temporarily set `point` to `value`; the previous value is always restored."""
        previous = self._grid[point.row][point.col]
        self._grid[point.row][point.col] = value
        try:
            yield self
        finally:
            self._grid[point.row][point.col] = previous

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        return f"Board(stones={self.count_stones()})"


def find_five(board: Board) -> Optional[Player]:
    """Return the player owning a 5-in-a-row anywhere on the board, if any."""
    for point in board.points():
        value = board.get(point)
        if value == EMPTY:
            continue
        for dr, dc in DIRECTIONS:
            count = 1
            for step in range(1, WIN_LENGTH):
                p = Point(point.row + dr * step, point.col + dc * step)
                if not board.in_bounds(p) or board.get(p) != value:
                    break
                count += 1
            if count >= WIN_LENGTH:
                return Player(value)
    return None


@dataclass
class Move:
    point: Point
    player: Player

    def __str__(self) -> str:
        return f"{self.player}: {format_point(self.point)}"


class GameState:
    """Game state around a Board: side to move, winner and one pending move."""

    def __init__(self, board: Optional[Board] = None, current_player: Player = Player.BLACK) -> None:
        self.board = board if board is not None else Board()
        self.current_player = current_player
        self.last_move: Optional[Move] = None
        self.pending: Optional[Point] = None
        self._winner: Optional[Player] = None
        self._is_over = False
        self._refresh_result()

    @property
    def is_over(self) -> bool:
        return self._is_over

    @property
    def winner(self) -> Optional[Player]:
        return self._winner

    @property
    def is_draw(self) -> bool:
        return self._is_over and self._winner is None

    def legal_moves(self) -> list[Point]:
        if self._is_over:
            return []
        return self.board.empty_points()

    def propose(self, point: Point) -> None:
        """Mark `point` as the pending move for the current player."""
        assert not self._is_over, "Game is already over"
        assert self.board.in_bounds(point), f"Point {point} is off the grid"
        assert self.board.is_empty(point), f"Point {format_point(point)} is occupied"
        self.pending = point

    def cancel(self) -> Optional[Point]:
        """Drop the pending move. Returns it, or None if nothing was pending."""
        point, self.pending = self.pending, None
        return point

    def confirm(self) -> Optional[Move]:
        """Play the pending move. Returns the Move, or None if nothing was pending."""
        if self.pending is None:
            return None
        point, self.pending = self.pending, None
        return self.apply_move(point)

    def apply_move(self, point: Point) -> Move:
        """Place a stone for the current player and advance the turn."""
        assert not self._is_over, "Game is already over"
        assert self.board.in_bounds(point), f"Point {point} is off the grid"
        assert self.board.is_empty(point), f"Point {format_point(point)} is occupied"

        player = self.current_player
        self.board.set(point, player.value)
        self.last_move = Move(point=point, player=player)
        self.pending = None
        self._refresh_result()
        self.current_player = player.other
        return self.last_move

    def _refresh_result(self) -> None:
        self._winner = find_five(self.board)
        self._is_over = self._winner is not None or self.board.is_full
