import pytest

from fiveinrow.game.board import (
    BOARD_SIZE,
    Board,
    BoardFormatError,
    GameState,
    find_five,
    format_point,
    parse_coordinate,
)
from fiveinrow.game.types import EMPTY, Player, Point


# ---------------------------------------------------------------------------
# Coordinates
# ---------------------------------------------------------------------------

class TestCoordinates:
    def test_parse_corners(self):
        assert parse_coordinate("A1") == Point(0, 0)
        assert parse_coordinate("M13") == Point(12, 12)

    def test_parse_is_case_and_space_insensitive(self):
        assert parse_coordinate(" g7 ") == Point(6, 6)

    @pytest.mark.parametrize("text", ["", "A", "N1", "A0", "A14", "AA", "1A", "A1234"])
    def test_parse_invalid(self, text):
        assert parse_coordinate(text) is None

    def test_format_point(self):
        assert format_point(Point(0, 0)) == "A1"
        assert format_point(Point(12, 4)) == "E13"

    def test_round_trip_all_points(self):
        for p in Board().points():
            assert parse_coordinate(format_point(p)) == p


# ---------------------------------------------------------------------------
# Board
# ---------------------------------------------------------------------------

class TestBoard:
    def test_empty_board(self):
        b = Board()
        assert b.count_stones() == 0
        assert len(b.empty_points()) == BOARD_SIZE * BOARD_SIZE
        assert b.center == Point(6, 6)
        assert not b.is_full

    def test_set_and_get(self):
        b = Board()
        b.set(Point(2, 3), Player.BLACK.value)
        assert b.get(Point(2, 3)) == 1
        assert not b.is_empty(Point(2, 3))
        assert b.count_stones() == 1

    def test_in_bounds(self):
        b = Board()
        assert b.in_bounds(Point(0, 12))
        assert not b.in_bounds(Point(-1, 0))
        assert not b.in_bounds(Point(0, 13))

    def test_points_are_row_major(self):
        pts = list(Board().points())
        assert pts[0] == Point(0, 0)
        assert pts[1] == Point(0, 1)
        assert pts[BOARD_SIZE] == Point(1, 0)
        assert pts[-1] == Point(12, 12)

    def test_from_rows_round_trip(self):
        rows = [[0] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        rows[4][5] = 1
        rows[7][1] = -1
        b = Board.from_rows(rows)
        assert b.to_rows() == rows
        assert b.get(Point(7, 1)) == -1

    def test_from_rows_rejects_wrong_shape(self):
        with pytest.raises(BoardFormatError):
            Board.from_rows([[0] * BOARD_SIZE for _ in range(BOARD_SIZE - 1)])
        with pytest.raises(BoardFormatError):
            Board.from_rows([[0] * (BOARD_SIZE + 1) for _ in range(BOARD_SIZE)])

    def test_from_rows_rejects_bad_value(self):
        rows = [[0] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        rows[0][0] = 2
        with pytest.raises(BoardFormatError):
            Board.from_rows(rows)

    def test_copy_is_independent(self):
        b = Board()
        b.set(Point(1, 1), 1)
        c = b.copy()
        c.set(Point(2, 2), -1)
        assert b.is_empty(Point(2, 2))
        assert c.get(Point(1, 1)) == 1

    def test_equality(self):
        a, b = Board(), Board()
        assert a == b
        b.set(Point(0, 0), 1)
        assert a != b

    def test_full_board(self):
        rows = [[1 if (r + c) % 2 else -1 for c in range(BOARD_SIZE)] for r in range(BOARD_SIZE)]
        assert Board.from_rows(rows).is_full


class TestHypothetical:
    def test_restores_empty_cell(self):
        b = Board()
        with b.hypothetical(Point(3, 3), 1):
            assert b.get(Point(3, 3)) == 1
        assert b.is_empty(Point(3, 3))

    def test_restores_occupied_cell(self):
        b = Board()
        b.set(Point(3, 3), -1)
        with b.hypothetical(Point(3, 3), 1):
            assert b.get(Point(3, 3)) == 1
        assert b.get(Point(3, 3)) == -1

    def test_restores_on_exception(self):
        b = Board()
        with pytest.raises(RuntimeError):
            with b.hypothetical(Point(3, 3), 1):
                raise RuntimeError("boom")
        assert b.get(Point(3, 3)) == EMPTY


# ---------------------------------------------------------------------------
# Five detection
# ---------------------------------------------------------------------------

class TestFindFive:
    @pytest.mark.parametrize("dr,dc", [(0, 1), (1, 0), (1, 1), (1, -1)])
    def test_five_in_each_direction(self, dr, dc):
        b = Board()
        for i in range(5):
            b.set(Point(4 + dr * i, 6 + dc * i), Player.WHITE.value)
        assert find_five(b) is Player.WHITE

    def test_four_is_not_five(self):
        b = Board()
        for c in range(4):
            b.set(Point(0, c), Player.BLACK.value)
        assert find_five(b) is None

    def test_overline_counts(self):
        b = Board()
        for c in range(7):
            b.set(Point(12, c), Player.BLACK.value)
        assert find_five(b) is Player.BLACK


# ---------------------------------------------------------------------------
# Game state
# ---------------------------------------------------------------------------

class TestGameState:
    def test_initial_state(self):
        g = GameState()
        assert g.current_player is Player.BLACK
        assert not g.is_over
        assert g.winner is None
        assert len(g.legal_moves()) == BOARD_SIZE * BOARD_SIZE

    def test_apply_move_switches_player(self):
        g = GameState()
        move = g.apply_move(Point(6, 6))
        assert move.player is Player.BLACK
        assert g.board.get(Point(6, 6)) == 1
        assert g.current_player is Player.WHITE
        assert g.last_move == move

    def test_occupied_move_rejected(self):
        g = GameState()
        g.apply_move(Point(6, 6))
        with pytest.raises(AssertionError):
            g.apply_move(Point(6, 6))

    def test_black_wins(self):
        g = GameState()
        for c in range(4):
            g.apply_move(Point(0, c))
            g.apply_move(Point(1, c))
        g.apply_move(Point(0, 4))
        assert g.is_over
        assert g.winner is Player.BLACK
        assert not g.is_draw
        assert g.legal_moves() == []

    def test_no_moves_after_game_over(self):
        g = GameState()
        for c in range(4):
            g.apply_move(Point(0, c))
            g.apply_move(Point(1, c))
        g.apply_move(Point(0, 4))
        with pytest.raises(AssertionError):
            g.apply_move(Point(5, 5))

    def test_draw_on_full_board_without_five(self):
        # Columns repeat in pairs; each row is offset by two
        rows = [
            [1 if (c + 2 * r) % 4 < 2 else -1 for c in range(BOARD_SIZE)]
            for r in range(BOARD_SIZE)
        ]
        b = Board.from_rows(rows)
        assert find_five(b) is None
        g = GameState(b)
        assert g.is_over
        assert g.is_draw

    def test_loaded_position_with_side_to_move(self):
        b = Board()
        b.set(Point(6, 6), 1)
        g = GameState(b, current_player=Player.WHITE)
        assert g.current_player is Player.WHITE
        assert not g.is_over


class TestPendingMove:
    def test_propose_and_confirm(self):
        g = GameState()
        g.propose(Point(6, 6))
        assert g.pending == Point(6, 6)
        assert g.board.is_empty(Point(6, 6))
        move = g.confirm()
        assert move.point == Point(6, 6)
        assert g.pending is None
        assert g.current_player is Player.WHITE

    def test_cancel(self):
        g = GameState()
        g.propose(Point(6, 6))
        assert g.cancel() == Point(6, 6)
        assert g.pending is None
        assert g.board.count_stones() == 0

    def test_confirm_without_pending(self):
        g = GameState()
        assert g.confirm() is None
        assert g.cancel() is None

    def test_propose_occupied_rejected(self):
        g = GameState()
        g.apply_move(Point(6, 6))
        with pytest.raises(AssertionError):
            g.propose(Point(6, 6))
