from fiveinrow.engine.config import EngineConfig
from fiveinrow.engine.lines import (
    analyze_line,
    center_distance,
    check_direction,
    count_adjacent,
    gap_potential,
    is_run_head,
    player_line_score,
    run_heads,
)
from fiveinrow.game.board import Board
from fiveinrow.game.types import Player, Point


def make_board(black=(), white=()) -> Board:
    b = Board()
    for p in black:
        b.set(Point(*p), Player.BLACK.value)
    for p in white:
        b.set(Point(*p), Player.WHITE.value)
    return b


class TestAnalyzeLine:
    def test_open_three(self):
        b = make_board(black=[(6, 5), (6, 6), (6, 7)])
        run = analyze_line(b, Point(6, 6), (0, 1), Player.BLACK)
        assert run.length == 3
        assert run.open_ends == (Point(6, 8), Point(6, 4))
        assert run.open_end_count == 2

    def test_edge_counts_as_blocked(self):
        b = make_board(black=[(0, 0), (0, 1)])
        run = analyze_line(b, Point(0, 0), (0, 1), Player.BLACK)
        assert run.length == 2
        assert run.open_ends == (Point(0, 2),)
        assert run.open_end_count == 1

    def test_opponent_blocks_end(self):
        b = make_board(black=[(6, 5), (6, 6), (6, 7)], white=[(6, 4)])
        run = analyze_line(b, Point(6, 5), (0, 1), Player.BLACK)
        assert run.length == 3
        assert run.open_ends == (Point(6, 8),)

    def test_start_cell_always_counted(self):
        b = make_board(black=[(6, 6)])
        run = analyze_line(b, Point(6, 5), (0, 1), Player.BLACK)
        assert run.length == 2


class TestRunHeads:
    def test_heads_of_a_pair(self):
        b = make_board(black=[(6, 5), (6, 6)])
        heads = list(run_heads(b, Player.BLACK))
        assert len(heads) == 7
        assert (Point(6, 6), (0, 1)) not in heads
        assert is_run_head(b, Point(6, 5), (0, 1), Player.BLACK)
        assert not is_run_head(b, Point(6, 6), (0, 1), Player.BLACK)

    def test_no_heads_for_other_player(self):
        b = make_board(black=[(6, 5), (6, 6)])
        assert list(run_heads(b, Player.WHITE)) == []


class TestCheckDirection:
    def test_four_plus_gap_makes_five(self):
        b = make_board(black=[(6, 6), (6, 7), (6, 8), (6, 9)])
        assert check_direction(b, Point(6, 5), (0, 1), Player.BLACK, 5)
        assert not check_direction(b, Point(6, 5), (0, 1), Player.BLACK, 6)
        assert not check_direction(b, Point(6, 5), (1, 0), Player.BLACK, 2)

    def test_target_of_one(self):
        assert check_direction(Board(), Point(0, 0), (1, 1), Player.WHITE, 1)


class TestPlacementHeuristics:
    def test_player_line_score_empty_board(self):
        b = Board()
        assert player_line_score(b, Point(6, 6), Player.BLACK) == 20
        # Anti-diagonal from a corner is blocked on both sides
        assert player_line_score(b, Point(0, 0), Player.BLACK) == 15

    def test_player_line_score_extends_run(self):
        b = make_board(black=[(6, 6), (6, 7)])
        assert player_line_score(b, Point(6, 5), Player.BLACK) == 215

    def test_five_scores_nothing(self):
        b = make_board(black=[(6, 6), (6, 7), (6, 8), (6, 9)])
        assert player_line_score(b, Point(6, 5), Player.BLACK) == 15

    def test_gap_potential(self):
        b = make_board(white=[(6, 5), (6, 7)])
        assert gap_potential(b, Point(6, 6), Player.WHITE) == 50
        b.set(Point(6, 4), Player.WHITE.value)
        assert gap_potential(b, Point(6, 6), Player.WHITE) == 150
        assert gap_potential(b, Point(6, 6), Player.BLACK) == 0

    def test_count_adjacent(self):
        b = make_board(black=[(5, 5)], white=[(7, 7), (6, 7), (4, 4)])
        assert count_adjacent(b, Point(6, 6)) == 3
        assert count_adjacent(b, Point(0, 12)) == 0

    def test_center_distance(self):
        assert center_distance(Point(6, 6)) == 0
        assert center_distance(Point(0, 0)) == 12
        assert center_distance(Point(5, 8)) == 3

    def test_placement_table_from_config(self):
        cfg = EngineConfig(placement_line_scores=((1, (1, 1)),))
        assert player_line_score(Board(), Point(6, 6), Player.BLACK, cfg) == 4
        b = make_board(black=[(6, 6), (6, 7)])
        # Three-stone runs are not in this table
        assert player_line_score(b, Point(6, 5), Player.BLACK, cfg) == 3

    def test_gap_scores_from_config(self):
        cfg = EngineConfig(gap_score=1, gap_extension_score=10)
        b = make_board(white=[(6, 4), (6, 5), (6, 7)])
        assert gap_potential(b, Point(6, 6), Player.WHITE, cfg) == 11
