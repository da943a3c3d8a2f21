from __future__ import annotations

import enum
from dataclasses import dataclass


class Difficulty(enum.IntEnum):
    EASY = 0
    MEDIUM = 1
    HARD = 2
    EXPERT = 3

    def __str__(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True)
class EngineConfig:
    # Static evaluator line scores
    win_score: int = 1_000_000
    four_score: int = 100_000
    block_four_score: int = 8_000
    three_score: int = 35_000
    block_three_score: int = 50_000  # fully blocked three; intentionally above three_score
    two_score: int = 5_000
    center_bonus: int = 1_000

    # evaluate_board weights
    attack_weight: float = 1.2
    defense_weight: float = 1.5

    # Search
    candidate_limit: int = 15
    early_candidate_limit: int = 5
    early_game_stones: int = 5
    depth_schedule: tuple[tuple[int, int], ...] = ((5, 1), (10, 2), (20, 3))
    max_depth: int = 4
    search_stone_limit: int = 40
    depth_bonus: int = 1_000
    open_three_penalty: int = 500_000

    # Tier behaviour
    easy_best_move_chance: float = 0.2
    easy_best_move_max_empty: int = 5
    medium_window: int = 4
    opening_stones: int = 3
    # Greedy weights: (attack, block) over the full board and inside the window
    greedy_weights: tuple[float, float] = (1.0, 0.8)
    window_weights: tuple[float, float] = (0.8, 1.0)

    # Pattern scores
    jump_four_scores: tuple[int, int] = (1000, 900)  # (computer, opponent)
    split_four_scores: tuple[int, int] = (1050, 950)
    open_three_block_score: int = 500
    double_threat_score: int = 1000
    split_two_scores: tuple[int, int] = (150, 200)  # X__X: first gap, second gap
    split_three_score: int = 300
    split_four_score: int = 400
    # Open ends of runs: four, open three (attack, defense), half-open three, open two
    potential_four_score: int = 1000
    potential_open_three_scores: tuple[int, int] = (500, 300)
    potential_half_three_score: int = 100
    potential_open_two_score: int = 50

    # Placement heuristics
    # count -> (both ends open, one end open)
    placement_line_scores: tuple[tuple[int, tuple[int, int]], ...] = (
        (4, (500, 300)),
        (3, (200, 80)),
        (2, (50, 20)),
        (1, (5, 5)),
    )
    gap_score: int = 50
    gap_extension_score: int = 100
    # own line, opponent line, centrality, gap
    tie_break_weights: tuple[int, int, int, int] = (8, 3, 2, 5)
    # own line, opponent line, centrality, adjacency, gap
    strategic_weights: tuple[int, int, int, int, int] = (10, 5, 3, 8, 5)
    candidate_center_weight: int = 100
    candidate_adjacency_weight: int = 50
    early_game_radius: int = 2

    def pattern_scores(self) -> dict[tuple[int, int], int]:
        """(consecutive_count, open_ends) -> score."""
        return {
            (4, 2): self.four_score,
            (4, 1): self.block_four_score,
            (3, 2): self.three_score * 2,
            (3, 1): self.three_score,
            (3, 0): self.block_three_score,
            (2, 2): self.two_score * 2,
            (2, 1): self.two_score,
        }


DEFAULT_CONFIG = EngineConfig()
