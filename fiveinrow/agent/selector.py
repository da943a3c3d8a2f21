"""Route a move request to the agent for the chosen difficulty."""

from __future__ import annotations

import logging
import random
from typing import Optional

from fiveinrow.engine.config import DEFAULT_CONFIG, Difficulty, EngineConfig
from fiveinrow.game.board import Board
from fiveinrow.game.types import Player, Point

from .base import Agent
from .expert_agent import ExpertAgent
from .greedy_agent import GreedyAgent
from .random_agent import RandomAgent

logger = logging.getLogger(__name__)

# Seconds of simulated thinking per level below the top one
THINKING_STEP = 0.08


def build_agent(
    difficulty: int,
    computer: Player = Player.WHITE,
    config: EngineConfig = DEFAULT_CONFIG,
    rng: Optional[random.Random] = None,
) -> Agent:
    """Agent playing `computer` at the given difficulty (0-3)."""
    level = Difficulty(difficulty)
    if level is Difficulty.EASY:
        return RandomAgent(computer, config, rng=rng)
    if level is Difficulty.MEDIUM:
        return GreedyAgent(
            computer,
            config,
            window=config.medium_window,
            fallback=RandomAgent(computer, config, rng=rng),
        )
    if level is Difficulty.HARD:
        return GreedyAgent(computer, config)
    return ExpertAgent(computer, config)


def calculate_next_move(
    board: Board,
    difficulty: int,
    computer: Player = Player.WHITE,
    config: Optional[EngineConfig] = None,
    rng: Optional[random.Random] = None,
) -> Point:
    """Choose the computer's next move.

    The caller's board is not modified. On a full board the center is
    returned and should be treated as "no legal move".
    """
    agent = build_agent(difficulty, computer, config or DEFAULT_CONFIG, rng=rng)
    move = agent.select_move(board.copy())
    logger.debug("%s (%s) plays %s", agent.name, Difficulty(difficulty), move)
    return move


def thinking_delay(difficulty: int) -> float:
    """Seconds the UI waits before showing a move; weaker levels wait longer."""
    return (len(Difficulty) - Difficulty(difficulty)) * THINKING_STEP
