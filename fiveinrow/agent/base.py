from __future__ import annotations

import abc

from fiveinrow.engine.config import DEFAULT_CONFIG, EngineConfig
from fiveinrow.game.board import Board
from fiveinrow.game.types import Player, Point


class Agent(abc.ABC):
    def __init__(self, computer: Player = Player.WHITE, config: EngineConfig = DEFAULT_CONFIG) -> None:
        self.computer = computer
        self.config = config

    @abc.abstractmethod
    def select_move(self, board: Board) -> Point:
        """Return the point where this agent wants to play.

        The board is left as it was received. On a full board the center is
        returned.
        """

    @property
    def name(self) -> str:
        return self.__class__.__name__
