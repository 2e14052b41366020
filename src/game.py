"""
core game logic and lifecycle
"""
import logging
from collections import namedtuple
from enum import Enum

from engine import Direction, apply_direction
from grid import FIELD_SIZE, Grid
from spawner import BoardFull, place_random_tile


logger = logging.getLogger(__name__)


class GameState(Enum):
    ACTIVE = "active"
    OVER = "over"


# result of a move that kept the game going
Moved = namedtuple("Moved", ["direction", "score_delta", "score", "spawn"])


class GameOver(namedtuple("GameOver", ["score"])):
    """terminal result of a move, carries the final score"""

    __slots__ = ()

    def __str__(self):
        return f"Game over. Your score is {self.score}"


class Game2048:
    def __init__(self, size=FIELD_SIZE, rng=None):
        """start a game on an empty board with two tiles"""
        self.grid = Grid(size)
        self.rng = rng
        self.score = 0
        self.state = GameState.ACTIVE

        try:
            place_random_tile(self.grid, self.rng)
            place_random_tile(self.grid, self.rng)
        except BoardFull as exc:
            raise RuntimeError(f"cannot start a game on a {size}x{size} board") from exc

    @property
    def game_over(self):
        return self.state is GameState.OVER

    def apply_direction(self, direction):
        """
        make a move in the given direction

        a tile is spawned after every move, even one that changed nothing.
        when there is no room for it the game ends.

        returns:
            Moved while the game goes on, GameOver once it has ended
        """
        if self.game_over:
            return GameOver(self.score)

        direction = Direction.parse(direction)
        score_delta = apply_direction(self.grid, direction)
        self.score += score_delta

        try:
            spawn = place_random_tile(self.grid, self.rng)
        except BoardFull:
            self.state = GameState.OVER
            logger.info("game over with score %d", self.score)
            return GameOver(self.score)

        return Moved(direction, score_delta, self.score, spawn)

    def render(self, best_score=None):
        """score line followed by the grid table"""
        header = f"Score: {self.score}"
        if best_score is not None:
            header += f" Best: {best_score}"
        return f"{header}\n{self.grid.render()}"
