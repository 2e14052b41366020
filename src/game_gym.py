import random

import gymnasium as gym
from gymnasium import spaces
import numpy as np

from engine import Direction, apply_direction
from game import Game2048, GameOver
from grid import FIELD_SIZE


class Game2048Env(gym.Env):
    """
    gymnasium environment for the 2048 game

    lets an agent stand in for the player:
    - actions are the four direction commands
    - observations are the raw tile values
    - reward is the score gained by the move
    - the episode ends when no tile can be spawned any more
    """

    metadata = {"render_modes": ["human"]}

    def __init__(self, size=FIELD_SIZE):
        super().__init__()

        self.size = size
        self.game = Game2048(size)

        # 0 = up, 1 = down, 2 = left, 3 = right
        self.action_space = spaces.Discrete(4)

        self.observation_space = spaces.Box(
            low=0,
            high=131072,
            shape=(size, size),
            dtype=np.int32
        )

        self.action_to_direction = {
            0: Direction.UP,
            1: Direction.DOWN,
            2: Direction.LEFT,
            3: Direction.RIGHT
        }

    def _get_observation(self):
        return self.game.grid.snapshot().astype(np.int32)

    def _direction(self, action):
        try:
            return self.action_to_direction[int(action)]
        except KeyError:
            raise ValueError(f"invalid action: {action}") from None

    def get_afterstate(self, action):
        """
        result of the player's move without the random tile

        returns:
            afterstate_board: board after the move
            reward: points earned from merging
            valid: if the move changed the board
        """
        direction = self._direction(action)
        grid = self.game.grid.copy()
        points = apply_direction(grid, direction)
        valid = grid != self.game.grid
        return grid.snapshot().astype(np.int32), points, valid

    def reset(self, seed=None, options=None):
        """start a new episode on a fresh game"""
        super().reset(seed=seed)

        rng = random.Random(seed) if seed is not None else None
        self.game = Game2048(self.size, rng=rng)

        return self._get_observation(), {"score": self.game.score}

    def step(self, action):
        afterstate_board, _, valid = self.get_afterstate(action)
        score_before = self.game.score

        result = self.game.apply_direction(self._direction(action))

        terminated = isinstance(result, GameOver)
        points = self.game.score - score_before

        info = {
            "score": self.game.score,
            "moved": valid,
            "points_gained": points,
            "afterstate": afterstate_board if valid else None,
            "max_tile": self.game.grid.max_tile()
        }

        return self._get_observation(), float(points), terminated, False, info

    def render(self):
        print(self.game.render())
