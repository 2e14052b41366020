"""
slide and merge logic

every direction goes through the same traversal: the direction decides the
scan order, the step vector and where the board ends
"""
import logging
from enum import Enum


logger = logging.getLogger(__name__)


class Direction(str, Enum):
    """the four moves a player can make"""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def step(self):
        """(row, col) offset of one step in this direction"""
        return _STEPS[self]

    @classmethod
    def parse(cls, token):
        """accept a Direction or its name in any case"""
        if isinstance(token, cls):
            return token
        try:
            return cls(str(token).strip().lower())
        except ValueError:
            raise ValueError(f"unknown direction: {token!r}") from None


_STEPS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}


def scan_order(size, direction):
    """
    cells in the order they are processed

    row-major, with rows reversed when moving down and columns reversed
    when moving right, so tiles nearest the target edge go first
    """
    dr, dc = direction.step
    rows = range(size - 1, -1, -1) if dr > 0 else range(size)
    cols = range(size - 1, -1, -1) if dc > 0 else range(size)
    return [(r, c) for r in rows for c in cols]


def _slide_tile(grid, r, c, direction):
    """step one tile towards the edge, returns the points it scored"""
    dr, dc = direction.step
    points = 0
    while 0 <= r + dr < grid.size and 0 <= c + dc < grid.size:
        nr, nc = r + dr, c + dc
        value = grid.get(r, c)
        target = grid.get(nr, nc)
        if target == 0:
            grid.set(nr, nc, value)
            logger.debug("%d %d is moved from %d %d", nr, nc, r, c)
        elif target == value:
            # the merged tile keeps stepping and may merge again
            grid.set(nr, nc, target + value)
            points += target + value
            logger.debug("%d %d combines with %d %d", nr, nc, r, c)
        else:
            break
        grid.set(r, c, 0)
        r, c = nr, nc
    return points


def apply_direction(grid, direction):
    """
    slide and merge every tile on the grid in one direction

    no check is made for whether the move does anything; a blocked
    board is simply left as it was

    args:
        grid: Grid to mutate
        direction: Direction or its name

    returns:
        score_delta: sum of all merge results produced by this move
    """
    direction = Direction.parse(direction)
    score_delta = 0
    for r, c in scan_order(grid.size, direction):
        if grid.get(r, c) != 0:
            score_delta += _slide_tile(grid, r, c, direction)
    return score_delta
