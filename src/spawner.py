"""
new tile placement
"""
import logging
import random
from collections import namedtuple


logger = logging.getLogger(__name__)

SEED_VALUE = 2

TileSpawn = namedtuple("TileSpawn", ["row", "col", "value"])


class BoardFull(Exception):
    """raised when there is no empty cell left for a new tile"""


def place_random_tile(grid, rng=None):
    """
    put a seed tile on a random free cell

    a random cell is drawn from the whole board; if it is taken, the
    search walks forward (row first, column advances each time the
    row wraps) until it finds a free one. cells right after a cluster
    of tiles are therefore favoured over a uniform pick.

    args:
        grid: the Grid to write into
        rng: anything with randrange(), defaults to the random module

    returns:
        TileSpawn with the chosen coordinates and value
    """
    if grid.is_full():
        raise BoardFull("no empty cell left")

    rng = rng or random
    size = grid.size
    x = rng.randrange(size)
    y = rng.randrange(size)

    # a non-full board has a free cell within size * size steps
    for _ in range(size * size):
        if grid.get(x, y) == 0:
            break
        if x == size - 1:
            y = (y + 1) % size
        x = (x + 1) % size
    else:
        raise BoardFull("no empty cell left")

    grid.set(x, y, SEED_VALUE)
    logger.info("tile %d spawned at %d %d", SEED_VALUE, x, y)
    return TileSpawn(x, y, SEED_VALUE)
