import pytest

from grid import Grid


class FixedRng:
    """hands out preset randrange results, in order"""

    def __init__(self, *values):
        self.values = list(values)

    def randrange(self, stop):
        value = self.values.pop(0)
        assert 0 <= value < stop
        return value


@pytest.fixture()
def blocked_rows():
    """full board where no two neighbours are equal"""
    return [
        [2, 4, 2, 4],
        [4, 2, 4, 2],
        [2, 4, 2, 4],
        [4, 2, 4, 2],
    ]


@pytest.fixture()
def empty_grid():
    return Grid()


@pytest.fixture()
def fixed_rng():
    return FixedRng
