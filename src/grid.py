"""
board storage for the 2048 engine
"""
import numpy as np


FIELD_SIZE = 4


class Grid:
    """
    fixed N x N board of tile values, 0 means empty

    numpy would happily accept negative indices, so every access
    goes through the bounds check first
    """

    def __init__(self, size=FIELD_SIZE):
        self.size = size
        self.cells = np.zeros((size, size), dtype=np.int64)

    @classmethod
    def from_rows(cls, rows):
        """build a grid from nested lists (must be square)"""
        size = len(rows)
        if any(len(row) != size for row in rows):
            raise ValueError("grid rows must form a square")
        grid = cls(size)
        for r, row in enumerate(rows):
            for c, value in enumerate(row):
                grid.set(r, c, value)
        return grid

    def _check(self, r, c):
        if not (0 <= r < self.size and 0 <= c < self.size):
            raise IndexError(f"cell ({r}, {c}) is outside a {self.size}x{self.size} grid")

    def get(self, r, c):
        self._check(r, c)
        return int(self.cells[r, c])

    def set(self, r, c, value):
        self._check(r, c)
        if value < 0:
            raise ValueError(f"tile value must not be negative, got {value}")
        self.cells[r, c] = value

    def is_full(self):
        """true when no cell is empty"""
        return not (self.cells == 0).any()

    def occupied(self):
        return int(np.count_nonzero(self.cells))

    def max_tile(self):
        return int(self.cells.max())

    def copy(self):
        clone = Grid(self.size)
        clone.cells = self.cells.copy()
        return clone

    def snapshot(self):
        return self.cells.copy()

    def rows(self):
        return self.cells.tolist()

    def render(self):
        """fixed-width text table, one line per row"""
        lines = []
        for row in self.cells:
            fields = [f"[{int(value):4d}]" if value else "[    ]" for value in row]
            lines.append("\t".join(fields))
        return "\n".join(lines) + "\n"

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return np.array_equal(self.cells, other.cells)

    def __repr__(self):
        return f"Grid({self.rows()!r})"
