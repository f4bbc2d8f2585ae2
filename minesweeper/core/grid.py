from collections.abc import Iterator

from .errors import InvalidDimensions, OutOfBounds
from .model import Cell

NEIGHBORS = (
    (-1, -1),
    (0, -1),
    (1, -1),
    (-1, 0),
    (1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)


class Grid:
    """
    rows x cols container of cells, addressed as (row, col)
    """

    def __init__(self, rows: int, cols: int):
        if rows <= 0 or cols <= 0:
            raise InvalidDimensions(rows, cols)
        self.rows = rows
        self.cols = cols
        self.cells = [[Cell(r, c) for c in range(cols)] for r in range(rows)]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell_at(self, row: int, col: int) -> Cell:
        if not self.in_bounds(row, col):
            raise OutOfBounds(row, col)
        return self.cells[row][col]

    def neighbors_of(self, row: int, col: int) -> list[Cell]:
        if not self.in_bounds(row, col):
            raise OutOfBounds(row, col)
        return [
            self.cells[row + dr][col + dc]
            for dr, dc in NEIGHBORS
            if self.in_bounds(row + dr, col + dc)
        ]

    def all_cells(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row
