import random

from ..log import logger
from .errors import TooManyMines
from .grid import Grid


class MineLayout:
    """
    One-shot mine placement that never puts a mine on the safe cell
    """

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def place(self, grid: Grid, mine_count: int, safe_row: int, safe_col: int):
        if not 0 <= mine_count < grid.rows * grid.cols:
            raise TooManyMines(mine_count, grid.rows * grid.cols)
        # validates the safe cell
        grid.cell_at(safe_row, safe_col)

        for row, col in self._pick_positions(grid, mine_count, (safe_row, safe_col)):
            grid.cells[row][col].is_mine = True

        for cell in grid.all_cells():
            if cell.is_mine:
                continue
            cell.adjacent_mines = sum(
                1 for n in grid.neighbors_of(cell.row, cell.col) if n.is_mine
            )

        logger.debug(
            f"[minesweeper] placed {mine_count} mines on {grid.rows}x{grid.cols}, "
            f"safe cell ({safe_row}, {safe_col})"
        )

    def _pick_positions(
        self, grid: Grid, mine_count: int, exclude: tuple[int, int]
    ) -> set[tuple[int, int]]:
        picked: set[tuple[int, int]] = set()

        while len(picked) < mine_count:
            pos = (self.rng.randrange(grid.rows), self.rng.randrange(grid.cols))
            if pos == exclude or pos in picked:
                continue
            picked.add(pos)

        return picked
