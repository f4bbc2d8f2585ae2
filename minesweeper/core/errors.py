class MinesweeperError(ValueError):
    """Base class for every error the engine raises."""


class InvalidDimensions(MinesweeperError):
    def __init__(self, rows: int, cols: int):
        super().__init__(f"board must be at least 1x1, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols


class TooManyMines(MinesweeperError):
    def __init__(self, mines: int, total: int):
        super().__init__(f"mine count must be in [0, {total}), got {mines}")
        self.mines = mines
        self.total = total


class OutOfBounds(MinesweeperError, IndexError):
    def __init__(self, row: int, col: int):
        super().__init__(f"cell ({row}, {col}) is outside the board")
        self.row = row
        self.col = col


class CellAlreadyRevealed(MinesweeperError):
    def __init__(self, row: int, col: int):
        super().__init__(f"cell ({row}, {col}) is already revealed")
        self.row = row
        self.col = col
