from dataclasses import dataclass
from enum import Enum

from .errors import InvalidDimensions, TooManyMines


class GamePhase(Enum):
    NOT_STARTED = 0
    IN_PROGRESS = 1
    WON = 2
    LOST = 3

    @property
    def is_over(self) -> bool:
        return self in (GamePhase.WON, GamePhase.LOST)


class OpenResult(Enum):
    OPENED = 0
    DUP = 1
    FLAGGED = 2
    OVER = 3
    WIN = 4
    FAIL = 5


class MarkResult(Enum):
    MARKED = 0
    UNMARKED = 1
    OPENED = 2
    OVER = 3


class RevealKind(Enum):
    ALREADY_REVEALED = 0
    HIT_MINE = 1
    CLEARED = 2


@dataclass(frozen=True)
class GameSpec:
    rows: int
    cols: int
    mines: int

    def validate(self):
        if self.rows <= 0 or self.cols <= 0:
            raise InvalidDimensions(self.rows, self.cols)
        if not 0 <= self.mines < self.rows * self.cols:
            raise TooManyMines(self.mines, self.rows * self.cols)

    @property
    def safe_cells(self) -> int:
        return self.rows * self.cols - self.mines


PRESETS: dict[str, GameSpec] = {
    "beginner": GameSpec(9, 9, 10),
    "intermediate": GameSpec(16, 16, 40),
    "expert": GameSpec(16, 30, 99),
}


@dataclass
class Cell:
    row: int
    col: int
    is_mine: bool = False
    is_revealed: bool = False
    is_flagged: bool = False
    adjacent_mines: int = 0

    @property
    def position(self) -> tuple[int, int]:
        return self.row, self.col


@dataclass(frozen=True)
class RevealedCell:
    row: int
    col: int
    adjacent_mines: int


@dataclass(frozen=True)
class CellView:
    """
    What a collaborator is allowed to see of a cell.

    ``is_mine`` is None while the cell is covered and the game is running,
    ``adjacent_mines`` is None unless the cell is a revealed non-mine.
    """

    row: int
    col: int
    is_revealed: bool
    is_flagged: bool
    is_mine: bool | None = None
    adjacent_mines: int | None = None
