from dataclasses import dataclass

from .model import RevealedCell

Position = tuple[int, int]


@dataclass(frozen=True)
class GameEvent:
    pass


@dataclass(frozen=True)
class GameReset(GameEvent):
    rows: int
    cols: int
    mines: int


@dataclass(frozen=True)
class ClockStarted(GameEvent):
    pass


@dataclass(frozen=True)
class ClockStopped(GameEvent):
    elapsed: int


@dataclass(frozen=True)
class CellsRevealed(GameEvent):
    cells: tuple[RevealedCell, ...]


@dataclass(frozen=True)
class FlagChanged(GameEvent):
    row: int
    col: int
    flagged: bool
    flag_count: int


@dataclass(frozen=True)
class GameWon(GameEvent):
    """``cells``: the mines, to be shown as solved."""

    cells: tuple[Position, ...]


@dataclass(frozen=True)
class GameLost(GameEvent):
    """
    ``mine`` is the cell that went off, ``mines`` every mine on the board
    (revealed or not), ``wrong_flags`` flagged cells that are not mines.
    """

    mine: Position
    mines: tuple[Position, ...]
    wrong_flags: tuple[Position, ...]
