from .core.errors import (
    CellAlreadyRevealed,
    InvalidDimensions,
    MinesweeperError,
    OutOfBounds,
    TooManyMines,
)
from .core.game import MineSweeper
from .core.model import PRESETS, GamePhase, GameSpec, MarkResult, OpenResult

__version__ = "1.0.0"

__all__ = [
    "CellAlreadyRevealed",
    "GamePhase",
    "GameSpec",
    "InvalidDimensions",
    "MarkResult",
    "MineSweeper",
    "MinesweeperError",
    "OpenResult",
    "OutOfBounds",
    "PRESETS",
    "TooManyMines",
]
