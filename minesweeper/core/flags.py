from .errors import CellAlreadyRevealed
from .model import Cell


class FlagTracker:
    def __init__(self):
        self.flags_placed = 0

    def toggle(self, cell: Cell) -> bool:
        """Flip the flag on a covered cell and return the new state. No cap on the count."""
        if cell.is_revealed:
            raise CellAlreadyRevealed(cell.row, cell.col)

        cell.is_flagged = not cell.is_flagged
        self.flags_placed += 1 if cell.is_flagged else -1
        return cell.is_flagged
