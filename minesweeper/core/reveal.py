from collections import deque
from dataclasses import dataclass, field

from .grid import Grid
from .model import Cell, RevealedCell, RevealKind


@dataclass
class RevealOutcome:
    kind: RevealKind
    cells: list[RevealedCell] = field(default_factory=list)


class RevealEngine:
    """
    Opens cells on a grid and flood-fills zero regions breadth first.

    Flag protection of the target cell is left to the caller.
    """

    def __init__(self, grid: Grid):
        self.grid = grid
        self.revealed_count = 0

    def reveal(self, row: int, col: int) -> RevealOutcome:
        cell = self.grid.cell_at(row, col)

        if cell.is_revealed:
            return RevealOutcome(RevealKind.ALREADY_REVEALED)

        self._open(cell)

        if cell.is_mine:
            return RevealOutcome(RevealKind.HIT_MINE, [self._snapshot(cell)])

        opened = [cell]
        if cell.adjacent_mines == 0:
            opened.extend(self._spread(cell))

        return RevealOutcome(RevealKind.CLEARED, [self._snapshot(c) for c in opened])

    def _open(self, cell: Cell):
        cell.is_revealed = True
        self.revealed_count += 1

    def _spread(self, start: Cell) -> list[Cell]:
        opened: list[Cell] = []
        queue = deque([start])
        visited: set[tuple[int, int]] = set()

        while queue:
            cell = queue.popleft()
            if cell.position in visited:
                continue
            visited.add(cell.position)

            for n in self.grid.neighbors_of(cell.row, cell.col):
                if n.is_revealed or n.is_flagged or n.is_mine:
                    continue

                self._open(n)
                opened.append(n)

                if n.adjacent_mines == 0:
                    queue.append(n)

        return opened

    @staticmethod
    def _snapshot(cell: Cell) -> RevealedCell:
        return RevealedCell(cell.row, cell.col, cell.adjacent_mines)
