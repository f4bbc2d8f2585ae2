# game.py
import threading
import time
from collections.abc import Callable

from ..log import logger
from .errors import CellAlreadyRevealed
from .events import (
    CellsRevealed,
    ClockStarted,
    ClockStopped,
    FlagChanged,
    GameEvent,
    GameLost,
    GameReset,
    GameWon,
)
from .flags import FlagTracker
from .grid import Grid
from .layout import MineLayout
from .model import (
    CellView,
    GamePhase,
    GameSpec,
    MarkResult,
    OpenResult,
    RevealKind,
)
from .reveal import RevealEngine

Listener = Callable[[GameEvent], None]


class MineSweeper:
    """
    Minesweeper rules and state. Knows nothing about how it is drawn.

    Commands (``open``, ``mark``, ``reset``) are serialized by a lock and
    run to completion; listeners are called afterwards, outside the lock,
    with the events the command produced.
    """

    def __init__(
        self,
        spec: GameSpec,
        layout: MineLayout | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        spec.validate()
        self.layout = layout or MineLayout()
        self._clock = clock

        self._listeners: list[Listener] = []
        self._lock = threading.Lock()

        self._install(spec)

    def _install(self, spec: GameSpec):
        self.spec = spec
        self.phase = GamePhase.NOT_STARTED
        self.exploded: tuple[int, int] | None = None
        self._grid = Grid(spec.rows, spec.cols)
        self._reveal = RevealEngine(self._grid)
        self._flags = FlagTracker()
        self._started_at: float | None = None
        self._stopped_at: float | None = None

    # ========= 状态 =========

    @property
    def is_over(self) -> bool:
        return self.phase.is_over

    @property
    def is_gaming(self) -> bool:
        return self.phase == GamePhase.IN_PROGRESS

    @property
    def revealed_count(self) -> int:
        return self._reveal.revealed_count

    @property
    def flags_placed(self) -> int:
        return self._flags.flags_placed

    def remaining_mine_estimate(self) -> int:
        return max(0, self.spec.mines - self._flags.flags_placed)

    def elapsed_seconds(self) -> int:
        if self._started_at is None:
            return 0
        end = self._stopped_at if self._stopped_at is not None else self._clock()
        return int(end - self._started_at)

    def cell_view(self, row: int, col: int) -> CellView:
        cell = self._grid.cell_at(row, col)
        show_mine = cell.is_revealed or self.is_over
        return CellView(
            row=row,
            col=col,
            is_revealed=cell.is_revealed,
            is_flagged=cell.is_flagged,
            is_mine=cell.is_mine if show_mine else None,
            adjacent_mines=(
                cell.adjacent_mines if cell.is_revealed and not cell.is_mine else None
            ),
        )

    def cell_views(self) -> list[list[CellView]]:
        return [
            [self.cell_view(r, c) for c in range(self.spec.cols)]
            for r in range(self.spec.rows)
        ]

    # ========= 监听 =========

    def add_listener(self, cb: Listener):
        self._listeners.append(cb)

    def remove_listener(self, cb: Listener):
        if cb in self._listeners:
            self._listeners.remove(cb)

    def _notify(self, events: list[GameEvent]):
        for event in events:
            for cb in list(self._listeners):
                cb(event)

    # ========= 命令 =========

    def reset(self, spec: GameSpec | None = None):
        """
        Start over, optionally with a new board size. An invalid spec
        raises before anything is touched.
        """
        spec = spec or self.spec
        spec.validate()

        with self._lock:
            self._install(spec)
            logger.info(
                f"[minesweeper] new game {spec.rows}x{spec.cols}, {spec.mines} mines"
            )
            events: list[GameEvent] = [GameReset(spec.rows, spec.cols, spec.mines)]

        self._notify(events)

    def open(self, x: int, y: int) -> OpenResult:
        events: list[GameEvent] = []

        with self._lock:
            result = self._open(x, y, events)

        self._notify(events)
        return result

    def mark(self, x: int, y: int) -> MarkResult:
        events: list[GameEvent] = []

        with self._lock:
            result = self._mark(x, y, events)

        self._notify(events)
        return result

    # ========= 内部实现 =========

    def _open(self, x: int, y: int, events: list[GameEvent]) -> OpenResult:
        if self.is_over:
            return OpenResult.OVER

        tile = self._grid.cell_at(x, y)
        if tile.is_flagged:
            return OpenResult.FLAGGED

        # 首次点击才布雷
        if self.phase == GamePhase.NOT_STARTED:
            self.layout.place(self._grid, self.spec.mines, x, y)
            self.phase = GamePhase.IN_PROGRESS
            self._started_at = self._clock()
            events.append(ClockStarted())

        outcome = self._reveal.reveal(x, y)

        if outcome.kind == RevealKind.ALREADY_REVEALED:
            return OpenResult.DUP

        events.append(CellsRevealed(tuple(outcome.cells)))

        if outcome.kind == RevealKind.HIT_MINE:
            self.phase = GamePhase.LOST
            self.exploded = (x, y)
            events.append(
                GameLost(
                    mine=(x, y),
                    mines=self._mine_positions(),
                    wrong_flags=self._wrong_flags(),
                )
            )
            events.append(self._stop_clock())
            logger.info(f"[minesweeper] mine hit at ({x}, {y})")
            return OpenResult.FAIL

        if self._check_win():
            self.phase = GamePhase.WON
            events.append(GameWon(self._mine_positions()))
            events.append(self._stop_clock())
            logger.info(
                f"[minesweeper] cleared in {self.elapsed_seconds()}s"
            )
            return OpenResult.WIN

        return OpenResult.OPENED

    def _mark(self, x: int, y: int, events: list[GameEvent]) -> MarkResult:
        if self.is_over:
            return MarkResult.OVER

        tile = self._grid.cell_at(x, y)
        try:
            flagged = self._flags.toggle(tile)
        except CellAlreadyRevealed:
            return MarkResult.OPENED

        events.append(FlagChanged(x, y, flagged, self._flags.flags_placed))
        return MarkResult.MARKED if flagged else MarkResult.UNMARKED

    def _stop_clock(self) -> ClockStopped:
        self._stopped_at = self._clock()
        return ClockStopped(self.elapsed_seconds())

    def _check_win(self) -> bool:
        return self._reveal.revealed_count >= self.spec.safe_cells

    def _mine_positions(self) -> tuple[tuple[int, int], ...]:
        return tuple(t.position for t in self._grid.all_cells() if t.is_mine)

    def _wrong_flags(self) -> tuple[tuple[int, int], ...]:
        return tuple(
            t.position for t in self._grid.all_cells() if t.is_flagged and not t.is_mine
        )
