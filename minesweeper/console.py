import re
from collections.abc import Callable

from .core.errors import OutOfBounds
from .core.events import ClockStarted, GameEvent, GameLost, GameWon
from .core.game import MineSweeper
from .core.model import GameSpec, MarkResult, OpenResult
from .core.utils import find_positions, parse_position
from .log import logger

HELP = (
    "a1b2c3 -- open cells\n"
    "flag c4 -- flag / unflag cells\n"
    "board -- show the board\n"
    "new [level] -- start a new game\n"
    "quit -- leave"
)

OPEN_RE = re.compile(r"^([a-zA-Z][0-9]+)(\s*[a-zA-Z][0-9]+)*$")
FLAG_RE = re.compile(r"^(?:flag|f)((?:\s*[a-zA-Z][0-9]+)+)$", re.I)
NEW_RE = re.compile(r"^new(?:\s+(\S+))?$", re.I)

# rows are addressed by a single letter
MAX_ROWS = 26


def render_ascii(game: MineSweeper) -> str:
    """Text board with A/B/C row letters and 1-based columns."""
    cols = game.spec.cols
    header = "   " + " ".join(f"{c + 1:>2}" for c in range(cols))
    lines = [header]

    for r, row in enumerate(game.cell_views()):
        marks = []
        for t in row:
            if t.is_revealed:
                if t.is_mine:
                    marks.append("X")
                elif t.adjacent_mines:
                    marks.append(str(t.adjacent_mines))
                else:
                    marks.append(".")
            elif t.is_flagged:
                marks.append("x" if t.is_mine is False else "F")
            elif t.is_mine:
                marks.append("*")
            else:
                marks.append("#")
        lines.append(f"{chr(r + 65):>2} " + " ".join(f"{m:>2}" for m in marks))

    lines.append(
        f"mines {game.remaining_mine_estimate():03d}  time {game.elapsed_seconds():03d}"
    )
    return "\n".join(lines)


class ConsoleSession:
    """
    Line-based front end: each input line is one command, each reply a
    list of lines to print.
    """

    def __init__(self, game: MineSweeper, levels: dict[str, GameSpec]):
        self.game = game
        self.levels = levels
        self.finished = False
        self._notes: list[str] = []
        game.add_listener(self._on_event)

    def _on_event(self, event: GameEvent):
        if isinstance(event, ClockStarted):
            self._notes.append("clock started")
        elif isinstance(event, GameLost):
            self._notes.append(f"{len(event.mines)} mines, {len(event.wrong_flags)} wrong flags")
        elif isinstance(event, GameWon):
            self._notes.append(f"all {len(event.cells)} mines found")

    def handle(self, text: str) -> list[str]:
        text = text.strip()
        if not text:
            return []

        if text.lower() in ("quit", "exit", "q"):
            self.finished = True
            return ["bye"]
        if text.lower() in ("help", "?"):
            return [HELP]
        if text.lower() == "board":
            return [render_ascii(self.game)]

        if m := NEW_RE.match(text):
            return self._new(m.group(1))
        if m := FLAG_RE.match(text):
            return self._mark(find_positions(m.group(1)))
        if OPEN_RE.match(text):
            return self._open(find_positions(text))

        return [f"unknown command {text!r}, type help"]

    def _new(self, level: str | None) -> list[str]:
        if level and level not in self.levels:
            return [f"levels: {list(self.levels)}"]

        spec = self.levels[level] if level else self.game.spec
        if spec.rows > MAX_ROWS:
            return [f"{level} has {spec.rows} rows, the terminal board allows {MAX_ROWS}"]
        self.game.reset(spec)
        return [f"new game {spec.rows}x{spec.cols}, {spec.mines} mines", render_ascii(self.game)]

    def _open(self, positions: list[str]) -> list[str]:
        msgs = []

        for pos in positions:
            xy = parse_position(pos)
            if not xy:
                msgs.append(f"position {pos} is invalid")
                continue

            try:
                res = self.game.open(*xy)
            except OutOfBounds:
                logger.warning(f"[minesweeper] open {pos} out of bounds")
                msgs.append(f"{pos} is off the board")
                continue

            if res == OpenResult.FLAGGED:
                msgs.append(f"{pos} is flagged, unflag it first")
            elif res == OpenResult.OVER:
                msgs.append("game is over, type new")
                break
            elif res == OpenResult.FAIL:
                msgs.append("boom! you hit a mine")
            elif res == OpenResult.WIN:
                msgs.append("you win!")

            if self.game.is_over:
                break

        return self._flush(msgs)

    def _mark(self, positions: list[str]) -> list[str]:
        msgs = []

        for pos in positions:
            xy = parse_position(pos)
            if not xy:
                msgs.append(f"{pos} is invalid")
                continue

            try:
                res = self.game.mark(*xy)
            except OutOfBounds:
                logger.warning(f"[minesweeper] flag {pos} out of bounds")
                msgs.append(f"{pos} is off the board")
                continue

            if res == MarkResult.OPENED:
                msgs.append(f"{pos} is already open, cannot flag")
            elif res == MarkResult.OVER:
                msgs.append("game is over, type new")
                break

        return self._flush(msgs)

    def _flush(self, msgs: list[str]) -> list[str]:
        out = self._notes + msgs + [render_ascii(self.game)]
        self._notes = []
        return out

    def run(
        self,
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ):
        write(HELP)
        write(render_ascii(self.game))
        while not self.finished:
            try:
                line = read("> ")
            except EOFError:
                break
            for out in self.handle(line):
                write(out)
