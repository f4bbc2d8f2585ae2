import os
import re
import sys

POSITION_RE = re.compile(r"[a-zA-Z][0-9]+")


def detect_desktop() -> bool:
    """
    Whether a GUI (tkinter) can be opened
    - Windows / macOS: just try tkinter
    - Linux: check DISPLAY / WAYLAND first, then try tkinter
    """

    if sys.platform.startswith("linux"):
        if not (os.getenv("DISPLAY") or os.getenv("WAYLAND_DISPLAY")):
            return False

    try:
        import tkinter
    except ImportError:
        return False

    try:
        root = tkinter.Tk()
        root.withdraw()
        root.update()
        root.destroy()
        return True
    except tkinter.TclError:
        return False


def parse_position(pos: str) -> tuple[int, int] | None:
    """
    'A1' / 'b12' -> (row, col), zero based
    """
    m = re.match(r"^([a-z])(\d+)$", pos, re.I)
    if not m:
        return None
    x = ord(m.group(1).lower()) - ord("a")
    y = int(m.group(2)) - 1
    return x, y


def find_positions(text: str) -> list[str]:
    return POSITION_RE.findall(text)


def position_label(row: int, col: int) -> str:
    """(0, 0) -> 'A1'"""
    return chr(row + 65) + str(col + 1)
