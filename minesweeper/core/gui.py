"""
Desktop GUI for Minesweeper using tkinter
Left click opens a tile, right click flags it, the face restarts.
"""

import tkinter as tk
from tkinter import messagebox

from PIL import ImageTk

from ..log import logger
from .errors import OutOfBounds
from .events import ClockStarted, ClockStopped, GameEvent, GameLost, GameReset, GameWon
from .game import MineSweeper
from .renderer import MineSweeperRenderer
from .skin import SkinManager


class MineSweeperGUI:
    """
    tkinter window driving a MineSweeper. All drawing goes through the
    renderer; the window only maps pixels to tiles and reacts to events.
    """

    def __init__(
        self,
        game: MineSweeper,
        skin_mgr: SkinManager,
        skin_name: str = "default",
        scale: int = 2,
        show_labels: bool = False,
    ):
        self.game = game
        self.skin_mgr = skin_mgr
        self.skin_name = skin_name
        self.scale = scale
        self.show_labels = show_labels

        self.root = tk.Tk()
        self.root.title("Minesweeper")
        self.root.resizable(False, False)

        self.canvas = tk.Canvas(self.root, bg="gray", highlightthickness=0)
        self.canvas.pack()

        self.canvas.bind("<Button-1>", self._on_left_click)
        self.canvas.bind("<Button-3>", self._on_right_click)
        # macOS reports the right button as Button-2
        self.canvas.bind("<Button-2>", self._on_right_click)

        self.current_photo: ImageTk.PhotoImage | None = None
        self._tick_job: str | None = None
        self._pending_message: tuple[str, str] | None = None

        self._make_renderer()
        game.add_listener(self._on_event)
        self._update_display()

    def _make_renderer(self):
        skin = self.skin_mgr.load(self.skin_name, self.game.spec)
        self.renderer = MineSweeperRenderer(
            skin=skin,
            scale=self.scale,
            show_labels=self.show_labels,
        )

    # ========= 事件 =========

    def _on_event(self, event: GameEvent):
        if isinstance(event, GameReset):
            self._stop_tick()
            self._make_renderer()
        elif isinstance(event, ClockStarted):
            self._start_tick()
        elif isinstance(event, ClockStopped):
            self._stop_tick()
        elif isinstance(event, GameWon):
            self._pending_message = ("Game over", "You win!")
        elif isinstance(event, GameLost):
            self._pending_message = ("Game over", "Boom! You hit a mine.")

    def _start_tick(self):
        if self._tick_job is None:
            self._tick_job = self.root.after(1000, self._tick)

    def _stop_tick(self):
        if self._tick_job is not None:
            self.root.after_cancel(self._tick_job)
            self._tick_job = None

    def _tick(self):
        self._tick_job = None
        self._update_display()
        if self.game.is_gaming:
            self._start_tick()

    # ========= 绘制 =========

    def _update_display(self):
        img = self.renderer.render_image(self.game)
        self.current_photo = ImageTk.PhotoImage(img)

        self.canvas.config(width=img.width, height=img.height)
        self.canvas.delete("all")
        self.canvas.create_image(0, 0, anchor=tk.NW, image=self.current_photo)

    def _after_command(self):
        self._update_display()
        if self._pending_message:
            title, text = self._pending_message
            self._pending_message = None
            messagebox.showinfo(title, text)

    # ========= 输入 =========

    def _on_face(self, x: int, y: int) -> bool:
        x0, y0, x1, y1 = self.renderer.face_box()
        return x0 <= x <= x1 and y0 <= y <= y1

    def _tile(self, x: int, y: int) -> tuple[int, int] | None:
        return self.renderer.tile_at(x, y, self.game.spec.rows, self.game.spec.cols)

    def _on_left_click(self, event):
        if self._on_face(event.x, event.y):
            self.game.reset()
            self._after_command()
            return

        pos = self._tile(event.x, event.y)
        if pos is None:
            return

        try:
            self.game.open(*pos)
        except OutOfBounds:
            logger.warning(f"[minesweeper] click outside the board at {pos}")
            return
        self._after_command()

    def _on_right_click(self, event):
        pos = self._tile(event.x, event.y)
        if pos is None:
            return

        try:
            self.game.mark(*pos)
        except OutOfBounds:
            logger.warning(f"[minesweeper] click outside the board at {pos}")
            return
        self._after_command()

    def run(self):
        self.root.mainloop()


def start_gui(
    game: MineSweeper,
    skin_mgr: SkinManager,
    skin_name: str = "default",
    scale: int = 2,
    show_labels: bool = False,
):
    """
    Open the window for ``game`` and block until it is closed.
    """
    gui = MineSweeperGUI(game, skin_mgr, skin_name, scale, show_labels)
    gui.run()
