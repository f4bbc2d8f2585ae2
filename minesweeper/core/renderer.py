# renderer.py
from io import BytesIO

from PIL import ImageDraw, ImageFont
from PIL.Image import Image as IMG
from PIL.Image import Resampling

from .game import MineSweeper
from .model import CellView, GamePhase
from .skin import Skin
from .utils import position_label

BOARD_X = 12
BOARD_Y = 55
FACE_Y = 15


class MineSweeperRenderer:
    """
    Draws a game to PNG through the game's public queries only.
    """

    def __init__(
        self,
        skin: Skin,
        font_path: str | None = None,
        scale: int = 4,
        show_labels: bool = True,
    ):
        self.scale = scale
        self.skin = skin
        self.show_labels = show_labels
        if font_path:
            self.font = ImageFont.truetype(
                font=font_path,
                size=7 * self.scale,
                encoding="utf-8",
            )
        else:
            self.font = ImageFont.load_default(size=7 * self.scale)

    @property
    def tile_size(self) -> int:
        return self.skin.numbers[0].width * self.scale

    @property
    def board_offset(self) -> tuple[int, int]:
        return BOARD_X * self.scale, BOARD_Y * self.scale

    def face_box(self) -> tuple[int, int, int, int]:
        face = self.skin.faces[0]
        x = (self.skin.background.width - face.width) // 2
        return (
            x * self.scale,
            FACE_Y * self.scale,
            (x + face.width) * self.scale,
            (FACE_Y + face.height) * self.scale,
        )

    def tile_at(self, x: int, y: int, rows: int, cols: int) -> tuple[int, int] | None:
        """Map a pixel on the rendered image back to (row, col)."""
        ox, oy = self.board_offset
        tile_x, tile_y = x - ox, y - oy
        if tile_x < 0 or tile_y < 0:
            return None

        row, col = tile_y // self.tile_size, tile_x // self.tile_size
        if 0 <= row < rows and 0 <= col < cols:
            return row, col
        return None

    # ========= 对外唯一入口 =========

    def render(self, game: MineSweeper) -> bytes:
        output = BytesIO()
        self.render_image(game).save(output, format="PNG")
        return output.getvalue()

    def render_image(self, game: MineSweeper) -> IMG:
        cells = game.cell_views()
        bg = self.skin.background.copy()

        self._draw_face(bg, game.phase)
        self._draw_counter(bg, game.remaining_mine_estimate())
        self._draw_time(bg, game.elapsed_seconds())
        self._draw_tiles(bg, cells, game.phase)

        bg = bg.resize(
            (bg.width * self.scale, bg.height * self.scale),
            Resampling.NEAREST,
        )

        if self.show_labels and not game.is_over:
            self._draw_label(bg, cells)

        return bg

    # ========= 具体绘制 =========

    def _draw_face(self, bg: IMG, phase: GamePhase):
        if phase == GamePhase.WON:
            num = 3
        elif phase == GamePhase.LOST:
            num = 2
        else:
            num = 0

        face = self.skin.faces[num]
        x = (bg.width - face.width) // 2
        bg.paste(face, (x, FACE_Y))

    def _draw_counter(self, bg: IMG, mine_left: int):
        nums = f"{mine_left:03d}"[-3:]

        for i, ch in enumerate(nums):
            img = self.skin.digits[int(ch)]
            x = 18 + i * (img.width + 2)
            y = 17
            bg.paste(img, (x, y))

    def _draw_time(self, bg: IMG, passed: int):
        nums = f"{passed:03d}"[-3:]

        for i, ch in enumerate(reversed(nums)):
            img = self.skin.digits[int(ch)]
            x = bg.width - 16 - (i + 1) * (img.width + 2)
            y = 17
            bg.paste(img, (x, y))

    def _tile_image(self, t: CellView, phase: GamePhase) -> IMG:
        icons = self.skin.icons

        if t.is_revealed:
            if t.is_mine:
                return icons[5]
            return self.skin.numbers[t.adjacent_mines or 0]

        if phase == GamePhase.LOST:
            if t.is_flagged and not t.is_mine:
                return icons[4]
            if t.is_mine and not t.is_flagged:
                return icons[2]
        elif phase == GamePhase.WON and t.is_mine:
            return icons[3]

        return icons[3 if t.is_flagged else 0]

    def _draw_tiles(self, bg: IMG, cells: list[list[CellView]], phase: GamePhase):
        for i, row in enumerate(cells):
            for j, t in enumerate(row):
                img = self._tile_image(t, phase)
                x = BOARD_X + img.width * j
                y = BOARD_Y + img.height * i
                bg.paste(img, (x, y))

    def _draw_label(self, bg: IMG, cells: list[list[CellView]]):
        tile_w = self.skin.numbers[0].width * self.scale
        tile_h = self.skin.numbers[0].height * self.scale

        dx = (BOARD_X + 0.5) * self.scale
        dy = (BOARD_Y - 0.5) * self.scale

        draw = ImageDraw.Draw(bg)

        for i, row in enumerate(cells):
            for j, t in enumerate(row):
                if t.is_revealed or t.is_flagged:
                    continue

                text = position_label(i, j)
                _, _, w, h = self.font.getbbox(text)

                x = dx + tile_w * j + (tile_w - w) / 2
                y = dy + tile_h * i + (tile_h - h) / 2

                draw.text((x, y), text, font=self.font, fill="black")
