from dataclasses import dataclass
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont
from PIL.Image import Image as IMG

from ..log import logger
from .model import GameSpec

DEFAULT_SKIN = "default"

# sprite sheet layout shared by every skin: 144 x 122
SHEET_SIZE = (144, 122)
NUMBER_COLORS = [
    None,
    (0, 0, 255),
    (0, 128, 0),
    (255, 0, 0),
    (0, 0, 128),
    (128, 0, 0),
    (0, 128, 128),
    (0, 0, 0),
    (128, 128, 128),
]


@dataclass
class Skin:
    numbers: list[IMG]
    icons: list[IMG]
    digits: list[IMG]
    faces: list[IMG]
    background: IMG


class SkinManager:
    def __init__(self, skins_dir: Path):
        self.skins_dir = skins_dir

        self._skin_names: list[str] = []
        self._skin_cache: dict[tuple[str, int, int], Skin] = {}

    def initialize(self):
        """Skin discovery; the built-in skin is always available."""
        self._skin_names.clear()
        self._skin_names.extend(self._scan_skins())
        if DEFAULT_SKIN not in self._skin_names:
            self._skin_names.insert(0, DEFAULT_SKIN)

    def _scan_skins(self) -> list[str]:
        if not self.skins_dir.exists():
            return []
        return sorted(
            f.stem
            for f in self.skins_dir.iterdir()
            if f.is_file() and f.suffix == ".bmp"
        )

    @property
    def skin_list(self) -> list[str]:
        return self._skin_names

    def load(self, skin_name: str, spec: GameSpec) -> Skin:
        """Load with cache, keyed by board size since the background depends on it."""
        key = (skin_name, spec.rows, spec.cols)
        if key in self._skin_cache:
            return self._skin_cache[key]

        skin = self._load_skin_impl(skin_name, spec)
        self._skin_cache[key] = skin
        return skin

    def _open_sheet(self, skin_name: str) -> IMG:
        path = self.skins_dir / f"{skin_name}.bmp"
        if path.is_file():
            return Image.open(path).convert("RGBA")
        if skin_name != DEFAULT_SKIN:
            logger.warning(f"[minesweeper] skin {skin_name!r} not found, using default")
        return draw_default_sheet()

    def _load_skin_impl(self, skin_name: str, spec: GameSpec) -> Skin:
        image = self._open_sheet(skin_name)

        def cut(box):
            return image.crop(box)

        numbers = [cut((i * 16, 0, i * 16 + 16, 16)) for i in range(9)]
        icons = [cut((i * 16, 16, i * 16 + 16, 32)) for i in range(8)]
        digits = [cut((i * 12, 33, i * 12 + 11, 54)) for i in range(11)]
        faces = [cut((i * 27, 55, i * 27 + 26, 81)) for i in range(5)]

        background = self._build_background(image, spec)

        return Skin(numbers, icons, digits, faces, background)

    def _build_background(self, image: IMG, spec: GameSpec) -> IMG:
        """Stretch the frame pieces of the sheet around a rows x cols board."""
        w, h = spec.cols, spec.rows
        background = Image.new("RGBA", (w * 16 + 24, h * 16 + 66), "silver")

        blocks = [
            ((0, 82, 12, 93), (0, 0, 12, 11)),
            ((13, 82, 14, 93), (12, 0, 12 + w * 16, 11)),
            ((15, 82, 27, 93), (12 + w * 16, 0, 24 + w * 16, 11)),
            ((0, 94, 12, 95), (0, 11, 12, 44)),
            ((15, 94, 27, 95), (12 + w * 16, 11, 24 + w * 16, 44)),
            ((0, 96, 12, 107), (0, 44, 12, 55)),
            ((13, 96, 14, 107), (12, 44, 12 + w * 16, 55)),
            ((15, 96, 27, 107), (12 + w * 16, 44, 24 + w * 16, 55)),
            ((0, 108, 12, 109), (0, 55, 12, 55 + h * 16)),
            ((15, 108, 27, 109), (12 + w * 16, 55, 24 + w * 16, 55 + h * 16)),
            ((0, 110, 12, 121), (0, 55 + h * 16, 12, 66 + h * 16)),
            ((13, 110, 14, 121), (12, 55 + h * 16, 12 + w * 16, 66 + h * 16)),
            ((15, 110, 27, 121), (12 + w * 16, 55 + h * 16, 24 + w * 16, 66 + h * 16)),
            ((28, 82, 69, 107), (16, 15, 57, 40)),
            ((28, 82, 69, 107), (w * 16 - 33, 15, 8 + w * 16, 40)),
        ]

        for src, dst in blocks:
            part = image.crop(src).resize((dst[2] - dst[0], dst[3] - dst[1]))
            background.paste(part, dst)

        return background


# ========= 内置皮肤 =========


def _centered_text(draw: ImageDraw.ImageDraw, box, text: str, font, fill):
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    x = box[0] + (box[2] - box[0] - (right - left)) / 2 - left
    y = box[1] + (box[3] - box[1] - (bottom - top)) / 2 - top
    draw.text((x, y), text, font=font, fill=fill)


def _raised(draw: ImageDraw.ImageDraw, box):
    x0, y0, x1, y1 = box
    draw.rectangle((x0, y0, x1 - 1, y1 - 1), fill="silver")
    draw.line((x0, y0, x1 - 1, y0), fill="white", width=2)
    draw.line((x0, y0, x0, y1 - 1), fill="white", width=2)
    draw.line((x0, y1 - 1, x1 - 1, y1 - 1), fill="gray", width=2)
    draw.line((x1 - 1, y0, x1 - 1, y1 - 1), fill="gray", width=2)


def _sunken(draw: ImageDraw.ImageDraw, box, fill="silver"):
    x0, y0, x1, y1 = box
    draw.rectangle((x0, y0, x1 - 1, y1 - 1), fill=fill, outline="gray")


def _mine(draw: ImageDraw.ImageDraw, box):
    x0, y0 = box[0], box[1]
    draw.ellipse((x0 + 4, y0 + 4, x0 + 11, y0 + 11), fill="black")
    draw.line((x0 + 7, y0 + 2, x0 + 7, y0 + 13), fill="black")
    draw.line((x0 + 2, y0 + 7, x0 + 13, y0 + 7), fill="black")
    draw.point((x0 + 6, y0 + 6), fill="white")


def _flag(draw: ImageDraw.ImageDraw, box):
    x0, y0 = box[0], box[1]
    draw.polygon([(x0 + 4, y0 + 6), (x0 + 9, y0 + 3), (x0 + 9, y0 + 8)], fill="red")
    draw.line((x0 + 9, y0 + 3, x0 + 9, y0 + 12), fill="black")
    draw.rectangle((x0 + 5, y0 + 11, x0 + 12, y0 + 12), fill="black")


def _face(draw: ImageDraw.ImageDraw, box, mood: str):
    x0, y0, x1, y1 = box
    _raised(draw, box)
    draw.ellipse((x0 + 4, y0 + 4, x1 - 5, y1 - 5), fill="yellow", outline="black")
    cx = (x0 + x1) // 2
    if mood == "dead":
        for ex in (cx - 5, cx + 3):
            draw.line((ex - 1, y0 + 9, ex + 1, y0 + 11), fill="black")
            draw.line((ex - 1, y0 + 11, ex + 1, y0 + 9), fill="black")
        draw.arc((cx - 5, y0 + 15, cx + 5, y0 + 21), 200, 340, fill="black")
        return
    if mood == "cool":
        draw.rectangle((cx - 7, y0 + 9, cx + 7, y0 + 11), fill="black")
    else:
        draw.point((cx - 3, y0 + 10), fill="black")
        draw.point((cx + 3, y0 + 10), fill="black")
    if mood == "wow":
        draw.ellipse((cx - 2, y0 + 14, cx + 2, y0 + 18), outline="black")
    else:
        draw.arc((cx - 5, y0 + 11, cx + 5, y0 + 18), 20, 160, fill="black")


def draw_default_sheet() -> IMG:
    """
    Draw the built-in sprite sheet, same layout as the .bmp skins:

    - y 0..16   numbers 0-8, 16px each
    - y 16..32  icons: covered, ?, mine, flag, wrong flag, exploded, pressed ?, blank
    - y 33..54  counter digits 0-9 and '-', 11px wide on a 12px pitch
    - y 55..81  faces: smile, pressed, dead, cool, wow; 26px on a 27px pitch
    - y 82..121 frame pieces and the counter well
    """
    sheet = Image.new("RGBA", SHEET_SIZE, (0, 0, 0, 0))
    draw = ImageDraw.Draw(sheet)
    tile_font = ImageFont.load_default(size=12)
    digit_font = ImageFont.load_default(size=18)

    for i in range(9):
        box = (i * 16, 0, i * 16 + 16, 16)
        _sunken(draw, box)
        if i:
            _centered_text(draw, box, str(i), tile_font, NUMBER_COLORS[i])

    icon_boxes = [(i * 16, 16, i * 16 + 16, 32) for i in range(8)]
    _raised(draw, icon_boxes[0])
    _raised(draw, icon_boxes[1])
    _centered_text(draw, icon_boxes[1], "?", tile_font, "black")
    _sunken(draw, icon_boxes[2])
    _mine(draw, icon_boxes[2])
    _raised(draw, icon_boxes[3])
    _flag(draw, icon_boxes[3])
    _sunken(draw, icon_boxes[4])
    _mine(draw, icon_boxes[4])
    x0, y0 = icon_boxes[4][0], icon_boxes[4][1]
    draw.line((x0 + 2, y0 + 2, x0 + 13, y0 + 13), fill="red", width=2)
    draw.line((x0 + 2, y0 + 13, x0 + 13, y0 + 2), fill="red", width=2)
    _sunken(draw, icon_boxes[5], fill="red")
    _mine(draw, icon_boxes[5])
    _sunken(draw, icon_boxes[6])
    _centered_text(draw, icon_boxes[6], "?", tile_font, "black")
    _sunken(draw, icon_boxes[7])

    for i, ch in enumerate("0123456789-"):
        box = (i * 12, 33, i * 12 + 11, 54)
        draw.rectangle((box[0], box[1], box[2] - 1, box[3] - 1), fill="black")
        _centered_text(draw, box, ch, digit_font, "red")

    for i, mood in enumerate(["smile", "pressed", "dead", "cool", "wow"]):
        _face(draw, (i * 27, 55, i * 27 + 26, 81), mood)

    # frame: light outer edge, silver body, counter well
    draw.rectangle((0, 82, 27, 121), fill="silver")
    draw.line((0, 82, 27, 82), fill="white", width=2)
    draw.line((0, 82, 0, 121), fill="white", width=2)
    draw.line((0, 121, 27, 121), fill="gray", width=2)
    draw.line((27, 82, 27, 121), fill="gray", width=2)
    draw.rectangle((28, 82, 68, 106), fill="black", outline="gray")

    return sheet
