from io import BytesIO

import pytest
from PIL import Image

from minesweeper.core.model import GameSpec
from minesweeper.core.renderer import BOARD_X, BOARD_Y, FACE_Y, MineSweeperRenderer
from minesweeper.core.skin import DEFAULT_SKIN, SHEET_SIZE, SkinManager, draw_default_sheet


@pytest.fixture
def skin_mgr(tmp_path):
    mgr = SkinManager(tmp_path)
    mgr.initialize()
    return mgr


def tile(img, row, col):
    return img.crop((BOARD_X + col * 16, BOARD_Y + row * 16, BOARD_X + col * 16 + 16, BOARD_Y + row * 16 + 16))


def same(a, b) -> bool:
    return a.size == b.size and a.convert("RGBA").tobytes() == b.convert("RGBA").tobytes()


class TestSkinManager:
    def test_default_always_listed(self, skin_mgr):
        assert skin_mgr.skin_list == [DEFAULT_SKIN]

    def test_discovers_bmp_sheets(self, tmp_path):
        draw_default_sheet().convert("RGB").save(tmp_path / "classic.bmp")
        (tmp_path / "notes.txt").write_text("not a skin")

        mgr = SkinManager(tmp_path)
        mgr.initialize()

        assert mgr.skin_list == [DEFAULT_SKIN, "classic"]
        skin = mgr.load("classic", GameSpec(9, 9, 10))
        assert skin.numbers[0].size == (16, 16)

    def test_sprite_sizes(self, skin_mgr):
        skin = skin_mgr.load(DEFAULT_SKIN, GameSpec(4, 6, 3))

        assert len(skin.numbers) == 9
        assert len(skin.icons) == 8
        assert len(skin.digits) == 11
        assert len(skin.faces) == 5
        assert skin.digits[0].size == (11, 21)
        assert skin.faces[0].size == (26, 26)
        assert skin.background.size == (6 * 16 + 24, 4 * 16 + 66)

    def test_cached_per_board_size(self, skin_mgr):
        a = skin_mgr.load(DEFAULT_SKIN, GameSpec(4, 6, 3))
        b = skin_mgr.load(DEFAULT_SKIN, GameSpec(4, 6, 5))
        c = skin_mgr.load(DEFAULT_SKIN, GameSpec(5, 6, 3))
        assert a is b
        assert a is not c

    def test_unknown_skin_uses_default(self, skin_mgr):
        skin = skin_mgr.load("missing", GameSpec(2, 2, 1))
        assert same(skin.numbers[3], skin_mgr.load(DEFAULT_SKIN, GameSpec(2, 2, 1)).numbers[3])

    def test_default_sheet_layout(self):
        assert draw_default_sheet().size == SHEET_SIZE


class TestRenderer:
    @pytest.fixture
    def renderer(self, skin_mgr):
        skin = skin_mgr.load(DEFAULT_SKIN, GameSpec(3, 9, 2))
        return MineSweeperRenderer(skin=skin, scale=1, show_labels=False)

    def test_png_output(self, renderer, make_game):
        game = make_game(3, 9, mines=[(0, 0), (2, 2)])

        data = renderer.render(game)

        assert data.startswith(b"\x89PNG")
        img = Image.open(BytesIO(data))
        assert img.size == (9 * 16 + 24, 3 * 16 + 66)

    def test_scaled_size(self, skin_mgr, make_game):
        skin = skin_mgr.load(DEFAULT_SKIN, GameSpec(3, 9, 2))
        renderer = MineSweeperRenderer(skin=skin, scale=4)
        img = renderer.render_image(make_game(3, 9, mines=[(0, 0), (2, 2)]))
        assert img.size == ((9 * 16 + 24) * 4, (3 * 16 + 66) * 4)

    def test_tiles_while_playing(self, renderer, make_game):
        game = make_game(3, 9, mines=[(0, 0), (2, 2)])
        game.mark(0, 2)
        game.open(1, 1)

        img = renderer.render_image(game)
        skin = renderer.skin

        assert same(tile(img, 0, 0), skin.icons[0])
        assert same(tile(img, 0, 2), skin.icons[3])
        assert same(tile(img, 1, 1), skin.numbers[2])

    def test_tiles_after_loss(self, renderer, make_game):
        game = make_game(3, 9, mines=[(0, 0), (2, 2)])
        game.mark(0, 1)
        game.open(1, 1)
        game.open(0, 0)

        img = renderer.render_image(game)
        skin = renderer.skin

        assert same(tile(img, 0, 0), skin.icons[5])
        assert same(tile(img, 2, 2), skin.icons[2])
        assert same(tile(img, 0, 1), skin.icons[4])
        assert same(tile(img, 1, 0), skin.icons[0])

        face_x = (img.width - 26) // 2
        assert same(img.crop((face_x, FACE_Y, face_x + 26, FACE_Y + 26)), skin.faces[2])

    def test_tiles_after_win(self, skin_mgr, make_game):
        game = make_game(1, 9, mines=[(0, 0), (0, 8)])
        skin = skin_mgr.load(DEFAULT_SKIN, game.spec)
        renderer = MineSweeperRenderer(skin=skin, scale=1, show_labels=False)
        game.open(0, 4)

        img = renderer.render_image(game)

        assert same(tile(img, 0, 0), skin.icons[3])
        assert same(tile(img, 0, 8), skin.icons[3])
        assert same(tile(img, 0, 1), skin.numbers[1])

        face_x = (img.width - 26) // 2
        assert same(img.crop((face_x, FACE_Y, face_x + 26, FACE_Y + 26)), skin.faces[3])

    def test_mine_counter(self, renderer, make_game):
        game = make_game(3, 9, mines=[(0, 0), (2, 2)])
        game.mark(1, 1)

        img = renderer.render_image(game)
        digits = renderer.skin.digits

        for i, expected in enumerate([0, 0, 1]):
            x = 18 + i * 13
            assert same(img.crop((x, 17, x + 11, 38)), digits[expected])

    def test_labels_on_covered_tiles(self, skin_mgr, make_game):
        game = make_game(3, 9, mines=[(0, 0), (2, 2)])
        skin = skin_mgr.load(DEFAULT_SKIN, game.spec)

        plain = MineSweeperRenderer(skin=skin, scale=4, show_labels=False).render_image(game)
        labelled = MineSweeperRenderer(skin=skin, scale=4, show_labels=True).render_image(game)

        assert not same(plain, labelled)

    def test_tile_at(self, skin_mgr):
        skin = skin_mgr.load(DEFAULT_SKIN, GameSpec(3, 3, 2))
        renderer = MineSweeperRenderer(skin=skin, scale=4)

        ox, oy = renderer.board_offset
        assert (ox, oy) == (48, 220)
        assert renderer.tile_at(ox, oy, 3, 3) == (0, 0)
        assert renderer.tile_at(ox + 64 * 2 + 10, oy + 64 + 1, 3, 3) == (1, 2)
        assert renderer.tile_at(ox - 1, oy, 3, 3) is None
        assert renderer.tile_at(ox + 64 * 3, oy, 3, 3) is None

    def test_face_box(self, skin_mgr):
        skin = skin_mgr.load(DEFAULT_SKIN, GameSpec(3, 3, 2))
        renderer = MineSweeperRenderer(skin=skin, scale=2)

        x0, y0, x1, y1 = renderer.face_box()

        assert (x1 - x0, y1 - y0) == (52, 52)
        assert y0 == FACE_Y * 2
        assert x0 == (skin.background.width - 26) // 2 * 2
