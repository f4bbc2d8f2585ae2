#!/usr/bin/env python
"""
Minesweeper launcher

Opens the desktop window when a display is available, otherwise plays in
the terminal.
"""

import argparse
import random
from pathlib import Path

from .config import load_config, parse_difficulty_level
from .console import MAX_ROWS, ConsoleSession
from .core.errors import MinesweeperError
from .core.game import MineSweeper
from .core.layout import MineLayout
from .core.model import GameSpec
from .core.skin import DEFAULT_SKIN, SkinManager
from .core.utils import detect_desktop
from .log import logger, setup_logging

SKINS_DIR = Path(__file__).parent / "skins"


def choose_spec(levels: dict[str, GameSpec], read=input, write=print) -> GameSpec:
    """Numbered difficulty menu; the last entry asks for a custom size."""
    names = list(levels)
    write("Difficulty:")
    for i, name in enumerate(names, 1):
        spec = levels[name]
        write(f"  {i}. {name} ({spec.rows}x{spec.cols}, {spec.mines} mines)")
    write(f"  {len(names) + 1}. custom")

    choice = read(f"Choose difficulty (1-{len(names) + 1}): ").strip()

    if choice.isdigit() and 1 <= int(choice) <= len(names):
        return levels[names[int(choice) - 1]]

    if choice == str(len(names) + 1):
        try:
            spec = GameSpec(
                int(read("Rows: ").strip()),
                int(read("Columns: ").strip()),
                int(read("Mines: ").strip()),
            )
            spec.validate()
            return spec
        except ValueError as e:
            write(f"Invalid input: {e}")

    write(f"Using {names[0]}")
    return levels[names[0]]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="minesweeper")
    parser.add_argument("--config", type=str, default=None, help="JSON config file")
    parser.add_argument("--level", type=str, default=None)
    parser.add_argument("--rows", type=int, default=None)
    parser.add_argument("--cols", type=int, default=None)
    parser.add_argument("--mines", type=int, default=None)
    parser.add_argument("--seed", type=int, default=-1, help="<0 uses OS entropy")
    parser.add_argument("--console", action="store_true", help="play in the terminal")
    parser.add_argument("--skin", type=str, default=None, help="skin name for the window")
    return parser


def resolve_spec(args, levels: dict[str, GameSpec]) -> GameSpec | None:
    """Spec from the command line, or None when the menu should ask."""
    if args.level:
        if args.level not in levels:
            raise ValueError(f"unknown level {args.level!r}, choose from {list(levels)}")
        return levels[args.level]

    sizes = (args.rows, args.cols, args.mines)
    if all(v is None for v in sizes):
        return None
    if any(v is None for v in sizes):
        raise ValueError("--rows, --cols and --mines go together")

    spec = GameSpec(args.rows, args.cols, args.mines)
    spec.validate()
    return spec


def pick_skin(skin_mgr: SkinManager, name: str) -> str:
    """Discovered skin by name, the built-in one otherwise."""
    if name in skin_mgr.skin_list:
        return name
    logger.warning(f"[minesweeper] unknown skin {name!r}, available: {skin_mgr.skin_list}")
    return DEFAULT_SKIN


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    conf = load_config(args.config)
    setup_logging(conf["log_level"])

    try:
        levels = parse_difficulty_level(conf)
        spec = resolve_spec(args, levels) or choose_spec(levels)
    except ValueError as e:
        logger.error(f"[minesweeper] {e}")
        return 2

    use_gui = conf["use_gui"] and not args.console and detect_desktop()
    if not use_gui and spec.rows > MAX_ROWS:
        logger.error(f"[minesweeper] the terminal board has at most {MAX_ROWS} rows")
        return 2

    rng = random.Random(args.seed) if args.seed >= 0 else random.Random()
    game = MineSweeper(spec, layout=MineLayout(rng))

    if use_gui:
        from .core.gui import start_gui

        skin_mgr = SkinManager(SKINS_DIR)
        skin_mgr.initialize()
        start_gui(
            game,
            skin_mgr,
            pick_skin(skin_mgr, args.skin or conf["default_skin"]),
            conf["scale"],
            conf["show_labels"],
        )
    else:
        ConsoleSession(game, levels).run()

    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except KeyboardInterrupt:
        print("\nGame exited")
    except MinesweeperError as e:
        logger.error(f"[minesweeper] {e}")
        raise SystemExit(1)
