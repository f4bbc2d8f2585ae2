import logging

import colorlog

LOG_FORMAT = "%(log_color)s[%(asctime)s] [%(levelname)s] %(message)s"
LOG_COLORS = {
    "DEBUG": "green",
    "INFO": "cyan",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}

logger = logging.getLogger("minesweeper")


def setup_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach the coloured console handler once and set the level."""
    if not any(getattr(h, "_minesweeper", False) for h in logger.handlers):
        handler = colorlog.StreamHandler()
        handler.setFormatter(
            colorlog.ColoredFormatter(
                LOG_FORMAT,
                datefmt="%H:%M:%S",
                log_colors=LOG_COLORS,
            )
        )
        handler._minesweeper = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
        logger.propagate = False

    logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger
