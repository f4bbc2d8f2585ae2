import json
from pathlib import Path

from .core.model import PRESETS, GameSpec

DEFAULT_CONFIG: dict = {
    "difficulty_level": [
        f"{name} {spec.rows} {spec.cols} {spec.mines}" for name, spec in PRESETS.items()
    ],
    "default_skin": "default",
    "use_gui": True,
    "show_labels": False,
    "scale": 2,
    "log_level": "INFO",
}


def load_config(path: str | Path | None = None) -> dict:
    """Defaults, overridden by whatever keys the JSON file at ``path`` sets."""
    conf = dict(DEFAULT_CONFIG)
    if path is None:
        return conf

    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"config {path} must be a JSON object")

    conf.update(data)
    return conf


def parse_difficulty_level(conf: dict) -> dict[str, GameSpec]:
    result = {}

    for item in conf.get("difficulty_level", []):
        try:
            name, rows, cols, nums = item.split()
            spec = GameSpec(int(rows), int(cols), int(nums))
            spec.validate()
        except ValueError as e:
            raise ValueError(f"bad difficulty level {item!r}: {e}") from e
        result[name] = spec

    if len(result) == 0:
        raise ValueError("no difficulty level configured")

    return result
