import copy
import json
from pathlib import Path

from ddl2struct.errors import InputError

# Safe defaults if config.json is missing from the install
DEFAULTS = {
    "render": {"dialect": "gorm"},
    "sql": {"read_dialect": "mysql"},
    "log": {
        "level": "WARNING",
        "format": "%(asctime)s [%(levelname)s] %(message)s",
        "file": None,
    },
}


def _merge(base: dict, override: dict) -> dict:
    out = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def _read_json(path: Path) -> dict:
    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise InputError(f"cannot read config {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise InputError(f"invalid config {path}: {e}") from e
    if not isinstance(data, dict):
        raise InputError(f"invalid config {path}: top level must be an object")
    return data


def load_config(path=None) -> dict:
    """
    Load the packaged config.json, then overlay an optional user config.
    Sections missing from either file fall back to DEFAULTS.
    """
    here = Path(__file__).resolve().parent
    cfg = copy.deepcopy(DEFAULTS)

    packaged = here / "config.json"
    if packaged.exists():
        cfg = _merge(cfg, _read_json(packaged))

    if path is not None:
        cfg = _merge(cfg, _read_json(Path(path)))
    return cfg


CFG = load_config()
