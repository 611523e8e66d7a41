"""QSaveConfig: user-level config for the query store.

Lookup order for the config file:

    $QSAVE_CONFIG                   # explicit path
    ~/.config/qsave/config.toml     # default, optional

config.toml example:

    [qsave]
    db_path = "~/qsave.db"
    editor = "nvim"

Database path precedence: --db option > $QSAVE_DB > config file > ~/qsave.db.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

_CONFIG_ENV = "QSAVE_CONFIG"
_DB_ENV = "QSAVE_DB"
_DEFAULT_CONFIG_PATH = Path("~/.config/qsave/config.toml")
_DEFAULT_DB_FILENAME = "qsave.db"


def default_db_path() -> Path:
    """~/qsave.db. Raises RuntimeError if the home directory cannot be resolved."""
    return Path.home() / _DEFAULT_DB_FILENAME


@dataclass
class QSaveConfig:
    """Resolved configuration for one qsave invocation."""

    db_path: Path = field(default_factory=default_db_path)
    editor: str = ""                 # empty = $EDITOR or platform default
    source: Path | None = None       # config file the values came from, if any


def config_path() -> Path:
    env_path = os.environ.get(_CONFIG_ENV, "").strip()
    return Path(env_path or _DEFAULT_CONFIG_PATH).expanduser()


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        msg = f"invalid config file {path}: {exc}"
        raise ValueError(msg) from exc


def load_config(path: Path | str | None = None) -> QSaveConfig:
    """Load config.toml (if present) and apply environment overrides."""
    cfg_file = Path(path).expanduser() if path else config_path()

    raw: dict[str, Any] = {}
    if cfg_file.exists():
        raw = _read_toml(cfg_file)
    section = raw.get("qsave", {})

    db_value = os.environ.get(_DB_ENV, "").strip() or str(section.get("db_path", ""))
    db_path = Path(db_value).expanduser() if db_value else default_db_path()

    return QSaveConfig(
        db_path=db_path,
        editor=str(section.get("editor", "")).strip(),
        source=cfg_file if raw else None,
    )

