"""Config file discovery and loading.

``datekit.toml`` is looked up from the working directory towards the
filesystem root, the same way git finds ``.git/``. The ``DATEKIT_CONFIG``
env var (or the ``--config`` CLI flag) pins an explicit file instead.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from datekit.config.models import DateKitConfig

CONFIG_FILENAME = "datekit.toml"
CONFIG_ENV_VAR = "DATEKIT_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest datekit.toml at or above *start* (default: cwd).

    When DATEKIT_CONFIG is set it wins outright: its file is returned if
    it exists, otherwise nothing is found.
    """
    pinned = os.environ.get(CONFIG_ENV_VAR)
    if pinned:
        path = Path(pinned)
        return path if path.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML (raises ``tomllib.TOMLDecodeError``)."""
    return tomllib.loads(path.read_text(encoding="utf-8"))


def load_config(path: Path | None = None, cwd: Path | None = None) -> DateKitConfig:
    """Load and validate the TOML sections into a :class:`DateKitConfig`.

    Falls back to discovery from *cwd* when *path* is None, and to
    code defaults when no file exists.
    """
    path = path or find_config(cwd)
    if path is None:
        return DateKitConfig()
    return DateKitConfig.model_validate(read_toml(path))
