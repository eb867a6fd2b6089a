"""Config file discovery.

recordkit.toml is located by walking up from the working directory.
RECORDKIT_CONFIG (env) and --config (CLI) take precedence over the walk.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "recordkit.toml"
CONFIG_ENV_VAR = "RECORDKIT_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest recordkit.toml at or above *start* (default: cwd).

    When RECORDKIT_CONFIG is set it wins outright: its path is returned if
    it names an existing file, otherwise None.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        explicit = Path(env_path)
        return explicit if explicit.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
