"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, recordkit.toml only contains
overrides.  An empty (or missing) file is a valid configuration.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

# --- recordkit.toml sections ---


class ValidationConfig(BaseModel):
    """[validation] section."""

    model_config = {"frozen": True}

    now: datetime | None = None
    reject_unknown: bool = False


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    width: int = 120


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True

