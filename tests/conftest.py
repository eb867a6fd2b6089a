"""Shared pytest fixtures and test helpers for recordkit tests."""

from __future__ import annotations

import json
import logging
import os
import uuid
from collections.abc import Callable, Generator
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from recordkit.domain.registry import CONTRACT_REGISTRY

FIXED_NOW = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def now() -> datetime:
    """A fixed, timezone-aware clock reading."""
    return FIXED_NOW


@pytest.fixture
def new_id() -> Callable[[], str]:
    """Factory for fresh UUID strings."""
    return lambda: str(uuid.uuid4())


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test from a temp CWD with no RECORDKIT_* variables set.

    Keeps a stray recordkit.toml or environment variable on the developer
    machine from leaking into settings and CLI tests.
    """
    for name in list(os.environ):
        if name.startswith("RECORDKIT_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore logger state changed by configure_logging() in CLI runs."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    rk = logging.getLogger("recordkit")
    rk_level = rk.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    rk.setLevel(rk_level)


@pytest.fixture
def restore_registry() -> Generator[None]:
    """Undo contract registrations made during the test."""
    snapshot = dict(CONTRACT_REGISTRY)
    yield
    CONTRACT_REGISTRY.clear()
    CONTRACT_REGISTRY.update(snapshot)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_json(path: Path, data: Any) -> Path:
    """Write *data* as JSON to *path* and return the path."""
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def message_doc(**overrides: Any) -> dict[str, Any]:
    """A valid raw communication.message document."""
    doc: dict[str, Any] = {
        "id": str(uuid.uuid4()),
        "senderId": str(uuid.uuid4()),
        "receiverId": str(uuid.uuid4()),
        "content": "hello",
    }
    doc.update(overrides)
    return doc
