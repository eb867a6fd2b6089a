"""Raw document loading for the validate command.

Reads files into plain Python data; no contract logic lives here.
Supported formats, chosen by file suffix:

- ``.json``  — one object, or an array of objects
- ``.jsonl`` — one object per non-blank line
- ``.yaml`` / ``.yml`` — one mapping, or a sequence of mappings
- ``.md``    — the YAML frontmatter block between ``---`` delimiters

INVARIANT: Loading never validates.  A document that parses is returned
as-is, whatever shape it has; the contract decides whether it is valid.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

SUPPORTED_SUFFIXES: frozenset[str] = frozenset({".json", ".jsonl", ".yaml", ".yml", ".md"})

_FRONTMATTER_DELIMITER = "---"


class DocumentError(Exception):
    """A document file could not be read or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


@dataclass(frozen=True)
class Document:
    """One raw document and where it came from."""

    source: str
    data: Any


def _new_yaml() -> YAML:
    """Fresh safe-mode parser per call; YAML objects carry parser state."""
    return YAML(typ="safe", pure=True)


def _plain(value: Any) -> Any:
    """Convert YAML dates to ISO strings so timestamps parse uniformly."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


def parse_frontmatter(content: str) -> dict[str, Any] | None:
    """Extract the YAML frontmatter mapping from markdown *content*.

    The file must start with ``---``; the next ``---`` line closes the
    block.  Handles ``\\r\\n`` line endings.  Returns None when no
    complete frontmatter block is present.
    """
    lines = content.replace("\r\n", "\n").split("\n")
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return None

    for end_idx, line in enumerate(lines[1:], start=1):
        if line.strip() == _FRONTMATTER_DELIMITER:
            block = "\n".join(lines[1:end_idx])
            return _plain(_new_yaml().load(block)) or {}
    return None


def _expand(path: Path, data: Any) -> list[Document]:
    """Split a top-level list into one document per item."""
    if isinstance(data, list):
        return [Document(f"{path}#{idx}", item) for idx, item in enumerate(data)]
    return [Document(str(path), data)]


def _load_json_lines(path: Path, content: str) -> list[Document]:
    documents: list[Document] = []
    for lineno, line in enumerate(content.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            documents.append(Document(f"{path}:{lineno}", json.loads(line)))
        except json.JSONDecodeError as exc:
            raise DocumentError(path, f"invalid JSON on line {lineno}: {exc.msg}") from exc
    return documents


def expand_paths(paths: Iterable[Path]) -> list[Path]:
    """Replace each directory in *paths* with its supported files, sorted.

    Directories are not searched recursively.  Files are kept as given,
    whatever their suffix, so unsupported files still fail loudly.
    """
    expanded: list[Path] = []
    for path in paths:
        if path.is_dir():
            expanded.extend(
                sorted(
                    child
                    for child in path.iterdir()
                    if child.is_file() and child.suffix.lower() in SUPPORTED_SUFFIXES
                )
            )
        else:
            expanded.append(path)
    return expanded


def load_documents(path: Path) -> list[Document]:
    """Read every raw document contained in *path*.

    Raises:
        DocumentError: Unsupported suffix, unreadable or non-UTF-8 file, or
            parse failure.
    """
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise DocumentError(path, f"unsupported file type {suffix or '(none)'!r}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentError(path, exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise DocumentError(path, f"not valid UTF-8: {exc.reason}") from exc

    try:
        if suffix == ".json":
            return _expand(path, json.loads(content))
        if suffix == ".jsonl":
            return _load_json_lines(path, content)
        if suffix == ".md":
            fm = parse_frontmatter(content)
            if fm is None:
                raise DocumentError(path, "no frontmatter block found")
            return [Document(str(path), fm)]
        return _expand(path, _plain(_new_yaml().load(content)))
    except json.JSONDecodeError as exc:
        raise DocumentError(path, f"invalid JSON: {exc.msg} (line {exc.lineno})") from exc
    except YAMLError as exc:
        raise DocumentError(path, f"invalid YAML: {exc}") from exc
