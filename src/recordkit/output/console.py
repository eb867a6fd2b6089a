"""Rich Console factory and theme for recordkit output.

Consoles render into a StringIO buffer so renderers return plain
strings.  Outside a terminal (pipes, CliRunner) Rich emits no ANSI codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

RECORDKIT_THEME = Theme(
    {
        "rk.ok": "bold green",
        "rk.error": "bold red",
        "rk.warning": "bold yellow",
        "rk.op": "bold cyan",
        "rk.key": "dim",
        "rk.contract": "bold blue",
        "rk.field": "cyan",
        "rk.rule": "magenta",
        "rk.source": "dim",
        "rk.required": "bold",
    }
)

DEFAULT_WIDTH = 120


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Render width; defaults to :data:`DEFAULT_WIDTH`.
    """
    return Console(
        file=StringIO(),
        theme=RECORDKIT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or DEFAULT_WIDTH,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
