"""Pick an output mode for a ServiceResult.

``--json`` dumps the result model, ``--quiet`` prints minimal lines, and
the default goes through the Rich renderers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from recordkit.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from recordkit.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Output switches resolved from CLI flags and config."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    width: int | None = None


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format *result* according to *settings* (JSON wins over quiet)."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose, width=settings.width)
