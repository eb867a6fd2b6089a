"""Command: validate document files against a contract."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

import click

from recordkit.commands._base import RecordkitCommand

if TYPE_CHECKING:
    from recordkit.commands._context import AppContext


def _parse_now(_ctx: click.Context, _param: click.Parameter, value: str | None) -> datetime | None:
    """Parse ``--now`` as ISO 8601; naive values are taken as UTC."""
    if value is None:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"{value!r} is not an ISO 8601 timestamp") from None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


@click.command(
    cls=RecordkitCommand,
    examples="""\
  recordkit validate Message inbox/message.json
  recordkit validate communication.message exports/*.jsonl
  recordkit validate productivity.task tasks/ --strict
  recordkit validate Note notes/today.md --now 2024-01-01T00:00:00Z
  recordkit --json validate Event calendar.yaml""",
)
@click.argument("name")
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, path_type=Path),
)
@click.option(
    "--now",
    callback=_parse_now,
    default=None,
    help="Clock reading for omitted timestamps (ISO 8601).",
)
@click.option("--strict", is_flag=True, help="Reject keys the contract does not declare.")
@click.pass_obj
def validate(
    app: AppContext,
    name: str,
    paths: tuple[Path, ...],
    now: datetime | None,
    strict: bool,
) -> None:
    """Validate the documents in PATHS against contract NAME.

    A directory stands for every supported file directly inside it.
    Exits 1 if any document is invalid.
    """
    from recordkit.infrastructure.documents import expand_paths

    svc = app.contract_service(now=now, reject_unknown=strict)
    app.emit(svc.validate_documents(name, expand_paths(paths)))
