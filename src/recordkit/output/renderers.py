"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a StringIO-backed Console; :func:`render_result`
returns the captured text.  Renderers are dispatched by ``result.op``;
unknown ops fall back to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from recordkit.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from recordkit.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False, width: int | None = None) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console(width=width)

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        lines = [f"ERROR: {result.op} - {msg}"]
        for item in result.data.get("items", []):
            for violation in item.get("violations", []):
                lines.append(f"{item['source']}: {_violation_text(violation)}")
        return "\n".join(lines)

    if result.op == "list_contracts":
        return "\n".join(item["key"] for item in result.data.get("items", []))
    if result.op == "describe_contract":
        return "\n".join(row["name"] for row in result.data.get("fields", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _violation_text(violation: dict[str, Any]) -> str:
    field = violation.get("field") or "(document)"
    return f"{field}: {violation.get('message', '')}"


def _status_line(console: Console, result: ServiceResult, summary: str = "") -> None:
    """Print the OK status line."""
    label = Text("OK", style="rk.ok")
    op = Text(f"  {result.op}", style="rk.op")
    console.print(label, op, Text(f"  {summary}" if summary else ""), sep="", end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="rk.key")
    v = Text(str(value), style="rk.contract" if key in ("contract", "key") else "")
    console.print(k, v, sep="", end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(f"    {k}: {v}", markup=False)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="rk.error")
    op = Text(f"  {result.op}", style="rk.op")
    console.print(label, op, Text(" - "), Text(msg), sep="")

    if result.op == "validate" and result.data.get("items"):
        console.print()
        _validation_report(console, result.data, verbose=verbose)
    elif verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}", markup=False)

    if verbose:
        _render_meta(console, result)


# ── Contract renderers ────────────────────────────────────────────────


def _render_contract_list(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render list_contracts as a table of registry keys."""
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Key", style="rk.contract", no_wrap=True)
    table.add_column("Name")
    table.add_column("Fields", justify="right")
    table.add_column("Required", justify="right")
    if verbose:
        table.add_column("Description", style="dim")

    for item in items:
        row: list[str | Text] = [
            item["key"],
            item["name"],
            str(item["fields"]),
            str(item["required"]),
        ]
        if verbose:
            row.append(Text(item.get("doc", "")))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} contracts")


def _render_contract_detail(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render describe_contract as a header plus a field table."""
    d = result.data
    console.print(
        Text(d.get("name", "?"), style="rk.contract"), Text(f"  ({d.get('key', '')})"), sep=""
    )
    if d.get("doc"):
        console.print(Text(d["doc"], style="dim"))
    console.print()

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Field", style="rk.field", no_wrap=True)
    table.add_column("Type")
    table.add_column("Required", justify="center")
    table.add_column("Default")
    table.add_column("Description", style="dim")
    for row in d.get("fields", []):
        default = row.get("default")
        table.add_row(
            row["name"],
            Text(row["type"]),
            Text("yes", style="rk.required") if row["required"] else "",
            Text("" if default is None else str(default)),
            Text(row.get("description", "")),
        )
    console.print(table)

    if "schema" in d:
        console.print()
        console.print_json(data=d["schema"])


def _render_validation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result, f"{d.get('valid', 0)}/{d.get('count', 0)} valid")
    _field(console, "contract", d.get("contract", ""))
    if d.get("items"):
        console.print()
        _validation_report(console, d, verbose=verbose)
    if verbose:
        _render_meta(console, result)


def _validation_report(console: Console, data: dict[str, Any], *, verbose: bool) -> None:
    """Per-document table followed by the violations of invalid documents.

    When something failed, valid rows are left out unless *verbose*.
    """
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Source", style="rk.source")
    table.add_column("ID", no_wrap=True)
    table.add_column("Status")
    table.add_column("Violations", justify="right")

    items = data.get("items", [])
    for item in items:
        if not verbose and item["ok"] and data.get("invalid"):
            continue
        status = Text("valid", style="rk.ok") if item["ok"] else Text("invalid", style="rk.error")
        table.add_row(
            Text(item["source"]),
            Text(item.get("id") or ""),
            status,
            str(len(item["violations"])),
        )
    console.print(table)

    for item in items:
        if item["ok"]:
            continue
        console.print()
        console.print(Text(item["source"], style="rk.source"))
        for violation in item["violations"]:
            console.print(
                Text("  "),
                Text(violation.get("field") or "(document)", style="rk.field"),
                Text(f"  [{violation.get('rule', '')}]", style="rk.rule"),
                Text(f"  {violation.get('message', '')}"),
                sep="",
            )


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "list_contracts": _render_contract_list,
    "describe_contract": _render_contract_detail,
    "validate": _render_validation,
}
