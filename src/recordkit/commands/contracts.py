"""Command group: inspect registered contracts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from recordkit.commands._base import RecordkitGroup

if TYPE_CHECKING:
    from recordkit.commands._context import AppContext

_CONTRACTS_EXAMPLES = """\
  recordkit contracts list
  recordkit contracts list --domain communication
  recordkit contracts show Message
  recordkit contracts show productivity.tag --schema
  recordkit --json contracts show forms.form"""


@click.group(cls=RecordkitGroup, examples=_CONTRACTS_EXAMPLES)
def contracts() -> None:
    """List and describe record contracts."""


@contracts.command(
    "list",
    examples="""\
  recordkit contracts list
  recordkit contracts list --domain learning
  recordkit -q contracts list""",
)
@click.option("--domain", default=None, help="Only contracts of this domain.")
@click.pass_obj
def list_cmd(app: AppContext, domain: str | None) -> None:
    """List registered contracts."""
    app.emit(app.contract_service().list_contracts(domain))


@contracts.command(
    examples="""\
  recordkit contracts show Message
  recordkit contracts show communication.message
  recordkit contracts show content.tag --schema""",
)
@click.argument("name")
@click.option("--schema", is_flag=True, help="Include the JSON Schema.")
@click.pass_obj
def show(app: AppContext, name: str, schema: bool) -> None:
    """Show the fields of contract NAME."""
    app.emit(app.contract_service().describe_contract(name, schema=schema))
