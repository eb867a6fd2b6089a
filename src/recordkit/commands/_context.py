"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``.  Plugins load lazily, the first time a command asks
for the contract service, so ``--help`` and ``--version`` stay cheap.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from recordkit.config.logging import configure_logging
from recordkit.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from datetime import datetime

    from recordkit.config.settings import RecordkitSettings
    from recordkit.services.contracts import ContractService
    from recordkit.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: RecordkitSettings) -> None:
        self.settings = settings
        self._plugins_loaded = False
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def load_plugins(self) -> list[str]:
        """Load entry-point plugins once, unless disabled in config."""
        if self._plugins_loaded or not self.settings.plugins.enabled:
            return []
        from recordkit.plugins.manager import PluginManager

        self._plugins_loaded = True
        return PluginManager().discover_and_load()

    def contract_service(
        self,
        *,
        now: datetime | None = None,
        reject_unknown: bool = False,
    ) -> ContractService:
        """Build a ContractService; flags override ``[validation]`` config."""
        from recordkit.services.contracts import ContractService

        self.load_plugins()
        validation = self.settings.validation
        return ContractService(
            now=now or validation.now,
            reject_unknown=reject_unknown or validation.reject_unknown,
        )

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and set the exit status.

        * Success: stdout, warnings on stderr (outside JSON mode).
        * Failure: stderr, then exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            width=self.settings.output.width,
        )
        output = format_result(result, settings=settings)
        if not settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
