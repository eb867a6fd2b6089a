"""Pluggy hook specifications for recordkit.

Plugins implement hooks with :data:`hookimpl`::

    from recordkit.plugins import hookimpl

    class InvoicePlugin:
        @hookimpl
        def register_contracts(self):
            return {"billing.invoice": INVOICE}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from recordkit.domain.record import Contract

PROJECT_NAME = "recordkit"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class RecordkitHookSpec:
    """Hook specifications for the recordkit plugin system."""

    @hookspec
    def register_contracts(self) -> dict[str, Contract] | None:
        """Return ``"domain.name" -> Contract`` mappings to add to the registry."""
