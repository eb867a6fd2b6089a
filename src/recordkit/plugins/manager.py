"""Plugin discovery and contract registration.

Plugins are pip-installed packages exposing an entry point in the
``recordkit.plugins`` group.  The entry point may name a plugin instance,
a module, or a class with hookimpl-decorated methods.
"""

from __future__ import annotations

import inspect
import logging

import pluggy

from recordkit.domain.registry import register_contract
from recordkit.plugins.hookspecs import PROJECT_NAME, RecordkitHookSpec

ENTRY_POINT_GROUP = "recordkit.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Loads plugins and feeds their contracts into the registry."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(RecordkitHookSpec)
        self._loaded: bool = False

    def discover_and_load(self) -> list[str]:
        """Load entry-point plugins and register their contracts.

        Returns the names of all registered plugins.
        """
        try:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        except Exception:
            logger.warning("Failed to load %s entry points", ENTRY_POINT_GROUP, exc_info=True)
        self._normalize_plugin_instances()
        for plugin in self._pm.get_plugins():
            self._register_plugin_contracts(plugin, self._name(plugin))
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly.

        After :meth:`discover_and_load` its contracts are registered at once.
        """
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        if self._loaded:
            self._register_plugin_contracts(plugin, resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._name(p) for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------

    def _name(self, plugin: object) -> str:
        return self._pm.get_name(plugin) or plugin.__class__.__name__

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        An entry point may name a class; calling hooks on the class would
        leave ``self`` unbound.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin) or not _has_hook_impls(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s", plugin_name, exc_info=True
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)

    @staticmethod
    def _register_plugin_contracts(plugin: object, plugin_name: str) -> None:
        hook = getattr(plugin, "register_contracts", None)
        if hook is None:
            return

        try:
            contract_map = hook()
        except Exception:
            logger.warning(
                "Failed to collect contracts from plugin %s", plugin_name, exc_info=True
            )
            return

        if contract_map is None:
            return
        if not isinstance(contract_map, dict):
            logger.warning("Plugin %s returned non-dict contract registrations", plugin_name)
            return

        for key, contract in contract_map.items():
            try:
                register_contract(key, contract)
            except (TypeError, ValueError):
                logger.warning(
                    "Skipping contract %r from plugin %s", key, plugin_name, exc_info=True
                )
            else:
                logger.debug("Plugin %s registered contract %s", plugin_name, key)


def _has_hook_impls(cls: type) -> bool:
    """Whether *cls* has a public method decorated with :data:`hookimpl`."""
    marker = f"{PROJECT_NAME}_impl"
    for name in dir(cls):
        if name.startswith("_"):
            continue
        method = getattr(cls, name, None)
        if callable(method) and getattr(method, marker, None):
            return True
    return False
