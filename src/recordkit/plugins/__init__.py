"""Extension layer — contract plugins via pluggy.

Discovery: the ``recordkit.plugins`` entry-point group.
INVARIANT: Plugin failures are warnings, never errors.
"""

from recordkit.plugins.hookspecs import hookimpl
from recordkit.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
