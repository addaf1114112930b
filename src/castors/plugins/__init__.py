"""Extension layer — converter plugins via pluggy.

Discovery: entry_points (pip-installed) plus single-file local plugins.
INVARIANT: Plugin failures are warnings, never errors.
"""

from castors.plugins.hookspecs import hookimpl
from castors.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
