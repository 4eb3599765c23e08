"""Extension layer — domain plugins contributed via pluggy.

Discovery: the built-in domains plus entry points (pip-installed) in the
``lintctl.plugins`` group. A broken plugin is a warning; two plugins
claiming the same domain stop the process.
"""

from lintctl.plugins.manager import PluginManager

__all__ = ["PluginManager"]
