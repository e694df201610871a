"""CLI commands for reqlens."""

from .start import start
from .quick import quick
from .config_cmd import config
from .version import version

__all__ = [
    "start",
    "quick",
    "config",
    "version",
]
