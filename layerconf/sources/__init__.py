"""
Config sources: command-line switches, environment variables and the snapshot file
"""

from .flags import FlagBinding, FlagRegistry
from .env import EnvBinder
from .store import FileStore

__all__ = [
    "FlagBinding",
    "FlagRegistry",
    "EnvBinder",
    "FileStore",
]
