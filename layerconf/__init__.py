"""
Layered configuration for command-line services

A typed pydantic schema is populated from compiled defaults, a snapshot file,
command-line switches and environment variables, in that order of
precedence, and the merged result is saved back to the snapshot.
"""

__version__ = "0.1.0"

from .exceptions import (
    ConfigError,
    SchemaError,
    FileReadError,
    FileParseError,
    FileWriteError,
    EnvParseError,
)
from .schema import LeafField, LeafKind, RecordField, describe_schema, leaf_fields, walk_schema
from .sources import EnvBinder, FileStore, FlagBinding, FlagRegistry
from .loader import ConfigLoader, load_config, load_config_with_saver
from .printer import dump_config, format_config

__all__ = [
    "ConfigError",
    "SchemaError",
    "FileReadError",
    "FileParseError",
    "FileWriteError",
    "EnvParseError",
    "LeafField",
    "LeafKind",
    "RecordField",
    "describe_schema",
    "leaf_fields",
    "walk_schema",
    "EnvBinder",
    "FileStore",
    "FlagBinding",
    "FlagRegistry",
    "ConfigLoader",
    "load_config",
    "load_config_with_saver",
    "dump_config",
    "format_config",
]
