"""
Exception hierarchy for configuration loading.

Only SchemaError is fatal. The other errors belong to optional sources
(snapshot file, environment) and are caught and logged by the loader.
"""

from typing import Any, Dict, Optional


class ConfigError(Exception):
    """Base exception for all layerconf errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class SchemaError(ConfigError, TypeError):
    """
    Raised when a schema is structurally unusable.

    Non-record roots, cyclic records and clashing derived switch names are
    programming errors, so this is raised immediately rather than logged.
    """


class FileReadError(ConfigError):
    """Raised when a snapshot file is missing or cannot be read"""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot read config file {path}: {reason}", details={"path": path})
        self.path = path
        self.reason = reason


class FileParseError(ConfigError):
    """Raised when a snapshot file does not decode to a matching document"""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot parse config file {path}: {reason}", details={"path": path})
        self.path = path
        self.reason = reason


class FileWriteError(ConfigError):
    """Raised when a snapshot cannot be written"""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot write config file {path}: {reason}", details={"path": path})
        self.path = path
        self.reason = reason


class EnvParseError(ConfigError, ValueError):
    """Raised when an environment value does not parse as its field's kind"""

    def __init__(self, name: str, value: str, kind: str):
        super().__init__(
            f'Env: wrong value type for field "{name}", need {kind}',
            details={"name": name, "value": value, "kind": kind},
        )
        self.name = name
        self.value = value
        self.kind = kind
