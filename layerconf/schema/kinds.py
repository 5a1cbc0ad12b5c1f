"""
Leaf kinds: the closed set of primitive field types a schema may hold.

Each kind owns one parser (text from a switch or environment variable),
one formatter (diagnostic dump) and one coercer (decoded snapshot values).
"""

from enum import Enum
from typing import Any, Callable, Dict, Optional

_TRUE_STRINGS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_STRINGS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_bool(text: str) -> bool:
    """Parse a boolean the way command-line switches spell it"""
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise ValueError(f"invalid boolean value: {text!r}")


def _coerce_string(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected string, got {type(value).__name__}")
    return value


def _coerce_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected int, got {type(value).__name__}")
    return value


def _coerce_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected float, got {type(value).__name__}")
    try:
        return float(value)
    except OverflowError as e:
        raise TypeError(f"number out of float range: {e}") from e


def _coerce_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"expected bool, got {type(value).__name__}")
    return value


class LeafKind(Enum):
    """Primitive kind of a leaf field"""
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"

    @property
    def python_type(self) -> type:
        return _PYTHON_TYPES[self]

    def parse(self, text: str) -> Any:
        """
        Parse a text value (switch argument or environment variable).

        Raises:
            ValueError: If the text is not a valid literal for this kind
        """
        return _PARSERS[self](text)

    def format(self, value: Any) -> str:
        """Format a value for the diagnostic dump"""
        return _FORMATTERS[self](value)

    def coerce(self, value: Any) -> Any:
        """
        Check a decoded snapshot value against this kind.

        Raises:
            TypeError: If the value has the wrong type
        """
        return _COERCERS[self](value)


_PYTHON_TYPES: Dict[LeafKind, type] = {
    LeafKind.STRING: str,
    LeafKind.INT: int,
    LeafKind.FLOAT: float,
    LeafKind.BOOL: bool,
}

_PARSERS: Dict[LeafKind, Callable[[str], Any]] = {
    LeafKind.STRING: str,
    LeafKind.INT: lambda text: int(text, 10),
    LeafKind.FLOAT: float,
    LeafKind.BOOL: parse_bool,
}

_FORMATTERS: Dict[LeafKind, Callable[[Any], str]] = {
    LeafKind.STRING: str,
    LeafKind.INT: lambda value: f"{value:d}",
    LeafKind.FLOAT: lambda value: f"{value:f}",
    LeafKind.BOOL: lambda value: "true" if value else "false",
}

_COERCERS: Dict[LeafKind, Callable[[Any], Any]] = {
    LeafKind.STRING: _coerce_string,
    LeafKind.INT: _coerce_int,
    LeafKind.FLOAT: _coerce_float,
    LeafKind.BOOL: _coerce_bool,
}


def kind_for(annotation: Any) -> Optional[LeafKind]:
    """
    Map a field annotation to its leaf kind.

    Returns None for anything outside the four primitives (including
    Optional[...] and containers), which callers treat as unsupported.
    """
    for kind, python_type in _PYTHON_TYPES.items():
        if annotation is python_type:
            return kind
    return None
