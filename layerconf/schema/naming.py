"""
Name derivation for switches and environment variables.
"""

import re
from typing import List, Sequence

# Acronym runs, capitalized or lowercase words, and digit runs
_WORD_PATTERN = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")


def split_words(identifier: str) -> List[str]:
    """
    Split an identifier into words.

    Example:
        split_words("Float64Field1") -> ["Float", "64", "Field", "1"]
        split_words("float64_field_1") -> ["float", "64", "field", "1"]
    """
    return _WORD_PATTERN.findall(identifier)


def kebab_case(identifier: str) -> str:
    return "-".join(word.lower() for word in split_words(identifier))


def screaming_snake_case(identifier: str) -> str:
    return "_".join(word.upper() for word in split_words(identifier))


def flag_name(path: Sequence[str]) -> str:
    """Switch name for a field path: ("internal", "value") -> "internal-value" """
    return "-".join(kebab_case(segment) for segment in path)


def env_name(path: Sequence[str]) -> str:
    """Environment name for a field path: ("internal", "value") -> "INTERNAL.VALUE" """
    return ".".join(screaming_snake_case(segment) for segment in path)
