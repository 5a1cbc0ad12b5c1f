"""
Schema introspection: leaf kinds, name derivation and the field walker
"""

from .kinds import LeafKind, kind_for, parse_bool
from .naming import env_name, flag_name, kebab_case, screaming_snake_case, split_words
from .fields import (
    LeafField,
    RecordField,
    SchemaEntry,
    describe_schema,
    leaf_fields,
    record_type,
    walk_schema,
)

__all__ = [
    "LeafKind",
    "kind_for",
    "parse_bool",
    "env_name",
    "flag_name",
    "kebab_case",
    "screaming_snake_case",
    "split_words",
    "LeafField",
    "RecordField",
    "SchemaEntry",
    "describe_schema",
    "leaf_fields",
    "record_type",
    "walk_schema",
]
