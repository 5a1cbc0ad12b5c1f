"""
Schema walker and field descriptor table.

A schema is a pydantic model whose fields are either primitive leaves
(str, int, float, bool) or nested models. The walker visits them depth-first
in declaration order; describe_schema() freezes one walk into a table of
descriptors carrying accessors and derived names, built once per class.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, Dict, List, Optional, Tuple, Type, Union

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from ..exceptions import SchemaError
from .kinds import LeafKind, kind_for
from .naming import env_name, flag_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordField:
    """A nested record boundary"""
    path: Tuple[str, ...]
    key_path: Tuple[str, ...]
    title: str
    record_type: Type[BaseModel]
    description: Optional[str] = None

    @property
    def name(self) -> str:
        return self.path[-1]

    @property
    def depth(self) -> int:
        return len(self.path) - 1

    def get(self, instance: BaseModel) -> BaseModel:
        return _resolve(instance, self.path)


@dataclass(frozen=True)
class LeafField:
    """A primitive leaf with its accessors and derived names"""
    path: Tuple[str, ...]
    key_path: Tuple[str, ...]
    title: str
    kind: LeafKind
    description: Optional[str]
    flag_name: str
    env_name: str

    @property
    def name(self) -> str:
        return self.path[-1]

    @property
    def depth(self) -> int:
        return len(self.path) - 1

    @property
    def dotted_path(self) -> str:
        return ".".join(self.path)

    def get(self, instance: BaseModel) -> Any:
        return _resolve(instance, self.path)

    def set(self, instance: BaseModel, value: Any) -> None:
        owner = _resolve(instance, self.path[:-1])
        setattr(owner, self.path[-1], value)


SchemaEntry = Union[RecordField, LeafField]


def _resolve(instance: Any, path: Tuple[str, ...]) -> Any:
    current = instance
    for attr in path:
        current = getattr(current, attr)
    return current


def _is_record_type(candidate: Any) -> bool:
    return isinstance(candidate, type) and issubclass(candidate, BaseModel)


def record_type(record: Any) -> Type[BaseModel]:
    """
    Return the model class of a record class or instance.

    Raises:
        SchemaError: If the record is not a pydantic model
    """
    if _is_record_type(record):
        return record
    if isinstance(record, BaseModel):
        return type(record)
    raise SchemaError(
        f"unexpected config type: {type(record).__name__} ({record!r}), expected a pydantic model",
        details={"type": type(record).__name__},
    )


def _key_of(name: str, info: FieldInfo) -> str:
    return info.serialization_alias or info.alias or name


def walk_schema(
    record: Any,
    visit_leaf: Callable[[LeafField], None],
    visit_record: Optional[Callable[[RecordField], None]] = None,
    prefix: Tuple[str, ...] = (),
    key_prefix: Tuple[str, ...] = (),
) -> None:
    """
    Walk a schema depth-first in declaration order.

    visit_leaf is called once per primitive leaf; visit_record is called at
    each nested record before its fields are walked. Fields of other types
    are skipped.

    Args:
        record: Model class or instance
        visit_leaf: Called with each LeafField
        visit_record: Optional, called with each RecordField
        prefix: Attribute path of the record within an enclosing schema
        key_prefix: Serialization key path matching prefix

    Raises:
        SchemaError: If the root is not a model or records nest cyclically
    """
    _walk(record_type(record), prefix, key_prefix, visit_leaf, visit_record, ())


def _walk(
    cls: Type[BaseModel],
    prefix: Tuple[str, ...],
    key_prefix: Tuple[str, ...],
    visit_leaf: Callable[[LeafField], None],
    visit_record: Optional[Callable[[RecordField], None]],
    ancestors: Tuple[type, ...],
) -> None:
    if cls in ancestors:
        raise SchemaError(
            f"cyclic schema: {cls.__name__} nests itself at {'.'.join(prefix)}",
            details={"type": cls.__name__},
        )
    ancestors = ancestors + (cls,)

    for name, info in cls.model_fields.items():
        path = prefix + (name,)
        key_path = key_prefix + (_key_of(name, info),)
        title = info.title or name
        annotation = info.annotation

        if _is_record_type(annotation):
            if visit_record is not None:
                visit_record(RecordField(path, key_path, title, annotation, info.description))
            _walk(annotation, path, key_path, visit_leaf, visit_record, ancestors)
            continue

        kind = kind_for(annotation)
        if kind is None:
            logger.debug(f"Skipping field {'.'.join(path)}: unsupported type {annotation!r}")
            continue

        visit_leaf(
            LeafField(
                path=path,
                key_path=key_path,
                title=title,
                kind=kind,
                description=info.description,
                flag_name=flag_name(path),
                env_name=env_name(path),
            )
        )


@lru_cache(maxsize=None)
def _describe(cls: Type[BaseModel]) -> Tuple[SchemaEntry, ...]:
    entries: List[SchemaEntry] = []
    flags: Dict[str, LeafField] = {}

    def visit_leaf(leaf: LeafField) -> None:
        clash = flags.get(leaf.flag_name)
        if clash is not None:
            raise SchemaError(
                f"fields {clash.dotted_path} and {leaf.dotted_path} both map to switch --{leaf.flag_name}",
                details={"flag": leaf.flag_name},
            )
        flags[leaf.flag_name] = leaf
        entries.append(leaf)

    walk_schema(cls, visit_leaf, entries.append)
    return tuple(entries)


def describe_schema(record: Any) -> Tuple[SchemaEntry, ...]:
    """
    Build (or fetch the cached) descriptor table for a schema.

    Returns:
        RecordField and LeafField entries in walk order
    """
    return _describe(record_type(record))


def leaf_fields(record: Any) -> Tuple[LeafField, ...]:
    """Leaf descriptors of a schema, in walk order"""
    return tuple(entry for entry in describe_schema(record) if isinstance(entry, LeafField))
