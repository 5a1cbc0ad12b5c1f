"""
Command-line switches derived from a schema.

Every leaf with a description becomes one ``--kebab-path`` switch on the
host's argparse parser. Values are staged in the parsed namespace and copied
back into the config by apply(), after the snapshot file has been overlaid.
"""

import argparse
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from pydantic import BaseModel

from ..schema import LeafField, LeafKind, leaf_fields, parse_bool

logger = logging.getLogger(__name__)

_DEST_PREFIX = "layerconf:"


def _bool_argument(text: str) -> bool:
    return parse_bool(text)


_bool_argument.__name__ = "bool"

# argparse reports bad values as "invalid <type name> value"
_ARGUMENT_TYPES: Dict[LeafKind, Callable[[str], Any]] = {
    LeafKind.STRING: str,
    LeafKind.INT: int,
    LeafKind.FLOAT: float,
    LeafKind.BOOL: _bool_argument,
}


@dataclass(frozen=True)
class FlagBinding:
    """Link between one switch and the leaf it sets"""
    flag_name: str
    dest: str
    field: LeafField

    @property
    def option(self) -> str:
        return f"--{self.flag_name}"


def _default_text(kind: LeafKind, value: Any) -> str:
    if kind is LeafKind.STRING:
        return f'"{value}"'
    if kind is LeafKind.BOOL:
        return kind.format(value)
    return str(value)


class FlagRegistry:
    """
    Switch table for one load.

    A registry belongs to a single parser and a single load call, so loading
    twice in one process never re-registers a switch.
    """

    def __init__(self, parser: argparse.ArgumentParser):
        self.parser = parser
        self._bindings: Dict[str, FlagBinding] = {}

    @property
    def bindings(self) -> List[FlagBinding]:
        return list(self._bindings.values())

    def register(self, config: BaseModel) -> List[FlagBinding]:
        """
        Add one switch per described leaf, showing the leaf's current value
        as its default.

        Leaves without a description are skipped (logged at INFO). A switch
        the parser rejects, e.g. one clashing with a host switch, is logged
        and skipped.

        Returns:
            Bindings created by this call
        """
        created: List[FlagBinding] = []

        for leaf in leaf_fields(config):
            if not leaf.description:
                logger.info(f"No description for field {leaf.dotted_path}, not exposed as a switch")
                continue

            binding = FlagBinding(leaf.flag_name, _DEST_PREFIX + leaf.flag_name, leaf)
            default = _default_text(leaf.kind, leaf.get(config))
            help_text = f"{leaf.description} (default {default})".replace("%", "%%")

            kwargs: Dict[str, Any] = {
                "dest": binding.dest,
                "type": _ARGUMENT_TYPES[leaf.kind],
                # Unsupplied switches stay out of the namespace
                "default": argparse.SUPPRESS,
                "help": help_text,
            }
            if leaf.kind is LeafKind.BOOL:
                kwargs.update(nargs="?", const=True, metavar="BOOL")
            else:
                kwargs["metavar"] = leaf.kind.name

            try:
                self.parser.add_argument(binding.option, **kwargs)
            except argparse.ArgumentError as e:
                logger.error(f"Cannot register switch {binding.option} for field {leaf.dotted_path}: {e}")
                continue

            self._bindings[binding.flag_name] = binding
            created.append(binding)

        return created

    def apply(self, namespace: argparse.Namespace, config: BaseModel) -> List[str]:
        """
        Copy supplied switch values into the config.

        Returns:
            Names of the switches that were applied
        """
        applied: List[str] = []
        for binding in self._bindings.values():
            if not hasattr(namespace, binding.dest):
                continue
            binding.field.set(config, getattr(namespace, binding.dest))
            applied.append(binding.flag_name)

        if applied:
            logger.debug(f"Applied switches: {applied}")
        return applied
