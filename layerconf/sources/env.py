"""
Environment variable overlay.

Each leaf reads the variable named after its path in upper snake case,
with nesting levels joined by dots: ``internal.value`` -> ``INTERNAL.VALUE``.
"""

import logging
import os
from typing import List, Mapping, Optional

from pydantic import BaseModel

from ..exceptions import EnvParseError
from ..schema import LeafField, leaf_fields

logger = logging.getLogger(__name__)


class EnvBinder:
    """Overlays environment values onto a config"""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self.environ = os.environ if environ is None else environ

    def parse(self, leaf: LeafField, value: str):
        try:
            return leaf.kind.parse(value)
        except ValueError as e:
            raise EnvParseError(leaf.env_name, value, leaf.kind.value) from e

    def overlay(self, config: BaseModel) -> List[str]:
        """
        Overwrite every leaf whose variable is set and non-empty.

        A value that does not parse is logged and that leaf keeps its value;
        the remaining leaves are still processed.

        Returns:
            Names of the variables that were applied
        """
        applied: List[str] = []

        for leaf in leaf_fields(config):
            raw = self.environ.get(leaf.env_name)
            if not raw:
                continue
            try:
                value = self.parse(leaf, raw)
            except EnvParseError as e:
                logger.error(f"{e.message} (got {raw!r})")
                continue
            leaf.set(config, value)
            applied.append(leaf.env_name)

        if applied:
            logger.debug(f"Applied environment overrides: {applied}")
        return applied
