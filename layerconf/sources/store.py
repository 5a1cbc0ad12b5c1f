"""
Snapshot file store with YAML/JSON support.

The snapshot mirrors the schema: keys follow each field's serialization
alias and nested records are nested mappings.
"""

import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import yaml
from pydantic import BaseModel

from ..exceptions import FileParseError, FileReadError, FileWriteError
from ..schema import LeafField, leaf_fields

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = (".yaml", ".yml")

_MISSING = object()


def _target_mode(path: Path) -> int:
    """Permission bits for a snapshot: the existing file's, else 0666 minus umask"""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class FileStore:
    """
    Reads and writes the snapshot of one config.

    The format follows the file suffix: ``.yaml``/``.yml`` use YAML,
    anything else is JSON.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    @property
    def is_yaml(self) -> bool:
        return self.path.suffix.lower() in _YAML_SUFFIXES

    def read(self) -> Dict[str, Any]:
        """
        Read and decode the snapshot.

        Raises:
            FileReadError: If the file is missing or unreadable
            FileParseError: If the content does not decode to a mapping
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            raise FileReadError(str(self.path), e.strerror or str(e)) from e
        except UnicodeDecodeError as e:
            raise FileParseError(str(self.path), f"not valid UTF-8: {e}") from e

        try:
            if self.is_yaml:
                document = yaml.safe_load(text)
            else:
                document = json.loads(text)
        except (yaml.YAMLError, ValueError) as e:
            raise FileParseError(str(self.path), str(e)) from e

        if document is None and self.is_yaml:
            # Empty YAML file
            return {}
        if not isinstance(document, dict):
            raise FileParseError(str(self.path), f"expected a mapping at the top level, got {type(document).__name__}")
        return document

    def _collect(self, document: Dict[str, Any], config: BaseModel) -> List[Tuple[LeafField, Any]]:
        """Match snapshot values to leaves, checking every value before any is applied"""
        updates: List[Tuple[LeafField, Any]] = []

        for leaf in leaf_fields(config):
            node: Any = document
            for depth, key in enumerate(leaf.key_path):
                if not isinstance(node, dict):
                    parent = ".".join(leaf.key_path[:depth])
                    raise FileParseError(str(self.path), f"{parent}: expected a mapping, got {type(node).__name__}")
                node = node.get(key, _MISSING)
                if node is _MISSING or node is None:
                    break
            if node is _MISSING or node is None:
                continue

            try:
                value = leaf.kind.coerce(node)
            except TypeError as e:
                raise FileParseError(str(self.path), f"{'.'.join(leaf.key_path)}: {e}") from e
            updates.append((leaf, value))

        return updates

    def load(self, config: BaseModel) -> bool:
        """
        Overlay the snapshot's values onto config.

        Only leaves present in the file are changed. A missing, unreadable or
        malformed file leaves config untouched and is only logged.

        Returns:
            True if the snapshot was applied
        """
        if not self.path.exists():
            logger.warning(f"Config file not found: {self.path}, using defaults")
            return False

        try:
            updates = self._collect(self.read(), config)
        except (FileReadError, FileParseError) as e:
            logger.error(e.message)
            return False

        for leaf, value in updates:
            leaf.set(config, value)

        logger.debug(f"Loaded {len(updates)} values from {self.path}")
        return True

    def dumps(self, config: BaseModel) -> str:
        """Serialize the whole config with stable ordering and indentation"""
        data = config.model_dump(by_alias=True, mode="json")
        if self.is_yaml:
            return yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    def save(self, config: BaseModel) -> Path:
        """
        Write the config to the snapshot file.

        The content is written to a temporary file next to the target and
        renamed over it, so readers never see a partial snapshot.

        Raises:
            FileWriteError: If the file cannot be written

        Returns:
            Path of the written snapshot
        """
        try:
            content = self.dumps(config)
        except (TypeError, ValueError, yaml.YAMLError) as e:
            raise FileWriteError(str(self.path), f"cannot serialize config: {e}") from e

        tmp_path = None
        try:
            directory = self.path.parent
            directory.mkdir(parents=True, exist_ok=True)
            mode = _target_mode(self.path)
            fd, tmp_path = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=directory)
            try:
                f = os.fdopen(fd, "w", encoding="utf-8")
            except OSError:
                os.close(fd)
                raise
            with f:
                f.write(content)
            # mkstemp creates 0600; keep the snapshot's existing permissions
            os.chmod(tmp_path, mode)
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            raise FileWriteError(str(self.path), e.strerror or str(e)) from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)

        logger.debug(f"Saved config to {self.path}")
        return self.path
