"""
Diagnostic dump of a loaded config.
"""

import io
import sys
from typing import List, Optional, TextIO

from pydantic import BaseModel

from .schema import LeafField, describe_schema

INDENT = "   "
NAME_WIDTH = 25


def _config_lines(config: BaseModel) -> List[str]:
    lines = []
    for entry in describe_schema(config):
        prefix = INDENT * entry.depth
        width = max(NAME_WIDTH - len(prefix), 0)
        head = f"{prefix} - {entry.title:<{width}}"
        if isinstance(entry, LeafField):
            lines.append(f"{head} : {entry.kind.format(entry.get(config))}")
        else:
            lines.append(head)
    return lines


def dump_config(
    config: BaseModel,
    app_name: str,
    version: str,
    writer: Optional[TextIO] = None,
) -> None:
    """
    Print the current config, one line per field.

    Nested records get a header line and their fields are indented one
    level further. Not a serialization format.

    Example output:

        my-service (version 1.2.3) running with params:

         - port                      : 8080
         - database
            - timeout                : 2.500000
    """
    writer = writer if writer is not None else sys.stdout
    writer.write(f"\n{app_name} (version {version}) running with params:\n\n")
    for line in _config_lines(config):
        writer.write(line + "\n")
    writer.write("\n")


def format_config(config: BaseModel, app_name: str, version: str) -> str:
    """Return the dump_config() output as a string"""
    buffer = io.StringIO()
    dump_config(config, app_name, version, buffer)
    return buffer.getvalue()
