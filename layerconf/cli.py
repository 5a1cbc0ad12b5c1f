"""
CLI entrypoint: resolve a schema through all config layers and print it.
"""

import argparse
import importlib
import logging
import sys
from typing import Callable, List, Optional

from pydantic import BaseModel

from . import __version__
from .exceptions import ConfigError
from .loader import ConfigLoader
from .printer import dump_config

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO"):
    """Setup logging configuration"""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def resolve_factory(target: str) -> Callable[[], BaseModel]:
    """
    Import a config factory from a ``module:attribute`` reference.

    The attribute may be a model class or any callable returning a model.

    Raises:
        ValueError: If the reference is malformed or does not resolve
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"Invalid target: {target}. Expected 'module:attribute'")

    try:
        obj = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Cannot import module '{module_name}': {e}") from e

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise ValueError(f"'{module_name}' has no attribute '{attr_path}'") from e

    if not callable(obj):
        raise ValueError(f"Target {target} is not callable")
    return obj


def main(argv: Optional[List[str]] = None):
    """Main CLI entrypoint"""
    parser = argparse.ArgumentParser(
        prog="layerconf",
        description="Resolve a config schema from defaults, file, switches and environment, then print it",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the effective config of a schema
  layerconf myservice.settings:Settings

  # Pass switches through to the schema
  layerconf --name my-service myservice.settings:Settings -config /etc/my-service.json --port 9000

  # Resolve without writing the snapshot back
  layerconf --no-save myservice.settings:Settings
        """,
    )

    parser.add_argument("target", help="Config factory as module:attribute")
    parser.add_argument(
        "schema_args",
        nargs=argparse.REMAINDER,
        help="Switches passed to the schema (e.g. -config PATH --some-field VALUE)",
    )
    parser.add_argument("--name", default=None, help="Application name for banner (default: target)")
    parser.add_argument("--app-version", default="0.0.0", help="Application version for banner (default: 0.0.0)")
    parser.add_argument(
        "--default-path",
        default="config.json",
        help="Snapshot path used when -config is not given (default: config.json)",
    )
    parser.add_argument("--no-save", action="store_true", help="Do not write the merged config back")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    app_name = args.name or args.target

    try:
        factory = resolve_factory(args.target)
        loader = ConfigLoader(
            factory,
            app_name,
            args.app_version,
            args.default_path,
            save_on_load=not args.no_save,
        )
        config, _ = loader.load(args.schema_args)
    except (ConfigError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        logger.exception("Config resolution failed")
        return 1

    dump_config(config, app_name, args.app_version)

    if loader.save_error is not None:
        print(f"WARNING: {loader.save_error.message}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
