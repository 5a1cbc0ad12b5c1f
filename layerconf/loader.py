"""
Config loader: layers defaults, snapshot file, switches and environment.

Precedence, lowest first:
    compiled defaults < snapshot file < command-line switch < environment

The merged config is saved back to the snapshot once every layer has been
applied, so the file always matches the effective configuration.
"""

import argparse
import logging
from pathlib import Path
from typing import Callable, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel

from .exceptions import FileWriteError
from .schema import record_type
from .sources import EnvBinder, FileStore, FlagRegistry

logger = logging.getLogger(__name__)

Saver = Callable[[], Path]


def banner(app_name: str, version: str) -> str:
    return f"{app_name} (version {version})"


class ConfigLoader:
    """
    Materializes a config instance from its layered sources.

    Args:
        factory: Returns a fresh config populated with compiled defaults
        app_name: Application name shown in help output
        version: Application version shown in help output
        default_path: Snapshot path used when -config is not given
        parser: Host argparse parser to register switches on (a new one is
            created per load when omitted)
        environ: Environment mapping (defaults to os.environ)
        save_on_load: Persist the merged config at the end of load()
    """

    def __init__(
        self,
        factory: Callable[[], BaseModel],
        app_name: str,
        version: str,
        default_path: Union[str, Path],
        parser: Optional[argparse.ArgumentParser] = None,
        environ: Optional[Mapping[str, str]] = None,
        save_on_load: bool = True,
    ):
        self.factory = factory
        self.app_name = app_name
        self.version = version
        self.default_path = Path(default_path)
        self.parser = parser
        self.environ = environ
        self.save_on_load = save_on_load

        self.config_path: Optional[Path] = None
        self.namespace: Optional[argparse.Namespace] = None
        self.save_error: Optional[FileWriteError] = None

    def build_parser(self) -> argparse.ArgumentParser:
        """Return the parser with the -config switch added"""
        if self.parser is not None:
            parser = self.parser
            if parser.description is None:
                parser.description = banner(self.app_name, self.version)
        else:
            parser = argparse.ArgumentParser(
                description=banner(self.app_name, self.version),
                formatter_class=argparse.RawDescriptionHelpFormatter,
                allow_abbrev=False,
            )

        parser.add_argument(
            "-config",
            "--config",
            dest="config",
            default=str(self.default_path),
            metavar="PATH",
            help=f"path to config (default {self.default_path})",
        )
        return parser

    def load(self, argv: Optional[Sequence[str]] = None) -> Tuple[BaseModel, Saver]:
        """
        Build the config from all sources.

        Args:
            argv: Command-line arguments (defaults to sys.argv[1:])

        Returns:
            (config, save) where save() re-persists the live config and
            raises FileWriteError on failure

        Raises:
            SchemaError: If the factory does not return a pydantic model
        """
        config = self.factory()
        record_type(config)
        self.save_error = None

        parser = self.build_parser()
        registry = FlagRegistry(parser)
        registry.register(config)

        namespace = parser.parse_args(argv)
        self.namespace = namespace
        self.config_path = Path(namespace.config)

        store = FileStore(self.config_path)
        store.load(config)

        registry.apply(namespace, config)

        EnvBinder(self.environ).overlay(config)

        def save() -> Path:
            return store.save(config)

        if self.save_on_load:
            try:
                save()
            except FileWriteError as e:
                logger.error(f"Save config: {e.message}")
                self.save_error = e

        logger.debug(f"Loaded {type(config).__name__} for {banner(self.app_name, self.version)}")
        return config, save


def load_config_with_saver(
    factory: Callable[[], BaseModel],
    app_name: str,
    version: str,
    default_path: Union[str, Path],
    argv: Optional[Sequence[str]] = None,
    **kwargs,
) -> Tuple[BaseModel, Saver]:
    """
    Load config by default path or by the -config switch.

    Returns:
        (config, save) as returned by ConfigLoader.load()
    """
    loader = ConfigLoader(factory, app_name, version, default_path, **kwargs)
    return loader.load(argv)


def load_config(
    factory: Callable[[], BaseModel],
    app_name: str,
    version: str,
    default_path: Union[str, Path],
    argv: Optional[Sequence[str]] = None,
    **kwargs,
) -> BaseModel:
    """Load config by default path or by the -config switch"""
    config, _ = load_config_with_saver(factory, app_name, version, default_path, argv, **kwargs)
    return config
