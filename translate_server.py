"""Translation router HTTP server.

Loads translate_server.ini, configures logging, builds the language provider registry for the
configured backend and serves the translation API until interrupted.

The backend API key is read from the TRANSLATOR_API_KEY environment variable.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Final, NoReturn

from aiohttp import web

from config.loader import ConfigLoader, ConfigLoaderError
from core.trans.dispatcher import TransDispatcher
from core.trans.registry import build_registry
from core.version import VERSION
from handlers.api_server import create_app
from utils.file_utils import FileUtils, FileUtilsError
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from core.trans.registry import ProviderRegistry
    from models.config_models import Config

CFG_FILE: Final[str] = "translate_server.ini"


def check_python_version() -> None:
    """Check if Python version is 3.12 or later.

    Raises:
        RuntimeError: If Python version is below 3.12.
    """
    if sys.version_info < (3, 12):
        msg = "Python 3.12 or later is required"
        raise RuntimeError(msg)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        print(f"\n{message}\n", file=sys.stderr)
        self.print_help(sys.stderr)
        raise SystemExit(2)


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        argparse.Namespace: Parsed arguments; options not given are None.
    """
    parser = _ArgumentParser(
        description="Serve translations through language-specific providers",
        epilog="Example: python translate_server.py --config translate_server.ini --port 8080",
    )
    parser.add_argument("--config", dest="config", metavar="FILE", default=CFG_FILE, help="Configuration file")
    parser.add_argument("--host", dest="host", metavar="HOST", help="Override SERVER.HOST")
    parser.add_argument("--port", dest="port", metavar="PORT", type=int, help="Override SERVER.PORT")
    parser.add_argument("--debug", dest="debug", action="store_true", default=None, help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> Config:
    """Load the configuration file and apply command-line overrides.

    Raises:
        ConfigLoaderError: If the configuration file cannot be loaded.
        FileUtilsError: If the configuration path does not name an INI file.
    """
    config_path: Path = FileUtils.resolve_path(args.config)
    FileUtils.validate_file_path(config_path, ".ini")
    overrides: dict[str, object] = {k: v for k, v in vars(args).items() if k != "config"}
    script_name: str = Path(sys.argv[0]).name
    return ConfigLoader(config_filename=str(config_path), script_name=script_name, **overrides).config


def setup_logging(config: Config) -> logging.Logger:
    log_file: str = str(FileUtils.resolve_path(config.GENERAL.LOG_FILE)) if config.GENERAL.LOG_FILE else ""
    logger_utils = LoggerUtils(log_file)
    logger_utils.set_level(config.GENERAL.LOG_LEVEL)
    return LoggerUtils.get_logger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Run the server.

    Returns:
        int: Process exit status.
    """
    check_python_version()
    args: argparse.Namespace = parse_arguments(argv)
    try:
        config: Config = load_config(args)
    except (ConfigLoaderError, FileUtilsError) as err:
        print(f"\nError: Failed to load configuration file.\nDetails: {err}", file=sys.stderr)
        return 1

    logger: logging.Logger = setup_logging(config)
    logger.info("Translation router %s starting", VERSION)
    logger.debug("Configuration: %s", config)

    registry: ProviderRegistry = build_registry(config)
    if not registry:
        print("\nError: No translation provider is available. See the log for details.", file=sys.stderr)
        return 1

    app: web.Application = create_app(TransDispatcher(registry))
    logger.info("Serving on http://%s:%d", config.SERVER.HOST, config.SERVER.PORT)
    web.run_app(app, host=config.SERVER.HOST, port=config.SERVER.PORT, print=None)
    logger.info("Translation router stopped")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except (OSError, RuntimeError) as err:
        print(f"\nFatal error: {err}", file=sys.stderr)
        sys.exit(1)
