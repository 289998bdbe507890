"""Loading of ``translate_server.ini``.

The INI file is mapped onto the ``Config`` dataclasses section by section: each key is coerced to
the type of the field's default value, and keys or sections absent from the file keep their
defaults. The API key from the environment and command-line options are applied on top, and the
result is checked before anything is built from it.
"""

from __future__ import annotations

import ast
import configparser
import os
from dataclasses import fields
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from models.config_models import Config
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable, Mapping

__all__: list[str] = [
    "API_KEY_ENV",
    "ConfigFileNotFoundError",
    "ConfigFormatError",
    "ConfigLoader",
    "ConfigLoaderError",
    "ConfigTypeError",
    "ConfigValueError",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

API_KEY_ENV: Final[str] = "TRANSLATOR_API_KEY"

KNOWN_ENGINES: Final[tuple[str, ...]] = ("azure", "deepl")
KNOWN_LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigLoaderError(Exception):
    """Base class for configuration failures."""


class ConfigFileNotFoundError(ConfigLoaderError):
    """No configuration file at the given path."""


class ConfigFormatError(ConfigLoaderError):
    """The file is not valid INI, or a literal in it cannot be parsed."""


class ConfigValueError(ConfigFormatError):
    """A setting has the right type but an unusable value."""


class ConfigTypeError(ConfigFormatError):
    """A setting has the wrong type."""


def _unquote(raw: str) -> str:
    text: str = raw.strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"":
        return text[1:-1]
    return text


def _to_bool(raw: str) -> bool:
    state: bool | None = configparser.ConfigParser.BOOLEAN_STATES.get(_unquote(raw).lower())
    if state is None:
        msg = f"not a boolean: {raw!r}"
        raise ValueError(msg)
    return state


def _to_int(raw: str) -> int:
    # "8080.0" is accepted as 8080.
    return int(float(_unquote(raw)))


def _to_literal(raw: str) -> Any:
    return ast.literal_eval(raw.strip())


_COERCERS: Final[dict[type, Callable[[str], Any]]] = {
    bool: _to_bool,
    int: _to_int,
    float: lambda raw: float(_unquote(raw)),
    str: _unquote,
}


def _coerce(setting: str, raw: str, default: Any) -> Any:
    """Convert ``raw`` to the type of ``default``; containers are read as Python literals.

    Raises:
        ConfigValueError: If the text does not represent a value of that type.
        ConfigFormatError: If a literal is syntactically broken.
    """
    coercer: Callable[[str], Any] = _COERCERS.get(type(default), _to_literal)
    try:
        return coercer(raw)
    except SyntaxError as err:
        msg = f"'{setting}' is not a valid literal: {raw}"
        raise ConfigFormatError(msg) from err
    except (ValueError, TypeError, OverflowError) as err:
        msg = f"'{setting}' has an invalid value: {err}"
        raise ConfigValueError(msg) from err


class ConfigLoader:
    """Reads, overrides and validates the router configuration.

    Args:
        config_filename (str): Path of the INI file.
        script_name (str): Name of the running script, used in the missing-file message.
        **args: Command-line overrides ``host``, ``port`` and ``debug``. None means "not given".

    Attributes:
        config (Config): The loaded configuration.

    Raises:
        ConfigFileNotFoundError: If the file does not exist.
        ConfigFormatError: If the file or one of its values is invalid.
    """

    def __init__(self, *, config_filename: str, script_name: str, **args) -> None:
        if not Path(config_filename).exists():
            msg = f"'{config_filename}' not found. {script_name} needs a configuration file to start."
            raise ConfigFileNotFoundError(msg)

        self.config: Config = Config()
        self.config.GENERAL.SCRIPT_NAME = script_name
        self._load_file(config_filename)
        self._apply_overrides(args)
        self._validate()
        logger.debug("Configuration loaded: %s", self.config)

    def _load_file(self, config_filename: str) -> None:
        parser = configparser.ConfigParser()
        # Keys are matched against the upper-case field names.
        parser.optionxform = str.upper  # type: ignore[assignment,method-assign]
        try:
            parser.read(config_filename, encoding="utf-8")
        except (configparser.Error, UnicodeDecodeError) as err:
            msg = f"'{config_filename}' is not a valid INI file: {err}"
            raise ConfigFormatError(msg) from None

        for section_field in fields(self.config):
            if not parser.has_section(section_field.name):
                logger.debug("[%s] not in file; defaults kept", section_field.name)
                continue
            self._load_section(section_field.name, parser[section_field.name])

    def _load_section(self, name: str, values: Mapping[str, str]) -> None:
        section: Any = getattr(self.config, name)
        for key_field in fields(section):
            raw: str | None = values.get(key_field.name)
            if raw is None:
                continue
            default: Any = getattr(section, key_field.name)
            setattr(section, key_field.name, _coerce(f"{name}.{key_field.name}", raw, default))

    def _apply_overrides(self, args: Mapping[str, Any]) -> None:
        env_key: str = os.getenv(API_KEY_ENV, "")
        if env_key:
            self.config.BACKEND.API_KEY = env_key
            logger.debug("API key taken from '%s'", API_KEY_ENV)

        host: str | None = args.get("host")
        port: int | None = args.get("port")
        if host is not None:
            self.config.SERVER.HOST = host
        if port is not None:
            self.config.SERVER.PORT = int(port)
        if args.get("debug"):
            self.config.GENERAL.DEBUG = True
            self.config.GENERAL.LOG_LEVEL = "DEBUG"

    def _validate(self) -> None:
        """Normalize case-insensitive settings and reject unusable ones.

        Unknown engine or log level names are only warned about; the registry and the logger
        report them again when they are used.

        Raises:
            ConfigValueError: If the timeout or port is out of range.
            ConfigTypeError: If LANGUAGES.ENABLED is not a list of strings.
        """
        backend = self.config.BACKEND
        general = self.config.GENERAL

        backend.ENGINE = backend.ENGINE.strip().lower()
        if backend.ENGINE not in KNOWN_ENGINES:
            logger.warning("Unknown backend engine '%s'", backend.ENGINE)
        general.LOG_LEVEL = general.LOG_LEVEL.strip().upper()
        if general.LOG_LEVEL not in KNOWN_LOG_LEVELS:
            logger.warning("Unknown log level '%s'", general.LOG_LEVEL)

        if not backend.TIMEOUT > 0:
            msg = f"'BACKEND.TIMEOUT' must be greater than zero, got {backend.TIMEOUT}"
            raise ConfigValueError(msg)
        if not 0 < self.config.SERVER.PORT < 65536:
            msg = f"'SERVER.PORT' must be between 1 and 65535, got {self.config.SERVER.PORT}"
            raise ConfigValueError(msg)

        enabled: Any = self.config.LANGUAGES.ENABLED
        if not isinstance(enabled, list) or not all(isinstance(code, str) for code in enabled):
            msg = f"'LANGUAGES.ENABLED' must be a list of language codes, got {enabled!r}"
            raise ConfigTypeError(msg)
        self.config.LANGUAGES.ENABLED = [code.strip().lower() for code in enabled if code.strip()]

        if not backend.API_KEY:
            logger.warning("No API key configured; set %s or BACKEND.API_KEY", API_KEY_ENV)
