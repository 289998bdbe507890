"""Logging setup for the translation router.

Every module logs through ``LoggerUtils.get_logger(__name__)``, which places its logger under one
namespace. Creating a ``LoggerUtils`` instance attaches the console and file handlers to that
namespace once per process; the server entry point does this right after loading its configuration.
"""

from __future__ import annotations

import logging
import sys
import warnings
from logging import Formatter, NullHandler, StreamHandler
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING, ClassVar, Final, Literal, TextIO

if TYPE_CHECKING:
    from pathlib import Path

__all__: list[str] = ["DEFAULT_NAMESPACE", "LoggerUtils"]

type LevelName = Literal["NOTSET", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_NAMESPACE: Final[str] = "TranslationRouter"
DEFAULT_LOG_LEVEL: Final[int] = logging.INFO

LOG_MAX_BYTES: Final[int] = 2 * 1024 * 1024
LOG_BACKUPS: Final[int] = 2

CONSOLE_FORMAT: Final[str] = "%(levelname)s: %(message)s"
FILE_FORMAT: Final[str] = "%(asctime)s %(levelname)-8s %(process)5d %(name)-48s %(funcName)s:%(lineno)d\t%(message)s"


def _console_handler(*, silent: bool) -> logging.Handler:
    if silent:
        return NullHandler()
    handler: StreamHandler[TextIO] = StreamHandler(sys.stderr)
    handler.setLevel(logging.WARNING)
    handler.setFormatter(Formatter(CONSOLE_FORMAT))
    return handler


def _file_handler(filename: str) -> RotatingFileHandler:
    """Rotating UTF-8 log receiving every record the namespace lets through.

    Raises:
        OSError: If the file cannot be opened.
    """
    handler = RotatingFileHandler(filename, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(Formatter(FILE_FORMAT))
    return handler


class LoggerUtils:
    """Configures the router's namespace logger.

    Attributes:
        root_logger (logging.Logger): The namespace logger every module logger propagates to.
    """

    _LOGGER_NAMESPACE: ClassVar[str] = DEFAULT_NAMESPACE
    _configured: ClassVar[bool] = False

    def __init__(self, filename: str | Path = "", *, use_null_console: bool = False) -> None:
        """Attach handlers unless an earlier instance already did.

        Args:
            filename (str | Path): Log file path, already resolved by the caller. Empty disables the file log.
            use_null_console (bool): Discard console output instead of writing WARNING and above to stderr.
        """
        self.root_logger: logging.Logger = logging.getLogger(self._LOGGER_NAMESPACE)
        if LoggerUtils._configured:
            return

        # The logger level gates records before any handler sees them.
        self.root_logger.setLevel(DEFAULT_LOG_LEVEL)
        self._attach(_console_handler(silent=use_null_console or sys.stderr is None))

        log_file: str = str(filename).strip()
        if log_file:
            try:
                self._attach(_file_handler(log_file))
            except OSError as err:
                self.root_logger.error("Cannot open log file '%s', file logging disabled: %s", log_file, err)
        else:
            self.root_logger.debug("No log file configured")

        warnings.showwarning = self.warning_to_log
        LoggerUtils._configured = True

    def _attach(self, handler: logging.Handler) -> None:
        if any(type(existing) is type(handler) for existing in self.root_logger.handlers):
            self.root_logger.warning("A %s is already attached; skipped.", type(handler).__name__)
            return
        self.root_logger.addHandler(handler)

    def warning_to_log(
        self,
        message: Warning | str,
        category: type[Warning],
        filename: str,
        lineno: int,
        file: TextIO | None = None,
        line: str | None = None,
    ) -> None:
        """``warnings.showwarning`` replacement that writes to the log."""
        _ = file, line
        self.root_logger.warning("%s:%d: %s: %s", filename, lineno, category.__name__, message)

    def set_level(self, level: LevelName | str) -> None:
        """Set the namespace level by name; an unknown name selects INFO."""
        value: int | None = logging.getLevelNamesMapping().get(level.strip().upper())
        if value is None:
            self.root_logger.setLevel(DEFAULT_LOG_LEVEL)
            self.root_logger.warning("Unknown log level '%s'; using INFO.", level)
            return
        self.root_logger.setLevel(value)

    @staticmethod
    def get_logger(name: str | None = None) -> logging.Logger:
        """Logger ``<namespace>.<name>``, or the namespace logger itself when ``name`` is None."""
        namespace: str = LoggerUtils._LOGGER_NAMESPACE
        return logging.getLogger(f"{namespace}.{name}" if name else namespace)
