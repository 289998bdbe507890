from __future__ import annotations

import os
from pathlib import Path

__all__: list[str] = [
    "FileMissingError",
    "FileUtils",
    "FileUtilsError",
    "UnsupportedFileFormatError",
]


class FileUtils:
    """Path helpers for the configuration and log files named on the command line or in the INI file."""

    @staticmethod
    def resolve_path(path: str | Path, *, strict: bool = False) -> Path:
        """Turn a user-supplied path into an absolute one.

        Environment variables ($HOME, %APPDATA%) and ``~`` are expanded; relative paths are taken
        from the current working directory.

        Args:
            path (str | Path): Path as written by the user (e.g. "~/logs/$APP_ENV/translate_server.log").
            strict (bool): Raise if the path does not exist. Defaults to False.

        Returns:
            Path: Absolute path.
        """
        expanded: Path = Path(os.path.expandvars(str(path))).expanduser()
        if not expanded.is_absolute():
            expanded = Path.cwd() / expanded
        return expanded.resolve(strict=strict)

    @staticmethod
    def validate_file_path(file_path: Path, suffix: list[str] | str) -> None:
        """Check that a file exists and carries one of the allowed suffixes.

        Raises:
            FileMissingError: If the file does not exist.
            UnsupportedFileFormatError: If the suffix is not allowed (compared case-insensitively).
        """
        suffixes: list[str] = [suffix] if isinstance(suffix, str) else suffix

        if not file_path.is_file():
            msg = f"File does not exist: {file_path}"
            raise FileMissingError(msg)
        if file_path.suffix.lower() not in [s.lower() for s in suffixes]:
            msg = f"Unsupported file format: '{file_path.suffix}'. Expected one of: {', '.join(suffixes)}"
            raise UnsupportedFileFormatError(msg)


class FileUtilsError(Exception):
    """A file named by the user cannot be used."""


class FileMissingError(FileUtilsError):
    """The file does not exist."""


class UnsupportedFileFormatError(FileUtilsError):
    """The file has an unexpected suffix."""
