"""Configuration loading and validation for the translation router.

This package provides utilities for loading, parsing, and validating configuration
settings from the translate_server.ini file.
"""

from config.loader import (
    API_KEY_ENV,
    ConfigFileNotFoundError,
    ConfigFormatError,
    ConfigLoader,
    ConfigLoaderError,
    ConfigTypeError,
    ConfigValueError,
)

__all__: list[str] = [
    "API_KEY_ENV",
    "ConfigFileNotFoundError",
    "ConfigFormatError",
    "ConfigLoader",
    "ConfigLoaderError",
    "ConfigTypeError",
    "ConfigValueError",
]
