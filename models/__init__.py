"""Data models for the translation router.

This package contains dataclass definitions for configuration and for translation
requests and results.
"""

from __future__ import annotations

from models.config_models import Backend, Config, General, Languages, Server
from models.translation_models import TranslationRequest, TranslationResult

__all__: list[str] = [
    "Backend",
    "Config",
    "General",
    "Languages",
    "Server",
    "TranslationRequest",
    "TranslationResult",
]
