"""Translation routing.

This package routes translation requests to single-language providers, each backed by a
pluggable backend adapter (Azure AI Translator, DeepL), and normalizes every outcome into a
TranslationResult.
"""

from core.trans.dispatcher import TransDispatcher
from core.trans.interface import (
    BackendAdapter,
    InvalidArgumentError,
    NotSupportedLanguagesError,
    RoutingError,
    RoutingErrorKind,
    TranslateExceptionError,
)
from core.trans.provider import LanguageProvider
from core.trans.registry import ProviderRegistry, build_registry

__all__: list[str] = [
    "BackendAdapter",
    "InvalidArgumentError",
    "LanguageProvider",
    "NotSupportedLanguagesError",
    "ProviderRegistry",
    "RoutingError",
    "RoutingErrorKind",
    "TransDispatcher",
    "TranslateExceptionError",
    "build_registry",
]
