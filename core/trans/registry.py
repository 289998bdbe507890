"""Language provider registry.

``build_registry`` is run once at start-up. It walks the static ``PROVIDER_TABLE``, gives every
provider its own backend adapter built from the common backend settings, and indexes the providers
by language code. A provider whose construction fails is logged and left out; start-up continues
with the remaining languages. The registry is read-only once built.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from core.trans.engines import AzureTranslation, DeeplTranslation  # noqa: F401
from core.trans.interface import (
    BackendAdapter,
    DuplicateLanguageError,
    InvalidArgumentError,
    NotSupportedLanguagesError,
    RoutingError,
    TranslateExceptionError,
)
from core.trans.provider import (
    FrenchTranslationProvider,
    GermanTranslationProvider,
    ItalianTranslationProvider,
    LanguageProvider,
    SpanishTranslationProvider,
)
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable, Iterable

    from models.config_models import Config
    from models.translation_models import TranslationRequest

__all__: list[str] = ["PROVIDER_TABLE", "ProviderFactory", "ProviderRegistry", "build_registry"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

type ProviderFactory = Callable[[BackendAdapter], LanguageProvider]

PROVIDER_TABLE: Final[tuple[tuple[str, ProviderFactory], ...]] = (
    ("fr", FrenchTranslationProvider),
    ("it", ItalianTranslationProvider),
    ("es", SpanishTranslationProvider),
    ("de", GermanTranslationProvider),
)


def _language_key(language_code: str) -> str:
    return language_code.strip().casefold()


class ProviderRegistry:
    """Routing table from language code to provider.

    Codes are matched case-insensitively and are unique; ``supported_languages`` keeps
    registration order.
    """

    def __init__(self) -> None:
        self._providers: dict[str, LanguageProvider] = {}

    def __len__(self) -> int:
        return len(self._providers)

    def __contains__(self, language_code: object) -> bool:
        return isinstance(language_code, str) and _language_key(language_code) in self._providers

    def register(self, provider: LanguageProvider) -> None:
        """Add a provider under its language code.

        Raises:
            DuplicateLanguageError: If a provider is already registered for the same code.
        """
        key: str = _language_key(provider.language_code)
        existing: LanguageProvider | None = self._providers.get(key)
        if existing is not None:
            msg: str = (
                f"Language '{provider.language_code}' is already served by {existing!r}; "
                f"{provider!r} was rejected."
            )
            raise DuplicateLanguageError(msg)
        self._providers[key] = provider
        logger.debug("Provider registered: %r", provider)

    @property
    def supported_languages(self) -> list[str]:
        """Registered language codes, in registration order."""
        return [provider.language_code for provider in self._providers.values()]

    def lookup(self, request: TranslationRequest | None) -> LanguageProvider | RoutingError:
        """Find the provider for the request's target language without raising.

        Args:
            request (TranslationRequest | None): Request to route.

        Returns:
            LanguageProvider | RoutingError: The provider, or the routing error describing why there is
                none (InvalidArgumentError for a missing request, NotSupportedLanguagesError for an
                unknown code). Callers can branch on ``RoutingError.kind``.
        """
        if request is None:
            return InvalidArgumentError("A translation request is required")

        language: str | None = request.target_language
        provider: LanguageProvider | None = None
        if isinstance(language, str):
            provider = self._providers.get(_language_key(language))
        if provider is None:
            return NotSupportedLanguagesError(language)
        return provider

    def get_provider(self, request: TranslationRequest | None) -> LanguageProvider:
        """Find the provider for the request's target language.

        Args:
            request (TranslationRequest | None): Request to route.

        Returns:
            LanguageProvider: Provider registered for ``request.target_language``.

        Raises:
            InvalidArgumentError: If ``request`` is None.
            NotSupportedLanguagesError: If no provider serves the requested language.
        """
        found: LanguageProvider | RoutingError = self.lookup(request)
        if isinstance(found, RoutingError):
            raise found
        return found

    async def close(self) -> None:
        """Close every provider's backend adapter."""
        for provider in self._providers.values():
            try:
                await provider.close()
            except TranslateExceptionError as err:
                logger.error("Failed to close %r: %s", provider, err)
        logger.debug("Provider registry closed")


def build_registry(
    config: Config,
    table: Iterable[tuple[str, ProviderFactory]] = PROVIDER_TABLE,
) -> ProviderRegistry:
    """Build the registry for the configured backend.

    Args:
        config (Config): Application configuration. BACKEND selects and configures the adapter;
            LANGUAGES.ENABLED, when not empty, limits which table entries are built.
        table (Iterable[tuple[str, ProviderFactory]]): Language codes and provider constructors.

    Returns:
        ProviderRegistry: Registry holding every provider that could be built. Empty if none could.
    """
    logger.info("Provider registry construction started")
    registry = ProviderRegistry()

    engine: str = config.BACKEND.ENGINE
    adapter_cls: type[BackendAdapter] | None = BackendAdapter.registered.get(engine)
    if adapter_cls is None:
        logger.critical(
            "Translation backend not found: '%s'. Available: %s", engine, list(BackendAdapter.registered)
        )
        return registry

    entries: list[tuple[str, ProviderFactory]] = list(table)
    enabled: set[str] = {_language_key(code) for code in config.LANGUAGES.ENABLED}
    unknown: set[str] = enabled - {_language_key(code) for code, _ in entries}
    if unknown:
        logger.warning("Ignoring languages without a provider: %s", sorted(unknown))

    for code, factory in entries:
        if enabled and _language_key(code) not in enabled:
            logger.debug("Language not enabled, skipped: '%s'", code)
            continue
        try:
            adapter: BackendAdapter = adapter_cls()
            provider: LanguageProvider = factory(adapter)
            if _language_key(provider.language_code) != _language_key(code):
                msg: str = f"{provider!r} does not serve the language it is registered for ('{code}')"
                raise TypeError(msg)
            if provider.language_code in registry:
                msg = f"Language '{provider.language_code}' is already served; {provider!r} was rejected."
                raise DuplicateLanguageError(msg)
            # Initialized last, so a rejected provider never holds an open client.
            adapter.initialize(config)
            registry.register(provider)
        except DuplicateLanguageError as err:
            logger.error("Duplicate language provider skipped: %s", err)
        except (RuntimeError, TypeError, ValueError) as err:
            logger.critical("Skipping '%s' provider; construction failed: %s", code, err)
        except TranslateExceptionError as err:
            logger.critical("Skipping '%s' provider; backend setup failed: %s", code, err)
        else:
            logger.info("Translation provider loaded: '%s' (%s)", provider.language_code, engine)

    if not registry:
        logger.critical("No translation providers could be registered")
    logger.info("Supported languages: %s", registry.supported_languages)
    return registry
