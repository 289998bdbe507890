from __future__ import annotations

from typing import TYPE_CHECKING, cast

from core.trans.interface import InvalidArgumentError, RoutingError
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from core.trans.provider import LanguageProvider
    from core.trans.registry import ProviderRegistry
    from models.translation_models import TranslationRequest, TranslationResult


__all__: list[str] = ["TransDispatcher"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class TransDispatcher:
    """Entry point for translations.

    Routes each request to the provider for its target language and hands back the provider's
    TranslationResult unchanged. Routing errors (missing request, unsupported language) are raised;
    translation failures arrive as failed results. Holds no per-request state.
    """

    def __init__(self, registry: ProviderRegistry) -> None:
        self._registry: ProviderRegistry = registry

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    async def translate(self, request: TranslationRequest | None) -> TranslationResult:
        """Translate a sentence into the request's target language.

        Args:
            request (TranslationRequest | None): Sentence and target language code.

        Returns:
            TranslationResult: Success with the translated sentence, or failure with an error message.

        Raises:
            InvalidArgumentError: If ``request`` is None.
            NotSupportedLanguagesError: If no provider serves the requested language.
        """
        if request is None:
            msg = "A translation request is required"
            raise InvalidArgumentError(msg)

        provider: LanguageProvider = self._registry.get_provider(request)
        logger.debug("Request for '%s' routed to %r", request.target_language, provider)
        return await provider.translate(request)

    async def try_translate(self, request: TranslationRequest | None) -> TranslationResult | RoutingError:
        """Like ``translate``, but a routing error is returned instead of raised.

        Returns:
            TranslationResult | RoutingError: The provider's result, or the routing error; its ``kind``
                tells a missing request from an unsupported language.
        """
        found: LanguageProvider | RoutingError = self._registry.lookup(request)
        if isinstance(found, RoutingError):
            logger.debug("Request not routed (%s): %s", found.kind.value, found)
            return found
        return await found.translate(cast("TranslationRequest", request))

    def get_supported_languages(self) -> list[str]:
        """Language codes that can be requested, in registration order."""
        return self._registry.supported_languages

    async def close(self) -> None:
        await self._registry.close()
