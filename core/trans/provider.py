"""Single-language translation providers.

A provider pins one target language code to one backend adapter. The registry selects providers
by that code; the adapter never needs to know which language it serves.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from core.trans.interface import BackendAdapter
    from models.translation_models import TranslationRequest, TranslationResult

__all__: list[str] = [
    "FrenchTranslationProvider",
    "GermanTranslationProvider",
    "ItalianTranslationProvider",
    "LanguageProvider",
    "SpanishTranslationProvider",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class LanguageProvider:
    """Translates into the one language named by ``LANGUAGE_CODE``.

    Attributes:
        LANGUAGE_CODE (ClassVar[str]): Canonical code this provider answers for. Set by subclasses.
    """

    LANGUAGE_CODE: ClassVar[str] = ""

    def __init__(self, adapter: BackendAdapter) -> None:
        if not self.LANGUAGE_CODE.strip():
            msg: str = f"{self.__class__.__name__} does not define a language code"
            raise TypeError(msg)
        self._adapter: BackendAdapter = adapter

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(language_code={self.language_code!r})"

    @property
    def language_code(self) -> str:
        return self.LANGUAGE_CODE

    @property
    def adapter(self) -> BackendAdapter:
        return self._adapter

    async def translate(self, request: TranslationRequest) -> TranslationResult:
        """Translate ``request`` into this provider's language.

        The adapter receives a copy of the request carrying this provider's canonical code,
        whatever casing or code the caller used.

        Args:
            request (TranslationRequest): Sentence to translate.

        Returns:
            TranslationResult: The adapter's result, unchanged.
        """
        if request.target_language != self.language_code:
            logger.debug("Target language '%s' set to '%s'", request.target_language, self.language_code)
            request = request.with_target_language(self.language_code)
        return await self._adapter.translate(request)

    async def close(self) -> None:
        await self._adapter.close()


class FrenchTranslationProvider(LanguageProvider):
    LANGUAGE_CODE = "fr"


class ItalianTranslationProvider(LanguageProvider):
    LANGUAGE_CODE = "it"


class SpanishTranslationProvider(LanguageProvider):
    LANGUAGE_CODE = "es"


class GermanTranslationProvider(LanguageProvider):
    LANGUAGE_CODE = "de"
