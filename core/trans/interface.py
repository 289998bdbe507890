"""This module defines the abstract base class for translation backends and the translation error hierarchy.

A backend adapter turns a TranslationRequest into one call to an external translation service
and always answers with a TranslationResult. Routing errors (missing request, unsupported language)
are raised as exceptions; backend failures never escape an adapter.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Final

from models.translation_models import TranslationResult
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from models.config_models import Config
    from models.translation_models import TranslationRequest

__all__: list[str] = [
    "EMPTY_INPUT_MESSAGE",
    "BackendAdapter",
    "DuplicateLanguageError",
    "InvalidArgumentError",
    "NotSupportedLanguagesError",
    "RoutingError",
    "RoutingErrorKind",
    "TranslateExceptionError",
    "TranslationAuthError",
    "TranslationQuotaExceededError",
    "TranslationRateLimitError",
    "TranslationTimeoutError",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

EMPTY_INPUT_MESSAGE: Final[str] = "Input sentence cannot be null or empty."


class TranslateExceptionError(Exception):
    """An error occurred during the translation process."""


class RoutingErrorKind(Enum):
    INVALID_ARGUMENT = "invalid_argument"
    UNSUPPORTED_LANGUAGE = "unsupported_language"


class RoutingError(TranslateExceptionError):
    """A request could not be routed to a language provider.

    Attributes:
        kind (RoutingErrorKind): Failure kind, for callers that branch on it instead of the class.
    """

    kind: ClassVar[RoutingErrorKind]


class InvalidArgumentError(RoutingError):
    """The translation request is missing."""

    kind = RoutingErrorKind.INVALID_ARGUMENT


class NotSupportedLanguagesError(RoutingError):
    """No provider is registered for the requested language code."""

    kind = RoutingErrorKind.UNSUPPORTED_LANGUAGE

    def __init__(self, language: str | None) -> None:
        self.language: str | None = language
        super().__init__(f"Translation to language '{language}' is not supported.")


class DuplicateLanguageError(TranslateExceptionError):
    """A provider for the same language code is already registered."""


class TranslationTimeoutError(TranslateExceptionError):
    """The backend did not answer within the configured timeout."""


class TranslationAuthError(TranslateExceptionError):
    """The backend rejected the credentials."""


class TranslationQuotaExceededError(TranslateExceptionError):
    """The translatable character quota has been exceeded."""


class TranslationRateLimitError(TranslateExceptionError):
    """The translation request was rate-limited by the API."""


class BackendAdapter(ABC):
    """Abstract base class for translation backend adapters.

    ``translate`` is the only public translation entry point. It rejects empty input without
    touching the backend and converts every exception raised by ``_call_backend`` into a failed
    TranslationResult, so subclasses only implement the raw service call.

    Attributes:
        registered (ClassVar[dict[str, type[BackendAdapter]]]): Adapter classes keyed by engine name.
            Subclasses register themselves when they are defined.
    """

    registered: ClassVar[dict[str, type[BackendAdapter]]] = {}

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        engine_name = cls.fetch_engine_name()
        if not isinstance(engine_name, str) or engine_name == "":
            return  # Unnamed adapters (test doubles, abstract helpers) stay out of the registry.

        if engine_name in cls.registered:
            msg: str = f"A translation backend with the name '{engine_name}' is already registered."
            raise ValueError(msg)

        cls.registered[engine_name] = cls

    def __init__(self) -> None:
        self._timeout: float = 10.0

    @property
    def timeout(self) -> float:
        """Upper bound in seconds for one backend call."""
        return self._timeout

    @staticmethod
    def fetch_engine_name() -> str:
        """Engine name used for registration. Subclasses override it; an empty name is not registered."""
        return ""

    @abstractmethod
    def initialize(self, config: Config) -> None:
        """Validate the backend settings and create the service client.

        Args:
            config (Config): Application configuration; the BACKEND section is used.

        Raises:
            RuntimeError: If the settings do not allow a client to be created.
            TranslateExceptionError: If the backend rejects the settings.
        """
        raise NotImplementedError

    @abstractmethod
    async def _call_backend(self, content: str, tgt_lang: str) -> str:
        """Send one sentence to the backend and return the first translation.

        Args:
            content (str): Non-empty text to translate.
            tgt_lang (str): Canonical target language code.

        Returns:
            str: Translated text.

        Raises:
            TranslateExceptionError: On any backend-level failure.
        """
        raise NotImplementedError

    @abstractmethod
    async def close(self) -> None:
        """Release the service client."""
        raise NotImplementedError

    async def translate(self, request: TranslationRequest) -> TranslationResult:
        """Translate the request's sentence into its target language.

        Args:
            request (TranslationRequest): Sentence and canonical target language.

        Returns:
            TranslationResult: Success with the translated text, or failure with an error message.
        """
        sentence: object = request.input_sentence
        if not isinstance(sentence, str) or not sentence.strip():
            logger.debug("Empty input sentence; backend not called.")
            return TranslationResult.failed(EMPTY_INPUT_MESSAGE)

        try:
            translated: str = await self._call_backend(request.input_sentence, request.target_language)
        except TranslateExceptionError as err:
            logger.error("Translation by '%s' failed: %s", self.fetch_engine_name(), err)
            return TranslationResult.failed(self._describe(err))
        except Exception as err:  # noqa: BLE001
            # Vendor libraries may raise outside the mapped family; none of it may leave the adapter.
            logger.exception("Unexpected error from backend '%s'", self.fetch_engine_name())
            return TranslationResult.failed(self._describe(err))

        logger.info("Translation completed by '%s' (> %s)", self.fetch_engine_name(), request.target_language)
        return TranslationResult.succeeded(translated)

    @staticmethod
    def _describe(err: Exception) -> str:
        return str(err) or err.__class__.__name__
