from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, ClassVar, Final

from deepl import DeepLClient, Language, TextResult
from deepl.exceptions import (
    AuthorizationException,
    ConnectionException,
    DeepLException,
    QuotaExceededException,
    TooManyRequestsException,
)

from core.trans.interface import (
    BackendAdapter,
    NotSupportedLanguagesError,
    TranslateExceptionError,
    TranslationAuthError,
    TranslationQuotaExceededError,
    TranslationRateLimitError,
    TranslationTimeoutError,
)
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from models.config_models import Config


__all__: list[str] = ["DeeplTranslation"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

# Checked in order; DeepLException is the base of the others and comes last.
_ERROR_MAP: Final[tuple[tuple[type[DeepLException], type[TranslateExceptionError], str], ...]] = (
    (QuotaExceededException, TranslationQuotaExceededError, "DeepL character quota exceeded"),
    (AuthorizationException, TranslationAuthError, "DeepL rejected the API key"),
    (TooManyRequestsException, TranslationRateLimitError, "Too many requests sent to DeepL"),
    (ConnectionException, TranslateExceptionError, "Cannot reach the DeepL server"),
    (DeepLException, TranslateExceptionError, "DeepL translation failed"),
)


def _domain_error(err: DeepLException) -> TranslateExceptionError:
    for source, target, message in _ERROR_MAP:
        if isinstance(err, source):
            return target(f"{message}: {err}")
    return TranslateExceptionError(str(err))


def _collect_target_codes(language_cls: type) -> dict[str, str]:
    """Lower-case code to DeepL target code, from the upper-case constants of ``language_cls``.

    Regional codes map to themselves; a bare base code such as 'en' maps to the last regional
    variant the library lists.
    """
    table: dict[str, str] = {}
    for attr, code in vars(language_cls).items():
        if not attr.isupper() or not isinstance(code, str):
            continue
        table[code.lower()] = code.upper()
        table[code.partition("-")[0].lower()] = code.upper()
    return table


class DeeplTranslation(BackendAdapter):
    """DeepL through the official client library.

    The client is synchronous; each call runs in a worker thread so that the event loop keeps serving
    other requests.
    """

    _target_codes: ClassVar[dict[str, str]] = {}

    def __init__(self) -> None:
        super().__init__()
        self._client: DeepLClient | None = None
        if not DeeplTranslation._target_codes:
            DeeplTranslation._target_codes.update(_collect_target_codes(Language))
            logger.debug("DeepL target codes: %d entries", len(DeeplTranslation._target_codes))

    @property
    def _inst(self) -> DeepLClient:
        if self._client is None:
            msg = "DeepL client used before initialize() or after close()"
            raise TranslateExceptionError(msg)
        return self._client

    @staticmethod
    def fetch_engine_name() -> str:
        return "deepl"

    def initialize(self, config: Config) -> None:
        """Create the DeepL client.

        The key is only checked by DeepL on the first translation, so a wrong key is reported as a
        failed result rather than here.

        Args:
            config (Config): Configuration with BACKEND.API_KEY, optional API_URL and TIMEOUT.

        Raises:
            RuntimeError: If the key is missing or the client cannot be created.
        """
        settings = config.BACKEND
        if not settings.API_KEY:
            msg = "DeepL needs BACKEND.API_KEY or the API key environment variable"
            raise RuntimeError(msg)
        self._timeout = settings.TIMEOUT
        try:
            self._client = DeepLClient(settings.API_KEY, server_url=settings.API_URL or None)
        except (AttributeError, ValueError) as err:
            msg = f"Cannot create the DeepL client: {err}"
            raise RuntimeError(msg) from err
        logger.debug("DeepL client ready (server_url=%s)", settings.API_URL or "default")

    async def _call_backend(self, content: str, tgt_lang: str) -> str:
        target: str | None = DeeplTranslation._target_codes.get(tgt_lang.lower())
        if target is None:
            raise NotSupportedLanguagesError(tgt_lang)
        logger.debug("DeepL request: %d characters to %s", len(content), target)

        work = asyncio.to_thread(self._inst.translate_text, content, target_lang=target)
        try:
            results: TextResult | list[TextResult] = await asyncio.wait_for(work, timeout=self.timeout)
        except TimeoutError:
            msg = f"DeepL did not respond within {self.timeout} seconds"
            raise TranslationTimeoutError(msg) from None
        except DeepLException as err:
            raise _domain_error(err) from err

        # A list comes back only when a list was sent; it may be empty.
        first: TextResult | None = (results[0] if results else None) if isinstance(results, list) else results
        text = getattr(first, "text", None)
        if not isinstance(text, str):
            msg = f"DeepL returned no usable translation: {results!r}"
            raise TranslateExceptionError(msg)
        return text

    async def close(self) -> None:
        """Close the client's HTTP session and drop the client."""
        client, self._client = self._client, None
        if client is not None:
            client.close()
            logger.debug("DeepL client closed")
