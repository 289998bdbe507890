from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

from handlers.async_comm import AsyncCommError, AsyncCommResponseError, AsyncHttp
from models.translation_models import TranslationResult
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from models.translation_models import TranslationRequest

__all__: list[str] = ["TranslationServiceClient"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class TranslationServiceClient:
    """Client for the translation HTTP API.

    Transport problems are logged and reported through the return value instead of being raised:
    an empty language list, or None in place of a TranslationResult.
    """

    def __init__(self, base_url: str, *, timeout: float = 10.0) -> None:
        self._base_url: str = base_url.rstrip("/")
        self._timeout: float = timeout
        self._http: AsyncHttp = AsyncHttp()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        _ = exc_type, exc_val, exc_tb
        await self.close()

    @property
    def base_url(self) -> str:
        return self._base_url

    async def get_supported_languages(self) -> list[str]:
        """Fetch the language codes the service can translate into.

        Returns:
            list[str]: Supported codes, or an empty list if the service could not be reached.
        """
        try:
            body: Any = await self._http.get(url=f"{self._base_url}/languages", total_timeout=self._timeout)
        except AsyncCommError as err:
            logger.error("Failed to fetch supported languages: %s", err)
            return []

        if not isinstance(body, list):
            logger.error("Unexpected languages response: %r", body)
            return []
        return [code for code in body if isinstance(code, str)]

    async def translate(self, request: TranslationRequest) -> TranslationResult | None:
        """Ask the service to translate ``request``.

        Args:
            request (TranslationRequest): Sentence and target language.

        Returns:
            TranslationResult | None: The service's result. A rejected request (e.g. an unsupported
                language) becomes a failed result carrying the service's message. None if the service
                could not be reached or answered with something other than a result.
        """
        try:
            body: Any = await self._http.post(
                url=f"{self._base_url}/translate",
                data=request.to_dict(),
                total_timeout=self._timeout,
            )
        except AsyncCommResponseError as err:
            if isinstance(err.body, dict) and isinstance(err.body.get("error"), str):
                logger.warning("Translation request rejected: %s", err.body["error"])
                return TranslationResult.failed(err.body["error"])
            logger.error("Translation service error: %s", err)
            return None
        except AsyncCommError as err:
            logger.error("Translation service unreachable: %s", err)
            return None

        if not isinstance(body, dict) or not isinstance(body.get("success"), bool):
            logger.error("Unexpected translation response: %r", body)
            return None
        try:
            return TranslationResult.from_dict(body)
        except (KeyError, TypeError, ValueError) as err:
            logger.error("Unexpected translation response %r: %s", body, err)
            return None

    async def close(self) -> None:
        await self._http.close()
