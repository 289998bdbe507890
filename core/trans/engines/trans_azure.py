from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

from core.trans.interface import (
    BackendAdapter,
    NotSupportedLanguagesError,
    TranslateExceptionError,
    TranslationAuthError,
    TranslationQuotaExceededError,
    TranslationRateLimitError,
    TranslationTimeoutError,
)
from handlers.async_comm import (
    AsyncCommError,
    AsyncCommResponseError,
    AsyncCommTimeoutError,
    AsyncHttp,
)
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from models.config_models import Config


__all__: list[str] = ["AzureTranslation"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

API_VERSION: Final[str] = "3.0"
DEFAULT_ENDPOINT: Final[str] = "https://api.cognitive.microsofttranslator.com"
TRANSLATE_PATH: Final[str] = "/translate"

AZURE_INVALID_TARGET_LANGUAGE: Final[int] = 400036
AZURE_FREE_QUOTA_EXCEEDED: Final[int] = 403001


class AzureTranslation(BackendAdapter):
    """Azure AI Translator (Text Translation REST API v3).

    One POST per sentence; the source language is detected by the service.
    """

    def __init__(self) -> None:
        super().__init__()
        self.__http: AsyncHttp | None = None
        self._api_key: str = ""
        self._region: str = ""
        self._url: str = ""

    @property
    def _http(self) -> AsyncHttp:
        if self.__http is None:
            msg = "The Azure translator client is not initialised"
            raise TranslateExceptionError(msg)
        return self.__http

    @staticmethod
    def fetch_engine_name() -> str:
        return "azure"

    def initialize(self, config: Config) -> None:
        """Read the Azure settings and prepare the HTTP client.

        Credentials are only verified by the service on the first request.

        Args:
            config (Config): Configuration with BACKEND.API_KEY, API_URL, REGION and TIMEOUT.

        Raises:
            RuntimeError: If the API key is missing.
        """
        logger.debug("Azure adapter initializing (region=%s)", config.BACKEND.REGION or "global")

        backend = config.BACKEND
        if not backend.API_KEY:
            msg = "An API key is required for the Azure translator"
            raise RuntimeError(msg)
        self._api_key = backend.API_KEY
        self._region = backend.REGION
        self._url = (backend.API_URL or DEFAULT_ENDPOINT).rstrip("/") + TRANSLATE_PATH
        self._timeout = backend.TIMEOUT
        self.__http = AsyncHttp()

    def _build_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {
            "Ocp-Apim-Subscription-Key": self._api_key,
            "Content-Type": "application/json; charset=UTF-8",
        }
        # Global (non-regional) resources are addressed without a region header.
        if self._region:
            headers["Ocp-Apim-Subscription-Region"] = self._region
        return headers

    async def _call_backend(self, content: str, tgt_lang: str) -> str:
        logger.debug("'content': '%s', 'tgt_lang': '%s'", content, tgt_lang)
        try:
            response: Any = await self._http.post(
                url=self._url,
                params={"api-version": API_VERSION, "to": tgt_lang},
                headers=self._build_headers(),
                data=[{"Text": content}],
                total_timeout=self.timeout,
            )
        except AsyncCommTimeoutError as err:
            msg = f"The Azure translator did not respond within {self.timeout} seconds"
            raise TranslationTimeoutError(msg) from err
        except AsyncCommResponseError as err:
            raise self._map_error_response(err, tgt_lang) from err
        except AsyncCommError as err:
            msg = f"An error occurred when connecting to the Azure translator: {err}"
            raise TranslateExceptionError(msg) from err

        return self._extract_translation(response)

    @staticmethod
    def _map_error_response(err: AsyncCommResponseError, tgt_lang: str) -> TranslateExceptionError:
        """Build the domain error for an Azure error response.

        Azure reports failures as ``{"error": {"code": 400036, "message": "..."}}``; the message is
        used when present.
        """
        description: str = f"Azure translator error (HTTP {err.status})"
        code: int | None = None
        if isinstance(err.body, dict) and isinstance(err.body.get("error"), dict):
            error: dict[str, Any] = err.body["error"]
            code = error.get("code") if isinstance(error.get("code"), int) else None
            if error.get("message"):
                description = str(error["message"])

        if code == AZURE_INVALID_TARGET_LANGUAGE:
            return NotSupportedLanguagesError(tgt_lang)
        if code == AZURE_FREE_QUOTA_EXCEEDED:
            return TranslationQuotaExceededError(description)
        if err.status in (401, 403):
            return TranslationAuthError(description)
        if err.status == 429:
            return TranslationRateLimitError(description)
        return TranslateExceptionError(description)

    @staticmethod
    def _extract_translation(response: Any) -> str:
        """Return the first translation's text from ``[{"translations": [{"text": ..., "to": ...}]}]``.

        Raises:
            TranslateExceptionError: If the response does not have that shape.
        """
        try:
            text: Any = response[0]["translations"][0]["text"]
        except (IndexError, KeyError, TypeError) as err:
            msg = "Malformed response from the Azure translator"
            raise TranslateExceptionError(msg) from err
        if not isinstance(text, str):
            msg = "Malformed response from the Azure translator"
            raise TranslateExceptionError(msg)
        return text

    async def close(self) -> None:
        if self.__http is not None:
            await self.__http.close()
        self.__http = None
        logger.debug("Azure adapter closed")
