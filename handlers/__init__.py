"""HTTP handling for the translation router.

This package provides the aiohttp-based HTTP client wrapper used by backend adapters,
the translation API server, and a client for that API.
"""

from handlers.api_client import TranslationServiceClient
from handlers.api_server import create_app
from handlers.async_comm import (
    AsyncCommError,
    AsyncCommInvalidContentTypeError,
    AsyncCommResponseError,
    AsyncCommTimeoutError,
    AsyncHttp,
)

__all__: list[str] = [
    "AsyncCommError",
    "AsyncCommInvalidContentTypeError",
    "AsyncCommResponseError",
    "AsyncCommTimeoutError",
    "AsyncHttp",
    "TranslationServiceClient",
    "create_app",
]
