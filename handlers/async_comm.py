"""Asynchronous HTTP communication.

``AsyncHttp`` owns one aiohttp session and is shared by everything in the router that talks HTTP:
the Azure adapter calling the translator service and the client of the router's own API.
Responses are decoded by media type; failures surface as ``AsyncCommError`` subclasses, and an
error status keeps the decoded body so the caller can report the server's own message.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Final, Literal, Self

import aiohttp

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable

__all__: list[str] = [
    "AsyncCommError",
    "AsyncCommInvalidContentTypeError",
    "AsyncCommResponseError",
    "AsyncCommTimeoutError",
    "AsyncHttp",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

type Decoder = Callable[[bytes], Any]
type Method = Literal["GET", "POST"]

CONNECT_TIMEOUT: Final[float] = 1.0
DEFAULT_TIMEOUT: Final[float] = 10.0


def _decode_text(raw: bytes) -> str:
    return raw.decode("utf-8")


def _decode_json(raw: bytes) -> Any:
    return json.loads(raw.decode("utf-8"))


DECODERS: Final[dict[str, Decoder]] = {
    "application/json": _decode_json,
    "text/plain": _decode_text,
    "text/html": _decode_text,
}


class AsyncHttp:
    """Shared aiohttp client for JSON and text endpoints.

    The session is opened on first use and reopened after ``close()``, so one instance can live
    as long as its owner.
    """

    def __init__(self) -> None:
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> Self:
        self.initialize_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        _ = exc_type, exc_val, exc_tb
        await self.close()

    def initialize_session(self) -> aiohttp.ClientSession:
        """Open a session if none is usable. Requires a running event loop."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            logger.debug("%s session initialized", type(self).__name__)
        return self._session

    @property
    def session(self) -> aiohttp.ClientSession:
        return self.initialize_session()

    @property
    def closed(self) -> bool:
        return self._session is None or self._session.closed

    async def close(self) -> None:
        session, self._session = self._session, None
        if session is not None and not session.closed:
            await session.close()
            logger.debug("%s session closed", type(self).__name__)

    async def get(
        self,
        *,
        url: str,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
        total_timeout: float = DEFAULT_TIMEOUT,
    ) -> Any:
        """GET ``url`` and return the decoded body (None when the body is empty)."""
        return await self.request("GET", url, params=params, headers=headers, total_timeout=total_timeout)

    async def post(
        self,
        *,
        url: str,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
        data: Any | None = None,
        total_timeout: float = DEFAULT_TIMEOUT,
    ) -> Any:
        """POST ``data`` as JSON to ``url`` and return the decoded body (None when the body is empty)."""
        return await self.request(
            "POST", url, params=params, headers=headers, json=data, total_timeout=total_timeout
        )

    async def request(self, method: Method, url: str, *, total_timeout: float, **kwargs: Any) -> Any:
        """Send one request.

        Args:
            method (Method): HTTP method.
            url (str): Absolute URL.
            total_timeout (float): Seconds allowed for the whole exchange. Zero or less waits indefinitely.
            **kwargs: Passed to ``aiohttp.ClientSession.request`` (params, headers, json).

        Raises:
            AsyncCommTimeoutError: If the exchange does not finish in time.
            AsyncCommResponseError: If the server answers 4xx or 5xx.
            AsyncCommInvalidContentTypeError: If the body cannot be decoded.
            AsyncCommError: If the connection fails.
        """
        logger.debug("%s %s (timeout=%s)", method, url, total_timeout)
        try:
            async with self.session.request(method, url, timeout=_timeout(total_timeout), **kwargs) as resp:
                if resp.status < 400:
                    return await self.decode(resp)
                raise AsyncCommResponseError(
                    f"Server answered {method} {url} with status {resp.status}",
                    status=resp.status,
                    body=await self._error_body(resp),
                )
        except TimeoutError as err:
            msg = f"No response from {url} within {total_timeout} seconds"
            raise AsyncCommTimeoutError(msg) from err
        except aiohttp.ClientConnectorError as err:
            msg = f"Cannot connect to {url}: the server is down or the port is closed"
            raise AsyncCommError(msg) from err
        except (aiohttp.ClientError, ConnectionResetError) as err:
            msg = f"HTTP exchange with {url} failed: {err}"
            raise AsyncCommError(msg) from err

    async def decode(self, resp: aiohttp.ClientResponse) -> Any:
        """Decode a response body by its media type.

        Raises:
            AsyncCommInvalidContentTypeError: If the media type is unknown or the body malformed.
        """
        raw: bytes = await resp.read()
        if not raw:
            return None
        media_type: str = resp.content_type
        decoder: Decoder | None = DECODERS.get(media_type)
        if decoder is None:
            msg = f"No decoder for media type '{media_type}'"
            raise AsyncCommInvalidContentTypeError(msg)
        try:
            return decoder(raw)
        except ValueError as err:
            msg = f"Malformed '{media_type}' body"
            raise AsyncCommInvalidContentTypeError(msg) from err

    async def _error_body(self, resp: aiohttp.ClientResponse) -> Any:
        try:
            return await self.decode(resp)
        except AsyncCommInvalidContentTypeError as err:
            logger.debug("Error body ignored: %s", err)
            return None


def _timeout(total: float) -> aiohttp.ClientTimeout:
    if total <= 0:
        return aiohttp.ClientTimeout(total=None)
    # A connect limit above the total limit would never apply.
    return aiohttp.ClientTimeout(total=total, connect=min(CONNECT_TIMEOUT, total))


class AsyncCommError(Exception):
    """HTTP communication failed."""

    def __init__(self, msg: str | BaseException) -> None:
        self.msg: str = str(msg)
        super().__init__(self.msg)


class AsyncCommTimeoutError(AsyncCommError):
    """The exchange did not complete within its timeout."""


class AsyncCommInvalidContentTypeError(AsyncCommError):
    """The body has an unknown media type or cannot be decoded."""


class AsyncCommResponseError(AsyncCommError):
    """The server answered with an error status.

    Attributes:
        status (int): HTTP status code.
        body (Any): Decoded error body, or None if it was empty or undecodable.
    """

    def __init__(self, msg: str, *, status: int, body: Any = None) -> None:
        super().__init__(msg)
        self.status: int = status
        self.body: Any = body
