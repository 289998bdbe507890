from __future__ import annotations

import logging
import socket
from typing import TYPE_CHECKING

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from handlers.async_comm import (
    AsyncCommError,
    AsyncCommInvalidContentTypeError,
    AsyncCommResponseError,
    AsyncHttp,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


async def _echo_json(request: web.Request) -> web.Response:
    body = await request.json() if request.can_read_body else None
    return web.json_response({"query": dict(request.query), "body": body, "key": request.headers.get("X-Key")})


async def _text(_request: web.Request) -> web.Response:
    return web.Response(text="plain text")


async def _empty(_request: web.Request) -> web.Response:
    return web.Response(status=204)


async def _binary(_request: web.Request) -> web.Response:
    return web.Response(body=b"\x00\x01", content_type="application/octet-stream")


async def _error(_request: web.Request) -> web.Response:
    return web.json_response({"error": {"code": 400036, "message": "bad"}}, status=400)


@pytest_asyncio.fixture
async def server() -> AsyncIterator[TestServer]:
    app = web.Application()
    app.router.add_get("/json", _echo_json)
    app.router.add_post("/json", _echo_json)
    app.router.add_get("/text", _text)
    app.router.add_get("/empty", _empty)
    app.router.add_get("/binary", _binary)
    app.router.add_post("/error", _error)
    async with TestServer(app) as test_server:
        yield test_server


@pytest.mark.asyncio
async def test_session_is_created_lazily(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="TranslationRouter")

    http = AsyncHttp()
    assert http.closed is True
    assert not any("session initialized" in rec.message for rec in caplog.records)

    async with http:
        assert http.closed is False

    assert http.closed is True
    assert any("AsyncHttp session initialized" in rec.message for rec in caplog.records)


@pytest.mark.asyncio
async def test_reenter_after_close_creates_new_session(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="TranslationRouter")
    http = AsyncHttp()

    async with http:
        pass
    caplog.clear()
    async with http:
        pass

    assert any("AsyncHttp session initialized" in rec.message for rec in caplog.records)


@pytest.mark.asyncio
async def test_get_decodes_json(server: TestServer) -> None:
    async with AsyncHttp() as http:
        body = await http.get(url=str(server.make_url("/json")), params={"to": "fr"}, headers={"X-Key": "k"})

    assert body == {"query": {"to": "fr"}, "body": None, "key": "k"}


@pytest.mark.asyncio
async def test_post_sends_json_body(server: TestServer) -> None:
    async with AsyncHttp() as http:
        body = await http.post(url=str(server.make_url("/json")), data=[{"Text": "Hello"}])

    assert body["body"] == [{"Text": "Hello"}]


@pytest.mark.asyncio
async def test_text_and_empty_responses(server: TestServer) -> None:
    async with AsyncHttp() as http:
        assert await http.get(url=str(server.make_url("/text"))) == "plain text"
        assert await http.get(url=str(server.make_url("/empty"))) is None


@pytest.mark.asyncio
async def test_unknown_content_type_raises(server: TestServer) -> None:
    async with AsyncHttp() as http:
        with pytest.raises(AsyncCommInvalidContentTypeError):
            await http.get(url=str(server.make_url("/binary")))


@pytest.mark.asyncio
async def test_error_status_keeps_status_and_body(server: TestServer) -> None:
    async with AsyncHttp() as http:
        with pytest.raises(AsyncCommResponseError) as exc_info:
            await http.post(url=str(server.make_url("/error")), data={})

    assert exc_info.value.status == 400
    assert exc_info.value.body == {"error": {"code": 400036, "message": "bad"}}


@pytest.mark.asyncio
async def test_connection_failure_raises_comm_error() -> None:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port: int = sock.getsockname()[1]

    async with AsyncHttp() as http:
        with pytest.raises(AsyncCommError):
            await http.get(url=f"http://127.0.0.1:{port}/json", total_timeout=2.0)
