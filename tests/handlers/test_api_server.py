from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestClient, TestServer

from core.trans.dispatcher import TransDispatcher
from core.trans.interface import EMPTY_INPUT_MESSAGE, BackendAdapter
from core.trans.registry import build_registry
from handlers.api_server import create_app
from models.config_models import Config

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from aiohttp import ClientResponse


class UpperCaseAdapter(BackendAdapter):
    """Adapter that 'translates' by upper-casing the sentence and tagging the language."""

    closed: bool = False

    def initialize(self, config: Config) -> None:
        _ = config

    async def _call_backend(self, content: str, tgt_lang: str) -> str:
        return f"{content.upper()} ({tgt_lang})"

    async def close(self) -> None:
        type(self).closed = True


@pytest.fixture(autouse=True)
def register_adapter(monkeypatch: pytest.MonkeyPatch) -> None:
    UpperCaseAdapter.closed = False
    monkeypatch.setattr(BackendAdapter, "registered", {"upper": UpperCaseAdapter})


@pytest_asyncio.fixture
async def client() -> AsyncIterator[TestClient]:
    config = Config()
    config.BACKEND.ENGINE = "upper"
    config.LANGUAGES.ENABLED = ["fr", "it"]
    app = create_app(TransDispatcher(build_registry(config)))
    async with TestClient(TestServer(app)) as test_client:
        yield test_client


@pytest.mark.asyncio
async def test_translate_returns_result(client: TestClient) -> None:
    resp: ClientResponse = await client.post("/translate", json={"inputSentence": "Hello", "targetLanguage": "FR"})

    assert resp.status == 200
    assert await resp.json() == {"success": True, "translatedSentence": "HELLO (fr)", "errorMessage": ""}


@pytest.mark.asyncio
async def test_translate_empty_sentence_is_failed_result(client: TestClient) -> None:
    resp: ClientResponse = await client.post("/translate", json={"inputSentence": "", "targetLanguage": "it"})

    assert resp.status == 200
    assert await resp.json() == {"success": False, "translatedSentence": "", "errorMessage": EMPTY_INPUT_MESSAGE}


@pytest.mark.asyncio
async def test_translate_unsupported_language_is_bad_request(client: TestClient) -> None:
    resp: ClientResponse = await client.post("/translate", json={"inputSentence": "Hello", "targetLanguage": "es"})

    assert resp.status == 400
    body: dict[str, Any] = await resp.json()
    assert "'es'" in body["error"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        [],
        "Hello",
        {"inputSentence": "Hello"},
        {"targetLanguage": "fr"},
        {"inputSentence": 1, "targetLanguage": "fr"},
        {"inputSentence": "Hello", "targetLanguage": ["fr"]},
    ],
)
async def test_translate_malformed_body_is_bad_request(client: TestClient, payload: Any) -> None:
    resp: ClientResponse = await client.post("/translate", json=payload)

    assert resp.status == 400
    assert "error" in await resp.json()


@pytest.mark.asyncio
async def test_translate_invalid_json_is_bad_request(client: TestClient) -> None:
    resp: ClientResponse = await client.post(
        "/translate", data="{not json", headers={"Content-Type": "application/json"}
    )

    assert resp.status == 400
    assert await resp.json() == {"error": "Request body must be valid JSON"}


@pytest.mark.asyncio
async def test_translate_null_sentence_is_empty_input(client: TestClient) -> None:
    resp: ClientResponse = await client.post("/translate", json={"inputSentence": None, "targetLanguage": "fr"})

    assert resp.status == 200
    assert (await resp.json())["errorMessage"] == EMPTY_INPUT_MESSAGE


@pytest.mark.asyncio
async def test_languages_lists_supported_codes(client: TestClient) -> None:
    resp: ClientResponse = await client.get("/languages")

    assert resp.status == 200
    assert await resp.json() == ["fr", "it"]
    assert resp.headers["Access-Control-Allow-Origin"] == "*"


@pytest.mark.asyncio
async def test_preflight_request_is_answered(client: TestClient) -> None:
    resp: ClientResponse = await client.options("/translate")

    assert resp.status == 204
    assert resp.headers["Access-Control-Allow-Origin"] == "*"
    assert "POST" in resp.headers["Access-Control-Allow-Methods"]


@pytest.mark.asyncio
async def test_error_responses_carry_cors_headers(client: TestClient) -> None:
    bad: ClientResponse = await client.post("/translate", json=[])
    missing: ClientResponse = await client.get("/unknown")

    assert bad.headers["Access-Control-Allow-Origin"] == "*"
    assert missing.status == 404
    assert missing.headers["Access-Control-Allow-Origin"] == "*"


@pytest.mark.asyncio
async def test_shutdown_closes_adapters() -> None:
    config = Config()
    config.BACKEND.ENGINE = "upper"
    app = create_app(TransDispatcher(build_registry(config)))

    async with TestClient(TestServer(app)):
        pass

    assert UpperCaseAdapter.closed is True
