"""Unit tests for core.trans.dispatcher module."""

from __future__ import annotations

import asyncio
from typing import ClassVar

import pytest

from core.trans.dispatcher import TransDispatcher
from core.trans.interface import (
    EMPTY_INPUT_MESSAGE,
    BackendAdapter,
    InvalidArgumentError,
    NotSupportedLanguagesError,
    RoutingErrorKind,
    TranslationQuotaExceededError,
)
from core.trans.registry import build_registry
from models.config_models import Config
from models.translation_models import TranslationRequest, TranslationResult

GREETINGS: dict[str, str] = {"fr": "Bonjour", "it": "Ciao", "es": "Hola", "de": "Hallo"}


class GreetingAdapter(BackendAdapter):
    """Adapter that knows how to say hello."""

    backend_error: ClassVar[Exception | None] = None
    call_count: ClassVar[int] = 0

    def initialize(self, config: Config) -> None:
        _ = config

    async def _call_backend(self, content: str, tgt_lang: str) -> str:
        type(self).call_count += 1
        err: Exception | None = type(self).backend_error
        if err is not None:
            raise err
        if content != "Hello":
            return content
        return GREETINGS[tgt_lang]

    async def close(self) -> None:
        pass


@pytest.fixture(autouse=True)
def reset_registered(monkeypatch: pytest.MonkeyPatch) -> None:
    GreetingAdapter.backend_error = None
    GreetingAdapter.call_count = 0
    monkeypatch.setattr(BackendAdapter, "registered", {"greeting": GreetingAdapter})


@pytest.fixture
def dispatcher() -> TransDispatcher:
    config = Config()
    config.BACKEND.ENGINE = "greeting"
    return TransDispatcher(build_registry(config))


@pytest.mark.asyncio
async def test_translate_hello_to_french(dispatcher: TransDispatcher) -> None:
    result: TranslationResult = await dispatcher.translate(TranslationRequest("Hello", "fr"))

    assert result.success is True
    assert result.translated_sentence == "Bonjour"
    assert result.error_message == ""


@pytest.mark.asyncio
@pytest.mark.parametrize("code", ["it", "IT", "It"])
async def test_translate_is_case_insensitive(dispatcher: TransDispatcher, code: str) -> None:
    result: TranslationResult = await dispatcher.translate(TranslationRequest("Hello", code))

    assert result == TranslationResult.succeeded("Ciao")


@pytest.mark.asyncio
async def test_translate_unsupported_language_raises(dispatcher: TransDispatcher) -> None:
    with pytest.raises(NotSupportedLanguagesError) as exc_info:
        await dispatcher.translate(TranslationRequest("Hello", "xx"))

    assert exc_info.value.kind is RoutingErrorKind.UNSUPPORTED_LANGUAGE
    assert GreetingAdapter.call_count == 0


@pytest.mark.asyncio
async def test_translate_none_raises(dispatcher: TransDispatcher) -> None:
    with pytest.raises(InvalidArgumentError):
        await dispatcher.translate(None)


@pytest.mark.asyncio
async def test_translate_empty_sentence_fails_without_backend_call(dispatcher: TransDispatcher) -> None:
    result: TranslationResult = await dispatcher.translate(TranslationRequest("", "es"))

    assert result == TranslationResult.failed(EMPTY_INPUT_MESSAGE)
    assert GreetingAdapter.call_count == 0


@pytest.mark.asyncio
async def test_translate_backend_failure_is_a_result(dispatcher: TransDispatcher) -> None:
    GreetingAdapter.backend_error = TranslationQuotaExceededError("quota exceeded")

    result: TranslationResult = await dispatcher.translate(TranslationRequest("Hello", "de"))

    assert result == TranslationResult.failed("quota exceeded")


@pytest.mark.asyncio
async def test_translate_is_repeatable(dispatcher: TransDispatcher) -> None:
    request = TranslationRequest("Hello", "fr")

    first: TranslationResult = await dispatcher.translate(request)
    second: TranslationResult = await dispatcher.translate(request)

    assert first == second
    assert request == TranslationRequest("Hello", "fr")


@pytest.mark.asyncio
async def test_concurrent_requests_are_routed_independently(dispatcher: TransDispatcher) -> None:
    requests: list[TranslationRequest] = [TranslationRequest("Hello", code) for code in ("fr", "it", "es", "de")]

    results: list[TranslationResult] = await asyncio.gather(*(dispatcher.translate(r) for r in requests))

    assert [r.translated_sentence for r in results] == ["Bonjour", "Ciao", "Hola", "Hallo"]


def test_get_supported_languages(dispatcher: TransDispatcher) -> None:
    assert dispatcher.get_supported_languages() == ["fr", "it", "es", "de"]
    assert dispatcher.get_supported_languages() == dispatcher.get_supported_languages()


def test_get_supported_languages_empty_registry() -> None:
    config = Config()
    config.BACKEND.ENGINE = "missing"

    assert TransDispatcher(build_registry(config)).get_supported_languages() == []


@pytest.mark.asyncio
async def test_try_translate_returns_routing_errors_as_values(dispatcher: TransDispatcher) -> None:
    unsupported = await dispatcher.try_translate(TranslationRequest("Hello", "xx"))
    missing = await dispatcher.try_translate(None)
    translated = await dispatcher.try_translate(TranslationRequest("Hello", "ES"))

    assert isinstance(unsupported, NotSupportedLanguagesError)
    assert unsupported.kind is RoutingErrorKind.UNSUPPORTED_LANGUAGE
    assert isinstance(missing, InvalidArgumentError)
    assert missing.kind is RoutingErrorKind.INVALID_ARGUMENT
    assert translated == TranslationResult.succeeded("Hola")
    assert GreetingAdapter.call_count == 1
