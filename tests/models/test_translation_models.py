from __future__ import annotations

import pytest

from models.translation_models import TranslationRequest, TranslationResult


def test_request_serializes_with_camel_case_keys() -> None:
    request = TranslationRequest(input_sentence="Hello", target_language="fr")

    assert request.to_dict() == {"inputSentence": "Hello", "targetLanguage": "fr"}


def test_request_from_json() -> None:
    request: TranslationRequest = TranslationRequest.from_json('{"inputSentence": "Hola", "targetLanguage": "IT"}')

    assert request.input_sentence == "Hola"
    assert request.target_language == "IT"


def test_with_target_language_keeps_sentence_and_original() -> None:
    request = TranslationRequest(input_sentence="Hello", target_language="FR")

    copy: TranslationRequest = request.with_target_language("fr")

    assert copy.target_language == "fr"
    assert copy.input_sentence == "Hello"
    assert request.target_language == "FR"


def test_request_is_immutable() -> None:
    request = TranslationRequest(input_sentence="Hello", target_language="fr")

    with pytest.raises(AttributeError):
        request.target_language = "it"  # type: ignore[misc]


def test_succeeded_result() -> None:
    result: TranslationResult = TranslationResult.succeeded("Bonjour")

    assert result.success is True
    assert result.translated_sentence == "Bonjour"
    assert result.error_message == ""
    assert str(result) == "Bonjour"


def test_failed_result() -> None:
    result: TranslationResult = TranslationResult.failed("boom")

    assert result.success is False
    assert result.translated_sentence == ""
    assert result.error_message == "boom"
    assert str(result) == "boom"


@pytest.mark.parametrize(
    ("success", "translated", "error"),
    [
        (True, "Bonjour", "boom"),
        (False, "Bonjour", "boom"),
        (False, "Bonjour", ""),
    ],
)
def test_result_rejects_inconsistent_fields(success: bool, translated: str, error: str) -> None:  # noqa: FBT001
    with pytest.raises(ValueError, match="cannot carry"):
        TranslationResult(success=success, translated_sentence=translated, error_message=error)


def test_result_serializes_with_camel_case_keys() -> None:
    result: TranslationResult = TranslationResult.succeeded("Ciao")

    assert result.to_dict() == {"success": True, "translatedSentence": "Ciao", "errorMessage": ""}
    assert TranslationResult.from_dict(result.to_dict()) == result
