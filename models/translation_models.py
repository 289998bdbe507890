"""Models for translation requests and results.

Both types map to camelCase JSON (``inputSentence``, ``targetLanguage``, ``translatedSentence``...),
the wire format of the HTTP API.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from dataclasses_json import DataClassJsonMixin, LetterCase, dataclass_json

__all__: list[str] = ["TranslationRequest", "TranslationResult"]


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class TranslationRequest(DataClassJsonMixin):
    """A sentence and the language it should be translated into.

    Attributes:
        input_sentence (str): Text to translate, in any source language.
        target_language (str): Target language code (e.g. "fr"), compared case-insensitively.
    """

    input_sentence: str
    target_language: str

    def with_target_language(self, language_code: str) -> TranslationRequest:
        """Return a copy addressed to ``language_code``; the sentence is left untouched."""
        return replace(self, target_language=language_code)


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class TranslationResult(DataClassJsonMixin):
    """Outcome of one translation.

    A successful result never carries an error message and a failed one never carries
    translated text; construction of any other combination raises ValueError.

    Attributes:
        success (bool): Whether the backend produced a translation.
        translated_sentence (str): Translated text. Empty on failure.
        error_message (str): Reason for the failure. Empty on success.
    """

    success: bool
    translated_sentence: str = ""
    error_message: str = ""

    def __post_init__(self) -> None:
        if self.success and self.error_message:
            msg = "A successful translation result cannot carry an error message."
            raise ValueError(msg)
        if not self.success and self.translated_sentence:
            msg = "A failed translation result cannot carry translated text."
            raise ValueError(msg)

    @classmethod
    def succeeded(cls, translated_sentence: str) -> TranslationResult:
        return cls(success=True, translated_sentence=translated_sentence, error_message="")

    @classmethod
    def failed(cls, error_message: str) -> TranslationResult:
        return cls(success=False, translated_sentence="", error_message=error_message)

    def __str__(self) -> str:
        return self.translated_sentence if self.success else self.error_message
