"""
Translation request service.

Validates incoming requests, binds the translation capability to the
requested language pair and provider, and runs the document walker.

Field names on the wire are camelCase (``sourceLanguage``); Python code
uses snake_case.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field

from transjson.config import Settings, get_settings
from transjson.core.dispatcher import FailurePolicy
from transjson.core.errors import TranslationError, ValidationError
from transjson.core.walker import DocumentTranslator, LeafFailure
from transjson.i18n.languages import get_language_by_name, get_provider
from transjson.i18n.translator import TranslationCapability, bind_leaf_translator

logger = logging.getLogger(__name__)


# =============================================================================
# Request/Response Models
# =============================================================================


_WIRE = {"populate_by_name": True}


class JsonTranslationRequest(BaseModel):
    model_config = _WIRE

    document: str | None = Field(default=None, alias="json")
    source_language: str | None = Field(default=None, alias="sourceLanguage")
    target_language: str | None = Field(default=None, alias="targetLanguage")
    provider: str | None = None


class JsonTranslationResponse(BaseModel):
    model_config = _WIRE

    translated_json: str = Field(alias="translatedJson")
    source_language: str = Field(alias="sourceLanguage")
    target_language: str = Field(alias="targetLanguage")
    provider: str
    failures: list[dict[str, str]] | None = None


class TextTranslationRequest(BaseModel):
    model_config = _WIRE

    text: str | None = None
    source_language: str | None = Field(default=None, alias="sourceLanguage")
    target_language: str | None = Field(default=None, alias="targetLanguage")
    provider: str | None = None


class TextTranslationResponse(BaseModel):
    model_config = _WIRE

    translated_text: str = Field(alias="translatedText")
    source_language: str = Field(alias="sourceLanguage")
    target_language: str = Field(alias="targetLanguage")
    provider: str


# =============================================================================
# Validation
# =============================================================================


def validate_request(
    content_field: str,
    content: str | None,
    source_language: str | None,
    target_language: str | None,
    provider: str | None,
) -> None:
    """
    Check that all required fields are present and known.

    Args:
        content_field: Wire name of the content field ("json" or "text")
        content: The document or text to translate

    Raises:
        ValidationError: a field is missing, empty, or not recognised
    """
    fields: dict[str, Any] = {
        content_field: content,
        "sourceLanguage": source_language,
        "targetLanguage": target_language,
        "provider": provider,
    }
    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(fields)}",
            fields=missing,
        )

    if not content.strip():
        label = "JSON" if content_field == "json" else "Text"
        raise ValidationError(f"{label} cannot be empty", fields=[content_field])

    unknown = [
        name
        for name, value in (("sourceLanguage", source_language), ("targetLanguage", target_language))
        if get_language_by_name(value) is None
    ]
    if unknown:
        raise ValidationError(f"Unsupported language in: {', '.join(unknown)}", fields=unknown)

    if get_provider(provider) is None:
        raise ValidationError(f"Unknown provider: {provider}", fields=["provider"])


# =============================================================================
# Service
# =============================================================================


def _failure_dict(failure: LeafFailure) -> dict[str, str]:
    return {"pointer": failure.pointer, "error": failure.error}


class TranslationService:
    """
    Handles JSON and plain-text translation requests.

    Each request is independent; a failure ends only that request.
    """

    def __init__(
        self,
        capability: TranslationCapability,
        max_concurrency: int | None = None,
        policy: FailurePolicy | str | None = None,
        settings: Settings | None = None,
        indent: int | None = 2,
    ):
        settings = settings or get_settings()
        if max_concurrency is None:
            max_concurrency = settings.translation_max_concurrency
        if isinstance(max_concurrency, bool) or not isinstance(max_concurrency, int) or max_concurrency < 1:
            raise ValueError(f"max_concurrency must be a positive integer, got {max_concurrency!r}")

        self.capability = capability
        self.max_concurrency = max_concurrency
        self.indent = indent
        self.policy = FailurePolicy(policy or settings.translation_failure_policy)

    async def translate_json(self, request: JsonTranslationRequest) -> JsonTranslationResponse:
        """
        Translate every string value of a JSON document.

        Raises:
            ValidationError, ParseError, TranslationError
        """
        validate_request(
            "json",
            request.document,
            request.source_language,
            request.target_language,
            request.provider,
        )

        translate_leaf = bind_leaf_translator(
            self.capability,
            request.source_language,
            request.target_language,
            request.provider,
        )
        translator = DocumentTranslator(
            translate_leaf,
            max_concurrency=self.max_concurrency,
            policy=self.policy,
            indent=self.indent,
        )

        logger.info(
            "Translating JSON document %s -> %s via %s",
            request.source_language,
            request.target_language,
            request.provider,
        )
        result = await translator.translate(request.document)

        return JsonTranslationResponse(
            translated_json=result.text,
            source_language=request.source_language,
            target_language=request.target_language,
            provider=request.provider,
            failures=[_failure_dict(f) for f in result.failures] if self.policy == FailurePolicy.PARTIAL else None,
        )

    async def translate_text(self, request: TextTranslationRequest) -> TextTranslationResponse:
        """Translate a single piece of text."""
        validate_request(
            "text",
            request.text,
            request.source_language,
            request.target_language,
            request.provider,
        )

        try:
            translated = await self.capability.translate(
                request.text,
                request.source_language,
                request.target_language,
                request.provider,
            )
        except Exception as e:
            raise TranslationError(e) from e

        return TextTranslationResponse(
            translated_text=translated,
            source_language=request.source_language,
            target_language=request.target_language,
            provider=request.provider,
        )
