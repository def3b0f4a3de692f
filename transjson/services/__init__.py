"""
Services - request validation and orchestration on top of the core transform.
"""

from transjson.services.translation import (
    TranslationService,
    JsonTranslationRequest,
    JsonTranslationResponse,
    TextTranslationRequest,
    TextTranslationResponse,
    validate_request,
)

__all__ = [
    "TranslationService",
    "JsonTranslationRequest",
    "JsonTranslationResponse",
    "TextTranslationRequest",
    "TextTranslationResponse",
    "validate_request",
]
