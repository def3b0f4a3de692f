"""
Internationalization - languages, providers and the LLM translation capability.

Usage:
    from transjson.i18n import LLMTranslator, bind_leaf_translator

    translator = LLMTranslator()
    translate_leaf = bind_leaf_translator(translator, "English", "Spanish", "openai")
    text_es = await translate_leaf("Hello world")
"""

from transjson.i18n.translator import (
    TranslationCapability,
    LLMTranslator,
    bind_leaf_translator,
    get_lm,
)
from transjson.i18n.languages import (
    Language,
    Provider,
    SUPPORTED_LANGUAGES,
    SUPPORTED_PROVIDERS,
    get_language_by_name,
    get_language_name,
    get_provider,
)

__all__ = [
    # Capability
    "TranslationCapability",
    "LLMTranslator",
    "bind_leaf_translator",
    "get_lm",
    # Languages / providers
    "Language",
    "Provider",
    "SUPPORTED_LANGUAGES",
    "SUPPORTED_PROVIDERS",
    "get_language_by_name",
    "get_language_name",
    "get_provider",
]
