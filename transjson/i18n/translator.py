"""
LLM-powered leaf translation capability.

The walker only needs a one-argument coroutine ``translate_leaf(text)``.
This module provides the provider-backed implementation (DSPy over
OpenAI, Anthropic or Gemini) and the binding that fixes the language pair
and provider for one request.

No caching: every call reaches the model.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Protocol

import dspy

from transjson.config import Settings, get_settings
from transjson.i18n.languages import Language, Provider, get_language_name, get_provider

logger = logging.getLogger(__name__)


# =============================================================================
# Capability contract
# =============================================================================


class TranslationCapability(Protocol):
    """Anything that can translate one string between two languages."""

    async def translate(
        self,
        text: str,
        source_language: str,
        target_language: str,
        provider: str,
    ) -> str:
        ...


def bind_leaf_translator(
    capability: TranslationCapability,
    source_language: str,
    target_language: str,
    provider: str,
):
    """
    Fix the language pair and provider for one request.

    Returns:
        ``async translate_leaf(text) -> str`` as consumed by the walker
    """

    async def translate_leaf(text: str) -> str:
        return await capability.translate(text, source_language, target_language, provider)

    return translate_leaf


# =============================================================================
# DSPy Signature
# =============================================================================


class TranslateText(dspy.Signature):
    """Translate text while preserving meaning, tone, and style.

    Return only the translation. Keep placeholders, URLs and markup
    exactly as they appear in the input.
    """

    text: str = dspy.InputField(desc="Text to translate")
    source_language: str = dspy.InputField(desc="Source language name (e.g., 'English')")
    target_language: str = dspy.InputField(desc="Target language name (e.g., 'Spanish')")

    translated_text: str = dspy.OutputField(desc="Translated text")


# =============================================================================
# Language model selection
# =============================================================================


def get_lm(provider: str | Provider, settings: Settings | None = None) -> dspy.LM:
    """
    Build the language model for a provider.

    Args:
        provider: 'openai', 'anthropic' or 'gemini'
        settings: Settings to read keys and models from (defaults to env)

    Returns:
        Configured DSPy LM instance.
    """
    settings = settings or get_settings()
    resolved = provider if isinstance(provider, Provider) else get_provider(provider)

    if resolved == Provider.OPENAI:
        if not settings.openai_api_key:
            raise ValueError("OPENAI_API_KEY not set")
        return dspy.LM(
            model=f"openai/{settings.openai_model}",
            api_key=settings.openai_api_key,
            temperature=settings.llm_temperature,
        )

    elif resolved == Provider.ANTHROPIC:
        if not settings.anthropic_api_key:
            raise ValueError("ANTHROPIC_API_KEY not set")
        return dspy.LM(
            model=f"anthropic/{settings.anthropic_model}",
            api_key=settings.anthropic_api_key,
            temperature=settings.llm_temperature,
        )

    elif resolved == Provider.GEMINI:
        if not settings.gemini_key:
            raise ValueError("GOOGLE_API_KEY or GEMINI_API_KEY not set")
        # Use gemini/ prefix for litellm
        return dspy.LM(
            model=f"gemini/{settings.gemini_model}",
            api_key=settings.gemini_key,
            temperature=settings.llm_temperature,
        )

    else:
        raise ValueError(f"Unknown provider: {provider}")


# =============================================================================
# Translator
# =============================================================================


def _keep_surrounding_whitespace(source: str, translated: str) -> str:
    """Re-apply the leading and trailing whitespace of ``source`` to a model reply."""
    core = source.strip()
    leading = source[: len(source) - len(source.lstrip())]
    trailing = source[len(core) + len(leading):]
    return leading + translated.strip() + trailing


class LLMTranslator:
    """
    Provider-backed translation capability.

    Usage:
        translator = LLMTranslator()
        es_text = await translator.translate("Hello", "English", "Spanish", "openai")

    Model calls are blocking, so each one runs in a worker thread; this is
    what lets the dispatcher overlap several leaves. Errors propagate to the
    caller unchanged.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self._lms: dict[Provider, dspy.LM] = {}
        self._translate_module: dspy.Predict | None = None

    @property
    def translate_module(self) -> dspy.Predict:
        if self._translate_module is None:
            self._translate_module = dspy.Predict(TranslateText)
        return self._translate_module

    def lm_for(self, provider: str | Provider) -> dspy.LM:
        resolved = provider if isinstance(provider, Provider) else get_provider(provider)
        if resolved is None:
            raise ValueError(f"Unknown provider: {provider}")
        if resolved not in self._lms:
            self._lms[resolved] = get_lm(resolved, self.settings)
        return self._lms[resolved]

    async def translate(
        self,
        text: str,
        source_language: str | Language,
        target_language: str | Language,
        provider: str | Provider,
    ) -> str:
        """
        Translate text.

        Args:
            text: Text to translate
            source_language: Source language name or code
            target_language: Target language name or code
            provider: Backend to use

        Returns:
            Translated text
        """
        if not text or not text.strip():
            return text

        source = get_language_name(source_language)
        target = get_language_name(target_language)
        if source == target:
            return text

        lm = self.lm_for(provider)

        def call() -> str:
            with dspy.context(lm=lm):
                result = self.translate_module(
                    text=text,
                    source_language=source,
                    target_language=target,
                )
            return result.translated_text

        t0 = time.perf_counter()
        translated = await asyncio.to_thread(call)
        logger.debug(
            "llm_call provider=%s source=%s target=%s latency_ms=%.1f",
            provider,
            source,
            target,
            (time.perf_counter() - t0) * 1000.0,
        )

        if translated is None:
            raise ValueError("Model returned no translation")
        return _keep_surrounding_whitespace(text, translated)
