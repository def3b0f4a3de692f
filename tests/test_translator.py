"""
Tests for languages and the translation capability binding.

No test here reaches a real model.
"""

from types import SimpleNamespace

import pytest

from transjson.config import Settings
from transjson.i18n.languages import (
    Language,
    Provider,
    get_language_by_name,
    get_language_name,
    get_provider,
)
from transjson.i18n.translator import LLMTranslator, bind_leaf_translator, get_lm


@pytest.fixture
def no_keys():
    return Settings(openai_api_key="", anthropic_api_key="", google_api_key="", gemini_api_key="")


# =============================================================================
# Languages
# =============================================================================


class TestLanguages:
    def test_lookup_by_name_and_code(self):
        assert get_language_by_name("Spanish") == Language.SPANISH
        assert get_language_by_name("  spanish ") == Language.SPANISH
        assert get_language_by_name("es") == Language.SPANISH
        assert get_language_by_name("Klingon") is None

    def test_display_name(self):
        assert get_language_name(Language.CHINESE) == "Chinese (Simplified)"
        assert get_language_name("fr") == "French"
        assert get_language_name("Elvish") == "Elvish"

    def test_providers(self):
        assert get_provider("OpenAI") == Provider.OPENAI
        assert get_provider("nope") is None


# =============================================================================
# Binding
# =============================================================================


class TestBindLeafTranslator:
    @pytest.mark.asyncio
    async def test_binds_language_pair_and_provider(self):
        seen = []

        class Capability:
            async def translate(self, text, source_language, target_language, provider):
                seen.append((text, source_language, target_language, provider))
                return text

        translate_leaf = bind_leaf_translator(Capability(), "English", "Thai", "gemini")
        assert await translate_leaf("hi") == "hi"
        assert seen == [("hi", "English", "Thai", "gemini")]


# =============================================================================
# LLMTranslator
# =============================================================================


class TestLLMTranslator:
    @pytest.mark.asyncio
    async def test_blank_text_returned_unchanged(self, no_keys):
        translator = LLMTranslator(no_keys)
        assert await translator.translate("", "English", "Spanish", "openai") == ""
        assert await translator.translate("  ", "English", "Spanish", "openai") == "  "

    @pytest.mark.asyncio
    async def test_same_language_returned_unchanged(self, no_keys):
        translator = LLMTranslator(no_keys)
        assert await translator.translate("Hello", "English", "en", "openai") == "Hello"

    @pytest.mark.asyncio
    async def test_missing_key_raises(self, no_keys):
        translator = LLMTranslator(no_keys)
        with pytest.raises(ValueError, match="OPENAI_API_KEY"):
            await translator.translate("Hello", "English", "Spanish", "openai")

    @pytest.mark.asyncio
    async def test_unknown_provider_raises(self, no_keys):
        translator = LLMTranslator(no_keys)
        with pytest.raises(ValueError, match="Unknown provider"):
            await translator.translate("Hello", "English", "Spanish", "babelfish")

    def test_get_lm_requires_gemini_key(self, no_keys):
        with pytest.raises(ValueError, match="GOOGLE_API_KEY"):
            get_lm(Provider.GEMINI, no_keys)

    def test_get_lm_builds_provider_model(self):
        settings = Settings(anthropic_api_key="test-key", anthropic_model="claude-test")
        lm = get_lm("anthropic", settings)
        assert lm.model == "anthropic/claude-test"

    @pytest.mark.asyncio
    async def test_surrounding_whitespace_kept(self):
        translator = LLMTranslator(Settings(openai_api_key="test-key"))
        replies = {"Name: ": " Nombre: ", "\n  Hello\n": "Hola"}
        translator._translate_module = lambda text, **_: SimpleNamespace(translated_text=replies[text])

        assert await translator.translate("Name: ", "English", "Spanish", "openai") == "Nombre: "
        assert await translator.translate("\n  Hello\n", "English", "Spanish", "openai") == "\n  Hola\n"
