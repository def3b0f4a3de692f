"""
Supported languages and translation providers.

Languages are identified by their English name ("Spanish"), which is what
the prompt sent to the model uses. ISO 639-1 codes are accepted as aliases.
"""

from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    """Supported languages."""

    ENGLISH = "English"
    SPANISH = "Spanish"
    FRENCH = "French"
    GERMAN = "German"
    PORTUGUESE = "Portuguese"
    ITALIAN = "Italian"
    DUTCH = "Dutch"
    RUSSIAN = "Russian"
    JAPANESE = "Japanese"
    CHINESE = "Chinese"      # Simplified
    KOREAN = "Korean"
    ARABIC = "Arabic"
    HINDI = "Hindi"
    TURKISH = "Turkish"
    THAI = "Thai"


class Provider(str, Enum):
    """Upstream translation backends."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"


# Human-readable names (where they differ from the enum value)
DISPLAY_NAMES: dict[Language, str] = {
    Language.CHINESE: "Chinese (Simplified)",
}


LANGUAGE_CODES: dict[str, Language] = {
    "en": Language.ENGLISH,
    "es": Language.SPANISH,
    "fr": Language.FRENCH,
    "de": Language.GERMAN,
    "pt": Language.PORTUGUESE,
    "it": Language.ITALIAN,
    "nl": Language.DUTCH,
    "ru": Language.RUSSIAN,
    "ja": Language.JAPANESE,
    "zh": Language.CHINESE,
    "ko": Language.KOREAN,
    "ar": Language.ARABIC,
    "hi": Language.HINDI,
    "tr": Language.TURKISH,
    "th": Language.THAI,
}


SUPPORTED_LANGUAGES = list(Language)
SUPPORTED_PROVIDERS = list(Provider)


# =============================================================================
# Utilities
# =============================================================================


def get_language_by_name(name: str) -> Language | None:
    """Look up a language by name ("spanish", "Spanish") or code ("es")."""
    key = name.strip().lower()
    for lang in Language:
        if lang.value.lower() == key:
            return lang
    return LANGUAGE_CODES.get(key)


def get_language_name(lang: str | Language) -> str:
    """Get human-readable language name."""
    resolved = lang if isinstance(lang, Language) else get_language_by_name(lang)
    if resolved is None:
        return str(lang)
    return DISPLAY_NAMES.get(resolved, resolved.value)


def get_provider(name: str) -> Provider | None:
    """Look up a provider by name, case-insensitively."""
    try:
        return Provider(name.strip().lower())
    except ValueError:
        return None
