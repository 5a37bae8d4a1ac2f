"""
Encounter Legality - Trainer/Nickname resolver
Fixed names are stored per language id; index 0 doubles as the fallback.
"""

from typing import Optional, Sequence

from .constants import LanguageID

# Languages each generation's games shipped in
_LANGUAGES_GEN3 = (
    LanguageID.JAPANESE, LanguageID.ENGLISH, LanguageID.FRENCH,
    LanguageID.ITALIAN, LanguageID.GERMAN, LanguageID.SPANISH,
)
_LANGUAGES_GEN4 = _LANGUAGES_GEN3 + (LanguageID.KOREAN,)
_LANGUAGES_GEN7 = _LANGUAGES_GEN4 + (LanguageID.CHINESE_S, LanguageID.CHINESE_T)


def get_available_languages(generation: int):
    if generation <= 3:
        return _LANGUAGES_GEN3
    if generation <= 6:
        return _LANGUAGES_GEN4
    return _LANGUAGES_GEN7


def get_safe_language(generation: int, language: Optional[int]) -> int:
    """The trainer's language if the generation had it, else English."""
    if language in get_available_languages(generation):
        return int(language)
    return int(LanguageID.ENGLISH)


def resolve_name(names: Sequence[str], language: Optional[int]) -> str:
    """
    Language-indexed lookup. An unset language, an index past the end, or an
    empty slot falls back to index 0.
    """
    if not names:
        return ""
    if language is not None and 0 <= language < len(names) and names[language]:
        return names[language]
    return names[0]


def matches(names: Sequence[str], text: str, language: Optional[int]) -> bool:
    """Exact comparison against the resolved name. No names means unconstrained."""
    if not names:
        return True
    return text == resolve_name(names, language)
