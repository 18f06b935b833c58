"""
Script-based language detection for OCR text.

Each non-default language is identified either by a set of Unicode script
ranges (Japanese kana, Korean Hangul, Chinese Han) or by a set of accented
letters (German, French). Detection is a single pass that records which
profiles had at least one matching character; counts are never compared.

Adding a language means adding a LanguageProfile and a name table; the
detection logic does not change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from binderdex.exceptions import ConfigurationError
from binderdex.models import Language

logger = logging.getLogger(__name__)


# =============================================================================
# PROFILES
# =============================================================================


@dataclass(frozen=True)
class LanguageProfile:
    """Characters that identify one language."""

    language: Language
    script_ranges: tuple[tuple[int, int], ...] = ()  # Inclusive code point ranges
    accents: frozenset[str] = frozenset()

    def __post_init__(self):
        if bool(self.script_ranges) == bool(self.accents):
            raise ConfigurationError(
                f"Profile for {self.language.value} needs either script ranges or accents"
            )

    @property
    def is_script_based(self) -> bool:
        return bool(self.script_ranges)

    def contains_code_point(self, code_point: int) -> bool:
        return any(start <= code_point <= end for start, end in self.script_ranges)


JAPANESE_PROFILE = LanguageProfile(
    Language.JAPANESE,
    script_ranges=(
        (0x3040, 0x309F),  # Hiragana
        (0x30A0, 0x30FF),  # Katakana
        (0x31F0, 0x31FF),  # Katakana phonetic extensions
        (0xFF66, 0xFF9F),  # Halfwidth katakana
    ),
)

KOREAN_PROFILE = LanguageProfile(
    Language.KOREAN,
    script_ranges=(
        (0x1100, 0x11FF),  # Hangul Jamo
        (0x3130, 0x318F),  # Hangul compatibility Jamo
        (0xAC00, 0xD7AF),  # Hangul syllables
    ),
)

CHINESE_PROFILE = LanguageProfile(
    Language.CHINESE,
    script_ranges=(
        (0x3400, 0x4DBF),  # CJK extension A
        (0x4E00, 0x9FFF),  # CJK unified ideographs
    ),
)

GERMAN_PROFILE = LanguageProfile(
    Language.GERMAN,
    accents=frozenset("äöüßÄÖÜẞ"),
)

FRENCH_PROFILE = LanguageProfile(
    Language.FRENCH,
    accents=frozenset("àâæçéèêëîïôœùûÿÀÂÆÇÉÈÊËÎÏÔŒÙÛŸ"),
)

# Scan order: script profiles first, then accent profiles
DEFAULT_PROFILES: tuple[LanguageProfile, ...] = (
    JAPANESE_PROFILE,
    KOREAN_PROFILE,
    CHINESE_PROFILE,
    GERMAN_PROFILE,
    FRENCH_PROFILE,
)

# Kana outranks Han so Japanese names written with kanji stay Japanese
DEFAULT_PRIORITY: tuple[Language, ...] = (
    Language.JAPANESE,
    Language.KOREAN,
    Language.CHINESE,
    Language.GERMAN,
    Language.FRENCH,
)


# =============================================================================
# DETECTOR
# =============================================================================


class LanguageDetector:
    """
    Classify raw OCR text into one of a closed set of languages.

    Every character is assigned to at most one profile: script profiles are
    tried first, in configured order, then accent profiles. The result is the
    first language in the priority order that received any character, or the
    default language if none did.

    Example:
        >>> detector = LanguageDetector()
        >>> detector.detect("Pikachu HP 60")
        <Language.ENGLISH: 'en'>
        >>> detector.detect("ピカチュウ")
        <Language.JAPANESE: 'ja'>
    """

    def __init__(
        self,
        profiles: tuple[LanguageProfile, ...] = DEFAULT_PROFILES,
        priority: tuple[Language, ...] = DEFAULT_PRIORITY,
        default_language: Language = Language.ENGLISH,
    ) -> None:
        profiled = {p.language for p in profiles}
        if len(profiled) != len(profiles):
            raise ConfigurationError("Each language may have only one profile")
        if default_language in profiled:
            raise ConfigurationError(
                f"Default language {default_language.value} must not have a profile"
            )
        unknown = [lang.value for lang in priority if lang not in profiled]
        if unknown:
            raise ConfigurationError(f"Priority names languages without a profile: {unknown}")
        unranked = [p.language.value for p in profiles if p.language not in priority]
        if unranked:
            raise ConfigurationError(f"Profiles missing from priority: {unranked}")

        self.default_language = default_language
        self.priority = priority
        self._script_profiles = tuple(p for p in profiles if p.is_script_based)
        self._accent_profiles = tuple(p for p in profiles if not p.is_script_based)

    @property
    def languages(self) -> tuple[Language, ...]:
        """All languages this detector can return, default first."""
        return (self.default_language, *self.priority)

    def _classify(self, char: str) -> Language | None:
        code_point = ord(char)
        for profile in self._script_profiles:
            if profile.contains_code_point(code_point):
                return profile.language
        for profile in self._accent_profiles:
            if char in profile.accents:
                return profile.language
        return None

    def detect(self, text: str) -> Language:
        """
        Detect the language of a raw text sample.

        Args:
            text: Raw OCR text.

        Returns:
            Detected language; the default language for empty or
            whitespace-only text and for text with no profiled characters.
        """
        if not text or not text.strip():
            return self.default_language

        seen: set[Language] = set()
        for char in text:
            language = self._classify(char)
            if language is not None:
                seen.add(language)

        for language in self.priority:
            if language in seen:
                if len(seen) > 1:
                    logger.debug(
                        "Mixed scripts %s; choosing %s",
                        sorted(lang.value for lang in seen),
                        language.value,
                    )
                return language
        return self.default_language


_default_detector = LanguageDetector()


def detect_language(text: str) -> Language:
    """Detect language with the default profiles (English default)."""
    return _default_detector.detect(text)
