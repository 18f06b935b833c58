"""
Language-dependent text normalization.

OCR output and catalog names go through the same normalization before any
comparison. Scripts that do not separate words with spaces (Japanese,
Chinese, Korean card names) lose all whitespace, since OCR inserts spurious
gaps between glyphs. Space-delimited languages are lowercased and have
whitespace runs collapsed.
"""

from __future__ import annotations

import re

from binderdex.models import Language

# Languages whose card names carry no meaningful spaces
UNSPACED_LANGUAGES = frozenset({Language.JAPANESE, Language.CHINESE, Language.KOREAN})

WHITESPACE_PATTERN = re.compile(r"\s+")


def is_unspaced(language: Language) -> bool:
    return language in UNSPACED_LANGUAGES


def normalize_text(text: str, language: Language) -> str:
    """
    Normalize text for name comparison in the given language.

    Args:
        text: Raw OCR text or catalog display name.
        language: Language whose rules apply.

    Returns:
        Normalized string; empty if the input was empty or whitespace only.

    Example:
        >>> normalize_text("  Mr.   Mime\\n", Language.ENGLISH)
        'mr. mime'
        >>> normalize_text("ピカ チュウ", Language.JAPANESE)
        'ピカチュウ'
    """
    if not text:
        return ""
    if is_unspaced(language):
        return WHITESPACE_PATTERN.sub("", text)
    return WHITESPACE_PATTERN.sub(" ", text.lower()).strip()
