"""
Name matching against a per-language name table.

Every table entry is scored against the normalized OCR text:

1. Exact substring: the name occurs verbatim in the text.
   Score = len(name) + exact_bonus, so exact hits always beat fuzzy ones.
2. Fuzzy substring: the smallest Levenshtein distance between the name and
   any same-length window of the text (or the whole text, if the name is
   longer). Accepted within a length-scaled tolerance.
   Score = len(name) - distance * distance_penalty.

The single highest score wins; on equal scores the earlier table entry
(lower catalog id) is kept.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rapidfuzz.distance import Levenshtein

from binderdex.config import MatchConfig
from binderdex.matching.normalize import normalize_text
from binderdex.models import Language, MatchResult

if TYPE_CHECKING:
    from binderdex.catalog import NameTable

logger = logging.getLogger(__name__)


def min_window_distance(name: str, text: str, max_distance: int | None = None) -> int:
    """
    Minimum edit distance between ``name`` and any same-length window of ``text``.

    If ``name`` is longer than ``text`` the two are compared directly.

    Args:
        name: Normalized candidate name.
        text: Normalized OCR text.
        max_distance: Optional cutoff; distances above it are reported as
            ``max_distance + 1``.

    Returns:
        Smallest distance found.
    """
    width = len(name)
    if width > len(text):
        return Levenshtein.distance(name, text, score_cutoff=max_distance)

    best = width + 1 if max_distance is None else max_distance + 1
    for start in range(len(text) - width + 1):
        distance = Levenshtein.distance(name, text[start : start + width], score_cutoff=best - 1)
        if distance < best:
            best = distance
            if best == 0:
                break
    return best


class NameMatcher:
    """
    Find the catalog entry whose name best matches noisy OCR text.

    Attributes:
        config: Matching thresholds and scoring constants.

    Example:
        >>> table = NameTable.from_mapping({"Charmander": 4, "Charizard": 6}, Language.ENGLISH)
        >>> NameMatcher().find_best_match("charmanber", table)
        MatchResult(id=4, display_name='Charmander', confidence=8.5)
    """

    def __init__(self, config: MatchConfig | None = None) -> None:
        self.config = config or MatchConfig()

    def score_candidate(self, name: str, text: str, fuzzy: bool = True) -> float | None:
        """
        Score one normalized name against normalized text.

        Returns:
            The score, or None if the name does not match within tolerance.
        """
        if name in text:
            return len(name) + self.config.exact_bonus
        if not fuzzy:
            return None

        tolerance = self.config.tolerance_for(len(name))
        distance = min_window_distance(name, text, max_distance=tolerance)
        if distance > tolerance:
            return None
        return len(name) - distance * self.config.distance_penalty

    def find_best_match(
        self,
        raw_text: str,
        table: NameTable,
        language: Language | None = None,
        fuzzy: bool = True,
    ) -> MatchResult | None:
        """
        Match raw OCR text against a name table.

        Args:
            raw_text: OCR output (not yet normalized).
            table: Name table to search.
            language: Normalization language; defaults to the table's language.
            fuzzy: Whether to fall back to edit-distance matching.

        Returns:
            Best MatchResult, or None for empty input, an empty table, or
            no name within tolerance.
        """
        if not raw_text or not raw_text.strip() or not table:
            return None

        language = language or table.language
        text = normalize_text(raw_text, language)
        if not text:
            return None

        best_name: str | None = None
        best_score = 0.0
        for name, _entry_id in table.items():
            score = self.score_candidate(name, text, fuzzy=fuzzy)
            if score is None:
                continue
            if best_name is None or score > best_score:
                best_name = name
                best_score = score

        if best_name is None:
            logger.debug("No %s match for %r", language.value, text)
            return None

        result = MatchResult(
            id=table.ids[best_name],
            display_name=table.display_name(best_name),
            confidence=best_score,
        )
        logger.debug(
            "Matched %r -> #%d %s (score %.1f)", text, result.id, result.display_name, best_score
        )
        return result


_default_matcher = NameMatcher()


def find_best_match(
    raw_text: str,
    table: NameTable,
    language: Language | None = None,
) -> MatchResult | None:
    """Match with default thresholds. See NameMatcher.find_best_match."""
    return _default_matcher.find_best_match(raw_text, table, language)
