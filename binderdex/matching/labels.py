"""
Matching for vision-provider labels.

A label provider returns ranked entity descriptions such as
"Pikachu (Pokémon)" or "Pokémon Trading Card Game - Charizard". Short
candidate phrases are cut from each description and matched exactly
against the default-language table; there is no fuzzy phase because labels
are not OCR noise.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from binderdex.matching.matcher import NameMatcher
from binderdex.models import LabelCandidate, MatchResult

if TYPE_CHECKING:
    from binderdex.catalog import NameTable

logger = logging.getLogger(__name__)

# Punctuation that separates phrases inside one description
PHRASE_SEPARATORS = re.compile(r"[()\[\]{}:;,/|\-–—]+")
MAX_TRAILING_WORDS = 3


def extract_candidates(description: str) -> list[str]:
    """
    Cut a label description into candidate name phrases.

    Phrases between separators come first, then the trailing one, two and
    three word windows of the description. Duplicates are dropped.

    Example:
        >>> extract_candidates("Pokémon TCG - Mr. Mime (card)")
        ['Pokémon TCG', 'Mr. Mime', 'card', '(card)', 'Mime (card)', 'Mr. Mime (card)']
    """
    candidates: list[str] = []
    seen: set[str] = set()

    def add(phrase: str) -> None:
        phrase = phrase.strip()
        if phrase and phrase not in seen:
            seen.add(phrase)
            candidates.append(phrase)

    for part in PHRASE_SEPARATORS.split(description):
        add(part)

    words = description.split()
    for size in range(1, min(MAX_TRAILING_WORDS, len(words)) + 1):
        add(" ".join(words[-size:]))

    return candidates


def match_labels(
    labels: list[LabelCandidate] | tuple[LabelCandidate, ...],
    table: NameTable,
    matcher: NameMatcher | None = None,
) -> MatchResult | None:
    """
    Match vision labels against a name table.

    Descriptions are visited from highest to lowest provider score (ties
    keep provider order); the first candidate phrase with an exact hit wins.

    Args:
        labels: Labels returned by the vision provider.
        table: Default-language name table.
        matcher: Matcher supplying the scoring constants.

    Returns:
        MatchResult for the first hit, or None.
    """
    if not labels or not table:
        return None

    matcher = matcher or NameMatcher()
    for label in sorted(labels, key=lambda lbl: lbl.score, reverse=True):
        for candidate in extract_candidates(label.description):
            result = matcher.find_best_match(candidate, table, fuzzy=False)
            if result is not None:
                logger.debug(
                    "Label %r (score %.2f) matched #%d via %r",
                    label.description,
                    label.score,
                    result.id,
                    candidate,
                )
                return result
    return None
