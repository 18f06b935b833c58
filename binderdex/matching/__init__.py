"""
Card name matching engine.

This package turns noisy OCR text or vision labels into a catalog id:
- Script-based language detection
- Exact and bounded edit-distance substring matching
- Two-phase majority voting across observations

Example:
    >>> from binderdex.matching import LanguageDetector, NameMatcher
    >>> detector = LanguageDetector()
    >>> language = detector.detect("ピカチュウ HP60")
    >>> NameMatcher().find_best_match("ピカチュウ HP60", index.table_for(language))
    MatchResult(id=25, display_name='ピカチュウ', confidence=1005.0)
"""

from binderdex.matching.labels import extract_candidates, match_labels
from binderdex.matching.language import (
    DEFAULT_PRIORITY,
    DEFAULT_PROFILES,
    LanguageDetector,
    LanguageProfile,
    detect_language,
)
from binderdex.matching.matcher import NameMatcher, find_best_match, min_window_distance
from binderdex.matching.normalize import normalize_text
from binderdex.matching.voting import run_voting_pipeline, vote_identity, vote_language

__all__ = [
    # Language
    "LanguageDetector",
    "LanguageProfile",
    "DEFAULT_PROFILES",
    "DEFAULT_PRIORITY",
    "detect_language",
    # Matching
    "NameMatcher",
    "find_best_match",
    "min_window_distance",
    "normalize_text",
    # Labels
    "extract_candidates",
    "match_labels",
    # Voting
    "vote_language",
    "vote_identity",
    "run_voting_pipeline",
]
