"""
Majority voting across independent noisy observations.

A scan produces several observations of the same card (OCR passes with
different language hints, several captured frames, vision labels). Each one
alone is unreliable; the consensus is reached in two phases:

1. Every text observation votes for the language detected in its text.
2. Every observation is re-matched against the WINNING language's table
   (not its own detected language), and the matches vote on the id.

Forcing phase 2 through one table keeps a single coherent reading across
all samples. Ties in either vote go to the first-seen value.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from binderdex.models import (
    ConsensusResult,
    LabelCandidate,
    Language,
    MatchResult,
    Observation,
)

if TYPE_CHECKING:
    from binderdex.catalog import NameTable

logger = logging.getLogger(__name__)

DetectFn = Callable[[str], Language]
MatchFn = Callable[[str, "NameTable", Language], MatchResult | None]
TableFn = Callable[[Language], "NameTable"]
LabelMatchFn = Callable[[Sequence[LabelCandidate], "NameTable"], MatchResult | None]


def vote_language(
    samples: Sequence[Language | None],
    default_language: Language = Language.ENGLISH,
) -> Language:
    """
    Plurality vote over per-observation language guesses.

    Args:
        samples: Detected languages; None entries are ignored.
        default_language: Returned when there are no usable samples.

    Returns:
        The most frequent language; the first seen wins a tie.
    """
    counts: dict[Language, int] = {}
    for language in samples:
        if language:
            counts[language] = counts.get(language, 0) + 1

    winner = default_language
    best = 0
    for language, count in counts.items():
        if count > best:
            winner, best = language, count
    return winner


def vote_identity(matches: Sequence[MatchResult | None]) -> MatchResult | None:
    """
    Plurality vote over match results, grouped by id.

    Votes are counted by occurrences, not by summed confidence. The winning
    group is represented by its first result; the first group seen wins a tie.

    Returns:
        The winning MatchResult, or None if there are no matches.
    """
    counts: dict[int, int] = {}
    representatives: dict[int, MatchResult] = {}
    for match in matches:
        if match is None:
            continue
        counts[match.id] = counts.get(match.id, 0) + 1
        representatives.setdefault(match.id, match)

    winner: MatchResult | None = None
    best = 0
    for entry_id, count in counts.items():
        if count > best:
            winner, best = representatives[entry_id], count
    return winner


def run_voting_pipeline(
    observations: Sequence[Observation],
    detect_language: DetectFn,
    match_text: MatchFn,
    table_for: TableFn,
    default_language: Language = Language.ENGLISH,
    match_labels: LabelMatchFn | None = None,
) -> ConsensusResult:
    """
    Reduce a set of observations to one consensus language and id.

    Label observations do not vote on language and are always matched
    against the default-language table with ``match_labels``.

    Args:
        observations: All observations for one scan attempt.
        detect_language: Raw text -> detected language.
        match_text: (raw text, table, language) -> MatchResult or None.
        table_for: Language -> name table (empty tables fall back to default).
        default_language: Fallback language.
        match_labels: (labels, default table) -> MatchResult or None.

    Returns:
        ConsensusResult; ``id`` is None when nothing matched.
    """
    # Phase 1: language
    language_votes = tuple(
        detect_language(obs.text) for obs in observations if not obs.is_label_based
    )
    language = vote_language(language_votes, default_language)
    logger.debug("Language votes %s -> %s", [v.value for v in language_votes], language.value)

    # Phase 2: identity, every observation against the winning table
    table = table_for(language)
    if not table:
        table = table_for(default_language)
    default_table = table if table.language == default_language else table_for(default_language)

    matches: list[MatchResult | None] = []
    for obs in observations:
        if obs.is_label_based:
            match = match_labels(obs.labels, default_table) if match_labels else None
        else:
            match = match_text(obs.text, table, table.language)
        matches.append(match)

    winner = vote_identity(matches)
    logger.debug(
        "Identity votes %s -> %s",
        [m.id if m else None for m in matches],
        winner.id if winner else None,
    )

    return ConsensusResult(
        language=language,
        id=winner.id if winner else None,
        display_name=winner.display_name if winner else None,
        language_votes=language_votes,
        matches=tuple(matches),
    )
