"""
Data models for BinderDex.

Value objects passed between the catalog, the matching engine, the voting
stage and the slot placer. Everything here is immutable once built; a scan
creates its observations and results and drops them when it is done.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Language(Enum):
    """Languages a card name can be printed in."""

    ENGLISH = "en"
    JAPANESE = "ja"
    KOREAN = "ko"
    CHINESE = "zh"
    GERMAN = "de"
    FRENCH = "fr"

    @classmethod
    def from_code(cls, code: str) -> Language | None:
        """Return the language for a code like ``"ja"``, or None if unsupported."""
        try:
            return cls(code.strip().lower())
        except ValueError:
            return None


class ScanStatus(Enum):
    """Outcome category of one scan attempt."""

    MATCHED = "matched"
    NO_MATCH = "no_match"
    OUT_OF_RANGE = "out_of_range"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class CatalogEntry:
    """One collectible with its display name in each language that has one."""

    id: int
    names: dict[Language, str] = field(default_factory=dict)

    def name_for(self, language: Language) -> str | None:
        return self.names.get(language)


@dataclass(frozen=True)
class LabelCandidate:
    """A labeled entity returned by a vision provider."""

    description: str
    score: float = 0.0


@dataclass(frozen=True)
class Observation:
    """
    One independent noisy read of a card.

    Text observations carry the OCR output and the language hint the OCR
    pass ran with. Label observations carry ranked vision labels and no
    language (labels are always in the default language).
    """

    text: str = ""
    language: Language | None = None
    labels: tuple[LabelCandidate, ...] | None = None  # None for text reads

    @property
    def is_label_based(self) -> bool:
        return self.labels is not None

    @classmethod
    def from_labels(cls, labels: list[LabelCandidate] | tuple[LabelCandidate, ...]) -> Observation:
        return cls(labels=tuple(labels))


@dataclass(frozen=True)
class MatchResult:
    """
    Best catalog hit for one observation.

    ``confidence`` is a ranking score inside one observation only. It is not
    a probability and is not comparable across languages or strategies.
    """

    id: int
    display_name: str
    confidence: float


@dataclass(frozen=True)
class ConsensusResult:
    """Majority-vote outcome across the observations of one scan."""

    language: Language
    id: int | None = None
    display_name: str | None = None
    # Per-observation detail, in observation order
    language_votes: tuple[Language, ...] = ()
    matches: tuple[MatchResult | None, ...] = ()

    @property
    def is_match(self) -> bool:
        return self.id is not None


@dataclass(frozen=True)
class PlacementResult:
    """Physical address of a catalog id in the album."""

    binder_index: int
    page_index: int
    slot_on_page: int
    slot_in_binder: int


@dataclass(frozen=True)
class LookupResult:
    """A resolved name-or-number lookup with its placement."""

    id: int
    display_name: str | None
    placement: PlacementResult


@dataclass(frozen=True)
class ScanResult:
    """Everything one scan attempt produced, ready to hand to storage."""

    consensus: ConsensusResult
    status: ScanStatus
    placement: PlacementResult | None = None
    error: str | None = None
    processing_time_ms: float = 0.0
