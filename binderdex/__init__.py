"""
BinderDex: Identify scanned trading cards and find their album slot.

This library matches noisy multilingual OCR text (or vision labels) from a
card scan against a catalog of up to 1025 entries, reaches a consensus over
several reads by majority vote, and maps the winning entry to a fixed
binder/page/slot address.

Example:
    >>> import binderdex
    >>> index = binderdex.CatalogIndex.from_file("pokedex.yaml")
    >>> pipeline = binderdex.ScanPipeline(index)
    >>> result = pipeline.scan([
    ...     binderdex.Observation("Pikachu HP60", binderdex.Language.ENGLISH),
    ...     binderdex.Observation("Pikachv HP 60", binderdex.Language.ENGLISH),
    ...     binderdex.Observation("ピカチュウ", binderdex.Language.JAPANESE),
    ... ])
    >>> result.consensus.id, result.placement.page_index
    (25, 3)
"""

from binderdex.catalog import CatalogIndex, NameTable, build_name_table, load_catalog
from binderdex.collection import (
    binder_progress,
    completion,
    export_owned_csv,
    export_owned_json,
    generation_progress,
    parse_owned,
)
from binderdex.config import AlbumConfig, MatchConfig, ScanConfig
from binderdex.exceptions import (
    BinderDexError,
    CatalogError,
    ConfigurationError,
    InputRangeError,
    UnknownNameError,
)
from binderdex.matching import (
    LanguageDetector,
    NameMatcher,
    detect_language,
    find_best_match,
    match_labels,
    run_voting_pipeline,
    vote_identity,
    vote_language,
)
from binderdex.models import (
    CatalogEntry,
    ConsensusResult,
    LabelCandidate,
    Language,
    LookupResult,
    MatchResult,
    Observation,
    PlacementResult,
    ScanResult,
    ScanStatus,
)
from binderdex.pipeline import LabelReader, ScanPipeline, TextReader, crop_name_region
from binderdex.placement import SlotPlacer, format_name, locate

__version__ = "0.1.0"
__all__ = [
    # Main API
    "ScanPipeline",
    "TextReader",
    "LabelReader",
    "crop_name_region",
    # Catalog
    "CatalogIndex",
    "NameTable",
    "build_name_table",
    "load_catalog",
    # Matching
    "LanguageDetector",
    "NameMatcher",
    "detect_language",
    "find_best_match",
    "match_labels",
    "vote_language",
    "vote_identity",
    "run_voting_pipeline",
    # Placement
    "SlotPlacer",
    "locate",
    "format_name",
    # Collection
    "parse_owned",
    "export_owned_csv",
    "export_owned_json",
    "completion",
    "binder_progress",
    "generation_progress",
    # Configuration
    "AlbumConfig",
    "MatchConfig",
    "ScanConfig",
    # Models
    "Language",
    "CatalogEntry",
    "Observation",
    "LabelCandidate",
    "MatchResult",
    "ConsensusResult",
    "PlacementResult",
    "LookupResult",
    "ScanResult",
    "ScanStatus",
    # Exceptions
    "BinderDexError",
    "InputRangeError",
    "ConfigurationError",
    "CatalogError",
    "UnknownNameError",
]
