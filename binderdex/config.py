"""
Configuration for BinderDex scanning and album placement.

All options have sensible defaults matching a 3-binder, 360-slot album
for a 1025-entry catalog.
"""

from dataclasses import dataclass, field

from binderdex.exceptions import ConfigurationError
from binderdex.models import Language


@dataclass
class AlbumConfig:
    """
    Geometry of the physical album.

    Example:
        >>> album = AlbumConfig(slots_per_page=9, pages_per_binder=40)
        >>> album.slots_per_binder
        360
    """

    slots_per_page: int = 9  # 3x3 pocket page
    pages_per_binder: int = 40
    binder_count: int = 3
    max_id: int = 1025  # Catalog ceiling N

    def __post_init__(self):
        """Validate configuration."""
        for name in ("slots_per_page", "pages_per_binder", "binder_count", "max_id"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 1:
                raise ConfigurationError(f"{name} must be an integer >= 1, got {value!r}")

    @property
    def slots_per_binder(self) -> int:
        return self.slots_per_page * self.pages_per_binder

    @property
    def capacity(self) -> int:
        """Total number of slots across all binders."""
        return self.slots_per_binder * self.binder_count


@dataclass
class MatchConfig:
    """
    Tuning constants for the name matcher.

    These were tuned by hand against real card scans; treat them as
    configuration rather than derived values.
    """

    # Added to exact substring hits so they always outrank fuzzy hits
    exact_bonus: float = 1000.0

    # Names this short tolerate fewer edits
    short_name_length: int = 3
    short_name_max_distance: int = 1
    max_distance: int = 2

    # Score = len(name) - distance * distance_penalty
    distance_penalty: float = 1.5

    def __post_init__(self):
        """Validate configuration."""
        if self.exact_bonus <= 0:
            raise ConfigurationError(f"exact_bonus must be positive, got {self.exact_bonus}")
        if self.short_name_length < 0:
            raise ConfigurationError(
                f"short_name_length must be >= 0, got {self.short_name_length}"
            )
        if self.short_name_max_distance < 0 or self.max_distance < 0:
            raise ConfigurationError(
                f"distances must be >= 0, got short_name_max_distance="
                f"{self.short_name_max_distance}, max_distance={self.max_distance}"
            )
        if self.short_name_max_distance > self.max_distance:
            raise ConfigurationError(
                "short_name_max_distance must not exceed max_distance, "
                f"got {self.short_name_max_distance} > {self.max_distance}"
            )
        if self.distance_penalty < 0:
            raise ConfigurationError(
                f"distance_penalty must be >= 0, got {self.distance_penalty}"
            )

    def tolerance_for(self, name_length: int) -> int:
        """Maximum edit distance accepted for a name of this length."""
        if name_length <= self.short_name_length:
            return self.short_name_max_distance
        return self.max_distance


@dataclass
class ScanConfig:
    """
    Configuration for a card scan.

    Example:
        >>> config = ScanConfig(
        ...     pass_languages=(Language.ENGLISH, Language.JAPANESE),
        ...     parallel=True,
        ... )
        >>> pipeline = ScanPipeline(index, reader, config=config)
    """

    default_language: Language = Language.ENGLISH

    # One OCR pass per language hint, on each captured frame
    pass_languages: tuple[Language, ...] = (
        Language.ENGLISH,
        Language.JAPANESE,
        Language.KOREAN,
    )
    max_frames: int = 3

    # Card frame as (x, y, width, height) fractions of the captured image
    name_region: tuple[float, float, float, float] = (0.1, 0.15, 0.8, 0.6)
    target_width: int = 800  # Down-scale wider crops before OCR

    # Observation gathering
    parallel: bool = False
    max_workers: int = 4

    album: AlbumConfig = field(default_factory=AlbumConfig)
    matching: MatchConfig = field(default_factory=MatchConfig)

    def __post_init__(self):
        """Validate configuration."""
        if not self.pass_languages:
            raise ConfigurationError("pass_languages must name at least one language")
        if self.max_frames < 1:
            raise ConfigurationError(f"max_frames must be >= 1, got {self.max_frames}")
        if self.max_workers < 1:
            raise ConfigurationError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.target_width < 1:
            raise ConfigurationError(f"target_width must be >= 1, got {self.target_width}")

        x, y, width, height = self.name_region
        if not all(0.0 <= v <= 1.0 for v in self.name_region):
            raise ConfigurationError(
                f"name_region values must be between 0.0 and 1.0, got {self.name_region}"
            )
        if width <= 0 or height <= 0 or x + width > 1.0 + 1e-9 or y + height > 1.0 + 1e-9:
            raise ConfigurationError(
                f"name_region must be a non-empty box inside the frame, got {self.name_region}"
            )
