"""
Card scan pipeline orchestrator.

This module ties the matching engine together:
1. Gather observations (OCR passes per frame, or vision labels)
2. Vote on the language, then on the catalog id
3. Place the winning id in the album

OCR and vision engines are external collaborators behind the TextReader and
LabelReader interfaces; the pipeline never stores results, it hands each
ScanResult to an optional result handler.
"""

from __future__ import annotations

import logging
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import partial
from typing import TYPE_CHECKING, Any

from PIL import Image

from binderdex.config import ScanConfig
from binderdex.exceptions import ConfigurationError, InputRangeError
from binderdex.matching.labels import match_labels
from binderdex.matching.language import DEFAULT_PRIORITY, DEFAULT_PROFILES, LanguageDetector
from binderdex.matching.matcher import NameMatcher
from binderdex.matching.voting import run_voting_pipeline
from binderdex.models import (
    ConsensusResult,
    LabelCandidate,
    Language,
    Observation,
    ScanResult,
    ScanStatus,
)
from binderdex.placement import SlotPlacer

if TYPE_CHECKING:
    from binderdex.catalog import CatalogIndex

logger = logging.getLogger(__name__)


# =============================================================================
# EXTERNAL COLLABORATORS
# =============================================================================


class TextReader(ABC):
    """OCR engine: image region + language hint -> text (possibly empty)."""

    name: str = "base"

    @abstractmethod
    def read_text(self, image: Image.Image, language: Language) -> str:
        """Return the text found in the image.

        Output is expected to be noisy; an empty string means nothing
        was read.
        """
        pass


class LabelReader(ABC):
    """Vision engine: image -> ranked entity labels in the default language."""

    name: str = "base"

    @abstractmethod
    def read_labels(self, image: Image.Image) -> list[LabelCandidate]:
        """Return labeled entities, best first or with scores."""
        pass


def crop_name_region(
    image: Image.Image,
    region: tuple[float, float, float, float],
    target_width: int,
) -> Image.Image:
    """
    Crop the card frame out of a captured image and scale it for OCR.

    Args:
        image: Full captured frame.
        region: (x, y, width, height) as fractions of the frame.
        target_width: Crops wider than this are scaled down to it.

    Returns:
        Cropped (and possibly down-scaled) image.
    """
    width, height = image.size
    x, y, w, h = region
    box = (
        round(x * width),
        round(y * height),
        round((x + w) * width),
        round((y + h) * height),
    )
    crop = image.crop(box)

    if crop.width > target_width:
        scale = target_width / crop.width
        new_size = (target_width, max(1, round(crop.height * scale)))
        crop = crop.resize(new_size, Image.Resampling.LANCZOS)
    return crop


def _cancelled(cancel_event: threading.Event | None) -> bool:
    return cancel_event is not None and cancel_event.is_set()


# =============================================================================
# SCAN PIPELINE
# =============================================================================


@dataclass
class ScanPipeline:
    """
    Identify a card from observations and place it in the album.

    Holds no state between scans: every call builds its own observations
    and results.

    Attributes:
        index: Catalog with per-language name tables.
        text_reader: OCR engine for frame scans.
        label_reader: Vision engine for label scans.
        config: Scan configuration.
        result_handler: Called with every completed (non-cancelled) result.

    Example:
        >>> pipeline = ScanPipeline(index, text_reader=TesseractReader())
        >>> result = pipeline.scan_frames([frame1, frame2])
        >>> result.status, result.consensus.display_name, result.placement
        (<ScanStatus.MATCHED: 'matched'>, 'Pikachu', PlacementResult(binder_index=1, ...))
    """

    index: CatalogIndex
    text_reader: TextReader | None = None
    label_reader: LabelReader | None = None
    config: ScanConfig = field(default_factory=ScanConfig)
    detector: LanguageDetector | None = None
    matcher: NameMatcher | None = None
    placer: SlotPlacer | None = None
    result_handler: Callable[[ScanResult], None] | None = None

    def __post_init__(self) -> None:
        """Initialize pipeline components."""
        default = self.config.default_language
        if self.index.default_language != default:
            raise ConfigurationError(
                f"Catalog default language {self.index.default_language.value} "
                f"does not match scan default {default.value}"
            )

        if self.detector is None:
            self.detector = LanguageDetector(
                profiles=tuple(p for p in DEFAULT_PROFILES if p.language != default),
                priority=tuple(lang for lang in DEFAULT_PRIORITY if lang != default),
                default_language=default,
            )
        if self.matcher is None:
            self.matcher = NameMatcher(self.config.matching)
        if self.placer is None:
            self.placer = SlotPlacer(self.config.album)

    # -------------------------------------------------------------------------
    # Observation gathering
    # -------------------------------------------------------------------------

    def _read_text(self, image: Image.Image, language: Language) -> str:
        try:
            return self.text_reader.read_text(image, language) or ""
        except Exception as e:
            logger.warning("OCR pass (%s) failed: %s", language.value, e)
            return ""

    def _read_labels(self, image: Image.Image) -> list[LabelCandidate]:
        try:
            return list(self.label_reader.read_labels(image) or [])
        except Exception as e:
            logger.warning("Label detection failed: %s", e)
            return []

    def _run_tasks(
        self,
        tasks: list[Callable[[], Any]],
        cancel_event: threading.Event | None,
    ) -> list[Any] | None:
        """Run tasks in order (or in a pool); None if cancelled."""
        if self.config.parallel and len(tasks) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
                # map() yields in submission order, keeping votes deterministic
                results = list(pool.map(lambda task: task(), tasks))
        else:
            if self.config.parallel:
                logger.debug(
                    "Parallel reads requested for %d task(s); running sequentially", len(tasks)
                )
            results = []
            for task in tasks:
                if _cancelled(cancel_event):
                    return None
                results.append(task())

        if _cancelled(cancel_event):
            return None
        return results

    def gather_observations(
        self,
        frames: Sequence[Image.Image],
        cancel_event: threading.Event | None = None,
    ) -> list[Observation] | None:
        """
        Run every OCR pass on every frame.

        Observations come back in (frame, pass) order whatever order the
        reads finish in.

        Returns:
            Observations, or None if the scan was cancelled.
        """
        if self.text_reader is None:
            raise ConfigurationError("ScanPipeline has no text_reader configured")

        crops = [
            crop_name_region(frame, self.config.name_region, self.config.target_width)
            for frame in frames[: self.config.max_frames]
        ]
        passes = [(crop, language) for crop in crops for language in self.config.pass_languages]
        texts = self._run_tasks(
            [partial(self._read_text, crop, language) for crop, language in passes],
            cancel_event,
        )
        if texts is None:
            return None

        return [
            Observation(text=text, language=language)
            for (_crop, language), text in zip(passes, texts, strict=True)
        ]

    def gather_label_observations(
        self,
        frames: Sequence[Image.Image],
        cancel_event: threading.Event | None = None,
    ) -> list[Observation] | None:
        """Run the vision provider on every frame. None if cancelled."""
        if self.label_reader is None:
            raise ConfigurationError("ScanPipeline has no label_reader configured")

        label_sets = self._run_tasks(
            [partial(self._read_labels, frame) for frame in frames[: self.config.max_frames]],
            cancel_event,
        )
        if label_sets is None:
            return None
        return [Observation.from_labels(labels) for labels in label_sets]

    # -------------------------------------------------------------------------
    # Scanning
    # -------------------------------------------------------------------------

    def _cancelled_result(self) -> ScanResult:
        logger.debug("Scan cancelled; discarding observations")
        return ScanResult(
            consensus=ConsensusResult(language=self.config.default_language),
            status=ScanStatus.CANCELLED,
        )

    def scan(
        self,
        observations: Sequence[Observation],
        cancel_event: threading.Event | None = None,
    ) -> ScanResult:
        """
        Reach a consensus over observations and place the winner.

        Args:
            observations: All observations for one card.
            cancel_event: When set, the scan yields no result.

        Returns:
            ScanResult with MATCHED, NO_MATCH, OUT_OF_RANGE or CANCELLED.
        """
        if _cancelled(cancel_event):
            return self._cancelled_result()

        start_time = time.time()
        default = self.config.default_language

        consensus = run_voting_pipeline(
            observations,
            detect_language=self.detector.detect,
            match_text=self.matcher.find_best_match,
            table_for=self.index.table_for,
            default_language=default,
            match_labels=partial(match_labels, matcher=self.matcher),
        )

        if _cancelled(cancel_event):
            return self._cancelled_result()

        placement = None
        error = None
        if consensus.id is None:
            status = ScanStatus.NO_MATCH
        else:
            try:
                placement = self.placer.locate(consensus.id)
                status = ScanStatus.MATCHED
            except InputRangeError as e:
                status = ScanStatus.OUT_OF_RANGE
                error = str(e)

        result = ScanResult(
            consensus=consensus,
            status=status,
            placement=placement,
            error=error,
            processing_time_ms=(time.time() - start_time) * 1000,
        )
        logger.debug(
            "Scan of %d observations: %s #%s (%s)",
            len(observations),
            status.value,
            consensus.id,
            consensus.language.value,
        )

        if self.result_handler is not None:
            self.result_handler(result)
        return result

    def scan_frames(
        self,
        frames: Sequence[Image.Image],
        cancel_event: threading.Event | None = None,
    ) -> ScanResult:
        """Gather OCR observations from frames, then scan them."""
        observations = self.gather_observations(frames, cancel_event)
        if observations is None:
            return self._cancelled_result()
        return self.scan(observations, cancel_event)

    def scan_labels(
        self,
        frames: Sequence[Image.Image],
        cancel_event: threading.Event | None = None,
    ) -> ScanResult:
        """Gather vision-label observations from frames, then scan them."""
        observations = self.gather_label_observations(frames, cancel_event)
        if observations is None:
            return self._cancelled_result()
        return self.scan(observations, cancel_event)

    def get_info(self) -> dict[str, Any]:
        """Get pipeline configuration information."""
        return {
            "default_language": self.config.default_language.value,
            "pass_languages": [lang.value for lang in self.config.pass_languages],
            "max_frames": self.config.max_frames,
            "parallel": self.config.parallel,
            "text_reader": self.text_reader.name if self.text_reader else None,
            "label_reader": self.label_reader.name if self.label_reader else None,
            "catalog_size": len(self.index),
        }
