"""
Owned-collection import, export and progress.

The collection itself is stored by the caller; these helpers only convert
between id lists and the two exchange formats:

    CSV:   #owned
           1,4,25
    JSON:  {"owned": [1, 4, 25]}
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from binderdex.config import AlbumConfig

logger = logging.getLogger(__name__)

CSV_HEADER = "#owned"
CSV_SEPARATORS = re.compile(r"[,\s;]+")
ID_TEXT = re.compile(r"[0-9]+")

# (label, first id, last id), inclusive
GENERATIONS: tuple[tuple[str, int, int], ...] = (
    ("Generation 1", 1, 151),
    ("Generation 2", 152, 251),
    ("Generation 3", 252, 386),
    ("Generation 4", 387, 493),
    ("Generation 5", 494, 649),
    ("Generation 6", 650, 721),
    ("Generation 7", 722, 809),
    ("Generation 8", 810, 905),
    ("Generation 9", 906, 1025),
)


def _clean_ids(values: Iterable[object], max_id: int) -> list[int]:
    ids: set[int] = set()
    for value in values:
        if isinstance(value, bool):
            continue
        if isinstance(value, int):
            number = value
        elif isinstance(value, str) and ID_TEXT.fullmatch(value.strip()):
            number = int(value.strip())
        else:
            continue
        if 1 <= number <= max_id:
            ids.add(number)
    return sorted(ids)


def parse_owned_csv(text: str, max_id: int = 1025) -> list[int]:
    """Parse comma/newline separated ids; lines starting with ``#`` are ignored."""
    tokens: list[str] = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        tokens.extend(CSV_SEPARATORS.split(line))
    return _clean_ids(tokens, max_id)


def parse_owned_json(text: str, max_id: int = 1025) -> list[int] | None:
    """
    Parse ``{"owned": [...]}``.

    Returns:
        Sorted ids, or None if the text is not JSON of that shape.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict) or not isinstance(data.get("owned"), list):
        return None
    return _clean_ids(data["owned"], max_id)


def parse_owned(text: str, file_name: str | None = None, max_id: int = 1025) -> list[int]:
    """
    Parse an exported owned list, picking the format from the file name.

    Without a recognizable extension JSON is tried first, then CSV.
    Ids outside 1..max_id and non-numeric values are dropped.

    Returns:
        Sorted, de-duplicated ids.
    """
    suffix = Path(file_name).suffix.lower() if file_name else ""
    if suffix == ".json":
        return parse_owned_json(text, max_id) or []
    if suffix in (".csv", ".txt"):
        return parse_owned_csv(text, max_id)

    from_json = parse_owned_json(text, max_id)
    if from_json is not None:
        return from_json
    return parse_owned_csv(text, max_id)


def export_owned_csv(owned: Iterable[int]) -> str:
    return f"{CSV_HEADER}\n" + ",".join(str(i) for i in sorted(set(owned)))


def export_owned_json(owned: Iterable[int]) -> str:
    return json.dumps({"owned": sorted(set(owned))}, indent=2)


def completion(owned: Iterable[int], max_id: int = 1025) -> float:
    """Percentage of the catalog owned."""
    count = len({i for i in owned if 1 <= i <= max_id})
    return count / max_id * 100


def binder_progress(owned: Iterable[int], album: AlbumConfig | None = None) -> dict[int, int]:
    """
    Owned count per binder.

    Returns:
        Mapping of binder index to the number of owned ids it holds, with an
        entry for every binder.
    """
    album = album or AlbumConfig()
    progress = {binder: 0 for binder in range(1, album.binder_count + 1)}
    for entry_id in set(owned):
        if not 1 <= entry_id <= album.max_id:
            continue
        binder = (entry_id - 1) // album.slots_per_binder + 1
        if binder in progress:
            progress[binder] += 1
        else:
            logger.warning("Id %d falls past binder %d", entry_id, album.binder_count)
    return progress


@dataclass(frozen=True)
class GenerationProgress:
    label: str
    owned: int
    total: int

    @property
    def completion(self) -> float:
        return self.owned / self.total * 100 if self.total else 0.0


def generation_progress(
    owned: Iterable[int],
    generations: tuple[tuple[str, int, int], ...] = GENERATIONS,
) -> list[GenerationProgress]:
    """
    Owned count per generation, in generation order.

    Every generation is reported, including ones with nothing owned. Ids
    outside all generations are not counted.
    """
    owned_ids = set(owned)
    progress = []
    for label, start, end in generations:
        count = sum(1 for entry_id in owned_ids if start <= entry_id <= end)
        progress.append(GenerationProgress(label, count, end - start + 1))
    return progress
