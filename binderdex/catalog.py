"""
Catalog index and per-language name tables.

The catalog is loaded once at startup and is read-only afterwards. For each
language a NameTable maps normalized display names to catalog ids, in
catalog id order. Languages without any names fall back to the default
language's table.

Catalog files are YAML or JSON:

    entries:
      - id: 25
        names: {en: Pikachu, ja: ピカチュウ, ko: 피카츄}
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from binderdex.exceptions import CatalogError
from binderdex.matching.normalize import normalize_text
from binderdex.models import CatalogEntry, Language

logger = logging.getLogger(__name__)


# =============================================================================
# NAME TABLE
# =============================================================================


@dataclass(frozen=True)
class NameTable:
    """
    Normalized name -> catalog id lookup for one language.

    Iteration order is insertion order, which is catalog id order.
    """

    language: Language
    ids: Mapping[str, int] = field(default_factory=dict)
    display_names: Mapping[str, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.ids)

    def __iter__(self) -> Iterator[str]:
        return iter(self.ids)

    def __contains__(self, name: object) -> bool:
        return name in self.ids

    def items(self) -> Iterable[tuple[str, int]]:
        return self.ids.items()

    def get(self, name: str) -> int | None:
        return self.ids.get(name)

    def display_name(self, name: str) -> str:
        return self.display_names.get(name, name)

    @classmethod
    def from_mapping(cls, names: Mapping[str, int], language: Language) -> NameTable:
        """
        Build a table from a raw display name -> id mapping.

        Names are normalized; on collision the first name wins.
        """
        entries = [
            CatalogEntry(id=entry_id, names={language: name}) for name, entry_id in names.items()
        ]
        return build_name_table(entries, language)


def build_name_table(entries: Iterable[CatalogEntry], language: Language) -> NameTable:
    """
    Build the name table for one language.

    Entries without a name in this language are skipped. Two names that
    normalize to the same key are a defect in the catalog data; the first
    one wins and the collision is logged.

    Args:
        entries: Catalog entries, in id order.
        language: Language to index.

    Returns:
        Immutable NameTable (possibly empty).
    """
    ids: dict[str, int] = {}
    display_names: dict[str, str] = {}

    for entry in entries:
        name = entry.name_for(language)
        if not name:
            continue
        key = normalize_text(name, language)
        if not key:
            continue
        if key in ids:
            logger.warning(
                "Name collision in %s table: %r (id %d) shadowed by id %d",
                language.value,
                key,
                entry.id,
                ids[key],
            )
            continue
        ids[key] = entry.id
        display_names[key] = name

    return NameTable(
        language=language,
        ids=MappingProxyType(ids),
        display_names=MappingProxyType(display_names),
    )


# =============================================================================
# CATALOG INDEX
# =============================================================================


class CatalogIndex:
    """
    All catalog entries plus a name table per language.

    Example:
        >>> index = CatalogIndex.from_file("pokedex.yaml")
        >>> index.table_for(Language.JAPANESE).get("ピカチュウ")
        25
        >>> index.display_name(25, Language.KOREAN)
        '피카츄'
    """

    def __init__(
        self,
        entries: Iterable[CatalogEntry],
        default_language: Language = Language.ENGLISH,
        max_id: int = 1025,
    ) -> None:
        self.default_language = default_language
        self.max_id = max_id
        self._entries: dict[int, CatalogEntry] = {}

        for entry in sorted(entries, key=lambda e: e.id):
            if not 1 <= entry.id <= max_id:
                raise CatalogError(f"Catalog id {entry.id} outside 1..{max_id}")
            if entry.id in self._entries:
                raise CatalogError(f"Duplicate catalog id {entry.id}")
            self._entries[entry.id] = entry

        self._tables: dict[Language, NameTable] = {
            language: build_name_table(self._entries.values(), language) for language in Language
        }

        missing = self.missing_ids()
        if missing:
            logger.warning(
                "Catalog has %d gaps in 1..%d (first missing: %d)",
                len(missing),
                max_id,
                missing[0],
            )
        logger.debug(
            "Catalog loaded: %d entries, tables: %s",
            len(self._entries),
            {lang.value: len(table) for lang, table in self._tables.items()},
        )

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        default_language: Language = Language.ENGLISH,
        max_id: int = 1025,
    ) -> CatalogIndex:
        return cls(load_catalog(path), default_language=default_language, max_id=max_id)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._entries

    def get(self, entry_id: int) -> CatalogEntry | None:
        return self._entries.get(entry_id)

    def missing_ids(self) -> list[int]:
        """Ids in 1..max_id with no catalog entry."""
        return [i for i in range(1, self.max_id + 1) if i not in self._entries]

    def table_for(self, language: Language) -> NameTable:
        """Name table for a language, or the default language's if it is empty."""
        table = self._tables.get(language)
        if table:
            return table
        if language != self.default_language:
            logger.debug(
                "No names for %s; using %s table", language.value, self.default_language.value
            )
        return self._tables[self.default_language]

    def display_name(self, entry_id: int, language: Language | None = None) -> str | None:
        """Display name of an entry, falling back to the default language."""
        entry = self._entries.get(entry_id)
        if entry is None:
            return None
        if language is not None:
            name = entry.name_for(language)
            if name:
                return name
        return entry.name_for(self.default_language)


# =============================================================================
# LOADING
# =============================================================================


def load_catalog(path: str | Path) -> list[CatalogEntry]:
    """
    Load catalog entries from a YAML or JSON file.

    Args:
        path: Path to a ``.yaml``, ``.yml`` or ``.json`` file.

    Returns:
        List of CatalogEntry in file order.

    Raises:
        CatalogError: If the file is missing, unparseable, or malformed.
    """
    path = Path(path)
    if not path.exists():
        raise CatalogError(f"Catalog file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
        raise CatalogError(f"Failed to parse catalog {path}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("entries"), list):
        raise CatalogError(f"Catalog {path} must contain an 'entries' list")

    return [_parse_entry(raw, path) for raw in data["entries"]]


def _parse_entry(raw: Any, path: Path) -> CatalogEntry:
    if not isinstance(raw, dict) or "id" not in raw:
        raise CatalogError(f"Malformed catalog entry in {path}: {raw!r}")

    try:
        entry_id = int(raw["id"])
    except (TypeError, ValueError) as e:
        raise CatalogError(f"Catalog id must be an integer in {path}: {raw['id']!r}") from e

    raw_names = raw.get("names") or {}
    if not isinstance(raw_names, dict):
        raise CatalogError(f"Catalog names for id {entry_id} in {path} must be a mapping")

    names: dict[Language, str] = {}
    for code, name in raw_names.items():
        language = Language.from_code(str(code))
        if language is None:
            logger.debug("Ignoring unsupported language %r for id %d", code, entry_id)
            continue
        if name:
            names[language] = str(name)

    return CatalogEntry(id=entry_id, names=names)
