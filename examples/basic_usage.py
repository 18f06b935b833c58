#!/usr/bin/env python3
"""
Basic BinderDex Usage Example

This example demonstrates the core workflow:
1. Build a catalog index
2. Scan a card from several noisy OCR reads
3. Find where the card goes in the album
4. Look up entries by name or number
5. Export the owned collection
"""

import logging

from binderdex import (
    CatalogEntry,
    CatalogIndex,
    Language,
    Observation,
    ScanPipeline,
    ScanStatus,
    SlotPlacer,
    export_owned_csv,
)


def main():
    logging.basicConfig(level=logging.DEBUG)

    # ─────────────────────────────────────────────────────────────────────────
    # 1. Catalog
    # ─────────────────────────────────────────────────────────────────────────

    # Normally loaded once at startup: CatalogIndex.from_file("pokedex.yaml")
    index = CatalogIndex(
        [
            CatalogEntry(4, {Language.ENGLISH: "Charmander", Language.JAPANESE: "ヒトカゲ"}),
            CatalogEntry(6, {Language.ENGLISH: "Charizard", Language.JAPANESE: "リザードン"}),
            CatalogEntry(25, {Language.ENGLISH: "Pikachu", Language.JAPANESE: "ピカチュウ"}),
        ]
    )

    # ─────────────────────────────────────────────────────────────────────────
    # 2. Scan
    # ─────────────────────────────────────────────────────────────────────────

    # Each observation is one OCR pass; in an app these come from
    # pipeline.scan_frames(frames) with a TextReader plugged in.
    pipeline = ScanPipeline(index)
    result = pipeline.scan(
        [
            Observation("Charizard HP 120", Language.ENGLISH),
            Observation("Charizarb", Language.ENGLISH),
            Observation("リザードン", Language.JAPANESE),
        ]
    )

    if result.status == ScanStatus.MATCHED:
        placement = result.placement
        print(f"Detected {result.consensus.display_name} (#{result.consensus.id})")
        print(
            f"  Binder {placement.binder_index}, page {placement.page_index}, "
            f"slot {placement.slot_on_page}"
        )
    elif result.status == ScanStatus.NO_MATCH:
        print("No confident match - adjust the card or lighting and scan again")
    else:
        print(f"Scan failed: {result.status.value} {result.error or ''}")

    # ─────────────────────────────────────────────────────────────────────────
    # 3. Lookups
    # ─────────────────────────────────────────────────────────────────────────

    placer = SlotPlacer()
    for query in ("25", "charmander"):
        found = placer.lookup(query, index)
        print(f"{query!r}: #{found.id} {found.display_name} -> {found.placement}")

    print("Page 1 of binder 1 holds:", placer.page_ids(1, 1))

    # ─────────────────────────────────────────────────────────────────────────
    # 4. Export
    # ─────────────────────────────────────────────────────────────────────────

    owned = [result.consensus.id] if result.consensus.id else []
    print(export_owned_csv(owned))


if __name__ == "__main__":
    main()
