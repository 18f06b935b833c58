"""
Pytest configuration and fixtures for BinderDex tests.
"""

from pathlib import Path

import pytest

from binderdex.models import CatalogEntry, Language

EN, JA, KO, ZH, DE, FR = (
    Language.ENGLISH,
    Language.JAPANESE,
    Language.KOREAN,
    Language.CHINESE,
    Language.GERMAN,
    Language.FRENCH,
)

# id: (en, ja, ko, zh, de, fr)
SAMPLE_NAMES = {
    1: ("Bulbasaur", "フシギダネ", "이상해씨", "妙蛙种子", "Bisasam", "Bulbizarre"),
    2: ("Ivysaur", "フシギソウ", "이상해풀", "妙蛙草", "Bisaknosp", "Herbizarre"),
    3: ("Venusaur", "フシギバナ", "이상해꽃", "妙蛙花", "Bisaflor", "Florizarre"),
    4: ("Charmander", "ヒトカゲ", "파이리", "小火龙", "Glumanda", "Salamèche"),
    5: ("Charmeleon", "リザード", "리자드", "火恐龙", "Glutexo", "Reptincel"),
    6: ("Charizard", "リザードン", "리자몽", "喷火龙", "Glurak", "Dracaufeu"),
    7: ("Squirtle", "ゼニガメ", "꼬부기", "杰尼龟", "Schiggy", "Carapuce"),
    25: ("Pikachu", "ピカチュウ", "피카츄", "皮卡丘", "Pikachu", "Pikachu"),
    122: ("Mr. Mime", "バリヤード", "마임맨", "魔墙人偶", "Pantimos", "M. Mime"),
    151: ("Mew", "ミュウ", "뮤", "梦幻", "Mew", "Mew"),
}


def make_entries(languages=(EN, JA, KO, ZH, DE, FR)) -> list[CatalogEntry]:
    """Build sample catalog entries carrying names for the given languages."""
    order = (EN, JA, KO, ZH, DE, FR)
    entries = []
    for entry_id, names in SAMPLE_NAMES.items():
        by_language = dict(zip(order, names, strict=True))
        entries.append(
            CatalogEntry(id=entry_id, names={lang: by_language[lang] for lang in languages})
        )
    return entries


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    """Return path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def sample_entries() -> list[CatalogEntry]:
    """Sample catalog entries with names in every language."""
    return make_entries()


@pytest.fixture(scope="session")
def sample_index(sample_entries):
    """CatalogIndex over the sample entries."""
    from binderdex import CatalogIndex

    return CatalogIndex(sample_entries)


@pytest.fixture(scope="session")
def english_index():
    """CatalogIndex with English names only (other languages fall back)."""
    from binderdex import CatalogIndex

    return CatalogIndex(make_entries(languages=(EN,)))
