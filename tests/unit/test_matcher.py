"""Tests for binderdex.matching.matcher."""

import pytest

from binderdex.catalog import NameTable
from binderdex.config import MatchConfig
from binderdex.matching.matcher import NameMatcher, find_best_match, min_window_distance
from binderdex.models import Language


@pytest.fixture
def fire_table():
    """Table with two similar names."""
    return NameTable.from_mapping({"Charmander": 4, "Charizard": 6}, Language.ENGLISH)


@pytest.fixture
def matcher():
    return NameMatcher()


# =============================================================================
# WINDOW DISTANCE
# =============================================================================


class TestMinWindowDistance:
    """Tests for min_window_distance."""

    def test_exact_window(self):
        """A verbatim occurrence has distance zero."""
        assert min_window_distance("mew", "a wild mew appears") == 0

    def test_substitution_in_window(self):
        """One substituted character inside the text is distance one."""
        assert min_window_distance("charmander", "xx charmanber yy") == 1

    def test_name_longer_than_text(self):
        """Longer names are compared against the whole text."""
        assert min_window_distance("charmander", "charmande") == 1

    def test_cutoff(self):
        """Distances above the cutoff are reported as cutoff + 1."""
        assert min_window_distance("charmander", "xyzxyzxyzxyz", max_distance=2) == 3


# =============================================================================
# EXACT MATCHING
# =============================================================================


class TestExactMatch:
    """Tests for the exact substring phase."""

    def test_exact_match_wins(self, matcher, fire_table):
        """Exact substring returns the right id with the exact bonus."""
        result = matcher.find_best_match("charmander appears here", fire_table, Language.ENGLISH)
        assert result is not None
        assert result.id == 4
        assert result.confidence == len("charmander") + MatchConfig().exact_bonus

    def test_case_and_spacing_ignored(self, matcher, fire_table):
        """Raw OCR text is normalized before comparison."""
        result = matcher.find_best_match("  CHARIZARD\n  HP 120", fire_table)
        assert result.id == 6
        assert result.display_name == "Charizard"

    def test_longest_exact_wins(self, matcher):
        """When several names occur, the longest one scores highest."""
        table = NameTable.from_mapping({"リザード": 5, "リザードン": 6}, Language.JAPANESE)
        result = matcher.find_best_match("リザードン HP120", table, Language.JAPANESE)
        assert result.id == 6

    def test_exact_beats_fuzzy(self, matcher):
        """An exact short name outranks a fuzzy long name."""
        table = NameTable.from_mapping({"Charmandxx": 1, "Mew": 151}, Language.ENGLISH)
        result = matcher.find_best_match("charmander and mew", table)
        assert result.id == 151

    def test_unspaced_language(self, matcher):
        """CJK names match across OCR-inserted spaces."""
        table = NameTable.from_mapping({"ピカチュウ": 25}, Language.JAPANESE)
        result = matcher.find_best_match("ピカ チュウ", table, Language.JAPANESE)
        assert result.id == 25
        assert result.display_name == "ピカチュウ"


# =============================================================================
# FUZZY MATCHING
# =============================================================================


class TestFuzzyMatch:
    """Tests for the bounded edit-distance phase."""

    def test_one_substitution(self, matcher, fire_table):
        """One wrong character in a long name is tolerated."""
        result = matcher.find_best_match("charmanber", fire_table, Language.ENGLISH)
        assert result is not None
        assert result.id == 4
        assert result.confidence == pytest.approx(10 - 1.5)

    def test_two_edits_tolerated_for_long_names(self, matcher, fire_table):
        """Names longer than three characters allow distance two."""
        result = matcher.find_best_match("chorizarb", fire_table)
        assert result.id == 6
        assert result.confidence == pytest.approx(9 - 3.0)

    def test_three_edits_rejected(self, matcher, fire_table):
        """Distance three is beyond tolerance."""
        assert matcher.find_best_match("chxrixxrd", fire_table) is None

    def test_short_name_tolerance(self, matcher):
        """Names of three characters or fewer allow only one edit."""
        table = NameTable.from_mapping({"Mew": 151}, Language.ENGLISH)
        assert matcher.find_best_match("mow", table).id == 151
        assert matcher.find_best_match("mxx", table) is None

    def test_garbage_returns_none(self, matcher, fire_table):
        """Text unlike any name yields no match."""
        assert matcher.find_best_match("xyzxyzxyz", fire_table, Language.ENGLISH) is None

    def test_equal_scores_keep_first(self, matcher):
        """On a tie the earlier table entry wins."""
        table = NameTable.from_mapping({"abc": 1, "abd": 2}, Language.ENGLISH)
        result = matcher.find_best_match("abx", table)
        assert result.id == 1

    def test_fuzzy_disabled(self, matcher, fire_table):
        """With fuzzy=False only exact hits count."""
        assert matcher.find_best_match("charmanber", fire_table, fuzzy=False) is None

    def test_custom_tolerance(self, fire_table):
        """Tolerance comes from MatchConfig."""
        strict = NameMatcher(MatchConfig(short_name_max_distance=0, max_distance=0))
        assert strict.find_best_match("charmanber", fire_table) is None
        assert strict.find_best_match("charmander", fire_table).id == 4


# =============================================================================
# EDGE CASES
# =============================================================================


class TestEdgeCases:
    """Tests for empty inputs."""

    def test_empty_text(self, matcher, fire_table):
        assert matcher.find_best_match("", fire_table) is None
        assert matcher.find_best_match("   \n", fire_table) is None

    def test_empty_table(self, matcher):
        empty = NameTable(language=Language.ENGLISH)
        assert matcher.find_best_match("charmander", empty) is None

    def test_module_level_function(self, fire_table):
        """find_best_match uses default thresholds."""
        assert find_best_match("charmander", fire_table).id == 4
