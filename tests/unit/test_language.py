"""Tests for binderdex.matching.language and normalization."""

import pytest

from binderdex.exceptions import ConfigurationError
from binderdex.matching.language import (
    FRENCH_PROFILE,
    GERMAN_PROFILE,
    JAPANESE_PROFILE,
    LanguageDetector,
    LanguageProfile,
    detect_language,
)
from binderdex.matching.normalize import normalize_text
from binderdex.models import Language

# =============================================================================
# NORMALIZATION
# =============================================================================


class TestNormalizeText:
    """Tests for normalize_text."""

    def test_spaced_language_lowercases_and_collapses(self):
        """Space-delimited text is lowercased with single spaces."""
        assert normalize_text("  Mr.   Mime\n\tHP 60 ", Language.ENGLISH) == "mr. mime hp 60"

    def test_unspaced_language_strips_all_whitespace(self):
        """CJK text loses every whitespace character."""
        assert normalize_text("ピカ チュウ\n HP", Language.JAPANESE) == "ピカチュウHP"
        assert normalize_text("피카 츄", Language.KOREAN) == "피카츄"
        assert normalize_text("皮卡 丘", Language.CHINESE) == "皮卡丘"

    def test_empty_input(self):
        """Empty and whitespace-only input normalize to empty."""
        assert normalize_text("", Language.ENGLISH) == ""
        assert normalize_text("   \n", Language.ENGLISH) == ""
        assert normalize_text("   ", Language.JAPANESE) == ""

    def test_accents_preserved(self):
        """Accented letters survive normalization."""
        assert normalize_text("Salamèche", Language.FRENCH) == "salamèche"


# =============================================================================
# DETECTION
# =============================================================================


class TestLanguageDetector:
    """Tests for LanguageDetector.detect."""

    @pytest.fixture
    def detector(self):
        return LanguageDetector()

    def test_empty_text_is_default(self, detector):
        """Empty or whitespace-only text returns the default language."""
        assert detector.detect("") == Language.ENGLISH
        assert detector.detect("   \n\t") == Language.ENGLISH

    def test_plain_ascii_is_default(self, detector):
        """ASCII without configured accents is the default language."""
        assert detector.detect("Pikachu HP 60 Lightning") == Language.ENGLISH
        assert detector.detect("Glumanda") == Language.ENGLISH

    def test_hiragana_and_katakana(self, detector):
        """Kana blocks detect as Japanese."""
        assert detector.detect("ぴかちゅう") == Language.JAPANESE
        assert detector.detect("ピカチュウ") == Language.JAPANESE
        assert detector.detect("ｶﾞﾙｰﾗ") == Language.JAPANESE  # halfwidth

    def test_hangul(self, detector):
        """Hangul syllables detect as Korean."""
        assert detector.detect("피카츄") == Language.KOREAN

    def test_han_only(self, detector):
        """Han ideographs without kana detect as Chinese."""
        assert detector.detect("皮卡丘") == Language.CHINESE
        assert detector.detect("妙蛙种子") == Language.CHINESE

    def test_kana_outranks_han(self, detector):
        """Japanese text mixing kanji and kana stays Japanese."""
        assert detector.detect("リザードン 炎") == Language.JAPANESE

    def test_script_outranks_accents(self, detector):
        """Script-based languages take precedence over accent-based ones."""
        assert detector.detect("Salamèche 파이리") == Language.KOREAN

    def test_accents(self, detector):
        """Accent sets identify German and French."""
        assert detector.detect("Salamèche") == Language.FRENCH
        assert detector.detect("Glumanda für Trainer") == Language.GERMAN

    def test_german_outranks_french(self, detector):
        """German wins over French when both accent sets appear."""
        assert detector.detect("Dracaufeu Überraschung") == Language.GERMAN

    def test_presence_not_frequency(self, detector):
        """A single profiled character decides, regardless of counts."""
        text = "Pikachu Pikachu Pikachu Pikachu ピ"
        assert detector.detect(text) == Language.JAPANESE

    def test_custom_default(self):
        """A detector can use another default when it has no profile."""
        detector = LanguageDetector(
            profiles=(GERMAN_PROFILE, FRENCH_PROFILE),
            priority=(Language.GERMAN, Language.FRENCH),
            default_language=Language.JAPANESE,
        )
        assert detector.detect("Pikachu") == Language.JAPANESE
        assert detector.detect("Pikachu für") == Language.GERMAN

    def test_module_level_detect(self):
        """detect_language uses the default profiles."""
        assert detect_language("ヒトカゲ") == Language.JAPANESE
        assert detect_language("Charmander") == Language.ENGLISH


class TestDetectorConfiguration:
    """Tests for detector and profile validation."""

    def test_profile_needs_ranges_or_accents(self):
        """A profile must have exactly one kind of definition."""
        with pytest.raises(ConfigurationError):
            LanguageProfile(Language.GERMAN)
        with pytest.raises(ConfigurationError):
            LanguageProfile(
                Language.GERMAN, script_ranges=((0x41, 0x5A),), accents=frozenset("ä")
            )

    def test_default_language_with_profile_rejected(self):
        """The default language cannot also be a detected language."""
        with pytest.raises(ConfigurationError):
            LanguageDetector(default_language=Language.JAPANESE)

    def test_priority_without_profile_rejected(self):
        """Every priority entry needs a profile."""
        with pytest.raises(ConfigurationError):
            LanguageDetector(profiles=(JAPANESE_PROFILE,), priority=(Language.KOREAN,))

    def test_profile_without_priority_rejected(self):
        """A profiled language that can never win is a configuration error."""
        with pytest.raises(ConfigurationError, match="priority"):
            LanguageDetector(
                profiles=(JAPANESE_PROFILE, GERMAN_PROFILE),
                priority=(Language.JAPANESE,),
            )

    def test_languages_lists_default_first(self):
        """languages exposes the closed language set."""
        detector = LanguageDetector()
        assert detector.languages[0] == Language.ENGLISH
        assert set(detector.languages) == set(Language)
