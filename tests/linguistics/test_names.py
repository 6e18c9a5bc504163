# ABOUTME: Tests for name heuristics
# ABOUTME: Abbreviations, entity decoding and ASCII normalization

import pytest

from wikitaxon.linguistics import decode, is_abbreviation, normalize


class TestIsAbbreviation:
    """Test acronym detection."""

    @pytest.mark.parametrize("word", ["NGOs", "BBC", "U.S.", "NATO", "MPs"])
    def test_abbreviations(self, word):
        """Test words recognized as abbreviations."""
        assert is_abbreviation(word)

    @pytest.mark.parametrize("word", ["novelists", "Novelists", "A", "", None, "iPods"])
    def test_regular_words(self, word):
        """Test words that are not abbreviations."""
        assert not is_abbreviation(word)


class TestDecode:
    """Test decoding of HTML entities and percent escapes."""

    def test_html_entities(self):
        """Test that HTML entities are resolved."""
        assert decode("Tom &amp; Jerry") == "Tom & Jerry"

    def test_percent_escapes(self):
        """Test that percent escapes are resolved."""
        assert decode("Caf%C3%A9") == "Café"

    def test_plain_text_unchanged(self):
        """Test that plain text is returned as is."""
        assert decode("100% Pure") == "100% Pure"


class TestNormalize:
    """Test ASCII transliteration."""

    def test_transliteration(self):
        """Test that accented characters lose their accents."""
        assert normalize("Zürich") == "Zurich"
        assert normalize("Paris") == "Paris"
