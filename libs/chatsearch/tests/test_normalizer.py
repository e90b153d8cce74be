"""Unit tests for text normalization."""

from chatsearch.services.normalizer import normalize, normalize_query


class TestNormalize:
    """Tests for normalize()."""

    def test_lowercases(self):
        """Test lower-casing."""
        assert normalize("Rust OWNERSHIP") == "rust ownership"

    def test_preserves_whitespace_and_punctuation(self):
        """Test preserves whitespace and punctuation."""
        assert normalize("  Hello,\tWorld!  ") == "  hello,\tworld!  "

    def test_none_and_empty(self):
        """Test none and empty."""
        assert normalize(None) == ""
        assert normalize("") == ""

    def test_length_is_preserved(self):
        """Characters that expand when lower-cased are kept as-is."""
        text = "İstanbul Rust"
        result = normalize(text)

        assert len(result) == len(text)
        assert result.endswith("rust")
        assert result.find("rust") == text.find("Rust")

    def test_final_sigma_folds_like_query(self):
        """Test a word-final capital sigma folds to the same letter a query uses."""
        assert normalize("ΟΔΟΣ") == "οδοσ"
        assert normalize("ΟΔΟΣ") == normalize_query("οδοσ")


class TestNormalizeQuery:
    """Tests for normalize_query()."""

    def test_trims_and_lowercases(self):
        """Test trims and lowercases."""
        assert normalize_query("  RuSt  ") == "rust"

    def test_whitespace_only_is_empty(self):
        """Test whitespace only is empty."""
        assert normalize_query(" \t\n ") == ""

    def test_inner_whitespace_kept(self):
        """Test inner whitespace kept."""
        assert normalize_query(" Rust  Book ") == "rust  book"
