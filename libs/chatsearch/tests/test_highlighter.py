"""Unit tests for snippet highlighting."""

import pytest

from chatsearch.models.config import HighlightConfig
from chatsearch.services.highlighter import Highlighter, split_highlighted


def _visible(highlighted: str) -> str:
    return highlighted.replace("<mark>", "").replace("</mark>", "")


@pytest.fixture
def highlighter():
    return Highlighter()


class TestHighlight:
    """Tests for Highlighter.highlight()."""

    def test_short_field_is_returned_whole(self, highlighter):
        """Test short field is returned whole."""
        snippet = highlighter.highlight("Hello Rust world", 6, 10)

        assert snippet.highlighted == "Hello <mark>Rust</mark> world"
        assert snippet.text == "Hello Rust world"
        assert not snippet.truncated_start
        assert not snippet.truncated_end

    def test_match_near_end_of_long_message(self, highlighter):
        """Test match near end of long message."""
        text = "a" * 290 + "needle" + "bbbb"
        assert len(text) == 300

        snippet = highlighter.highlight(text, 290, 296)

        assert len(_visible(snippet.highlighted)) <= 160
        assert len(snippet.text) <= 160
        assert snippet.highlighted.startswith("...")
        assert not snippet.highlighted.endswith("...")
        assert snippet.highlighted.count("<mark>") == 1
        assert snippet.highlighted.count("</mark>") == 1
        assert "<mark>needle</mark>bbbb" in snippet.highlighted

    def test_match_in_middle_gets_both_ellipses(self, highlighter):
        """Test match in middle gets both ellipses."""
        text = "x" * 200 + "needle" + "y" * 200

        snippet = highlighter.highlight(text, 200, 206)

        assert snippet.truncated_start and snippet.truncated_end
        assert snippet.highlighted.startswith("...")
        assert snippet.highlighted.endswith("...")
        assert len(snippet.text) <= 160
        before, _, after = snippet.text[3:-3].partition("needle")
        assert abs(len(before) - len(after)) <= 1

    def test_match_at_start_of_long_message(self, highlighter):
        """Test match at start of long message."""
        text = "needle" + "z" * 300

        snippet = highlighter.highlight(text, 0, 6)

        assert snippet.highlighted.startswith("<mark>needle</mark>")
        assert snippet.truncated_end
        assert not snippet.truncated_start

    def test_match_longer_than_window_is_clipped(self, highlighter):
        """Test match longer than window is clipped."""
        text = "q" * 400

        snippet = highlighter.highlight(text, 10, 300)

        assert len(_visible(snippet.highlighted)) <= 160
        assert snippet.highlighted.count("<mark>") == 1
        assert snippet.highlighted.count("</mark>") == 1

    def test_literal_delimiters_are_escaped(self, highlighter):
        """Test literal delimiters are escaped."""
        text = "use <mark>tags</mark> and <MARK> for rust"
        start = text.find("rust")

        snippet = highlighter.highlight(text, start, start + 4)

        assert snippet.highlighted.count("<mark>") == 1
        assert snippet.highlighted.count("</mark>") == 1
        assert "&lt;mark&gt;tags&lt;/mark&gt;" in snippet.highlighted
        assert "&lt;MARK&gt;" in snippet.highlighted
        assert snippet.highlighted.endswith("<mark>rust</mark>")

    def test_escaped_delimiters_count_towards_window(self, highlighter):
        """Test a long field packed with literal delimiters stays within the window."""
        text = "<mark>" * 40 + " rust " + "<mark>" * 10
        start = text.find("rust")

        snippet = highlighter.highlight(text, start, start + 4)

        visible = "".join(t for t, _ in split_highlighted(snippet.highlighted))
        assert len(visible) <= 160
        assert visible == snippet.text
        assert snippet.highlighted.count("<mark>") == 1
        assert [t for t, marked in split_highlighted(snippet.highlighted) if marked] == ["rust"]
        assert snippet.truncated_start and snippet.truncated_end

    def test_delimiter_inside_match_is_escaped(self, highlighter):
        """Test delimiter inside match is escaped."""
        text = "say <mark> twice"

        snippet = highlighter.highlight(text, 4, 10)

        assert snippet.highlighted == "say <mark>&lt;mark&gt;</mark> twice"

    def test_custom_window(self):
        """Test custom window."""
        highlighter = Highlighter(HighlightConfig(snippet_max_chars=20, ellipsis="…"))
        text = "0123456789" * 5

        snippet = highlighter.highlight(text, 25, 27)

        assert len(snippet.text) <= 20
        assert snippet.text.startswith("…") and snippet.text.endswith("…")


class TestSplitHighlighted:
    """Tests for split_highlighted()."""

    def test_segments(self):
        """Test segments."""
        assert split_highlighted("...I love <mark>Rust</mark> and more...") == [
            ("...I love ", False),
            ("Rust", True),
            (" and more...", False),
        ]

    def test_escaped_literals_stay_plain(self, highlighter):
        """Test escaped literals stay plain."""
        text = "a <mark> b rust"
        snippet = highlighter.highlight(text, 11, 15)

        segments = split_highlighted(snippet.highlighted)

        assert [s for s in segments if s[1]] == [("rust", True)]

    def test_unbalanced_open_tag_is_plain(self):
        """Test unbalanced open tag is plain."""
        assert split_highlighted("a<mark>b") == [("a", False), ("b", False)]
