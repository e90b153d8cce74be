"""Unit tests for relevance scoring."""

from datetime import datetime, timedelta

import pytest

from chatsearch.models.config import ScoringConfig
from chatsearch.models.search import SearchMatchType
from chatsearch.services.field_matcher import FieldHit
from chatsearch.services.scorer import RelevanceScorer

from conftest import NOW

OLD = NOW - timedelta(days=365)


def _hit(match_type, text, query):
    start = text.lower().find(query)
    return FieldHit(match_type, text, start, start + len(query))


@pytest.fixture
def scorer():
    return RelevanceScorer()


class TestComponents:
    """Tests for individual score components."""

    def test_base_scores(self, scorer):
        """Test base scores."""
        assert scorer.base_score(SearchMatchType.TITLE) == 60
        assert scorer.base_score(SearchMatchType.TAG) == 50
        assert scorer.base_score(SearchMatchType.MESSAGE) == 40

    @pytest.mark.parametrize(
        "offset, expected",
        [(0, 10), (1, 10), (19, 10), (20, 9), (45, 8), (199, 1), (200, 0), (1000, 0)],
    )
    def test_position_bonus(self, scorer, offset, expected):
        """Test position bonus."""
        assert scorer.position_bonus(offset) == expected

    @pytest.mark.parametrize(
        "age, expected",
        [
            (timedelta(0), 10),
            (timedelta(hours=23), 10),
            (timedelta(days=3), 7),
            (timedelta(days=9, hours=12), 1),
            (timedelta(days=10), 0),
            (timedelta(days=30), 0),
            (-timedelta(days=2), 10),
        ],
    )
    def test_recency_bonus(self, scorer, age, expected):
        """Test recency bonus."""
        assert scorer.recency_bonus(NOW - age, NOW) == expected

    def test_recency_without_timestamp(self, scorer):
        """Test recency without timestamp."""
        assert scorer.recency_bonus(None, NOW) == 0

    def test_recency_with_naive_timestamp(self, scorer):
        """Test recency with naive timestamp."""
        naive = datetime(2026, 10, 16, 12, 0)

        assert scorer.recency_bonus(naive, NOW) == 8

    def test_exact_match_bonus(self, scorer):
        """Test exact match bonus."""
        assert scorer.exact_match_bonus(_hit(SearchMatchType.TITLE, "Rust", "rust"), "rust") == 30
        assert scorer.exact_match_bonus(_hit(SearchMatchType.MESSAGE, " rust ", "rust"), "rust") == 30
        assert scorer.exact_match_bonus(_hit(SearchMatchType.TAG, "RUST", "rust"), "rust") == 5
        assert scorer.exact_match_bonus(_hit(SearchMatchType.TITLE, "Rust book", "rust"), "rust") == 0


class TestScore:
    """Tests for combined scores and the ordering they produce."""

    def test_score_is_clamped(self, scorer):
        """Test score is clamped."""
        hit = _hit(SearchMatchType.TITLE, "Rust", "rust")

        assert scorer.score(hit, "rust", NOW, NOW) == 100

    def test_score_sums_components(self, scorer):
        """Test score sums components."""
        hit = _hit(SearchMatchType.MESSAGE, "I love Rust and ownership semantics", "rust")

        assert scorer.score(hit, "rust", NOW - timedelta(days=4), NOW) == 40 + 10 + 6

    @pytest.mark.parametrize(
        "match_type, exact, partial",
        [
            (SearchMatchType.TITLE, "Rust", "Rust ownership"),
            (SearchMatchType.MESSAGE, "rust", "rust is great"),
            (SearchMatchType.TAG, "rust", "rustacean"),
        ],
    )
    def test_exact_ranks_above_partial(self, scorer, match_type, exact, partial):
        """Test exact ranks above partial."""
        for timestamp in (NOW, OLD):
            exact_score = scorer.score(_hit(match_type, exact, "rust"), "rust", timestamp, NOW)
            partial_score = scorer.score(_hit(match_type, partial, "rust"), "rust", timestamp, NOW)
            assert exact_score > partial_score

    def test_title_ranks_above_message(self, scorer):
        """Test title ranks above message."""
        text = "Notes about rust lifetimes"
        for timestamp in (NOW, OLD):
            title = scorer.score(_hit(SearchMatchType.TITLE, text, "rust"), "rust", timestamp, NOW)
            message = scorer.score(_hit(SearchMatchType.MESSAGE, text, "rust"), "rust", timestamp, NOW)
            assert title > message

    def test_custom_weights(self):
        """Test custom weights."""
        scorer = RelevanceScorer(ScoringConfig(message_base=70, position_bonus=0, recency_window_days=0))
        hit = _hit(SearchMatchType.MESSAGE, "about rust", "rust")

        assert scorer.score(hit, "rust", NOW, NOW) == 70
