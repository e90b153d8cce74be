"""Relevance scoring for field hits."""

import math
from datetime import datetime, timezone

from chatsearch.models.config import ScoringConfig
from chatsearch.models.search import SearchMatchType
from chatsearch.services.field_matcher import FieldHit
from chatsearch.services.normalizer import normalize

SECONDS_PER_DAY = 86400


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class RelevanceScorer:
    """Additive relevance heuristic, clamped to ``max_score``.

    score = field base + exact-match bonus + position bonus + recency bonus
    """

    def __init__(self, config: ScoringConfig | None = None):
        self.config = config or ScoringConfig()

    def base_score(self, match_type: SearchMatchType) -> float:
        if match_type == SearchMatchType.TITLE:
            return self.config.title_base
        if match_type == SearchMatchType.TAG:
            return self.config.tag_base
        return self.config.message_base

    def exact_match_bonus(self, hit: FieldHit, query: str) -> float:
        if normalize(hit.text).strip() != query:
            return 0.0
        if hit.match_type == SearchMatchType.TAG:
            return self.config.tag_exact_match_bonus
        return self.config.exact_match_bonus

    def position_bonus(self, offset: int) -> float:
        if offset <= 0:
            return self.config.position_bonus
        decay = offset // max(1, self.config.position_decay_chars)
        return max(0.0, self.config.position_bonus - decay)

    def recency_bonus(self, timestamp: datetime | None, now: datetime) -> float:
        if timestamp is None:
            return 0.0
        elapsed = (as_utc(now) - as_utc(timestamp)).total_seconds()
        days_ago = max(0, math.floor(elapsed / SECONDS_PER_DAY))
        return float(max(0, self.config.recency_window_days - days_ago))

    def score(
        self,
        hit: FieldHit,
        query: str,
        timestamp: datetime | None,
        now: datetime,
    ) -> float:
        """Score a hit.

        Args:
            hit: Field hit from the matcher
            query: Normalized query the hit was found with
            timestamp: Timestamp the match will carry
            now: Reference time for the recency bonus

        Returns:
            Relevance in [0, max_score]
        """
        total = (
            self.base_score(hit.match_type)
            + self.exact_match_bonus(hit, query)
            + self.position_bonus(hit.start)
            + self.recency_bonus(timestamp, now)
        )
        return min(self.config.max_score, max(0.0, total))
