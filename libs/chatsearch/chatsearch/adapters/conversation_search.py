"""In-memory search over a loaded conversation list."""

import time
from datetime import datetime, timedelta, timezone
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Sequence

from chatsearch.models.config import SearchConfig
from chatsearch.models.conversation import Conversation
from chatsearch.models.search import (
    SearchMatch,
    SearchMatchType,
    SearchOptions,
    SearchResults,
)
from chatsearch.services.cancellation import CancellationToken
from chatsearch.services.config_manager import ConfigManager
from chatsearch.services.field_matcher import FieldHit, FieldMatcher
from chatsearch.services.highlighter import Highlighter
from chatsearch.services.normalizer import normalize_query
from chatsearch.services.scorer import RelevanceScorer, as_utc
from conduit_logging import configure_from_config, get_logger

# Sort key for matches without a timestamp: older than anything real
_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ConversationSearchAdapter:
    """Search titles, messages and tags of conversations on demand.

    The adapter holds configuration only. Conversations, query and options
    are supplied on every call, and nothing is cached between calls.
    """

    def __init__(
        self,
        config: SearchConfig | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """Initialize the search adapter.

        Args:
            config: Search configuration (defaults used when omitted)
            clock: Source of "now" for recency scoring
        """
        self.config = config or SearchConfig()
        self.clock = clock
        self.scorer = RelevanceScorer(self.config.scoring)
        self.highlighter = Highlighter(self.config.highlight)
        self.logger = get_logger('chatsearch.engine')

    @classmethod
    def from_config_file(cls, config_path: Path | str | None = None) -> "ConversationSearchAdapter":
        """Create an adapter from the on-disk config, applying its logging section."""
        config = ConfigManager(config_path).config
        configure_from_config(config)
        return cls(config)

    def _timestamp_for(self, conversation: Conversation, hit: FieldHit) -> datetime | None:
        if hit.match_type == SearchMatchType.MESSAGE:
            return hit.message.created_at
        return conversation.updated_at

    def _context_for(self, conversation: Conversation, index: int):
        lines = self.config.context_lines
        start = max(0, index - lines)
        return tuple(conversation.messages[start:index + lines + 1])

    @staticmethod
    def _within_dates(timestamp: datetime | None, options: SearchOptions) -> bool:
        if options.date_from is None and options.date_to is None:
            return True
        if timestamp is None:
            return False
        ts = as_utc(timestamp)
        if options.date_from is not None and ts < as_utc(options.date_from):
            return False
        if options.date_to is not None and ts > as_utc(options.date_to):
            return False
        return True

    def _build_match(
        self,
        conversation: Conversation,
        hit: FieldHit,
        query: str,
        timestamp: datetime | None,
        now: datetime,
    ) -> SearchMatch:
        snippet = self.highlighter.highlight(hit.text, hit.start, hit.end)
        is_message = hit.match_type == SearchMatchType.MESSAGE
        return SearchMatch(
            conversation_id=conversation.id,
            conversation_title=conversation.title or "",
            match_type=hit.match_type,
            snippet=snippet.text,
            highlighted_snippet=snippet.highlighted,
            relevance_score=self.scorer.score(hit, query, timestamp, now),
            timestamp=timestamp,
            message_id=hit.message.id if is_message else None,
            message_role=hit.message.role if is_message else None,
            message_index=hit.message_index,
            context_messages=self._context_for(conversation, hit.message_index) if is_message else (),
            additional_info=MappingProxyType({"tag": hit.tag} if hit.tag is not None else {}),
        )

    def _search_conversation(
        self,
        conversation: Conversation,
        matcher: FieldMatcher,
        query: str,
        options: SearchOptions,
        now: datetime,
    ) -> list[SearchMatch]:
        matches = []
        for hit in matcher.match(conversation, query):
            timestamp = self._timestamp_for(conversation, hit)
            if not self._within_dates(timestamp, options):
                continue
            matches.append(self._build_match(conversation, hit, query, timestamp, now))
        return matches

    @staticmethod
    def _sort_key(match: SearchMatch):
        timestamp = as_utc(match.timestamp) if match.timestamp is not None else _OLDEST
        return match.relevance_score, timestamp

    def search(
        self,
        conversations: Sequence[Conversation],
        query: str,
        options: SearchOptions | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> SearchResults:
        """Search conversations for a query.

        Args:
            conversations: Candidates, in the caller's display order
            query: Raw user query
            options: Scope and filter options (all fields by default)
            cancel_token: Checked between conversations; a cancelled scan
                returns what it found so far with ``cancelled=True``

        Returns:
            SearchResults sorted by relevance, then recency, then encounter
            order, truncated to ``max_results``
        """
        started = time.perf_counter()
        options = options or SearchOptions()
        normalized = normalize_query(query if isinstance(query, str) else "")

        def elapsed() -> timedelta:
            return timedelta(seconds=time.perf_counter() - started)

        if not normalized:
            return SearchResults.empty(query if isinstance(query, str) else "", elapsed())
        if not options.has_scope:
            self.logger.debug("Search skipped, no fields enabled", query=normalized)
            return SearchResults.empty(query, elapsed())

        now = self.clock()
        matcher = FieldMatcher(options)
        matches: list[SearchMatch] = []
        cancelled = False
        skipped = 0

        for position, conversation in enumerate(conversations or ()):
            if cancel_token is not None and cancel_token.cancelled:
                cancelled = True
                break
            try:
                matches.extend(
                    self._search_conversation(conversation, matcher, normalized, options, now)
                )
            except Exception as e:
                skipped += 1
                self.logger.warning(
                    "Skipping conversation that failed to search",
                    conversation_id=str(getattr(conversation, 'id', position)),
                    error=repr(e),
                )

        # Stable: equal keys keep matcher encounter order
        matches.sort(key=self._sort_key, reverse=True)

        duration = elapsed()
        self.logger.debug(
            "Search completed",
            query=normalized,
            total=len(matches),
            skipped=skipped,
            cancelled=cancelled,
            duration_ms=round(duration.total_seconds() * 1000, 3),
        )
        return SearchResults(
            query=query,
            results=tuple(matches[:self.config.max_results]),
            total_matches=len(matches),
            search_duration=duration,
            cancelled=cancelled,
        )
