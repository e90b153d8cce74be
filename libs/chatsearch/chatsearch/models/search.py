from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from chatsearch.models.conversation import ChatMessage, Role


class SearchMatchType(str, Enum):
    """Field a match was found in."""
    TITLE = "title"
    MESSAGE = "message"
    TAG = "tag"


@dataclass(frozen=True)
class SearchOptions:
    """Which fields participate in a search, and how messages are filtered.

    Attributes:
        search_titles: Match conversation titles
        search_messages: Match message bodies
        search_tags: Match conversation tags
        role_filter: Only scan messages written by this role
        include_system_messages: Scan system messages when no role filter
            asks for them explicitly
        date_from: Earliest match timestamp to keep (inclusive)
        date_to: Latest match timestamp to keep (inclusive)
    """

    search_titles: bool = True
    search_messages: bool = True
    search_tags: bool = True
    role_filter: Role | None = None
    include_system_messages: bool = True
    date_from: datetime | None = None
    date_to: datetime | None = None

    @property
    def has_scope(self) -> bool:
        return self.search_titles or self.search_messages or self.search_tags

    def replace(self, **changes) -> "SearchOptions":
        return replace(self, **changes)


@dataclass(frozen=True)
class SearchMatch:
    """One field of one conversation that contains the query.

    Attributes:
        conversation_id: Owning conversation
        conversation_title: Owning conversation's title ("" when absent)
        match_type: Field the query was found in
        snippet: Plain excerpt around the match, with ellipsis markers
        highlighted_snippet: Excerpt with the match wrapped in <mark></mark>
        relevance_score: Ranking heuristic in [0, 100]
        timestamp: Conversation updated_at for title/tag, message created_at
            for message matches
        message_id: Matched message, message matches only
        message_role: Matched message's role, message matches only
        message_index: Position of the matched message in its conversation
        context_messages: Neighbouring messages around the matched one
        additional_info: Extra match details, e.g. the matched tag
    """

    conversation_id: str
    conversation_title: str
    match_type: SearchMatchType
    snippet: str
    highlighted_snippet: str
    relevance_score: float
    timestamp: datetime | None = None
    message_id: str | None = None
    message_role: Role | None = None
    message_index: int | None = None
    context_messages: tuple[ChatMessage, ...] = ()
    additional_info: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True)
class SearchResults:
    """Ranked, truncated matches for one query."""

    query: str
    results: tuple[SearchMatch, ...]
    total_matches: int
    search_duration: timedelta
    cancelled: bool = False

    @classmethod
    def empty(cls, query: str = "", search_duration: timedelta = timedelta(0)) -> "SearchResults":
        return cls(query=query, results=(), total_matches=0, search_duration=search_duration)

    @property
    def length(self) -> int:
        return len(self.results)

    @property
    def is_empty(self) -> bool:
        return not self.results

    @property
    def is_not_empty(self) -> bool:
        return bool(self.results)

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self):
        return iter(self.results)
