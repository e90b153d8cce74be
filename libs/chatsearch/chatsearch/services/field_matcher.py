"""Locate the query in conversation titles, messages and tags."""

from typing import Iterator, NamedTuple

from chatsearch.models.conversation import ChatMessage, Conversation, Role
from chatsearch.models.search import SearchMatchType, SearchOptions
from chatsearch.services.normalizer import normalize


class FieldHit(NamedTuple):
    """First occurrence of the query inside one field instance."""
    match_type: SearchMatchType
    text: str
    start: int
    end: int
    message: ChatMessage | None = None
    message_index: int | None = None
    tag: str | None = None

    @property
    def matched_text(self) -> str:
        return self.text[self.start:self.end]


def find_first(text: str | None, query: str) -> tuple[int, int] | None:
    """Return the (start, end) span of the first case-insensitive occurrence."""
    if not text or not query:
        return None
    start = normalize(text).find(query)
    if start < 0:
        return None
    return start, start + len(query)


class FieldMatcher:
    """Scan the enabled fields of a conversation for a normalized query.

    Hits are produced in encounter order: title, messages (in conversation
    order), then tags. Only the first occurrence per field instance is
    reported.
    """

    def __init__(self, options: SearchOptions):
        self.options = options

    def _accepts_role(self, role: Role | None) -> bool:
        if self.options.role_filter is not None:
            return role == self.options.role_filter
        if role == Role.SYSTEM:
            return self.options.include_system_messages
        return True

    def match_title(self, conversation: Conversation, query: str) -> FieldHit | None:
        span = find_first(conversation.title, query)
        if span is None:
            return None
        return FieldHit(SearchMatchType.TITLE, conversation.title, *span)

    def match_messages(self, conversation: Conversation, query: str) -> Iterator[FieldHit]:
        for index, message in enumerate(conversation.messages):
            if not self._accepts_role(message.role):
                continue
            span = find_first(message.content, query)
            if span is not None:
                yield FieldHit(
                    SearchMatchType.MESSAGE,
                    message.content,
                    *span,
                    message=message,
                    message_index=index,
                )

    def match_tags(self, conversation: Conversation, query: str) -> Iterator[FieldHit]:
        for tag in conversation.tags:
            if not isinstance(tag, str):
                continue
            span = find_first(tag, query)
            if span is not None:
                yield FieldHit(SearchMatchType.TAG, tag, *span, tag=tag)

    def match(self, conversation: Conversation, query: str) -> list[FieldHit]:
        """Return every field instance of ``conversation`` containing ``query``.

        Args:
            conversation: Candidate conversation
            query: Normalized (lower-cased, trimmed) query

        Returns:
            Hits in encounter order; empty for a blank query
        """
        if not query or not query.strip():
            return []

        hits: list[FieldHit] = []
        if self.options.search_titles:
            title_hit = self.match_title(conversation, query)
            if title_hit is not None:
                hits.append(title_hit)
        if self.options.search_messages:
            hits.extend(self.match_messages(conversation, query))
        if self.options.search_tags:
            hits.extend(self.match_tags(conversation, query))
        return hits
