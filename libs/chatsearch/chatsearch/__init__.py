"""Conduit's conversation search package"""

from chatsearch.adapters.conversation_search import ConversationSearchAdapter
from chatsearch.interfaces.searcher import ConversationSearcher
from chatsearch.models.config import (
    HighlightConfig,
    LoggingConfig,
    ScoringConfig,
    SearchConfig,
)
from chatsearch.models.conversation import ChatMessage, Conversation, Role
from chatsearch.models.search import (
    SearchMatch,
    SearchMatchType,
    SearchOptions,
    SearchResults,
)
from chatsearch.services.cancellation import CancellationToken
from chatsearch.services.config_manager import ConfigManager
from chatsearch.services.field_matcher import FieldHit, FieldMatcher
from chatsearch.services.highlighter import Highlighter, Snippet, split_highlighted
from chatsearch.services.normalizer import normalize, normalize_query
from chatsearch.services.scorer import RelevanceScorer
from chatsearch.services.search_session import SearchSession, SearchTicket

__all__ = [
    "ConversationSearchAdapter",
    "ConversationSearcher",
    "SearchSession",
    "SearchTicket",
    "CancellationToken",
    "Conversation",
    "ChatMessage",
    "Role",
    "SearchOptions",
    "SearchMatch",
    "SearchMatchType",
    "SearchResults",
    "SearchConfig",
    "ScoringConfig",
    "HighlightConfig",
    "LoggingConfig",
    "ConfigManager",
    "FieldHit",
    "FieldMatcher",
    "RelevanceScorer",
    "Highlighter",
    "Snippet",
    "split_highlighted",
    "normalize",
    "normalize_query",
]
