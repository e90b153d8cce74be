from typing import Protocol, Sequence

from chatsearch.models.conversation import Conversation
from chatsearch.models.search import SearchOptions, SearchResults
from chatsearch.services.cancellation import CancellationToken


class ConversationSearcher(Protocol):
    def search(
        self,
        conversations: Sequence[Conversation],
        query: str,
        options: SearchOptions | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> SearchResults:
        ...
