"""Caller-side search-as-you-type coordination.

Every new query supersedes the one before it: the previous scan is asked to
stop, and whatever it returns afterwards is discarded, so stale results never
replace the latest ones.
"""

import asyncio
import threading
from dataclasses import dataclass, field
from typing import Sequence

from chatsearch.interfaces.searcher import ConversationSearcher
from chatsearch.models.conversation import Conversation
from chatsearch.models.search import SearchOptions, SearchResults
from chatsearch.services.cancellation import CancellationToken
from conduit_logging import get_logger


@dataclass(frozen=True)
class SearchTicket:
    generation: int
    token: CancellationToken = field(default_factory=CancellationToken)


class SearchSession:
    """One logical search box: at most one live search at a time."""

    def __init__(self, searcher: ConversationSearcher, debounce_ms: int | None = None):
        """Initialize the session.

        Args:
            searcher: Engine that runs the actual scan
            debounce_ms: Delay before a scan starts; a newer query arriving
                during the delay replaces this one without scanning.
                Defaults to the searcher config's debounce_ms, or 0
        """
        self.searcher = searcher
        if debounce_ms is None:
            config = getattr(searcher, 'config', None)
            debounce_ms = getattr(config, 'debounce_ms', 0)
        self.debounce_ms = max(0, int(debounce_ms))
        self.debounce_seconds = self.debounce_ms / 1000.0
        self.logger = get_logger('chatsearch.session')
        self._lock = threading.Lock()
        self._generation = 0
        self._current: SearchTicket | None = None
        self._latest: SearchResults | None = None

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    @property
    def latest(self) -> SearchResults | None:
        """Results of the most recent search that was not superseded."""
        with self._lock:
            return self._latest

    def begin(self) -> SearchTicket:
        """Start a new generation, cancelling the one in flight."""
        with self._lock:
            if self._current is not None:
                self._current.token.cancel()
            self._generation += 1
            self._current = SearchTicket(self._generation)
            return self._current

    def is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def publish(self, ticket: SearchTicket, results: SearchResults) -> bool:
        """Store results if their ticket is still current.

        Returns:
            True if stored, False if the ticket was superseded
        """
        with self._lock:
            if ticket.generation != self._generation:
                return False
            self._latest = results
            return True

    def clear(self):
        """Supersede anything in flight and forget the latest results."""
        self.begin()
        with self._lock:
            self._latest = None

    async def search(
        self,
        conversations: Sequence[Conversation],
        query: str,
        options: SearchOptions | None = None,
    ) -> SearchResults | None:
        """Run a search unless a newer one supersedes it.

        Args:
            conversations: Snapshot of the caller's conversations
            query: Raw user query
            options: Search options

        Returns:
            The results, or None when a newer search superseded this one
        """
        ticket = self.begin()
        snapshot = tuple(conversations)

        if self.debounce_seconds:
            await asyncio.sleep(self.debounce_seconds)
            if not self.is_current(ticket.generation):
                return None

        results = await asyncio.to_thread(
            self.searcher.search, snapshot, query, options, ticket.token
        )

        if not self.publish(ticket, results):
            self.logger.debug("Discarding stale search results", generation=ticket.generation)
            return None
        return results
