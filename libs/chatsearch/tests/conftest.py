from datetime import datetime, timedelta, timezone

import pytest

from chatsearch.adapters.conversation_search import ConversationSearchAdapter
from chatsearch.models.conversation import ChatMessage, Conversation, Role

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def make_conversation(
    id: str,
    title: str | None = "Untitled",
    messages: list[tuple[str, str]] | None = None,
    tags: list[str] | None = None,
    updated_at: datetime | None = NOW,
    message_age: timedelta = timedelta(0),
) -> Conversation:
    """Build a conversation from (role, content) pairs."""
    return Conversation(
        id=id,
        title=title,
        updated_at=updated_at,
        messages=tuple(
            ChatMessage(
                id=f"{id}-m{i}",
                role=Role(role),
                content=content,
                created_at=NOW - message_age,
            )
            for i, (role, content) in enumerate(messages or [])
        ),
        tags=tuple(tags or []),
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def adapter():
    return ConversationSearchAdapter(clock=lambda: NOW)


@pytest.fixture
def rust_conversation():
    return make_conversation(
        "c-rust",
        title="Rust ownership",
        messages=[("user", "I love Rust and ownership semantics")],
        tags=["rust"],
    )
