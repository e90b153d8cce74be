"""Candidate records supplied by the conversation store."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping


class Role(str, Enum):
    """Author of a chat message."""
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"

    @classmethod
    def parse(cls, value: Any) -> "Role | None":
        """Return the matching role, or None for unknown/missing values."""
        if isinstance(value, Role):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a persisted timestamp.

    Accepts datetimes, ISO-8601 strings (a trailing ``Z`` included) and epoch
    numbers in seconds or milliseconds. Naive values are taken as UTC.
    Anything else yields None.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, bool):
        return None
    elif isinstance(value, (int, float)):
        seconds = value / 1000 if abs(value) >= 1e11 else value
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class ChatMessage:
    """A single message in a conversation.

    Attributes:
        id: Message identifier
        role: Author role, None when missing or unrecognised
        content: Message body, None when missing
        created_at: Creation time, None when missing
    """

    id: str
    role: Role | None = None
    content: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ChatMessage":
        """Build a message from a persistence payload, dropping malformed fields."""
        created = data.get("created_at", data.get("createdAt", data.get("timestamp")))
        return cls(
            id=str(data.get("id") or ""),
            role=Role.parse(data.get("role")),
            content=_optional_str(data.get("content")),
            created_at=parse_timestamp(created),
        )


@dataclass(frozen=True)
class Conversation:
    """A conversation as loaded from the local store.

    Attributes:
        id: Conversation identifier
        title: Display title, None when missing
        updated_at: Last activity time, None when missing
        messages: Messages in chronological order
        tags: User-assigned tags
        created_at: Creation time, None when missing
    """

    id: str
    title: str | None = None
    updated_at: datetime | None = None
    messages: tuple[ChatMessage, ...] = field(default_factory=tuple)
    tags: tuple[str, ...] = field(default_factory=tuple)
    created_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Conversation":
        """Build a conversation from a persistence payload.

        Missing or wrongly typed fields become absent rather than raising;
        messages that are not mappings and tags that are not strings are
        dropped.
        """
        raw_messages = data.get("messages")
        messages = tuple(
            ChatMessage.from_dict(m)
            for m in (raw_messages if isinstance(raw_messages, (list, tuple)) else ())
            if isinstance(m, Mapping)
        )
        raw_tags = data.get("tags")
        tags = tuple(
            t for t in (raw_tags if isinstance(raw_tags, (list, tuple)) else ())
            if isinstance(t, str)
        )
        return cls(
            id=str(data.get("id") or ""),
            title=_optional_str(data.get("title")),
            updated_at=parse_timestamp(data.get("updated_at", data.get("updatedAt"))),
            messages=messages,
            tags=tags,
            created_at=parse_timestamp(data.get("created_at", data.get("createdAt"))),
        )
