"""Snippet extraction with <mark></mark> highlighting.

The consuming renderer splits snippets on the literal opening tag and then
on the literal closing tag, so every snippet carries exactly one balanced,
non-nested pair. Literal delimiter tokens already present in the source text
are rewritten to their HTML-entity form (``<mark>`` -> ``&lt;mark&gt;``)
before wrapping, which leaves the engine's pair as the only real one.
"""

import re
from typing import NamedTuple

from chatsearch.models.config import HighlightConfig


class Snippet(NamedTuple):
    text: str
    highlighted: str
    truncated_start: bool
    truncated_end: bool


def _entity_escape(token: str) -> str:
    return token.replace("<", "&lt;").replace(">", "&gt;")


class Highlighter:
    """Cut a bounded window around a match and mark the matched span."""

    def __init__(self, config: HighlightConfig | None = None):
        self.config = config or HighlightConfig()
        tokens = sorted({self.config.open_tag, self.config.close_tag}, key=len, reverse=True)
        self._token_pattern = re.compile(
            "|".join(re.escape(t) for t in tokens), re.IGNORECASE
        )

    def escape(self, text: str) -> str:
        """Neutralize literal delimiter tokens in source text."""
        return self._token_pattern.sub(lambda m: _entity_escape(m.group(0)), text)

    def window(self, length: int, start: int, end: int) -> tuple[int, int]:
        """Pick the [start, end) slice of a field to show.

        Args:
            length: Length of the field
            start: Match start offset
            end: Match end offset

        Returns:
            Window bounds; the whole field when it fits
        """
        limit = self.config.snippet_max_chars
        if length <= limit:
            return 0, length

        # Reserve room for an ellipsis on both sides
        budget = limit - 2 * len(self.config.ellipsis)
        match_len = end - start
        if match_len >= budget:
            return start, start + budget

        window_start = start - (budget - match_len) // 2
        window_start = max(0, min(window_start, length - budget))
        return window_start, window_start + budget

    def highlight(self, text: str, start: int, end: int) -> Snippet:
        """Build the plain and highlighted snippet for a match at [start, end).

        Escaping happens before windowing, so the window bound applies to the
        characters the reader sees and ``text`` equals the highlighted
        snippet with the delimiter pair removed.
        """
        before = self.escape(text[:start])
        matched = self.escape(text[start:end])
        escaped = before + matched + self.escape(text[end:])
        match_start = len(before)
        match_end = match_start + len(matched)

        window_start, window_end = self.window(len(escaped), match_start, match_end)
        marked_end = min(match_end, window_end)

        lead = self.config.ellipsis if window_start > 0 else ""
        trail = self.config.ellipsis if window_end < len(escaped) else ""

        highlighted = "".join((
            lead,
            escaped[window_start:match_start],
            self.config.open_tag,
            escaped[match_start:marked_end],
            self.config.close_tag,
            escaped[marked_end:window_end],
            trail,
        ))
        return Snippet(
            text=f"{lead}{escaped[window_start:window_end]}{trail}",
            highlighted=highlighted,
            truncated_start=bool(lead),
            truncated_end=bool(trail),
        )


def split_highlighted(
    snippet: str,
    open_tag: str = "<mark>",
    close_tag: str = "</mark>",
) -> list[tuple[str, bool]]:
    """Split a highlighted snippet into (text, is_highlighted) segments.

    Mirrors the split-on-open-then-close parsing done by the chat UI.
    """
    parts = snippet.split(open_tag)
    segments: list[tuple[str, bool]] = []
    if parts[0]:
        segments.append((parts[0], False))
    for part in parts[1:]:
        marked, sep, rest = part.partition(close_tag)
        if not sep:
            if part:
                segments.append((part, False))
            continue
        if marked:
            segments.append((marked, True))
        if rest:
            segments.append((rest, False))
    return segments
