"""Case folding shared by query and candidate text."""


def normalize(text: str | None) -> str:
    """Lower-case text one character at a time without changing its length.

    Matching is substring based, so whitespace and punctuation are kept and
    offsets found in the result are valid offsets into ``text``. Folding per
    character keeps queries and candidates consistent: ``str.lower`` on a
    whole string turns a word-final "Σ" into "ς", which a typed "σ" would
    never match. Characters whose lower-case form is longer than one
    character (e.g. "İ") are left as they are.
    """
    if not text:
        return ""
    if text.isascii():
        return text.lower()
    return "".join(
        low if len(low) == 1 else char
        for char, low in ((c, c.lower()) for c in text)
    )


def normalize_query(query: str | None) -> str:
    """Normalize a user query and trim surrounding whitespace."""
    return normalize(query).strip()
