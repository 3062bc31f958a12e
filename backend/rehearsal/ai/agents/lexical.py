"""Keyword extraction shared by the talking-point tracker and the composer."""

import re

STOP_WORDS: frozenset[str] = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "if", "then", "else", "for", "to", "of",
        "in", "on", "at", "by", "with", "from", "as", "is", "are", "was", "were", "be",
        "been", "being", "it", "this", "that", "these", "those", "i", "you", "he", "she",
        "we", "they", "me", "him", "her", "us", "them", "my", "your", "his", "our",
        "their", "mine", "yours", "ours", "theirs", "do", "does", "did", "doing", "have",
        "has", "had", "having", "so", "not", "no", "yes", "just", "like",
    }
)

MIN_TOKEN_LENGTH = 3

_NON_WORD_RE = re.compile(r"[^a-z0-9\s]")


def _words(text: str | None) -> list[str]:
    normalized = _NON_WORD_RE.sub(" ", (text or "").lower())
    return [
        word
        for word in normalized.split()
        if len(word) >= MIN_TOKEN_LENGTH and word not in STOP_WORDS
    ]


def tokenize(text: str | None) -> set[str]:
    """Return the normalized keyword set of ``text``.

    Lower-cases, replaces every character outside ``[a-z0-9]`` and whitespace
    with a space, splits on whitespace and drops stop words and tokens shorter
    than three characters.
    """
    return set(_words(text))


def keywords(text: str | None) -> list[str]:
    """Like :func:`tokenize` but ordered by first appearance, without duplicates."""
    return list(dict.fromkeys(_words(text)))
