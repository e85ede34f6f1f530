"""Keyword query matching shared by result filtering and discussion lookup."""

from __future__ import annotations

from typing import Iterable, Optional


def tokenize(query: Optional[str]) -> list[str]:
    """Split a keyword query into lower-cased, non-empty tokens."""
    return [part for part in (query or "").lower().split() if part]


def matches_tokens(haystack: str, tokens: Iterable[str]) -> bool:
    """Return True when every token occurs in the (lower-cased) haystack.

    ``tokens`` must already be lower-cased, e.g. from :func:`tokenize`.
    """
    lowered = (haystack or "").lower()
    return all(token in lowered for token in tokens)


def matches(haystack: str, query: Optional[str]) -> bool:
    """Return True when ``haystack`` satisfies the keyword ``query``.

    Matching is case-insensitive, order-independent and token-wise AND.
    Tokens are plain substrings (no word-boundary requirement) and an empty
    query matches everything.
    """
    return matches_tokens(haystack, tokenize(query))
