"""
Configuration constants for the sarif-review system.
"""

import os

# Only logs carrying this schema version take part in aggregation.
SUPPORTED_SARIF_VERSION = "2.1.0"

# Discussion thread statuses; the first entry is the default for new threads.
STATUSES = ("Open", "Closed")

# Ordered dispositions; the first entry is the default for every thread.
DISPOSITIONS = (
    "Should fix, P1",
    "Should fix, P2",
    "Should fix, P3",
    "Ignore for 90 days",
    "Not worth fixing",
    "False positive",
    "Discussion",
)

# Filter state applied on reset when the caller supplies no default of its own.
DEFAULT_FILTER_STATE = {
    "Baseline": {"value": ["new", "unchanged", "updated"]},
    "Suppression": {"value": ["unsuppressed"]},
}

# Filter category names
KEYWORDS = "Keywords"
DISCUSSION = "Discussion"
BASELINE = "Baseline"
LEVEL = "Level"
SUPPRESSION = "Suppression"

_COMMENT_LIMIT_ENV = "SARIF_REVIEW_COMMENT_LIMIT"
_DEFAULT_USER_ENV = "SARIF_REVIEW_USER"

_DEFAULT_COMMENT_PREVIEW_LIMIT = 3


def _to_int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def comment_preview_limit() -> int:
    """Number of comments shown in a thread before "View more comments"."""
    return _to_int_env(_COMMENT_LIMIT_ENV, _DEFAULT_COMMENT_PREVIEW_LIMIT)


def default_author() -> str:
    """Author recorded on comments posted without an explicit user."""
    return os.environ.get(_DEFAULT_USER_ENV, "").strip() or "Anonymous"


# Backward-compatible constants (resolved at import time)
COMMENT_PREVIEW_LIMIT = comment_preview_limit()
DEFAULT_AUTHOR = default_author()
