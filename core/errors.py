"""
Exceptions raised by the sarif-review core.

Nothing here is fatal: every error leaves state untouched so callers can
surface it inline and let the user retry.
"""


class ReviewError(Exception):
    """Base class for recoverable core errors."""


class ValidationError(ReviewError):
    """Raised when a command carries an invalid value (e.g. an empty comment)."""

    def __init__(self, message: str, field: str = ""):
        super().__init__(message)
        self.field = field


class DuplicateKeyError(ReviewError):
    """Raised when creating a discussion whose keyword signature already exists."""

    def __init__(self, keywords: str):
        super().__init__(f"A discussion for '{keywords}' already exists")
        self.keywords = keywords


class NoSelectionError(ReviewError):
    """Raised when a detail-view command runs while no discussion is selected."""
