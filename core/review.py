"""In-memory review collaborator.

Stands in for the external review/pipeline service: it carries the review
revision and the "results updated" flag, and lets callers simulate the
service loading and reporting background changes.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from .signals import Notifier

logger = logging.getLogger(__name__)


class ReviewContext:
    """Review state for one pipeline."""

    def __init__(self, pipeline_id: str, reviews: Optional[dict[str, Any]] = None, *, loaded: bool = True):
        self.pipeline_id = pipeline_id
        self.review_revision = 0
        self.show_review_updated = False
        self.reviews: Optional[dict[str, Any]] = dict(reviews or {}) if loaded else None
        self._notifier = Notifier()

    @property
    def loaded(self) -> bool:
        return self.reviews is not None

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        return self._notifier.subscribe(callback)

    def load(self, reviews: Optional[dict[str, Any]] = None) -> None:
        """Mark the reviews as loaded."""
        self.reviews = dict(reviews or {})
        logger.info("Reviews loaded for pipeline %s (%d entries)", self.pipeline_id, len(self.reviews))
        self._notifier.notify()

    def mark_updated(self) -> None:
        """Report that results changed in the background."""
        self.show_review_updated = True
        logger.info("Review results updated for pipeline %s", self.pipeline_id)
        self._notifier.notify()
