"""Staleness tracking against the external review revision.

Protocol:

1. A filter change clears ``dirty``; a fresh filter already reflects intent.
2. The review collaborator reporting updated results sets ``dirty``.
3. While dirty the "results may be stale" prompt is visible.  Nothing is
   recomputed automatically.
4. ``reapply()`` clears ``dirty``, bumps ``applied_revision`` (and the
   collaborator's ``review_revision``) and notifies dependents, which treat
   the underlying data as changed.

Without a loaded collaborator the signal is inert and never dirty.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .ports import ReviewContextPort
from .signals import Notifier

logger = logging.getLogger(__name__)


class InvalidationSignal:
    """Dirty flag plus a monotonic applied revision.

    ``version`` equals ``applied_revision`` so the signal can be used as an
    input to derived values that must rebuild on reapply.
    """

    def __init__(self, review: Optional[ReviewContextPort] = None):
        self._review = review
        self._applied_revision = 0
        self._dirty = False
        self._notifier = Notifier()
        self._unsubscribe: Optional[Callable[[], None]] = None
        if review is not None:
            self._unsubscribe = review.subscribe(self._on_review_event)
            self._on_review_event()

    @property
    def review(self) -> Optional[ReviewContextPort]:
        return self._review

    @property
    def version(self) -> int:
        return self._applied_revision

    @property
    def applied_revision(self) -> int:
        return self._applied_revision

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def prompt_visible(self) -> bool:
        return self._dirty

    @property
    def available(self) -> bool:
        return self._review is not None and self._review.reviews is not None

    @property
    def loading(self) -> bool:
        """True while a collaborator exists but has not loaded its reviews."""
        return self._review is not None and self._review.reviews is None

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        return self._notifier.subscribe(callback)

    def mark_dirty(self) -> None:
        """Record that background results changed."""
        if not self.available or self._dirty:
            return
        self._dirty = True
        logger.info("Results may be stale (applied revision %d)", self._applied_revision)

    def filter_changed(self) -> None:
        """Drop any pending update, including one reported before reviews loaded."""
        if self._review is not None:
            self._review.show_review_updated = False
        if self._dirty:
            self._dirty = False
            logger.debug("Filter changed; dropping stale-results prompt")

    def reapply(self) -> bool:
        """Acknowledge the latest review state; returns False when inert."""
        review = self._review
        if review is None or review.reviews is None:
            return False
        self._dirty = False
        self._applied_revision += 1
        review.show_review_updated = False
        review.review_revision += 1
        logger.info("Reapplied filter at revision %d", self._applied_revision)
        self._notifier.notify()
        return True

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_review_event(self) -> None:
        if self._review is not None and self._review.show_review_updated:
            self.mark_dirty()
