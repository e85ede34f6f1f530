"""Top-level viewer session: owns all core state and exposes the command surface.

Every read is pulled through a :class:`~core.signals.Derived` keyed on the
versions of its inputs, so repeated reads between mutations reuse cached
values and a read after any command sees the post-command state.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Iterable, Optional, Sequence, Union

from .aggregation import RunAggregate, RunAggregator
from .discussion import DiscussionDetails, DiscussionStore, utcnow
from .domain import Comment, DiscussionThread, Log
from .filters import Filter, FilterStateDict, FilterValue, keyword_query
from .invalidation import InvalidationSignal
from .ports import ReviewContextPort
from .ranking import ResultsView, rank, results_view
from .review import ReviewContext
from .signals import Derived

logger = logging.getLogger(__name__)

ThreadRef = Union[DiscussionThread, str]


class Viewer:
    """One user's view over a set of result logs.

    ``filter_state`` is the starting filter, applied once; ``default_filter_state``
    is what ``reset_filter()`` restores.  A ``review`` collaborator (or a
    ``pipeline_id``, which creates an in-memory one) enables discussions and
    the stale-results protocol.
    """

    def __init__(
        self,
        logs: Optional[Sequence[Log]] = None,
        *,
        filter_state: Optional[FilterStateDict] = None,
        default_filter_state: Optional[FilterStateDict] = None,
        review: Optional[ReviewContextPort] = None,
        pipeline_id: Optional[str] = None,
        user: Optional[str] = None,
        hide_baseline: bool = False,
        hide_level: bool = False,
        discussions: Iterable[DiscussionThread] = (),
        comment_limit: Optional[int] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        if review is None and pipeline_id:
            review = ReviewContext(pipeline_id)
        self.user = user
        self.filter = Filter(default_filter_state, filter_state)
        self.review = review
        self.invalidation = InvalidationSignal(review)
        self.aggregator = RunAggregator(
            self.filter,
            revision=self.invalidation,
            hide_baseline=hide_baseline,
            hide_level=hide_level,
        )
        self.store = DiscussionStore(discussions, limit=comment_limit, clock=clock)
        self._unsubscribe_filter = self.filter.subscribe(self.invalidation.filter_changed)

        self._ranked = Derived(
            lambda: rank(self.aggregator.aggregates),
            self.aggregator, self.invalidation, self.filter,
            name="ranked_runs",
        )
        self._results_view = Derived(
            lambda: results_view(self.runs, keyword_query(self.filter.get_state())),
            self.aggregator, self.invalidation, self.filter,
            name="results_view",
        )
        self._discussions = Derived(
            lambda: self.store.filtered(self.filter.get_state()),
            self.filter, self.store,
            name="filtered_discussions",
        )
        self._has_exact_match = Derived(
            lambda: self.store.has_exact_match(self.filter.get_state()),
            self.filter, self.store,
            name="has_exact_match",
        )

        if logs is not None:
            self.load_logs(logs)

    # --- Reads ---

    @property
    def ready(self) -> bool:
        """False while the review collaborator exists but has not loaded."""
        return not self.invalidation.loading

    @property
    def discussions_enabled(self) -> bool:
        return self.review is not None

    @property
    def keywords(self) -> str:
        return keyword_query(self.filter.get_state())

    @property
    def runs(self) -> list[RunAggregate]:
        """Run aggregates ranked by filtered count."""
        return self._ranked.get()

    @property
    def results_view(self) -> ResultsView:
        return self._results_view.get()

    @property
    def warn_old_version(self) -> bool:
        return self.aggregator.legacy_logs_present

    @property
    def review_prompt_visible(self) -> bool:
        return self.invalidation.prompt_visible

    @property
    def applied_revision(self) -> int:
        return self.invalidation.applied_revision

    @property
    def discussions(self) -> list[DiscussionThread]:
        return self._discussions.get()

    @property
    def has_exact_match(self) -> bool:
        return self._has_exact_match.get()

    @property
    def selected_discussion(self) -> Optional[DiscussionThread]:
        return self.store.selected

    @property
    def details(self) -> Optional[DiscussionDetails]:
        return self.store.details

    # --- Commands ---

    def load_logs(self, logs: Optional[Sequence[Log]]) -> None:
        self.aggregator.set_logs(logs)

    def dismiss_legacy_notice(self) -> None:
        self.aggregator.dismiss_legacy_notice()

    def set_filter(self, name: str, value: Optional[FilterValue]) -> None:
        self.filter.set_filter(name, value)

    def clear_filter(self, name: str) -> None:
        self.filter.clear_filter(name)

    def reset_filter(self) -> None:
        self.filter.reset()

    def select_discussion(self, thread: Optional[ThreadRef]) -> None:
        self.store.select_thread(self._resolve(thread) if thread is not None else None)

    def back(self) -> None:
        self.store.back()

    def create_discussion(self, keywords: Optional[str] = None) -> DiscussionThread:
        """Start a discussion; defaults to the current keyword query."""
        return self.store.create_thread(self.keywords if keywords is None else keywords)

    def set_pending_comment(self, text: str) -> None:
        self.store.set_pending_comment(text)

    def post_comment(self, text: Optional[str] = None, author: Optional[str] = None) -> Comment:
        return self.store.submit_comment(author or self.user, text)

    def toggle_show_all(self) -> None:
        self.store.toggle_show_all()

    def set_status(self, thread: ThreadRef, status: str) -> None:
        self.store.set_status(self._resolve(thread), status)

    def set_disposition(self, thread: ThreadRef, disposition: str) -> None:
        self.store.set_disposition(self._resolve(thread), disposition)

    def reapply_filter(self) -> bool:
        return self.invalidation.reapply()

    def close(self) -> None:
        self._unsubscribe_filter()
        self.invalidation.close()

    def _resolve(self, thread: ThreadRef) -> DiscussionThread:
        if isinstance(thread, DiscussionThread):
            return thread
        found = self.store.get(thread)
        if found is None:
            raise KeyError(thread)
        return found
