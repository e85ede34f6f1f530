"""Keyword-scoped discussion threads and the list/detail selection state.

The store is an explicit object owned by the viewer session; it is never
shared through module state.  Threads are keyed by their keyword signature
and iterate in creation order.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Iterable, Iterator, Literal, Optional

from .config import DISCUSSION, DISPOSITIONS, STATUSES, comment_preview_limit, default_author
from .domain import Comment, DiscussionThread
from .errors import DuplicateKeyError, NoSelectionError, ValidationError
from .filters import FilterStateDict, category_values, keyword_query
from .keywords import matches_tokens, tokenize
from .signals import Notifier

logger = logging.getLogger(__name__)

ViewName = Literal["list", "detail"]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DiscussionDetails:
    """Per-selection detail state: comment disclosure and the pending input.

    A new instance is created every time a thread is selected, so the
    "show all" switch only lasts for one viewing of the thread.
    """

    def __init__(self, thread: DiscussionThread, limit: Optional[int] = None):
        self.thread = thread
        self.limit = limit if limit is not None else comment_preview_limit()
        self.show_all = False
        self.pending_comment = ""
        self.comment_error = False

    @property
    def visible_comments(self) -> list[Comment]:
        if self.show_all:
            return list(self.thread.comments)
        return self.thread.comments[: self.limit]

    @property
    def has_more(self) -> bool:
        """True when "View more comments" should be offered."""
        return not self.show_all and len(self.thread.comments) > self.limit

    def toggle_show_all(self) -> None:
        # One-way: there is no way back to the truncated list for this selection.
        self.show_all = True

    def set_pending_comment(self, text: str) -> None:
        self.pending_comment = text
        self.comment_error = not text


class DiscussionStore:
    """Discussion threads plus the ``list`` ⇄ ``detail`` selection machine."""

    def __init__(
        self,
        threads: Iterable[DiscussionThread] = (),
        *,
        limit: Optional[int] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._threads: dict[str, DiscussionThread] = {}
        for thread in threads:
            if thread.keywords in self._threads:
                raise DuplicateKeyError(thread.keywords)
            self._threads[thread.keywords] = thread
        self._limit = limit
        self._clock = clock
        self._details: Optional[DiscussionDetails] = None
        self._version = 0
        self._notifier = Notifier()

    # --- Collection ---

    def __len__(self) -> int:
        return len(self._threads)

    def __iter__(self) -> Iterator[DiscussionThread]:
        return iter(list(self._threads.values()))

    def __contains__(self, keywords: object) -> bool:
        return keywords in self._threads

    @property
    def threads(self) -> list[DiscussionThread]:
        return list(self._threads.values())

    def get(self, keywords: str) -> Optional[DiscussionThread]:
        return self._threads.get(keywords)

    @property
    def version(self) -> int:
        return self._version

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        return self._notifier.subscribe(callback)

    # --- Selection state ---

    @property
    def view(self) -> ViewName:
        return "list" if self._details is None else "detail"

    @property
    def selected(self) -> Optional[DiscussionThread]:
        return self._details.thread if self._details else None

    @property
    def details(self) -> Optional[DiscussionDetails]:
        return self._details

    def select_thread(self, thread: Optional[DiscussionThread]) -> None:
        """Open ``thread`` in the detail view; ``None`` returns to the list."""
        if thread is None:
            self.back()
            return
        self._require_member(thread)
        self._details = DiscussionDetails(thread, self._limit)
        self._changed()

    def back(self) -> None:
        if self._details is None:
            return
        self._details = None
        self._changed()

    def toggle_show_all(self) -> None:
        self._require_details().toggle_show_all()
        self._changed()

    def set_pending_comment(self, text: str) -> None:
        self._require_details().set_pending_comment(text)
        self._changed()

    # --- Filtering ---

    def filtered(self, state: FilterStateDict) -> list[DiscussionThread]:
        """Threads visible in the list view under the given filter state."""
        tokens = tokenize(keyword_query(state))
        statuses = category_values(state, DISCUSSION)
        return [
            thread
            for thread in self._threads.values()
            if (not statuses or thread.status in statuses)
            and matches_tokens(thread.keywords, tokens)
        ]

    def has_exact_match(self, state: FilterStateDict) -> bool:
        """True when no new discussion should be offered for the keyword query."""
        keywords = keyword_query(state)
        if not keywords:
            return True
        keywords = keywords.lower()
        return any(thread.keywords.lower() == keywords for thread in self.filtered(state))

    # --- Commands ---

    def create_thread(self, keywords: str, status: str = STATUSES[0]) -> DiscussionThread:
        """Start a new discussion for ``keywords`` and select it."""
        if not keywords or not keywords.strip():
            raise ValidationError("Discussion keywords must not be empty", field="keywords")
        if keywords in self._threads:
            logger.warning("Refusing to create duplicate discussion '%s'", keywords)
            raise DuplicateKeyError(keywords)
        self._check_choice(status, STATUSES, "status")

        thread = DiscussionThread(keywords=keywords, status=status)
        self._threads[keywords] = thread
        self._details = DiscussionDetails(thread, self._limit)
        logger.info("Created discussion '%s'", keywords)
        self._changed()
        return thread

    def post_comment(self, thread: DiscussionThread, author: Optional[str], text: str) -> Comment:
        """Append a comment to ``thread``; blank text is rejected."""
        self._require_member(thread)
        if not text or not text.strip():
            raise ValidationError("Comment text must not be empty", field="text")
        comment = Comment(who=author or default_author(), when=self._clock(), text=text)
        thread.comments.append(comment)
        self._changed()
        return comment

    def submit_comment(self, author: Optional[str], text: Optional[str] = None) -> Comment:
        """Post to the selected thread, defaulting to the pending input.

        On success the pending input is cleared; on failure the detail view's
        error flag is raised and nothing else changes.
        """
        details = self._require_details()
        body = details.pending_comment if text is None else text
        try:
            comment = self.post_comment(details.thread, author, body)
        except ValidationError:
            details.comment_error = True
            raise
        details.pending_comment = ""
        details.comment_error = False
        return comment

    def set_status(self, thread: DiscussionThread, status: str) -> None:
        self._require_member(thread)
        self._check_choice(status, STATUSES, "status")
        thread.status = status
        self._changed()

    def set_disposition(self, thread: DiscussionThread, disposition: str) -> None:
        self._require_member(thread)
        self._check_choice(disposition, DISPOSITIONS, "disposition")
        thread.disposition = disposition
        self._changed()

    # --- Helpers ---

    def _require_member(self, thread: DiscussionThread) -> None:
        if self._threads.get(thread.keywords) is not thread:
            raise KeyError(thread.keywords)

    def _require_details(self) -> DiscussionDetails:
        if self._details is None:
            raise NoSelectionError("No discussion is selected")
        return self._details

    @staticmethod
    def _check_choice(value: str, choices: tuple[str, ...], field: str) -> None:
        if value not in choices:
            raise ValidationError(
                f"Unknown {field} '{value}'. Expected one of: {', '.join(choices)}",
                field=field,
            )

    def _changed(self) -> None:
        self._version += 1
        self._notifier.notify()
