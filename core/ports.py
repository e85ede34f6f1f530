"""Core ports for the filter and review collaborators."""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol


class FilterStatePort(Protocol):
    """Read-only filter view consumed by aggregation and discussion lookup."""

    @property
    def version(self) -> int:
        ...

    def get_state(self) -> dict[str, dict[str, Any]]:
        ...


class ReviewContextPort(Protocol):
    """External review/pipeline process the view is synchronized against.

    ``reviews`` is ``None`` until the collaborator has loaded.  The core reads
    ``show_review_updated`` and, on reapply, writes ``review_revision`` and
    ``show_review_updated`` back.
    """

    review_revision: int
    show_review_updated: bool
    reviews: Optional[Any]

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        ...
