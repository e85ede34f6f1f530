"""
Server-side viewer manager for the web API.

Bridges the HTTP layer to a single core :class:`~core.viewer.Viewer`.
State lives in memory only; restarting the server starts a fresh session.
"""

import logging
import os
from typing import Optional

from core.domain import Log
from core.review import ReviewContext
from core.viewer import Viewer

logger = logging.getLogger(__name__)

PIPELINE_ID_ENV = "SARIF_REVIEW_PIPELINE_ID"
HIDE_BASELINE_ENV = "SARIF_REVIEW_HIDE_BASELINE"


def _flag_env(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in {"1", "true", "yes", "on"}


class WebViewerManager:
    """Owns the viewer session served by the web API (single-user local tool)."""

    def __init__(self):
        self.viewer: Optional[Viewer] = None

    @property
    def is_active(self) -> bool:
        return self.viewer is not None

    def start(
        self,
        logs: Optional[list[Log]] = None,
        *,
        pipeline_id: Optional[str] = None,
        user: Optional[str] = None,
    ) -> Viewer:
        """Start a new viewer session, replacing any existing one."""
        if self.viewer is not None:
            self.viewer.close()
        pipeline_id = pipeline_id or os.environ.get(PIPELINE_ID_ENV, "").strip() or "local"
        self.viewer = Viewer(
            logs,
            review=ReviewContext(pipeline_id),
            user=user,
            hide_baseline=_flag_env(HIDE_BASELINE_ENV),
        )
        logger.info("Started viewer session for pipeline %s", pipeline_id)
        return self.viewer

    def get_viewer(self) -> Viewer:
        """Return the active viewer, starting an empty one on first use."""
        if self.viewer is None:
            return self.start()
        return self.viewer

    def load_logs(self, logs: list[Log]) -> Viewer:
        viewer = self.get_viewer()
        viewer.load_logs(logs)
        return viewer

    def report_review_updated(self) -> None:
        """Simulate the review service reporting background changes."""
        review = self.get_viewer().review
        if isinstance(review, ReviewContext):
            review.mark_updated()

    def reset(self) -> None:
        if self.viewer is not None:
            self.viewer.close()
        self.viewer = None
