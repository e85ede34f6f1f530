"""Tests for core.invalidation and the in-memory review collaborator."""

from core.invalidation import InvalidationSignal
from core.review import ReviewContext


class TestInertSignal:
    def test_without_collaborator_never_dirty(self):
        signal = InvalidationSignal(None)
        signal.mark_dirty()
        assert signal.dirty is False
        assert signal.loading is False
        assert signal.reapply() is False
        assert signal.applied_revision == 0

    def test_unloaded_collaborator_is_loading_and_inert(self):
        review = ReviewContext("p1", loaded=False)
        signal = InvalidationSignal(review)

        review.mark_updated()

        assert signal.loading is True
        assert signal.dirty is False
        assert signal.reapply() is False

    def test_loading_finishes_when_reviews_arrive(self):
        review = ReviewContext("p1", loaded=False)
        signal = InvalidationSignal(review)
        review.load({"r1": "ok"})
        assert signal.loading is False
        assert signal.available is True


class TestProtocol:
    def test_review_update_sets_dirty_and_prompt(self):
        review = ReviewContext("p1")
        signal = InvalidationSignal(review)

        review.mark_updated()

        assert signal.dirty is True
        assert signal.prompt_visible is True

    def test_reapply_clears_dirty_and_bumps_revision(self):
        review = ReviewContext("p1")
        signal = InvalidationSignal(review)
        notified = []
        signal.subscribe(lambda: notified.append(signal.version))
        review.mark_updated()

        assert signal.reapply() is True

        assert signal.dirty is False
        assert signal.applied_revision == 1
        assert review.review_revision == 1
        assert review.show_review_updated is False
        assert notified == [1]

    def test_filter_change_clears_dirty_without_revision_change(self):
        review = ReviewContext("p1")
        signal = InvalidationSignal(review)
        review.mark_updated()

        signal.filter_changed()

        assert signal.dirty is False
        assert review.show_review_updated is False
        assert signal.applied_revision == 0

    def test_filter_change_while_loading_drops_pending_update(self):
        review = ReviewContext("p1", loaded=False)
        signal = InvalidationSignal(review)
        review.mark_updated()

        signal.filter_changed()
        review.load({"r1": "ok"})

        assert review.show_review_updated is False
        assert signal.dirty is False
        assert signal.prompt_visible is False

    def test_already_updated_collaborator_starts_dirty(self):
        review = ReviewContext("p1")
        review.show_review_updated = True
        signal = InvalidationSignal(review)
        assert signal.dirty is True

    def test_revision_is_monotonic(self):
        signal = InvalidationSignal(ReviewContext("p1"))
        revisions = []
        for _ in range(3):
            signal.reapply()
            revisions.append(signal.applied_revision)
        assert revisions == [1, 2, 3]

    def test_close_stops_listening(self):
        review = ReviewContext("p1")
        signal = InvalidationSignal(review)
        signal.close()
        review.mark_updated()
        assert signal.dirty is False
