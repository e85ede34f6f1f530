"""Adapters between v1 contracts and core domain objects."""

from __future__ import annotations

from core.aggregation import RunAggregate
from core.config import SUPPORTED_SARIF_VERSION
from core.discussion import DiscussionDetails
from core.domain import Comment, DiscussionThread, Log, Result, Run
from core.filters import FilterStateDict
from core.ranking import ResultsView
from core.viewer import Viewer

from .schemas import (
    CommentContract,
    DiscussionContract,
    DiscussionDetailContract,
    DiscussionListContract,
    FilterEntryContract,
    FilterStateContract,
    ResultContract,
    ResultsViewContract,
    ReviewStateContract,
    RunAggregateContract,
    RunContract,
    SarifEnvelopeContract,
    SarifLogContract,
)


def _is_suppressed(contract: ResultContract) -> bool:
    # A suppression without a status counts as accepted.
    return any(s.status in (None, "accepted") for s in contract.suppressions)


def _first_uri(contract: ResultContract) -> str:
    for location in contract.locations:
        physical = location.physical_location
        if physical and physical.artifact_location and physical.artifact_location.uri:
            return physical.artifact_location.uri
    return ""


def result_from_contract(contract: ResultContract) -> Result:
    return Result(
        rule_id=contract.rule_id or "",
        message=contract.message.text,
        level=contract.level or "warning",
        baseline_state=contract.baseline_state or "new",
        suppressed=_is_suppressed(contract),
        uri=_first_uri(contract),
    )


def run_from_contract(contract: RunContract) -> Run:
    return Run(
        driver_name=contract.tool.driver.name,
        results=tuple(result_from_contract(r) for r in contract.results or []),
    )


def log_from_contract(contract: SarifLogContract) -> Log:
    """Convert a SARIF log contract into a core :class:`Log`."""
    return Log(version=contract.version, runs=tuple(run_from_contract(r) for r in contract.runs))


def log_from_payload(item: dict) -> Log:
    """Validate one raw SARIF dictionary and convert it to a core log.

    Only the version is checked for logs other than
    ``SUPPORTED_SARIF_VERSION``; they become run-less logs so the
    aggregator can report them as omitted.
    """
    envelope = SarifEnvelopeContract.model_validate(item)
    if envelope.version != SUPPORTED_SARIF_VERSION:
        return Log(version=envelope.version, runs=())
    return log_from_contract(SarifLogContract.model_validate(item))


def logs_from_payload(payload: list[dict]) -> list[Log]:
    """Validate raw SARIF dictionaries and convert them to core logs.

    Raises ``pydantic.ValidationError`` for malformed payloads.
    """
    return [log_from_payload(item) for item in payload]


def filter_state_to_contract(state: FilterStateDict, version: int) -> FilterStateContract:
    return FilterStateContract(
        state={name: FilterEntryContract(value=entry["value"]) for name, entry in state.items()},
        version=version,
    )


def run_to_contract(run: RunAggregate) -> RunAggregateContract:
    return RunAggregateContract(
        index=run.index,
        name=run.name,
        filtered_count=run.filtered_count,
        result_count=len(run.results),
    )


def results_view_to_contract(view: ResultsView, *, warn_old_version: bool = False) -> ResultsViewContract:
    return ResultsViewContract(
        state=view.state,
        runs=[run_to_contract(run) for run in view.runs],
        total=view.total,
        warn_old_version=warn_old_version,
    )


def comment_to_contract(comment: Comment) -> CommentContract:
    return CommentContract(who=comment.who, when=comment.when, text=comment.text)


def thread_to_contract(thread: DiscussionThread) -> DiscussionContract:
    return DiscussionContract(
        keywords=thread.keywords,
        status=thread.status,
        disposition=thread.disposition,
        comment_count=len(thread.comments),
        preview=thread.preview,
    )


def details_to_contract(details: DiscussionDetails) -> DiscussionDetailContract:
    return DiscussionDetailContract(
        discussion=thread_to_contract(details.thread),
        comments=[comment_to_contract(c) for c in details.visible_comments],
        show_all=details.show_all,
        has_more=details.has_more,
        pending_comment=details.pending_comment,
        comment_error=details.comment_error,
    )


def discussion_list_to_contract(viewer: Viewer) -> DiscussionListContract:
    details = viewer.details
    return DiscussionListContract(
        view=viewer.store.view,
        keywords=viewer.keywords,
        has_exact_match=viewer.has_exact_match,
        discussions=[thread_to_contract(t) for t in viewer.discussions],
        selected=details_to_contract(details) if details else None,
    )


def review_state_to_contract(viewer: Viewer) -> ReviewStateContract:
    signal = viewer.invalidation
    review = viewer.review
    return ReviewStateContract(
        available=signal.available,
        loading=signal.loading,
        dirty=signal.dirty,
        prompt_visible=signal.prompt_visible,
        applied_revision=signal.applied_revision,
        review_revision=review.review_revision if review is not None else None,
    )
