"""
REST API routes for the sarif-review viewer.
"""

import logging

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError as ContractValidationError

from contracts.v1.adapters import (
    comment_to_contract,
    discussion_list_to_contract,
    filter_state_to_contract,
    logs_from_payload,
    results_view_to_contract,
    review_state_to_contract,
)
from contracts.v1.schemas import (
    CommentContract,
    CommentRequest,
    CreateDiscussionRequest,
    DiscussionListContract,
    DispositionRequest,
    FilterStateContract,
    FilterUpdateRequest,
    LoadLogsRequest,
    PendingCommentRequest,
    ResultsViewContract,
    ReviewStateContract,
    SelectDiscussionRequest,
    StatusRequest,
)
from core.config import DISPOSITIONS, STATUSES, SUPPORTED_SARIF_VERSION
from core.errors import DuplicateKeyError, NoSelectionError, ReviewError, ValidationError

from .session_manager import WebViewerManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

# Single shared viewer manager (single-user local tool)
session_mgr = WebViewerManager()


# --- Helpers ---

def _http_error(e: Exception) -> HTTPException:
    """Map core errors onto HTTP status codes."""
    if isinstance(e, DuplicateKeyError):
        return HTTPException(status_code=409, detail=str(e))
    if isinstance(e, ValidationError):
        return HTTPException(status_code=422, detail={"field": e.field, "message": str(e)})
    if isinstance(e, NoSelectionError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, KeyError):
        return HTTPException(status_code=404, detail=f"No discussion for '{e.args[0]}'")
    return HTTPException(status_code=400, detail=str(e))


def _runs_payload() -> ResultsViewContract:
    viewer = session_mgr.get_viewer()
    return results_view_to_contract(viewer.results_view, warn_old_version=viewer.warn_old_version)


def _filter_payload() -> FilterStateContract:
    viewer = session_mgr.get_viewer()
    return filter_state_to_contract(viewer.filter.get_state(), viewer.filter.version)


def _discussions_payload() -> DiscussionListContract:
    return discussion_list_to_contract(session_mgr.get_viewer())


def _review_payload() -> ReviewStateContract:
    return review_state_to_contract(session_mgr.get_viewer())


# --- Routes ---

@router.get("/config")
async def get_config():
    """Return static configuration for the frontend."""
    return {
        "supported_sarif_version": SUPPORTED_SARIF_VERSION,
        "statuses": list(STATUSES),
        "dispositions": list(DISPOSITIONS),
    }


@router.put("/logs", response_model=ResultsViewContract)
async def load_logs(req: LoadLogsRequest):
    """Replace the raw log collection with the given SARIF logs."""
    try:
        logs = logs_from_payload(req.logs)
    except ContractValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    session_mgr.load_logs(logs)
    logger.info("Loaded %d log(s)", len(logs))
    return _runs_payload()


@router.get("/runs", response_model=ResultsViewContract)
async def get_runs():
    """Return run aggregates ranked by filtered result count."""
    return _runs_payload()


@router.post("/notices/legacy/dismiss", response_model=ResultsViewContract)
async def dismiss_legacy_notice():
    session_mgr.get_viewer().dismiss_legacy_notice()
    return _runs_payload()


@router.get("/filter", response_model=FilterStateContract)
async def get_filter():
    return _filter_payload()


@router.put("/filter", response_model=FilterStateContract)
async def update_filter(req: FilterUpdateRequest):
    """Set one filter category; a null or empty value clears it."""
    session_mgr.get_viewer().set_filter(req.name, req.value)
    return _filter_payload()


@router.post("/filter/reset", response_model=FilterStateContract)
async def reset_filter():
    session_mgr.get_viewer().reset_filter()
    return _filter_payload()


@router.get("/discussions", response_model=DiscussionListContract)
async def get_discussions():
    return _discussions_payload()


@router.post("/discussions", response_model=DiscussionListContract, status_code=201)
async def create_discussion(req: CreateDiscussionRequest):
    """Start a discussion (defaults to the current keyword query) and select it."""
    try:
        session_mgr.get_viewer().create_discussion(req.keywords)
    except ReviewError as e:
        raise _http_error(e) from e
    return _discussions_payload()


@router.post("/discussions/select", response_model=DiscussionListContract)
async def select_discussion(req: SelectDiscussionRequest):
    try:
        session_mgr.get_viewer().select_discussion(req.keywords)
    except KeyError as e:
        raise _http_error(e) from e
    return _discussions_payload()


@router.post("/discussions/back", response_model=DiscussionListContract)
async def back_to_list():
    session_mgr.get_viewer().back()
    return _discussions_payload()


@router.put("/discussions/pending-comment", response_model=DiscussionListContract)
async def set_pending_comment(req: PendingCommentRequest):
    try:
        session_mgr.get_viewer().set_pending_comment(req.text)
    except ReviewError as e:
        raise _http_error(e) from e
    return _discussions_payload()


@router.post("/discussions/comments", response_model=CommentContract, status_code=201)
async def post_comment(req: CommentRequest):
    """Post a comment to the selected discussion."""
    try:
        comment = session_mgr.get_viewer().post_comment(req.text, author=req.author)
    except ReviewError as e:
        raise _http_error(e) from e
    return comment_to_contract(comment)


@router.post("/discussions/show-all", response_model=DiscussionListContract)
async def show_all_comments():
    try:
        session_mgr.get_viewer().toggle_show_all()
    except ReviewError as e:
        raise _http_error(e) from e
    return _discussions_payload()


@router.put("/discussions/status", response_model=DiscussionListContract)
async def set_status(req: StatusRequest):
    try:
        session_mgr.get_viewer().set_status(req.keywords, req.status)
    except (ReviewError, KeyError) as e:
        raise _http_error(e) from e
    return _discussions_payload()


@router.put("/discussions/disposition", response_model=DiscussionListContract)
async def set_disposition(req: DispositionRequest):
    try:
        session_mgr.get_viewer().set_disposition(req.keywords, req.disposition)
    except (ReviewError, KeyError) as e:
        raise _http_error(e) from e
    return _discussions_payload()


@router.get("/review", response_model=ReviewStateContract)
async def get_review():
    return _review_payload()


@router.post("/review/updated", response_model=ReviewStateContract)
async def review_updated():
    """Report that the review service changed results in the background."""
    session_mgr.report_review_updated()
    return _review_payload()


@router.post("/review/reapply", response_model=ReviewStateContract)
async def reapply_filter():
    """Acknowledge review updates and rebuild the results."""
    session_mgr.get_viewer().reapply_filter()
    return _review_payload()
