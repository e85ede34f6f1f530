"""v1 contract schemas and adapters."""

__version__ = "1.0.0"

from .adapters import (
    details_to_contract,
    discussion_list_to_contract,
    filter_state_to_contract,
    log_from_contract,
    log_from_payload,
    logs_from_payload,
    results_view_to_contract,
    review_state_to_contract,
    run_to_contract,
    thread_to_contract,
)
from .schemas import (
    CommentContract,
    CommentRequest,
    CreateDiscussionRequest,
    DiscussionContract,
    DiscussionDetailContract,
    DiscussionListContract,
    DispositionRequest,
    FilterStateContract,
    FilterUpdateRequest,
    LoadLogsRequest,
    PendingCommentRequest,
    ResultContract,
    ResultsViewContract,
    ReviewStateContract,
    RunAggregateContract,
    RunContract,
    SarifEnvelopeContract,
    SarifLogContract,
    SelectDiscussionRequest,
    StatusRequest,
)

__all__ = [
    "__version__",
    "CommentContract",
    "CommentRequest",
    "CreateDiscussionRequest",
    "DiscussionContract",
    "DiscussionDetailContract",
    "DiscussionListContract",
    "DispositionRequest",
    "FilterStateContract",
    "FilterUpdateRequest",
    "LoadLogsRequest",
    "PendingCommentRequest",
    "ResultContract",
    "ResultsViewContract",
    "ReviewStateContract",
    "RunAggregateContract",
    "RunContract",
    "SarifEnvelopeContract",
    "SarifLogContract",
    "SelectDiscussionRequest",
    "StatusRequest",
    "details_to_contract",
    "discussion_list_to_contract",
    "filter_state_to_contract",
    "log_from_contract",
    "log_from_payload",
    "logs_from_payload",
    "results_view_to_contract",
    "review_state_to_contract",
    "run_to_contract",
    "thread_to_contract",
]
