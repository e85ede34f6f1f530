"""Pydantic contracts for the v1 viewer API."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class _StrictModel(BaseModel):
    """Base model that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class _SarifModel(BaseModel):
    """Base model for SARIF input; fields outside the filterable subset are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# --- SARIF input (filterable subset only) ---

class DriverContract(_SarifModel):
    name: str = ""


class ToolContract(_SarifModel):
    driver: DriverContract = Field(default_factory=DriverContract)


class MessageContract(_SarifModel):
    text: str = ""


class ArtifactLocationContract(_SarifModel):
    uri: str = ""


class PhysicalLocationContract(_SarifModel):
    artifact_location: ArtifactLocationContract | None = Field(default=None, alias="artifactLocation")


class LocationContract(_SarifModel):
    physical_location: PhysicalLocationContract | None = Field(default=None, alias="physicalLocation")


class SuppressionContract(_SarifModel):
    kind: str | None = None
    status: Literal["accepted", "underReview", "rejected"] | None = None


class ResultContract(_SarifModel):
    rule_id: str | None = Field(default=None, alias="ruleId")
    message: MessageContract = Field(default_factory=MessageContract)
    level: Literal["none", "note", "warning", "error"] | None = None
    baseline_state: Literal["new", "unchanged", "updated", "absent"] | None = Field(
        default=None, alias="baselineState"
    )
    suppressions: list[SuppressionContract] = Field(default_factory=list)
    locations: list[LocationContract] = Field(default_factory=list)


class RunContract(_SarifModel):
    tool: ToolContract = Field(default_factory=ToolContract)
    results: list[ResultContract] | None = None


class SarifEnvelopeContract(_SarifModel):
    """Version-only view of a SARIF log, checked before the full schema."""

    version: str
    runs: list[Any] = Field(default_factory=list)


class SarifLogContract(_SarifModel):
    version: str
    runs: list[RunContract] = Field(default_factory=list)


# --- Requests ---

class LoadLogsRequest(_StrictModel):
    logs: list[dict[str, Any]]


class FilterUpdateRequest(_StrictModel):
    name: str = Field(min_length=1)
    value: str | list[str] | None = None


class CreateDiscussionRequest(_StrictModel):
    keywords: str | None = None


class SelectDiscussionRequest(_StrictModel):
    keywords: str | None = None


class CommentRequest(_StrictModel):
    text: str | None = None
    author: str | None = None


class PendingCommentRequest(_StrictModel):
    text: str


class StatusRequest(_StrictModel):
    keywords: str
    status: str


class DispositionRequest(_StrictModel):
    keywords: str
    disposition: str


# --- Responses ---

class FilterEntryContract(_StrictModel):
    value: str | list[str]


class FilterStateContract(_StrictModel):
    state: dict[str, FilterEntryContract]
    version: int = Field(ge=0)


class RunAggregateContract(_StrictModel):
    index: int = Field(ge=0)
    name: str
    filtered_count: int = Field(ge=0)
    result_count: int = Field(ge=0)


class ResultsViewContract(_StrictModel):
    state: Literal["loading", "no_results", "results"]
    runs: list[RunAggregateContract] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    warn_old_version: bool = False


class CommentContract(_StrictModel):
    who: str
    when: datetime
    text: str


class DiscussionContract(_StrictModel):
    keywords: str
    status: str
    disposition: str
    comment_count: int = Field(ge=0)
    preview: str


class DiscussionDetailContract(_StrictModel):
    discussion: DiscussionContract
    comments: list[CommentContract]
    show_all: bool
    has_more: bool
    pending_comment: str = ""
    comment_error: bool = False


class DiscussionListContract(_StrictModel):
    view: Literal["list", "detail"]
    keywords: str = ""
    has_exact_match: bool
    discussions: list[DiscussionContract] = Field(default_factory=list)
    selected: DiscussionDetailContract | None = None


class ReviewStateContract(_StrictModel):
    available: bool
    loading: bool
    dirty: bool
    prompt_visible: bool
    applied_revision: int = Field(ge=0)
    review_revision: int | None = None
