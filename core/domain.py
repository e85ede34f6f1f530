"""Core-native domain models for analysis results and discussions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .config import DISPOSITIONS, STATUSES


@dataclass(frozen=True, slots=True)
class Result:
    """A single finding, reduced to the attributes the filters look at."""

    rule_id: str = ""
    message: str = ""
    level: str = "warning"
    baseline_state: str = "new"
    suppressed: bool = False
    uri: str = ""

    @property
    def search_text(self) -> str:
        """Lower-cased text that keyword queries are matched against."""
        return " ".join(part for part in (self.rule_id, self.message, self.uri) if part).lower()

    @property
    def suppression(self) -> str:
        return "suppressed" if self.suppressed else "unsuppressed"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Result":
        return cls(
            rule_id=data.get("rule_id", ""),
            message=data.get("message", ""),
            level=data.get("level") or "warning",
            baseline_state=data.get("baseline_state") or "new",
            suppressed=bool(data.get("suppressed", False)),
            uri=data.get("uri", ""),
        )


@dataclass(frozen=True, slots=True)
class Run:
    """One execution of an analysis tool within a log."""

    driver_name: str
    results: tuple[Result, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Run":
        return cls(
            driver_name=data.get("driver_name", ""),
            results=tuple(Result.from_dict(r) for r in data.get("results", [])),
        )


@dataclass(frozen=True, slots=True)
class Log:
    """A result log: a schema version tag plus its runs."""

    version: str
    runs: tuple[Run, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Log":
        return cls(
            version=data.get("version", ""),
            runs=tuple(Run.from_dict(r) for r in data.get("runs", [])),
        )


@dataclass(frozen=True, slots=True)
class Comment:
    """An immutable discussion comment."""

    who: str
    when: datetime
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"who": self.who, "when": self.when.isoformat(), "text": self.text}


@dataclass(slots=True)
class DiscussionThread:
    """A keyword-scoped conversation.

    ``keywords`` is the thread's signature and never changes after creation.
    Comments are only ever appended.
    """

    keywords: str
    status: str = STATUSES[0]
    disposition: str = DISPOSITIONS[0]
    comments: list[Comment] = field(default_factory=list)

    @property
    def preview(self) -> str:
        return self.comments[0].text if self.comments else "(No text)"

    def to_dict(self) -> dict[str, Any]:
        return {
            "keywords": self.keywords,
            "status": self.status,
            "disposition": self.disposition,
            "comments": [c.to_dict() for c in self.comments],
        }
