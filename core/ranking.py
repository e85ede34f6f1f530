"""Relevance ordering of run aggregates and the derived results view."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Literal

from .aggregation import RunAggregate

ViewState = Literal["loading", "no_results", "results"]


def rank(aggregates: Iterable[RunAggregate]) -> list[RunAggregate]:
    """Order aggregates by ``filtered_count``, highest first.

    ``sorted`` is stable, so equal counts keep their input order.
    """
    return sorted(aggregates, key=lambda aggregate: aggregate.filtered_count, reverse=True)


@dataclass
class ResultsView:
    """What the results pane should show."""

    state: ViewState
    runs: list[RunAggregate] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(run.filtered_count for run in self.runs)


def results_view(ranked: list[RunAggregate], keywords: str) -> ResultsView:
    """Derive the results pane from ranked aggregates and the keyword query.

    No aggregates means the logs are still loading.  With a keyword query,
    runs without matches are hidden and an all-zero total shows the
    "No results found" placeholder instead.
    """
    if not ranked:
        return ResultsView(state="loading")
    if not keywords:
        return ResultsView(state="results", runs=list(ranked))
    if not sum(run.filtered_count for run in ranked):
        return ResultsView(state="no_results")
    return ResultsView(state="results", runs=[run for run in ranked if run.filtered_count])
