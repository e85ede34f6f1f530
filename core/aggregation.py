"""Per-run aggregation of analysis results under the live filter state.

Aggregate construction (flattening logs into runs and indexing each run's
search surface) is cached on the identity of the raw log collection and on
the applied review revision.  Filter changes never rebuild aggregates; each
aggregate recomputes its ``filtered_count`` lazily when the filter version
has advanced since the last read.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .config import BASELINE, LEVEL, SUPPORTED_SARIF_VERSION, SUPPRESSION
from .domain import Log, Result, Run
from .filters import FilterStateDict, category_values, keyword_query
from .keywords import matches_tokens, tokenize
from .ports import FilterStatePort
from .signals import Derived, Signal, Versioned

logger = logging.getLogger(__name__)


class ResultCriteria:
    """Filter state resolved into the predicates applied to each result."""

    def __init__(self, state: FilterStateDict, *, hide_baseline: bool = False, hide_level: bool = False):
        self.tokens = tokenize(keyword_query(state))
        self.baseline = set() if hide_baseline else set(category_values(state, BASELINE))
        self.level = set() if hide_level else set(category_values(state, LEVEL))
        self.suppression = set(category_values(state, SUPPRESSION))

    def accepts(self, result: Result, search_text: Optional[str] = None) -> bool:
        if self.baseline and result.baseline_state not in self.baseline:
            return False
        if self.level and result.level not in self.level:
            return False
        if self.suppression and result.suppression not in self.suppression:
            return False
        text = result.search_text if search_text is None else search_text
        return matches_tokens(text, self.tokens)


class RunAggregate:
    """Derived view of one run: identity, display name and filtered count."""

    def __init__(
        self,
        run: Run,
        index: int,
        filter_state: FilterStatePort,
        *,
        hide_baseline: bool = False,
        hide_level: bool = False,
    ):
        self.index = index
        self.name = run.driver_name
        self.results: tuple[Result, ...] = tuple(run.results)
        self._search_texts = tuple(result.search_text for result in self.results)
        self._filter = filter_state
        self._hide_baseline = hide_baseline
        self._hide_level = hide_level
        self._filtered = Derived(self._compute_filtered, filter_state, name=f"filtered_results[{index}]")

    def __repr__(self) -> str:
        return f"RunAggregate(index={self.index}, name={self.name!r})"

    def _compute_filtered(self) -> tuple[Result, ...]:
        criteria = ResultCriteria(
            self._filter.get_state(),
            hide_baseline=self._hide_baseline,
            hide_level=self._hide_level,
        )
        return tuple(
            result
            for result, text in zip(self.results, self._search_texts)
            if criteria.accepts(result, text)
        )

    @property
    def filtered_results(self) -> tuple[Result, ...]:
        return self._filtered.get()

    @property
    def filtered_count(self) -> int:
        return len(self._filtered.get())


def qualifying_runs(logs: Sequence[Log]) -> list[Run]:
    """Flatten the runs of every supported-version log, in encounter order."""
    return [run for log in logs if log.version == SUPPORTED_SARIF_VERSION for run in log.runs]


class RunAggregator:
    """Builds and caches the ordered list of :class:`RunAggregate`.

    ``revision`` is an optional versioned input (the invalidation signal);
    advancing it forces a rebuild even when the log collection is unchanged.
    """

    def __init__(
        self,
        filter_state: FilterStatePort,
        *,
        revision: Optional[Versioned] = None,
        hide_baseline: bool = False,
        hide_level: bool = False,
    ):
        self._filter = filter_state
        self._hide_baseline = hide_baseline
        self._hide_level = hide_level
        self._logs: Signal[Optional[Sequence[Log]]] = Signal(None)
        inputs = (self._logs,) if revision is None else (self._logs, revision)
        self._aggregates = Derived(self._build, *inputs, name="run_aggregates")
        self._warn_old_version = False
        self.build_count = 0

    @property
    def logs(self) -> Optional[Sequence[Log]]:
        return self._logs.value

    @property
    def version(self) -> int:
        """Version of the raw log collection (advances on identity change)."""
        return self._logs.version

    def set_logs(self, logs: Optional[Sequence[Log]]) -> None:
        """Replace the raw log collection.

        Passing the same collection object again is not a change.  ``None``
        means the logs are still loading.
        """
        if logs is self._logs.value:
            return
        legacy = [log.version for log in logs or () if log.version != SUPPORTED_SARIF_VERSION]
        self._warn_old_version = bool(legacy)
        if legacy:
            logger.warning(
                "Omitting %d log(s) with unsupported SARIF version(s): %s",
                len(legacy),
                ", ".join(sorted(set(legacy))),
            )
        self._logs.set(logs)

    @property
    def legacy_logs_present(self) -> bool:
        """True while the "older logs omitted" notice should be shown."""
        return self._warn_old_version

    def dismiss_legacy_notice(self) -> None:
        self._warn_old_version = False

    @property
    def aggregates(self) -> list[RunAggregate]:
        return self._aggregates.get()

    def _build(self) -> list[RunAggregate]:
        logs = self._logs.value
        if logs is None:
            return []
        self.build_count += 1
        aggregates = [
            RunAggregate(
                run,
                index,
                self._filter,
                hide_baseline=self._hide_baseline,
                hide_level=self._hide_level,
            )
            for index, run in enumerate(qualifying_runs(logs))
        ]
        logger.info("Built %d run aggregate(s) (build #%d)", len(aggregates), self.build_count)
        return aggregates
