"""
Loading and printing helpers for the sarif-review CLI.
"""

import json
from pathlib import Path

from pydantic import ValidationError as ContractValidationError

from contracts.v1.adapters import logs_from_payload
from core.aggregation import RunAggregate
from core.domain import Log
from core.ranking import ResultsView


def load_logs(paths: list[Path]) -> list[Log]:
    """Read and validate SARIF files.

    Raises ``FileNotFoundError`` for missing files and ``ValueError`` for
    unreadable or malformed ones.
    """
    payload = []
    for path in paths:
        if not path.exists():
            raise FileNotFoundError(f"Log file not found: {path}")
        try:
            payload.append(json.loads(path.read_text(encoding="utf-8")))
        except json.JSONDecodeError as e:
            raise ValueError(f"{path}: not valid JSON ({e})") from e
    try:
        return logs_from_payload(payload)
    except ContractValidationError as e:
        raise ValueError(f"Invalid SARIF log: {e}") from e


def print_runs(view: ResultsView, *, warn_old_version: bool = False):
    """Print the ranked runs (or the loading / no-results placeholder)."""
    if warn_old_version:
        print("Warning: Pre-SARIF-2.1 logs have been omitted.")

    if view.state == "loading":
        print("No runs to show.")
        return
    if view.state == "no_results":
        print("No results found")
        return

    width = max(len(run.name or "(unnamed)") for run in view.runs)
    for position, run in enumerate(view.runs, 1):
        name = run.name or "(unnamed)"
        print(f"  {position:>3}. {name:<{width}}  {run.filtered_count:>5} / {len(run.results)}")
    print(f"\n  Total: {view.total}")


def print_results(run: RunAggregate):
    """Print the filtered results of one run."""
    print(f"{run.name or '(unnamed)'}: {run.filtered_count} result(s)")
    for result in run.filtered_results:
        location = f" ({result.uri})" if result.uri else ""
        print(f"  [{result.level}] {result.rule_id}: {result.message}{location}")
