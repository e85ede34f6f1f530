"""
Shared fixtures for sarif-review tests.
"""

from datetime import datetime, timedelta, timezone

import pytest

from core.domain import Comment, DiscussionThread, Log, Result, Run


def make_run(name: str, count: int, **result_fields) -> Run:
    """Build a run with ``count`` results sharing ``result_fields``."""
    fields = {"rule_id": f"{name.upper()}01", "message": f"{name} finding"}
    fields.update(result_fields)
    return Run(driver_name=name, results=tuple(Result(**fields) for _ in range(count)))


@pytest.fixture
def sample_logs():
    """Two supported logs with three runs in total."""
    return [
        Log(
            version="2.1.0",
            runs=(
                Run(
                    driver_name="alpha",
                    results=(
                        Result(rule_id="RULE01", message="Unused variable", uri="src/a.py"),
                        Result(rule_id="RULE02", message="Missing docstring", level="note"),
                    ),
                ),
                Run(
                    driver_name="beta",
                    results=(
                        Result(rule_id="RULE01", message="Unused import", baseline_state="unchanged"),
                        Result(rule_id="RULE03", message="SQL injection", level="error"),
                        Result(rule_id="RULE03", message="SQL injection", suppressed=True),
                    ),
                ),
            ),
        ),
        Log(
            version="2.1.0",
            runs=(Run(driver_name="gamma", results=(Result(rule_id="RULE04", message="Hardcoded secret"),)),),
        ),
    ]


@pytest.fixture
def legacy_log():
    return Log(version="2.0.0", runs=(make_run("old", 5),))


@pytest.fixture
def fixed_clock():
    """A clock returning increasing, deterministic timestamps."""
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    ticks = {"n": 0}

    def _clock():
        ticks["n"] += 1
        return start + timedelta(minutes=ticks["n"])

    return _clock


@pytest.fixture
def seeded_threads():
    return [
        DiscussionThread(
            "RULE01",
            "Open",
            comments=[
                Comment("Michael", datetime(2010, 1, 1, tzinfo=timezone.utc), "First"),
                Comment("Jeff", datetime(2010, 1, 2, tzinfo=timezone.utc), "Second"),
                Comment("Michael", datetime(2010, 1, 3, tzinfo=timezone.utc), "Third"),
                Comment("Jeff", datetime(2010, 1, 4, tzinfo=timezone.utc), "Fourth"),
            ],
        ),
        DiscussionThread(
            "RULE01 RULE02",
            "Closed",
            comments=[Comment("Larry", datetime(2010, 2, 1, tzinfo=timezone.utc), "Duis aute")],
        ),
        DiscussionThread(
            "RULE01 RULE02 RULE03",
            "Open",
            comments=[Comment("Alison", datetime(2010, 3, 1, tzinfo=timezone.utc), "Excepteur")],
        ),
    ]


@pytest.fixture
def run_factory():
    """Expose :func:`make_run` to tests."""
    return make_run
