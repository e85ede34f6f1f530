"""Tests for core.aggregation."""

from core.aggregation import ResultCriteria, RunAggregator, qualifying_runs
from core.domain import Log, Result
from core.filters import Filter
from core.signals import Signal


def _aggregator(initial=None, **kwargs):
    f = Filter(default_state={}, initial_state=initial)
    return f, RunAggregator(f, **kwargs)


class TestQualifyingRuns:
    def test_flattens_runs_in_encounter_order(self, sample_logs):
        names = [run.driver_name for run in qualifying_runs(sample_logs)]
        assert names == ["alpha", "beta", "gamma"]

    def test_skips_unsupported_versions(self, sample_logs, legacy_log):
        names = [run.driver_name for run in qualifying_runs([legacy_log] + sample_logs)]
        assert "old" not in names


class TestResultCriteria:
    def test_category_filters_are_anded_with_keywords(self):
        criteria = ResultCriteria(
            {
                "Keywords": {"value": "rule03"},
                "Level": {"value": ["error"]},
                "Suppression": {"value": ["unsuppressed"]},
            }
        )
        assert criteria.accepts(Result(rule_id="RULE03", level="error")) is True
        assert criteria.accepts(Result(rule_id="RULE03", level="note")) is False
        assert criteria.accepts(Result(rule_id="RULE03", level="error", suppressed=True)) is False
        assert criteria.accepts(Result(rule_id="RULE04", level="error")) is False

    def test_keywords_match_message_and_uri(self):
        criteria = ResultCriteria({"Keywords": {"value": "injection db.py"}})
        assert criteria.accepts(Result(message="SQL injection", uri="src/db.py")) is True

    def test_hidden_categories_are_ignored(self):
        state = {"Baseline": {"value": ["new"]}, "Level": {"value": ["error"]}}
        criteria = ResultCriteria(state, hide_baseline=True, hide_level=True)
        assert criteria.accepts(Result(baseline_state="absent", level="note")) is True


class TestRunAggregator:
    def test_absent_logs_yield_empty_sequence(self):
        _, aggregator = _aggregator()
        assert aggregator.aggregates == []
        assert aggregator.build_count == 0

    def test_one_aggregate_per_run_with_stable_index(self, sample_logs):
        _, aggregator = _aggregator()
        aggregator.set_logs(sample_logs)

        aggregates = aggregator.aggregates

        assert [(a.index, a.name) for a in aggregates] == [(0, "alpha"), (1, "beta"), (2, "gamma")]
        assert [a.filtered_count for a in aggregates] == [2, 3, 1]

    def test_default_filter_excludes_suppressed(self, sample_logs):
        aggregator = RunAggregator(Filter())
        aggregator.set_logs(sample_logs)
        assert [a.filtered_count for a in aggregator.aggregates] == [2, 2, 1]

    def test_filter_change_recounts_without_rebuilding(self, sample_logs):
        f, aggregator = _aggregator()
        aggregator.set_logs(sample_logs)
        first = aggregator.aggregates

        f.set_filter("Keywords", "rule01")

        assert aggregator.aggregates is first
        assert aggregator.build_count == 1
        assert [a.filtered_count for a in first] == [1, 1, 0]

    def test_same_collection_object_does_not_rebuild(self, sample_logs):
        _, aggregator = _aggregator()
        aggregator.set_logs(sample_logs)
        aggregator.aggregates
        aggregator.set_logs(sample_logs)
        aggregator.aggregates
        assert aggregator.build_count == 1

    def test_new_collection_rebuilds(self, sample_logs):
        _, aggregator = _aggregator()
        aggregator.set_logs(sample_logs)
        first = aggregator.aggregates
        aggregator.set_logs(list(sample_logs))
        assert aggregator.aggregates is not first
        assert aggregator.build_count == 2

    def test_revision_input_forces_rebuild(self, sample_logs):
        revision = Signal(0)
        f = Filter(default_state={})
        aggregator = RunAggregator(f, revision=revision)
        aggregator.set_logs(sample_logs)
        first = aggregator.aggregates

        revision.touch()

        assert aggregator.aggregates is not first
        assert aggregator.build_count == 2

    def test_legacy_logs_set_notice_until_dismissed(self, sample_logs, legacy_log):
        _, aggregator = _aggregator()
        aggregator.set_logs([legacy_log] + sample_logs)

        assert aggregator.legacy_logs_present is True
        assert [a.name for a in aggregator.aggregates] == ["alpha", "beta", "gamma"]

        aggregator.dismiss_legacy_notice()
        assert aggregator.legacy_logs_present is False

        aggregator.set_logs(sample_logs)
        assert aggregator.legacy_logs_present is False

    def test_legacy_exclusion_is_logged(self, legacy_log, caplog):
        _, aggregator = _aggregator()
        with caplog.at_level("WARNING", logger="core.aggregation"):
            aggregator.set_logs([legacy_log])
        assert "2.0.0" in caplog.text

    def test_only_legacy_logs_yield_no_aggregates(self, legacy_log):
        _, aggregator = _aggregator()
        aggregator.set_logs([legacy_log])
        assert aggregator.aggregates == []

    def test_filtered_results_follow_filter(self, sample_logs):
        f, aggregator = _aggregator()
        aggregator.set_logs(sample_logs)
        beta = aggregator.aggregates[1]

        f.set_filter("Level", ["error"])

        assert [r.rule_id for r in beta.filtered_results] == ["RULE03"]

    def test_empty_log_list_is_not_loading(self):
        _, aggregator = _aggregator()
        aggregator.set_logs([Log(version="2.1.0")])
        assert aggregator.aggregates == []
        assert aggregator.build_count == 1
