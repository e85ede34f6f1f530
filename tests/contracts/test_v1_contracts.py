"""Contract validation and adapter tests for contracts.v1."""

import pytest
from pydantic import ValidationError

from contracts.v1.adapters import (
    discussion_list_to_contract,
    log_from_contract,
    logs_from_payload,
    results_view_to_contract,
    review_state_to_contract,
)
from contracts.v1.schemas import (
    CommentRequest,
    FilterUpdateRequest,
    ResultContract,
    SarifLogContract,
)
from core.viewer import Viewer


def _sarif_log(version: str = "2.1.0") -> dict:
    return {
        "$schema": "https://json.schemastore.org/sarif-2.1.0.json",
        "version": version,
        "runs": [
            {
                "tool": {"driver": {"name": "CodeQL", "semanticVersion": "2.15.0"}},
                "results": [
                    {
                        "ruleId": "py/sql-injection",
                        "message": {"text": "Query built from user input"},
                        "level": "error",
                        "baselineState": "unchanged",
                        "locations": [
                            {"physicalLocation": {"artifactLocation": {"uri": "app/db.py"}, "region": {"startLine": 4}}}
                        ],
                    },
                    {
                        "ruleId": "py/unused-import",
                        "message": {"text": "Unused import"},
                        "suppressions": [{"kind": "inSource"}],
                    },
                ],
            },
            {"tool": {"driver": {"name": "Empty"}}},
        ],
    }


class TestSchemaValidation:
    def test_sarif_log_ignores_unknown_fields(self):
        log = SarifLogContract.model_validate(_sarif_log())
        assert log.version == "2.1.0"
        assert log.runs[0].tool.driver.name == "CodeQL"
        assert log.runs[1].results is None

    def test_sarif_log_requires_version(self):
        payload = _sarif_log()
        del payload["version"]
        with pytest.raises(ValidationError):
            SarifLogContract.model_validate(payload)

    def test_result_rejects_unknown_level(self):
        with pytest.raises(ValidationError):
            ResultContract.model_validate({"ruleId": "X", "level": "fatal"})

    def test_requests_reject_unknown_fields(self):
        with pytest.raises(ValidationError):
            CommentRequest.model_validate({"text": "hi", "extra": True})

    def test_filter_update_requires_name(self):
        with pytest.raises(ValidationError):
            FilterUpdateRequest.model_validate({"name": "", "value": "x"})


class TestAdapters:
    def test_log_from_contract_maps_filterable_fields(self):
        log = log_from_contract(SarifLogContract.model_validate(_sarif_log()))

        first, second = log.runs[0].results
        assert log.runs[0].driver_name == "CodeQL"
        assert first.rule_id == "py/sql-injection"
        assert first.message == "Query built from user input"
        assert first.level == "error"
        assert first.baseline_state == "unchanged"
        assert first.uri == "app/db.py"
        assert first.suppressed is False
        assert second.level == "warning"
        assert second.baseline_state == "new"
        assert second.suppressed is True
        assert log.runs[1].results == ()

    def test_rejected_suppression_does_not_suppress(self):
        result = ResultContract.model_validate(
            {"ruleId": "X", "suppressions": [{"kind": "external", "status": "rejected"}]}
        )
        log = log_from_contract(
            SarifLogContract(version="2.1.0", runs=[{"tool": {"driver": {"name": "t"}}, "results": [result]}])
        )
        assert log.runs[0].results[0].suppressed is False

    def test_logs_from_payload_raises_for_malformed(self):
        with pytest.raises(ValidationError):
            logs_from_payload([{"runs": []}])

    def test_legacy_log_checks_version_only(self):
        legacy = {
            "version": "1.0.0",
            "runs": [{"tool": {"name": "old"}, "results": [{"message": "x", "level": "pass"}]}],
        }
        logs = logs_from_payload([legacy, _sarif_log()])

        assert logs[0].version == "1.0.0"
        assert logs[0].runs == ()
        assert len(logs[1].runs) == 2

    def test_supported_log_still_fully_validated(self):
        payload = _sarif_log()
        payload["runs"][0]["results"][0]["level"] = "pass"
        with pytest.raises(ValidationError):
            logs_from_payload([payload])

    def test_results_view_contract(self):
        viewer = Viewer(logs_from_payload([_sarif_log()]))
        contract = results_view_to_contract(viewer.results_view, warn_old_version=viewer.warn_old_version)

        assert contract.state == "results"
        assert [run.name for run in contract.runs] == ["CodeQL", "Empty"]
        assert contract.runs[0].filtered_count == 1
        assert contract.runs[0].result_count == 2
        assert contract.total == 1
        assert contract.warn_old_version is False

    def test_discussion_and_review_contracts(self):
        viewer = Viewer(pipeline_id="p1", user="Ada")
        viewer.create_discussion("py/sql-injection")
        viewer.post_comment("Confirmed")

        listing = discussion_list_to_contract(viewer)
        review = review_state_to_contract(viewer)

        assert listing.view == "detail"
        assert listing.selected.discussion.preview == "Confirmed"
        assert listing.selected.comments[0].who == "Ada"
        assert review.available is True
        assert review.review_revision == 0
