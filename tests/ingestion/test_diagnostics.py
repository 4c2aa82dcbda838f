"""Unit tests for the diagnostics collector."""

import logging
import threading

from tour_toolkit.ingestion.diagnostics import DiagnosticsCollector, IssueKind, report


class TestReport:

    def test_report_when_collector_given_then_logged_and_stored(self, diagnostics, caplog):
        with caplog.at_level(logging.WARNING):
            issue = report(diagnostics, IssueKind.RECORD_INVALID, "dataset", "bad row", index=2, raw={"city": 1})

        assert diagnostics.issues == [issue]
        assert "[dataset] record_invalid: bad row" in caplog.text
        assert issue.to_dict() == {
            "kind": "record_invalid",
            "source": "dataset",
            "message": "bad row",
            "index": 2,
            "raw": '{"city": 1}',
        }

    def test_report_when_no_collector_then_only_logged(self, caplog):
        with caplog.at_level(logging.WARNING):
            report(None, IssueKind.BATCH_EMPTY, "upload", "nothing usable")
        assert "batch_empty" in caplog.text


class TestDiagnosticsCollector:

    def test_summary_when_mixed_kinds_then_counts(self, diagnostics):
        report(diagnostics, IssueKind.RECORD_INVALID, "a", "x")
        report(diagnostics, IssueKind.RECORD_INVALID, "a", "y")
        report(diagnostics, IssueKind.SOURCE_UNAVAILABLE, "b", "z")

        assert diagnostics.summary() == {"record_invalid": 2, "source_unavailable": 1}
        assert len(diagnostics.of_kind(IssueKind.SOURCE_UNAVAILABLE)) == 1

        diagnostics.clear()
        assert len(diagnostics) == 0

    def test_add_when_concurrent_then_all_recorded(self):
        collector = DiagnosticsCollector()

        def worker():
            for _ in range(100):
                report(collector, IssueKind.RECORD_INVALID, "t", "m")

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(collector) == 400
