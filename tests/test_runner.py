"""Tests for loading stored results and replaying them through a reporter."""

import json
import pytest
from testview.config import ReporterConfig
from testview.runners.runner import (
    ReplayRunner, ResultsFormatError, TestFileResult, load_results, parse_results,
)
from conftest import case


class RecordingReporter:
    """Reporter double that records hook calls and a snapshot of the totals."""

    def __init__(self, ok=True):
        self.calls = []
        self.ok = ok

    def on_run_start(self, config, aggregated):
        self.calls.append(("start", aggregated.num_total_tests, aggregated.num_passed_tests))

    def on_test_result(self, config, result, aggregated):
        self.calls.append(("result", result.test_file_path, aggregated.num_passed_tests, aggregated.num_failed_tests))
        return not result.test_exec_error

    def on_run_complete(self, config, aggregated):
        self.calls.append(("complete", aggregated.run_time))


DOCUMENT = [
    {
        "testFilePath": "/p/a.js",
        "numFailingTests": 1,
        "numPassingTests": 1,
        "perfStats": {"start": 1000, "end": 1500},
        "logMessages": [{"type": "log", "data": "hi\n"}],
        "testResults": [
            {"title": "x", "ancestorTitles": ["A"], "failureMessages": []},
            {"title": "y", "ancestorTitles": ["A", "B"], "failureMessages": ["boom"]},
        ],
    },
    {
        "testFilePath": "/p/b.js",
        "perfStats": {"start": 1200, "end": 3000},
        "testResults": [{"title": "z", "ancestorTitles": [], "failureMessages": []}],
    },
]


class TestParseResults:
    """Test conversion of results documents."""

    def test_list_document(self):
        """Test camelCase keys map onto file and case results."""
        files = parse_results(DOCUMENT)
        assert [f.test_file_path for f in files] == ["/p/a.js", "/p/b.js"]
        a = files[0]
        assert a.num_failing_tests == 1
        assert a.perf_stats.seconds == 0.5
        assert a.log_messages[0].type == "log"
        assert a.test_results[1] == case("y", "A", "B", failures=["boom"])

    def test_counts_derived_when_missing(self):
        """Test passing/failing counts fall back to the case outcomes."""
        files = parse_results(DOCUMENT)
        assert files[1].num_passing_tests == 1
        assert files[1].num_failing_tests == 0

    def test_object_document(self):
        """Test an aggregate object with a testResults list is accepted."""
        files = parse_results({"numTotalTests": 3, "testResults": DOCUMENT})
        assert len(files) == 2

    def test_exec_error_object(self):
        """Test an exec error given as an object keeps its stack text."""
        files = parse_results([{"testFilePath": "c.js", "testExecError": {"message": "m", "stack": "Error: m\n at c.js:1"}}])
        assert files[0].test_exec_error == "Error: m\n at c.js:1"

    @pytest.mark.parametrize("document", [
        "nope",
        {"results": []},
        [{"title": "missing path"}],
        [{"testFilePath": "a.js", "testResults": [{"ancestorTitles": []}]}],
        [42],
        [{"testFilePath": "a.js", "testResults": [{"title": "t", "ancestorTitles": "Outer"}]}],
        [{"testFilePath": "a.js", "testResults": [{"title": None}]}],
        [{"testFilePath": None, "testResults": []}],
        [{"testFilePath": "a.js", "testResults": [{"title": 7}]}],
        [{"testFilePath": "a.js", "testResults": [{"title": "t", "failureMessages": [None]}]}],
        [{"testFilePath": "a.js", "numFailingTests": "several"}],
        [{"testFilePath": "a.js", "perfStats": {"start": 1}}],
        [{"testFilePath": "a.js", "logMessages": [{"type": "log"}]}],
    ])
    def test_malformed(self, document):
        """Test malformed or mistyped documents raise ResultsFormatError."""
        with pytest.raises(ResultsFormatError):
            parse_results(document)

    def test_mistyped_field_named_in_error(self):
        """Test the error points at the offending field."""
        with pytest.raises(ResultsFormatError, match="ancestorTitles"):
            parse_results([{"testFilePath": "a.js", "testResults": [{"title": "t", "ancestorTitles": "Outer"}]}])

    def test_null_counts_are_derived(self):
        """Test explicit null counts fall back to the case outcomes."""
        files = parse_results([{
            "testFilePath": "a.js",
            "numFailingTests": None,
            "testResults": [{"title": "t", "failureMessages": ["x"]}],
        }])
        assert files[0].num_failing_tests == 1
        assert files[0].num_passing_tests == 0

    def test_load_from_file(self, tmp_path):
        """Test loading a JSON file from disk."""
        path = tmp_path / "results.json"
        path.write_text(json.dumps(DOCUMENT))
        assert len(load_results(str(path))) == 2

    def test_load_invalid_json(self, tmp_path):
        """Test invalid JSON is reported as a format error."""
        path = tmp_path / "results.json"
        path.write_text("{not json")
        with pytest.raises(ResultsFormatError, match="not valid JSON"):
            load_results(str(path))


class TestReplayRunner:
    """Test the replay runner drives the reporter like a live run."""

    def test_hook_order_and_totals(self):
        """Test totals are updated before each file is reported."""
        reporter = RecordingReporter()
        summary = ReplayRunner(ReporterConfig(), reporter).run(parse_results(DOCUMENT))

        assert reporter.calls == [
            ("start", 3, 0),
            ("result", "/p/a.js", 1, 1),
            ("result", "/p/b.js", 2, 1),
            ("complete", 2.0),
        ]
        assert summary.files == 2
        assert summary.aggregated.num_total_tests == 3
        assert summary.success is False

    def test_success_when_everything_passes(self):
        """Test a clean run reports success."""
        files = [TestFileResult(test_file_path="a.js", test_results=[case("ok")], num_passing_tests=1)]
        summary = ReplayRunner(ReporterConfig(), RecordingReporter()).run(files)
        assert summary.success is True
        assert summary.aggregated.run_time == 0

    def test_exec_error_fails_run(self):
        """Test a file that could not run makes the run unsuccessful and adds no totals."""
        files = [TestFileResult(test_file_path="a.js", test_exec_error="boom", test_results=[case("x")])]
        summary = ReplayRunner(ReporterConfig(), RecordingReporter()).run(files)
        assert summary.success is False
        assert summary.aggregated.num_total_tests == 0
        assert summary.aggregated.num_passed_tests == 0

    def test_empty_run(self):
        """Test no files still start and complete the run."""
        reporter = RecordingReporter()
        summary = ReplayRunner(ReporterConfig(), reporter).run([])
        assert reporter.calls == [("start", 0, 0), ("complete", 0)]
        assert summary.success is True
