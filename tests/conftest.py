import io
import pytest
from testview.config import ReporterConfig
from testview.reporters.console import DefaultReporter
from testview.runners.runner import AggregatedResults, PerfStats, TestCaseResult, TestFileResult


def case(title, *ancestors, failures=()):
    return TestCaseResult(title=title, ancestor_titles=list(ancestors), failure_messages=list(failures))


@pytest.fixture
def plain():
    return ReporterConfig(no_highlight=True)


@pytest.fixture
def colored():
    return ReporterConfig()


@pytest.fixture
def streams():
    return io.StringIO(), io.StringIO()


@pytest.fixture
def reporter(streams):
    out, err = streams
    return DefaultReporter(stdout=out, stderr=err)


@pytest.fixture
def math_file():
    return TestFileResult(
        test_file_path="/repo/src/math_test.js",
        test_results=[
            case("adds", "math", "add"),
            case("subtracts", "math"),
            case("divides by zero", "math", "divide", failures=["Error: expected Infinity\nat node_modules/jest/run.js:1:1\nat math_test.js:12:5"]),
        ],
        num_failing_tests=1,
        num_passing_tests=2,
        perf_stats=PerfStats(start=0, end=420),
    )


@pytest.fixture
def aggregated():
    return AggregatedResults(num_total_tests=5, num_passed_tests=2, num_failed_tests=1)
