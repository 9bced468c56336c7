
from dataclasses import dataclass
from typing import List, Optional, Dict, Any, Union, Protocol
import json, logging, pathlib
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel
from ..config import ReporterConfig

log = logging.getLogger(__name__)

class ResultsFormatError(ValueError):
    """A stored results document does not have the expected shape."""

class TestCaseResult(BaseModel):
    __test__ = False
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    title: str
    ancestor_titles: List[str] = Field(default_factory=list)
    failure_messages: List[str] = Field(default_factory=list)
    @property
    def passed(self) -> bool: return not self.failure_messages

class LogMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    data: str

class PerfStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: float = Field(..., description="Milliseconds")
    end: float = Field(..., description="Milliseconds")
    @property
    def seconds(self) -> float: return (self.end - self.start) / 1000

class TestFileResult(BaseModel):
    __test__ = False
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    test_file_path: str
    test_results: List[TestCaseResult] = Field(default_factory=list)
    num_failing_tests: Optional[int] = Field(None, description="Derived from test_results when absent")
    num_passing_tests: Optional[int] = Field(None, description="Derived from test_results when absent")
    test_exec_error: Optional[str] = None
    perf_stats: Optional[PerfStats] = None
    log_messages: List[LogMessage] = Field(default_factory=list)

    @field_validator("test_exec_error", mode="before")
    @classmethod
    def _error_text(cls, value: Any) -> Any:
        # Jest stores either the text or an {message, stack} object.
        if not value:
            return None
        if isinstance(value, dict):
            return value.get("stack") or value.get("message")
        return value

    @model_validator(mode="after")
    def _derive_counts(self) -> "TestFileResult":
        failing = sum(1 for c in self.test_results if not c.passed)
        if self.num_failing_tests is None:
            self.num_failing_tests = failing
        if self.num_passing_tests is None:
            self.num_passing_tests = len(self.test_results) - failing
        return self

@dataclass
class AggregatedResults:
    num_total_tests: int = 0
    num_passed_tests: int = 0
    num_failed_tests: int = 0
    run_time: float = 0

@dataclass
class RunSummary:
    aggregated: AggregatedResults
    files: int
    success: bool

class Reporter(Protocol):
    def on_run_start(self, config: ReporterConfig, aggregated: AggregatedResults) -> None: ...
    def on_test_result(self, config: ReporterConfig, result: TestFileResult, aggregated: AggregatedResults) -> bool: ...
    def on_run_complete(self, config: ReporterConfig, aggregated: AggregatedResults) -> None: ...

_FILE_RESULTS = TypeAdapter(List[TestFileResult])

def parse_results(document: Union[List[Any], Dict[str, Any]]) -> List[TestFileResult]:
    """Validate a Jest-style results document (camelCase keys) into file results."""
    if isinstance(document, dict):
        document = document.get("testResults")
    if not isinstance(document, list):
        raise ResultsFormatError("expected a list of file results or an object with 'testResults'")
    try:
        return _FILE_RESULTS.validate_python(document)
    except ValidationError as e:
        raise ResultsFormatError(f"malformed file result: {e}") from e

def load_results(path: str) -> List[TestFileResult]:
    try:
        document = json.loads(pathlib.Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ResultsFormatError(f"{path}: not valid JSON ({e.msg} at line {e.lineno})") from e
    return parse_results(document)

class ReplayRunner:
    """Feed stored file results to a reporter as if they were arriving from a live run."""

    def __init__(self, cfg: ReporterConfig, reporter: Reporter):
        self.cfg = cfg
        self.reporter = reporter

    def run(self, files: List[TestFileResult]) -> RunSummary:
        aggregated = AggregatedResults(
            num_total_tests=sum(len(f.test_results) for f in files if not f.test_exec_error))
        self.reporter.on_run_start(self.cfg, aggregated)
        success = True
        for f in files:
            if not f.test_exec_error:
                aggregated.num_passed_tests += f.num_passing_tests
                aggregated.num_failed_tests += f.num_failing_tests
            log.debug("Replaying %s (%d cases)", f.test_file_path, len(f.test_results))
            ok = self.reporter.on_test_result(self.cfg, f, aggregated)
            success = success and ok and f.num_failing_tests == 0
        aggregated.run_time = _run_time(files)
        self.reporter.on_run_complete(self.cfg, aggregated)
        return RunSummary(aggregated=aggregated, files=len(files), success=success)

def _run_time(files: List[TestFileResult]) -> float:
    stats = [f.perf_stats for f in files if f.perf_stats]
    if not stats:
        return 0
    return (max(s.end for s in stats) - min(s.start for s in stats)) / 1000
