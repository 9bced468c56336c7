
import logging
import sys
from typing import List, Optional, Sequence, TextIO

from rich.style import Style

from ..config import ReporterConfig
from ..runners.runner import AggregatedResults, LogMessage, TestFileResult
from ..utils.failures import format_failure_message
from ..utils.paths import relativize
from . import colors
from .tree import build_tree, render_tree

log = logging.getLogger(__name__)

SLOW_TEST_SECONDS = 2.5
CLEAR_LINE = "\r\x1b[K"

class UnknownMessageTypeError(ValueError):
    """A captured console message has a type the reporter cannot route."""
    def __init__(self, type_: str):
        super().__init__(f"Unknown console message type!: {type_}")
        self.type = type_

def format_msg(text: str, style: Style, config: ReporterConfig) -> str:
    return colors.make_colorizer(config)(text, style)

def _count(n: int, noun: str = "test") -> str:
    return f"{n} {noun}" if n == 1 else f"{n} {noun}s"

def _seconds(value: float) -> str:
    # Shortest round-trip form, whole numbers without ".0".
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text

def result_header(passed: bool, file_label: str, config: ReporterConfig, columns: Sequence[str] = ()) -> str:
    tag = (format_msg(" PASS ", colors.PASS_COLOR, config) if passed
           else format_msg(" FAIL ", colors.FAIL_COLOR, config))
    return " ".join([tag, format_msg(file_label, colors.TEST_NAME_COLOR, config), *columns])

def runtime_annotation(seconds: float, config: ReporterConfig) -> str:
    text = f"({_seconds(seconds)}s)"
    if seconds > SLOW_TEST_SECONDS:
        return format_msg(text, colors.FAIL_COLOR, config)
    return text

def summary_lines(aggregated: AggregatedResults, config: ReporterConfig) -> List[str]:
    if aggregated.num_total_tests == 0:
        return []
    results = ""
    if aggregated.num_failed_tests:
        results += format_msg(_count(aggregated.num_failed_tests) + " failed", colors.RED + colors.BOLD, config)
        results += ", "
    results += format_msg(_count(aggregated.num_passed_tests) + " passed", colors.GREEN + colors.BOLD, config)
    results += f" ({aggregated.num_total_tests} total)"
    return [results, f"Run time: {_seconds(aggregated.run_time)}s"]

def waiting_message(aggregated: AggregatedResults, config: ReporterConfig) -> Optional[str]:
    remaining = aggregated.num_total_tests - (aggregated.num_passed_tests + aggregated.num_failed_tests)
    if remaining <= 0:
        return None
    return format_msg(f"Waiting on {_count(remaining)}...", colors.MUTED, config)

def clear_waiting_sequence(config: ReporterConfig) -> str:
    # Plain logs get no control characters.
    return "\n" if config.no_highlight else CLEAR_LINE

class DefaultReporter:
    def __init__(self, stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None):
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr

    def log(self, text: str) -> None:
        self.stdout.write(text + "\n")

    def on_run_start(self, config: ReporterConfig, aggregated: AggregatedResults) -> None:
        if config.collect_coverage:
            log.warning("Coverage collection is not reported by this reporter; ignoring collect_coverage")
        self._print_waiting_on(config, aggregated)

    def on_test_result(self, config: ReporterConfig, result: TestFileResult, aggregated: AggregatedResults) -> bool:
        """Report one finished file. Returns False when the file could not be executed at all."""
        self.stdout.write(clear_waiting_sequence(config))
        path = relativize(config.root_dir, result.test_file_path)
        log.debug("Reporting %s", path)

        if result.test_exec_error:
            self.log(result_header(False, path, config))
            self.log(result.test_exec_error)
            return False

        all_passed = result.num_failing_tests == 0
        if config.verbose:
            render_tree(build_tree(result.test_results), self.log, colors.make_colorizer(config))
        else:
            columns = [runtime_annotation(result.perf_stats.seconds, config)] if result.perf_stats else []
            self.log(result_header(all_passed, path, config, columns))

        for message in result.log_messages:
            self.print_console_message(message, config)

        if not all_passed:
            self.log(format_failure_message(result, color=not config.no_highlight))

        self._print_waiting_on(config, aggregated)
        return True

    def on_run_complete(self, config: ReporterConfig, aggregated: AggregatedResults) -> None:
        for line in summary_lines(aggregated, config):
            self.log(line)

    def print_console_message(self, message: LogMessage, config: ReporterConfig) -> None:
        if message.type in ("log", "dir"):
            self.stdout.write(message.data)
        elif message.type == "warn":
            self.stderr.write(format_msg(message.data, colors.YELLOW, config))
        elif message.type == "error":
            self.stderr.write(format_msg(message.data, colors.RED, config))
        else:
            raise UnknownMessageTypeError(message.type)

    def _print_waiting_on(self, config: ReporterConfig, aggregated: AggregatedResults) -> None:
        text = waiting_message(aggregated, config)
        if text:
            self.stdout.write(text)
