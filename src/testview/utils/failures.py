from typing import List
import re
from ..runners.runner import TestFileResult
from ..reporters import colors

TITLE_SEPARATOR = " › "
BULLET = "  ● "
MESSAGE_INDENT = "    "

# Stack frames from the test framework itself carry no information for the reader.
_FRAMEWORK_FRAME = re.compile(r"site-packages/_pytest|node_modules/|/jasmine")

def full_title(ancestor_titles: List[str], title: str) -> str:
    return TITLE_SEPARATOR.join([*ancestor_titles, title])

def _clean(message: str) -> List[str]:
    return [MESSAGE_INDENT + line for line in message.splitlines() if not _FRAMEWORK_FRAME.search(line)]

def format_failure_message(result: TestFileResult, color: bool = True) -> str:
    """Describe every failing case of a file: its full title, then its indented failure messages."""
    blocks = []
    for case in result.test_results:
        if case.passed:
            continue
        header = BULLET + full_title(case.ancestor_titles, case.title)
        if color:
            header = colors.colorize(header, colors.RED + colors.BOLD)
        lines = [header]
        for message in case.failure_messages:
            lines.extend(_clean(message))
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)
