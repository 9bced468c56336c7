
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List

from ..runners.runner import TestCaseResult
from .colors import CASE_FAIL, CASE_PASS, Colorizer

INDENT = "  "

@dataclass
class GroupNode:
    cases: List[TestCaseResult] = field(default_factory=list)
    children: Dict[str, "GroupNode"] = field(default_factory=dict)

    def child(self, title: str) -> "GroupNode":
        """Return the child group for ``title``, creating it on first use."""
        node = self.children.get(title)
        if node is None:
            node = self.children[title] = GroupNode()
        return node

def build_tree(results: Iterable[TestCaseResult]) -> GroupNode:
    """Group results by ancestor titles; groups are shared by title prefix, in first-seen order."""
    root = GroupNode()
    for result in results:
        node = root
        for title in result.ancestor_titles:
            node = node.child(title)
        node.cases.append(result)
    return root

def indent(depth: int) -> str:
    return INDENT * depth

def _emit_cases(node: GroupNode, depth: int, emit_line: Callable[[str], None], colorize: Colorizer) -> None:
    for case in node.cases:
        color = CASE_PASS if case.passed else CASE_FAIL
        emit_line(colorize(indent(depth + 1) + case.title, color))

def _render_children(children: Dict[str, GroupNode], depth: int,
                     emit_line: Callable[[str], None], colorize: Colorizer) -> None:
    for title, node in children.items():
        emit_line(indent(depth) + title)
        _emit_cases(node, depth, emit_line, colorize)
        if node.children:
            _render_children(node.children, depth + 1, emit_line, colorize)

def render_tree(root: GroupNode, emit_line: Callable[[str], None], colorize: Colorizer) -> None:
    """Print ``root`` depth-first: a group's title, then its cases, then its subgroups."""
    _emit_cases(root, 0, emit_line, colorize)
    _render_children(root.children, 0, emit_line, colorize)
