
from typing import Callable
from rich.color import ColorSystem
from rich.style import Style

from ..config import ReporterConfig

RED = Style(color="red")
GREEN = Style(color="green")
YELLOW = Style(color="yellow")
GRAY = Style(color="bright_black")
BOLD = Style(bold=True)
RED_BG = Style(bgcolor="red")
GREEN_BG = Style(bgcolor="green")

FAIL_COLOR = RED_BG + BOLD
PASS_COLOR = GREEN_BG + BOLD
TEST_NAME_COLOR = BOLD
CASE_PASS = GREEN
CASE_FAIL = RED
MUTED = GRAY + BOLD

Colorizer = Callable[[str, Style], str]

def colorize(text: str, style: Style) -> str:
    return style.render(text, color_system=ColorSystem.STANDARD)

def _plain(text: str, style: Style) -> str:
    return text

def _ansi(text: str, style: Style) -> str:
    return colorize(text, style)

def make_colorizer(config: ReporterConfig) -> Colorizer:
    if config.no_highlight:
        return _plain
    return _ansi
