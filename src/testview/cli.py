
from enum import Enum
from typing import Optional, List
import typer
from pydantic import ValidationError
from .config import load_config, ReporterConfig
from .logging import setup_logging
from .runners.runner import ReplayRunner, ResultsFormatError, TestFileResult, load_results
from .reporters.console import DefaultReporter
from .reporters.colors import make_colorizer
from .reporters.tree import build_tree, render_tree
from .utils.failures import full_title
from .utils.paths import relativize

class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

app = typer.Typer(add_completion=False, help="testview - render stored test-run results in the terminal")

def _load(results: str, config: Optional[str], **overrides) -> tuple[ReporterConfig, List[TestFileResult]]:
    try:
        cfg = load_config(config) if config else ReporterConfig()
        files = load_results(results)
    except (OSError, ValidationError, ResultsFormatError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)
    updates = {k: v for k, v in overrides.items() if v is not None}
    return cfg.model_copy(update=updates), files

@app.command()
def report(
    results: str = typer.Argument(..., help="JSON results document to report"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config YAML"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print the nested test tree per file"),
    no_highlight: bool = typer.Option(False, "--no-highlight", help="Plain output without color codes"),
    root_dir: Optional[str] = typer.Option(None, "--root-dir", help="Report file paths relative to this directory"),
    log_level: LogLevel = typer.Option(LogLevel.WARNING, "--log-level", case_sensitive=False, help="Diagnostic log level (logs go to stderr)"),
    list_tests: bool = typer.Option(False, "--list", help="List tests without reporting"),
):
    setup_logging(log_level.value)
    cfg, files = _load(results, config, verbose=verbose or None, no_highlight=no_highlight or None, root_dir=root_dir)

    if list_tests:
        for f in files:
            for case in f.test_results:
                typer.echo(f"{relativize(cfg.root_dir, f.test_file_path)}: {full_title(case.ancestor_titles, case.title)}")
        raise typer.Exit(code=0)

    summary = ReplayRunner(cfg, DefaultReporter()).run(files)
    raise typer.Exit(code=0 if summary.success else 1)

@app.command()
def tree(
    results: str = typer.Argument(..., help="JSON results document to print"),
    no_highlight: bool = typer.Option(False, "--no-highlight", help="Plain output without color codes"),
):
    cfg, files = _load(results, None, no_highlight=no_highlight or None)
    colorize = make_colorizer(cfg)
    for f in files:
        render_tree(build_tree(f.test_results), typer.echo, colorize)

def main():
    app()

if __name__ == "__main__":
    main()
