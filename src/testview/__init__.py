# Lightweight package init: avoid eager imports that can fail at console start.
__all__ = ["DefaultReporter", "ReporterConfig", "build_tree", "render_tree"]

def __getattr__(name):
    if name == "DefaultReporter":
        from .reporters.console import DefaultReporter as _DefaultReporter
        return _DefaultReporter
    if name == "ReporterConfig":
        from .config import ReporterConfig as _ReporterConfig
        return _ReporterConfig
    if name == "build_tree":
        from .reporters.tree import build_tree as _build_tree
        return _build_tree
    if name == "render_tree":
        from .reporters.tree import render_tree as _render_tree
        return _render_tree
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
