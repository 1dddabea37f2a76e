"""Public runtime orchestration entry points.

This package groups the demo REPL bootstrap (``run_repl``) and the lower-level
event loop contract used by tests and composition code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .loop import RuntimeLoopCallbacks


def run_repl(*args, **kwargs):
    """Lazily import REPL entrypoint to avoid terminal setup on import."""
    from .app import run_repl as _run_repl

    return _run_repl(*args, **kwargs)


def run_input_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_input_loop as _run_input_loop

    return _run_input_loop(*args, **kwargs)


def __getattr__(name: str):
    if name == "RuntimeLoopCallbacks":
        from . import loop as _loop

        return getattr(_loop, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "run_repl",
    "run_input_loop",
    "RuntimeLoopCallbacks",
]
