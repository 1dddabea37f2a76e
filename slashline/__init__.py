"""Public package surface for slashline.

Exports ``main`` for programmatic CLI invocation.
The reusable input widgets live in ``slashline.completion``,
``slashline.editor`` and ``slashline.quick_search``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
