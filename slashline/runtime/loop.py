"""Main interactive event loop for the prompt.

Reads one key event at a time, applies it completely, and redraws before
reading the next. The loop is wiring only; widget behavior lives in callbacks.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from dataclasses import dataclass

from ..input import KeyEvent, KeyEventSource
from .screen import InlineScreen


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_input_loop``.

    ``handle_key`` returns whether the focused widget consumed the event;
    unconsumed events go to ``handle_unhandled_key`` (interrupts, EOF keys).
    """

    handle_key: Callable[[KeyEvent], bool]
    handle_unhandled_key: Callable[[KeyEvent], None]
    render: Callable[[int], list[str]]
    is_running: Callable[[], bool]
    take_output: Callable[[], list[str]]


def _flush_output(screen: InlineScreen, callbacks: RuntimeLoopCallbacks) -> None:
    pending = callbacks.take_output()
    if pending:
        screen.print_above(pending)


def run_input_loop(
    source: KeyEventSource,
    screen: InlineScreen,
    callbacks: RuntimeLoopCallbacks,
) -> None:
    """Run until ``is_running`` turns false or input reaches end of file."""
    with source.focused():
        try:
            while callbacks.is_running():
                _flush_output(screen, callbacks)
                term = shutil.get_terminal_size((80, 24))
                screen.draw(callbacks.render(max(1, term.columns)))

                event = source.read_event()
                if event is None:
                    if source.at_eof:
                        break
                    continue
                if not callbacks.handle_key(event):
                    callbacks.handle_unhandled_key(event)
            _flush_output(screen, callbacks)
        finally:
            screen.clear()
