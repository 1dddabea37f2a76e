"""In-place redraw of the prompt area on the main screen.

The prompt occupies the last few rows; redrawing moves the cursor back to the
first prompt row and clears to the end of the screen. Raw mode disables output
post-processing, so rows are joined with ``\\r\\n``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

CLEAR_TO_END = "\x1b[J"


class InlineScreen:
    def __init__(self, write: Callable[[str], None]) -> None:
        self._write = write
        self._rows_drawn = 0

    @property
    def rows_drawn(self) -> int:
        return self._rows_drawn

    def _erase_sequence(self) -> str:
        if self._rows_drawn <= 1:
            return "\r" + CLEAR_TO_END
        return f"\r\x1b[{self._rows_drawn - 1}A{CLEAR_TO_END}"

    def draw(self, lines: list[str]) -> None:
        """Replace the previously drawn frame with ``lines``."""
        self._write(self._erase_sequence() + "\r\n".join(lines))
        self._rows_drawn = len(lines)

    def print_above(self, lines: Iterable[str]) -> None:
        """Emit permanent lines where the frame was; the caller redraws after."""
        text = "".join(f"{line}\r\n" for line in lines)
        self._write(self._erase_sequence() + text)
        self._rows_drawn = 0

    def clear(self) -> None:
        if self._rows_drawn:
            self._write(self._erase_sequence())
        self._rows_drawn = 0
