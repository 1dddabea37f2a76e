"""Single-line text editor with a simulated cursor.

The editor never relies on the terminal's native cursor. It keeps the cursor
offset in ``EditorState`` and renders the character under it in inverse video.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace

from .ansi import display_width
from .input import KeyEvent
from .ui_theme import DEFAULT_THEME, UITheme

# Keys left for an outer handler (history, completion, interrupt).
PASSTHROUGH_COMBOS = frozenset({"up", "down", "tab", "shift+tab", "escape", "pageup", "pagedown"})


@dataclass(frozen=True)
class EditorState:
    """Cursor position plus the width of a just-pasted span.

    ``cursor_width`` is non-zero only right after a multi-character insertion.
    """

    cursor_offset: int = 0
    cursor_width: int = 0


def clamp_to_value(state: EditorState, value: str) -> EditorState:
    """Pull the cursor back inside ``value`` after an external overwrite."""
    if state.cursor_offset > len(value):
        return EditorState(cursor_offset=len(value), cursor_width=0)
    if state.cursor_offset < 0:
        return EditorState(cursor_offset=0, cursor_width=0)
    return state


def move_cursor(state: EditorState, value: str, delta: int) -> EditorState:
    offset = max(0, min(len(value), state.cursor_offset + delta))
    return EditorState(cursor_offset=offset, cursor_width=0)


def insert_text(state: EditorState, value: str, text: str) -> tuple[str, EditorState]:
    """Splice ``text`` in at the cursor and advance past it."""
    offset = state.cursor_offset
    new_value = value[:offset] + text + value[offset:]
    width = len(text) if len(text) > 1 else 0
    return new_value, EditorState(cursor_offset=offset + len(text), cursor_width=width)


def delete_before_cursor(state: EditorState, value: str) -> tuple[str, EditorState]:
    offset = state.cursor_offset
    if offset <= 0:
        return value, replace(state, cursor_width=0)
    return value[: offset - 1] + value[offset:], EditorState(cursor_offset=offset - 1, cursor_width=0)


def visible_span(value: str, cursor_offset: int, max_cols: int) -> tuple[int, int]:
    """Return ``(begin, end)`` of the slice of ``value`` shown in ``max_cols``.

    The slice scrolls horizontally so the cursor cell (the trailing blank when
    the cursor sits at the end) always fits.
    """
    at_end = cursor_offset >= len(value)
    tail = 1 if at_end else 0
    if max_cols <= 0 or display_width(value) + tail <= max_cols:
        return 0, len(value)
    cursor_end = len(value) if at_end else cursor_offset + 1
    begin = 0
    while begin < cursor_offset and display_width(value[begin:cursor_end]) + tail > max_cols:
        begin += 1
    end = cursor_end
    while end < len(value) and display_width(value[begin : end + 1]) <= max_cols:
        end += 1
    return begin, end


def render_cursor_overlay(
    value: str,
    state: EditorState,
    theme: UITheme = DEFAULT_THEME,
    max_cols: int | None = None,
) -> str:
    """Render ``value`` with the cursor span shown in inverse video.

    Characters with index in ``[cursor_offset - cursor_width, cursor_offset]``
    are inverted. An empty value renders one inverted blank, and a cursor at
    the end of a non-empty value appends one. With ``max_cols`` only the part
    of the value around the cursor that fits is rendered.
    """
    if not value:
        return f"{theme.reverse} {theme.reset}"

    begin, end = 0, len(value)
    if max_cols is not None:
        begin, end = visible_span(value, state.cursor_offset, max_cols)
    first = state.cursor_offset - state.cursor_width
    last = state.cursor_offset
    out: list[str] = []
    for index in range(begin, end):
        ch = value[index]
        if first <= index <= last:
            out.append(f"{theme.reverse}{ch}{theme.reset}")
        else:
            out.append(ch)
    if state.cursor_offset == len(value):
        out.append(f"{theme.reverse} {theme.reset}")
    return "".join(out)


class LineEditor:
    """Key-driven editor over a string value.

    ``on_change`` fires after every edit that changes the value and
    ``on_submit`` fires on Return with the current value. Neither clears the
    buffer; that is the caller's job via ``set_value``.
    """

    def __init__(
        self,
        value: str = "",
        on_change: Callable[[str], None] | None = None,
        on_submit: Callable[[str], None] | None = None,
        *,
        focus: bool = True,
    ) -> None:
        self.value = value
        self.on_change = on_change
        self.on_submit = on_submit
        self.focus = focus
        self.state = EditorState(cursor_offset=len(value))

    @property
    def cursor_offset(self) -> int:
        return self.state.cursor_offset

    def set_value(self, value: str, *, move_cursor_to_end: bool = False) -> None:
        """Overwrite the value from outside without firing ``on_change``."""
        if value == self.value and not move_cursor_to_end:
            return
        self.value = value
        if move_cursor_to_end:
            self.state = EditorState(cursor_offset=len(value))
        else:
            self.state = clamp_to_value(self.state, value)
            if self.state.cursor_width:
                self.state = replace(self.state, cursor_width=0)

    def _apply(self, value: str, state: EditorState) -> None:
        previous = self.value
        self.value = value
        self.state = state
        if value != previous and self.on_change is not None:
            self.on_change(value)

    def handle_key(self, event: KeyEvent) -> bool:
        """Apply one key event; return ``False`` for keys left to the caller."""
        if not self.focus:
            return False
        combo = event.combo
        if combo in PASSTHROUGH_COMBOS:
            return False

        if combo == "return":
            if self.on_submit is not None:
                self.on_submit(self.value)
            return True
        # Arrow and edit keys act the same with any modifier held.
        name = event.name
        if name == "left":
            self._apply(self.value, move_cursor(self.state, self.value, -1))
            return True
        if name == "right":
            self._apply(self.value, move_cursor(self.state, self.value, 1))
            return True
        if name == "home":
            self._apply(self.value, EditorState(cursor_offset=0))
            return True
        if name == "end":
            self._apply(self.value, EditorState(cursor_offset=len(self.value)))
            return True
        if name in {"backspace", "delete"}:
            self._apply(*delete_before_cursor(self.state, self.value))
            return True
        if event.is_text:
            self._apply(*insert_text(self.state, self.value, event.char))
            return True
        # Ctrl combos (including Ctrl+C) and anything else belong to the caller.
        return False

    def render(self, theme: UITheme = DEFAULT_THEME, max_cols: int | None = None) -> str:
        return render_cursor_overlay(self.value, self.state, theme, max_cols)


__all__ = [
    "EditorState",
    "LineEditor",
    "clamp_to_value",
    "delete_before_cursor",
    "insert_text",
    "move_cursor",
    "render_cursor_overlay",
    "visible_span",
]
