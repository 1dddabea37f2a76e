"""Prompt input that switches between free text and command quick-search.

While the buffer starts with the trigger character, keys go to a
``QuickSearchEngine`` over the command list; otherwise they go to a
``LineEditor``. Picking a command either fills the buffer with the command's
value or is intercepted by ``on_command``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from .ansi import clip_ansi_line, display_width
from .editor import LineEditor
from .input import KeyEvent
from .quick_search import Item, QuickSearchConfig, QuickSearchEngine
from .ui_theme import DEFAULT_THEME, UITheme

logger = logging.getLogger(__name__)

DEFAULT_TRIGGER = "/"
TEXT_PROMPT = "> "
SEARCH_PROMPT = ": "

CommandHandler = Callable[[Item, Callable[[str], None]], bool]


def input_mode(buffer: str, trigger: str = DEFAULT_TRIGGER) -> str:
    """Return ``"search"`` when ``buffer`` starts with ``trigger``, else ``"text"``."""
    if trigger and buffer.startswith(trigger):
        return "search"
    return "text"


def item_buffer_value(item: Item) -> str:
    """Text a picked item puts back into the buffer."""
    if item.value is None:
        return ""
    return str(item.value)


class CompletionInput:
    """Mode-switching prompt widget.

    ``on_submit`` receives free-text submissions. ``on_command`` gets the picked
    item and a ``set_value`` callable; returning ``True`` means the command was
    handled and the buffer is left as the handler set it.
    """

    def __init__(
        self,
        commands: Iterable[Item],
        on_submit: Callable[[str], None],
        on_command: CommandHandler | None = None,
        *,
        trigger: str = DEFAULT_TRIGGER,
        config: QuickSearchConfig | None = None,
        theme: UITheme = DEFAULT_THEME,
    ) -> None:
        self.on_submit = on_submit
        self.on_command = on_command
        self.trigger = trigger
        self.theme = theme
        self.editor = LineEditor("", on_change=self._on_buffer_change, on_submit=self._submit)
        self.search = QuickSearchEngine(commands, self._select, config=config)
        self._mode = "text"

    @property
    def value(self) -> str:
        return self.editor.value

    @property
    def mode(self) -> str:
        return self._mode

    def set_commands(self, commands: Iterable[Item]) -> None:
        self.search.set_items(commands)

    def set_value(self, value: str) -> None:
        """Replace the buffer from outside, e.g. to clear it after submit."""
        self.editor.set_value(value, move_cursor_to_end=input_mode(value, self.trigger) != self._mode)
        self._sync_mode()

    def _on_buffer_change(self, _value: str) -> None:
        self._sync_mode()

    def _sync_mode(self) -> None:
        mode = input_mode(self.editor.value, self.trigger)
        if mode == self._mode:
            return
        logger.debug("input mode %s -> %s", self._mode, mode)
        self._mode = mode
        if mode == "text":
            self.search.reset()

    def _submit(self, value: str) -> None:
        self.on_submit(value)

    def _select(self, item: Item) -> None:
        if self.on_command is not None and self.on_command(item, self.set_value):
            return
        self.editor.set_value(item_buffer_value(item), move_cursor_to_end=True)
        self._sync_mode()

    def handle_key(self, event: KeyEvent) -> bool:
        """Route one key to the active widget; ``False`` means unhandled."""
        if self._mode == "search":
            if event.combo == "escape":
                self.set_value("")
                return True
            return self.search.handle_key(event)
        return self.editor.handle_key(event)

    def render(self, width: int | None = None) -> list[str]:
        """Render the prompt as text lines, optionally fitted to ``width``.

        In text mode the buffer scrolls horizontally to keep the cursor visible.
        """
        theme = self.theme
        if self._mode == "search":
            lines = self.search.render(theme, prefix=SEARCH_PROMPT)
        else:
            max_cols = None if width is None else max(1, width - display_width(TEXT_PROMPT))
            lines = [f"{theme.prompt}{TEXT_PROMPT}{theme.reset}{self.editor.render(theme, max_cols)}"]
        if width is None:
            return lines
        return [clip_ansi_line(line, width) for line in lines]


__all__ = [
    "CommandHandler",
    "CompletionInput",
    "DEFAULT_TRIGGER",
    "SEARCH_PROMPT",
    "TEXT_PROMPT",
    "input_mode",
    "item_buffer_value",
]
