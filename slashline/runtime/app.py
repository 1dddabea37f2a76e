"""Runtime composition layer for the demo REPL.

Builds the prompt widget, wires it to the terminal and the event loop, and
keeps the small amount of application state (transcript output, info line).
Submitted text is echoed; no chat backend is involved.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable

from ..completion import DEFAULT_TRIGGER, CompletionInput
from ..input import KeyEvent, KeyEventSource
from ..quick_search import Item, QuickSearchConfig
from ..terminal import TerminalController
from ..ui_theme import DEFAULT_THEME, UITheme
from .loop import RuntimeLoopCallbacks, run_input_loop
from .screen import InlineScreen

logger = logging.getLogger(__name__)

DEFAULT_COMMANDS: tuple[Item, ...] = (
    Item(label="example", value="Hi there! How are you doing?"),
    Item(label="intuition", value="Help me build my intuition about "),
    Item(label="help", value="help"),
    Item(label="exit", value="exit"),
)
QUIT_COMBOS = frozenset({"ctrl+c", "ctrl+d"})


class ReplApp:
    """Echo REPL around a ``CompletionInput``.

    ``help`` and ``exit`` are intercepted commands; every other command fills
    the prompt buffer with its value.
    """

    def __init__(
        self,
        commands: Iterable[Item] | None = None,
        *,
        trigger: str = DEFAULT_TRIGGER,
        config: QuickSearchConfig | None = None,
        theme: UITheme = DEFAULT_THEME,
    ) -> None:
        self.theme = theme
        self.running = True
        self.info = ""
        self._output: list[str] = []
        self.commands = list(commands) if commands is not None else list(DEFAULT_COMMANDS)
        self.prompt = CompletionInput(
            self.commands,
            self.submit,
            self.run_command,
            trigger=trigger,
            config=config,
            theme=theme,
        )

    def stop(self) -> None:
        self.running = False

    def submit(self, text: str) -> None:
        """Echo ``text`` into the transcript and clear the prompt."""
        self._output.append(f"{self.theme.transcript_user}$ {self.theme.reset}{text}")
        self._output.append("")
        self.info = ""
        self.prompt.set_value("")

    def run_command(self, item: Item, set_value: Callable[[str], None]) -> bool:
        """Handle side-effecting commands; ``False`` lets the value fill the buffer."""
        if item.value == "exit":
            logger.debug("exit command selected")
            set_value("")
            self.stop()
            return True
        if item.value == "help":
            trigger = self.prompt.trigger
            labels = ", ".join(f"{trigger}{command.label}" for command in self.commands)
            self.info = f"Commands: {labels}"
            set_value("")
            return True
        return False

    def handle_unhandled_key(self, event: KeyEvent) -> None:
        if event.combo in QUIT_COMBOS:
            self.stop()

    def take_output(self) -> list[str]:
        output, self._output = self._output, []
        return output

    def render(self, width: int) -> list[str]:
        lines: list[str] = []
        if self.info:
            lines.append(f"{self.theme.info}{self.info}{self.theme.reset}")
        lines.extend(self.prompt.render(width))
        return lines

    def loop_callbacks(self) -> RuntimeLoopCallbacks:
        return RuntimeLoopCallbacks(
            handle_key=self.prompt.handle_key,
            handle_unhandled_key=self.handle_unhandled_key,
            render=self.render,
            is_running=lambda: self.running,
            take_output=self.take_output,
        )


def run_repl(app: ReplApp, stdin_fd: int, stdout_fd: int) -> None:
    """Run ``app`` on a real terminal until it stops or input ends."""
    if not os.isatty(stdin_fd):
        raise SystemExit("slashline needs an interactive terminal on stdin.")

    def write(text: str) -> None:
        os.write(stdout_fd, text.encode("utf-8", errors="replace"))

    terminal = TerminalController(stdin_fd, stdout_fd)
    source = KeyEventSource(stdin_fd, terminal)
    run_input_loop(source, InlineScreen(write), app.loop_callbacks())
