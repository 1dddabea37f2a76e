"""Terminal control helpers for the interactive prompt.

Owns the raw-mode lifecycle and native-cursor visibility. The prompt stays on
the main screen (no alternate buffer) so submitted lines remain in scrollback.
"""

from __future__ import annotations

import contextlib
import logging
import os
import termios
import tty
from collections.abc import Callable

logger = logging.getLogger(__name__)

HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"


def _log_warning(message: str) -> None:
    logger.warning(message)


class TerminalController:
    """Manage raw-mode transitions for one stdin/stdout pair.

    Enabling and disabling are idempotent, so nested or repeated teardown paths
    (normal exit, exceptions, a command calling ``sys.exit``) restore the saved
    tty attributes exactly once.
    """

    def __init__(
        self,
        stdin_fd: int,
        stdout_fd: int,
        on_warning: Callable[[str], None] | None = None,
    ) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._raw_enabled = False
        self._on_warning = on_warning if on_warning is not None else _log_warning

    @property
    def raw_enabled(self) -> bool:
        return self._raw_enabled

    def enable_raw_mode(self) -> None:
        """Switch stdin to raw mode and hide the native cursor."""
        if self._raw_enabled:
            return
        tty.setraw(self.stdin_fd, termios.TCSANOW)
        self._raw_enabled = True
        # The widgets draw their own cursor overlay.
        os.write(self.stdout_fd, HIDE_CURSOR)

    def disable_raw_mode(self) -> None:
        """Restore saved tty attributes; failures become warnings."""
        if not self._raw_enabled:
            return
        self._raw_enabled = False
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        except (termios.error, OSError) as exc:
            self._on_warning(f"could not restore terminal mode: {exc}")
        try:
            os.write(self.stdout_fd, SHOW_CURSOR)
        except OSError as exc:
            self._on_warning(f"could not restore cursor visibility: {exc}")

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with raw-mode enter/exit calls."""
        try:
            self.enable_raw_mode()
            yield
        finally:
            self.disable_raw_mode()
