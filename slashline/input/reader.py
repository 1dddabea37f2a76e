"""Low-level terminal input reading.

Reads raw bytes from stdin, decodes them into ``KeyEvent`` values, and drops
escape sequences that do not correspond to a named key. Events come out in
arrival order.
"""

from __future__ import annotations

import contextlib
import logging
import os
import select
from collections import deque
from typing import TYPE_CHECKING

from .keys import KeyDecoder, KeyEvent

if TYPE_CHECKING:
    from ..terminal import TerminalController

logger = logging.getLogger(__name__)

ESC_SEQUENCE_TIMEOUT_MS = 25
READ_CHUNK_BYTES = 4096


class KeyEventSource:
    """Normalized key events from a terminal file descriptor.

    ``focused()`` holds raw mode for as long as the consumer is reading keys.
    """

    def __init__(self, stdin_fd: int, terminal: TerminalController | None = None) -> None:
        self.stdin_fd = stdin_fd
        self.terminal = terminal
        self.at_eof = False
        self._decoder = KeyDecoder()
        self._events: deque[KeyEvent] = deque()
        self._focused = False

    @contextlib.contextmanager
    def focused(self):
        """Hold raw terminal mode while the block runs; re-entry is a no-op."""
        if self._focused or self.terminal is None:
            yield self
            return
        self._focused = True
        try:
            with self.terminal.raw_mode():
                yield self
        finally:
            self._focused = False

    def _enqueue(self, events: list[KeyEvent]) -> None:
        for event in events:
            if event.is_unrecognized_sequence:
                logger.debug("dropping unrecognized sequence %r", event.sequence)
                continue
            self._events.append(event)

    def _read_chunk(self, timeout_ms: int | None) -> bytes | None:
        if timeout_ms is not None:
            ready, _, _ = select.select([self.stdin_fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return None
        data = os.read(self.stdin_fd, READ_CHUNK_BYTES)
        if not data:
            self.at_eof = True
            return None
        return data

    def read_event(self, timeout_ms: int | None = None) -> KeyEvent | None:
        """Return the next key event, or ``None`` on timeout or end of input."""
        while not self._events:
            if self.at_eof:
                return None
            data = self._read_chunk(timeout_ms)
            if data is None:
                if self.at_eof:
                    self._enqueue(self._decoder.flush())
                    break
                return None
            self._enqueue(self._decoder.feed(data))
            # An ESC at the end of a chunk may start a sequence; wait briefly.
            while self._decoder.has_pending:
                more = self._read_chunk(ESC_SEQUENCE_TIMEOUT_MS)
                if more is None:
                    self._enqueue(self._decoder.flush())
                    break
                self._enqueue(self._decoder.feed(more))
        if not self._events:
            return None
        return self._events.popleft()
