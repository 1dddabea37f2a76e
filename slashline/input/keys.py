"""Key event model and incremental terminal byte decoding.

Raw stdin bytes become ``KeyEvent`` values: printable text (``name is None``),
named keys such as ``up`` or ``return``, ctrl-letter combos and Alt combos. Escape
sequences that do not map to a named key keep their raw ``sequence`` so the
event source can recognize and drop them.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass

from ..ansi import is_escape_sequence

ESC = "\x1b"

_CSI_FINAL_NAMES = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
}
_CSI_TILDE_NAMES = {
    "1": "home",
    "3": "delete",
    "4": "end",
    "5": "pageup",
    "6": "pagedown",
    "7": "home",
    "8": "end",
}
_SS3_NAMES = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
}


@dataclass(frozen=True)
class KeyEvent:
    """One normalized keypress.

    ``char`` holds the inserted text for printable input (possibly several
    characters when a paste arrives in one read) and the raw control character
    for ctrl combos. ``sequence`` is always the raw text the terminal sent.
    """

    char: str = ""
    name: str | None = None
    shift: bool = False
    ctrl: bool = False
    alt: bool = False
    sequence: str = ""

    @property
    def combo(self) -> str | None:
        """Dispatch token such as ``"up"``, ``"shift+tab"`` or ``"ctrl+u"``."""
        if self.name is None:
            return None
        prefix = ""
        if self.ctrl:
            prefix += "ctrl+"
        if self.alt:
            prefix += "alt+"
        if self.shift:
            prefix += "shift+"
        return prefix + self.name

    @property
    def is_text(self) -> bool:
        return self.name is None and bool(self.char) and self.char.isprintable()

    @property
    def is_unrecognized_sequence(self) -> bool:
        if self.name is not None or self.char:
            return False
        # Truncated sequences (flushed on timeout) fail the regex but are still escapes.
        return is_escape_sequence(self.sequence) or self.sequence.startswith(ESC)


def text_event(text: str) -> KeyEvent:
    """Build the event a terminal produces when ``text`` is typed or pasted."""
    return KeyEvent(char=text, shift=len(text) == 1 and text.isupper(), sequence=text)


def named_event(
    name: str,
    *,
    shift: bool = False,
    ctrl: bool = False,
    alt: bool = False,
    sequence: str = "",
) -> KeyEvent:
    return KeyEvent(char="", name=name, shift=shift, ctrl=ctrl, alt=alt, sequence=sequence)


def ctrl_event(letter: str) -> KeyEvent:
    """Build the event for Ctrl+``letter`` (``letter`` in ``a``-``z``)."""
    raw = chr(ord(letter.lower()) - 0x60)
    return KeyEvent(char=raw, name=letter.lower(), ctrl=True, sequence=raw)


def _modifiers(params: str) -> tuple[bool, bool, bool]:
    """Return ``(shift, ctrl, alt)`` from CSI parameters like ``1;5``."""
    parts = params.split(";")
    if len(parts) < 2:
        return False, False, False
    try:
        mask = int(parts[1]) - 1
    except ValueError:
        return False, False, False
    return bool(mask & 1), bool(mask & 4), bool(mask & 2)


def _csi_event(sequence: str) -> KeyEvent:
    params = sequence[2:-1]
    final = sequence[-1]
    shift, ctrl, alt = _modifiers(params)
    if final == "Z" and not params:
        return named_event("tab", shift=True, sequence=sequence)
    if final in _CSI_FINAL_NAMES and not params.startswith(("<", "?")):
        return named_event(_CSI_FINAL_NAMES[final], shift=shift, ctrl=ctrl, alt=alt, sequence=sequence)
    if final == "~":
        name = _CSI_TILDE_NAMES.get(params.split(";")[0])
        if name is not None:
            return named_event(name, shift=shift, ctrl=ctrl, alt=alt, sequence=sequence)
    return KeyEvent(sequence=sequence)


def _alt_event(ch: str) -> KeyEvent:
    name = "space" if ch == " " else ch.lower()
    return named_event(name, shift=ch.isupper(), alt=True, sequence=ESC + ch)


def _control_event(ch: str) -> KeyEvent:
    if ch in {"\r", "\n"}:
        return named_event("return", sequence=ch)
    if ch == "\t":
        return named_event("tab", sequence=ch)
    if ch in {"\x7f", "\x08"}:
        return named_event("backspace", sequence=ch)
    code = ord(ch)
    if 0x01 <= code <= 0x1A:
        return KeyEvent(char=ch, name=chr(code + 0x60), ctrl=True, sequence=ch)
    if code == 0x00:
        return KeyEvent(char=ch, name="space", ctrl=True, sequence=ch)
    return KeyEvent(char=ch, name=chr(code + 0x40), ctrl=True, sequence=ch)


def decode_text(text: str, final: bool = False) -> tuple[list[KeyEvent], str]:
    """Decode as many events as possible from ``text``.

    Returns ``(events, rest)`` where ``rest`` is an incomplete escape sequence
    kept for the next chunk. With ``final=True`` nothing is kept: a dangling
    ESC becomes ``escape`` and a truncated sequence becomes an unrecognized
    event.
    """
    events: list[KeyEvent] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == ESC:
            if i + 1 >= n:
                if not final:
                    return events, text[i:]
                events.append(named_event("escape", sequence=ESC))
                i += 1
                continue
            nxt = text[i + 1]
            if nxt == "[":
                j = i + 2
                while j < n and "\x30" <= text[j] <= "\x3f":
                    j += 1
                while j < n and "\x20" <= text[j] <= "\x2f":
                    j += 1
                if j >= n:
                    if not final:
                        return events, text[i:]
                    events.append(KeyEvent(sequence=text[i:]))
                    return events, ""
                sequence = text[i : j + 1]
                events.append(_csi_event(sequence))
                i = j + 1
                continue
            if nxt == "O":
                if i + 2 >= n:
                    if not final:
                        return events, text[i:]
                    events.append(KeyEvent(sequence=text[i:]))
                    return events, ""
                sequence = text[i : i + 3]
                name = _SS3_NAMES.get(sequence[2])
                events.append(named_event(name, sequence=sequence) if name else KeyEvent(sequence=sequence))
                i += 3
                continue
            if nxt.isprintable():
                # Terminals send Alt+key as ESC + key.
                events.append(_alt_event(nxt))
                i += 2
                continue
            # ESC before a control byte: keep the byte as its own key.
            events.append(named_event("escape", sequence=ESC))
            i += 1
            continue
        if ch.isprintable():
            j = i + 1
            while j < n and text[j].isprintable():
                j += 1
            events.append(text_event(text[i:j]))
            i = j
            continue
        if ord(ch) < 0x20 or ch == "\x7f":
            events.append(_control_event(ch))
        else:
            events.append(KeyEvent(sequence=ch))
        i += 1
    return events, ""


class KeyDecoder:
    """Incremental bytes-to-events decoder that tolerates split reads."""

    def __init__(self) -> None:
        self._utf8 = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending = ""

    @property
    def has_pending(self) -> bool:
        """Whether an escape sequence is waiting for more bytes."""
        return bool(self._pending)

    def feed(self, data: bytes) -> list[KeyEvent]:
        events, self._pending = decode_text(self._pending + self._utf8.decode(data))
        return events

    def flush(self) -> list[KeyEvent]:
        text = self._pending + self._utf8.decode(b"", final=True)
        self._pending = ""
        events, _rest = decode_text(text, final=True)
        return events


__all__ = [
    "KeyDecoder",
    "KeyEvent",
    "ctrl_event",
    "decode_text",
    "named_event",
    "text_event",
]
