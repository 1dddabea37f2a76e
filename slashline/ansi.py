"""ANSI-aware text measurement and clipping utilities.

Widgets render styled strings; these helpers keep prompt rows aligned with the
terminal width when color codes and wide characters are present.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]")
SS3_ESCAPE_RE = re.compile(r"\x1bO.")
TAB_STOP = 8


def is_escape_sequence(text: str) -> bool:
    """Return whether ``text`` starts with a CSI or SS3 escape sequence."""
    if not text or text[0] != "\x1b":
        return False
    return bool(ANSI_ESCAPE_RE.match(text) or SS3_ESCAPE_RE.match(text))


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return rendered column count of ``text`` ignoring escape sequences."""
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    Escape sequences are copied through untouched and do not count toward the
    width. A reset is appended when clipping cut the line inside styled text so
    the next row does not inherit the style.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    styled = False
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                styled = match.group(0) != "\x1b[0m"
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > max_cols:
            if styled:
                out.append("\x1b[0m")
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1

    return "".join(out)
