"""Input-layer public API for key decoding and dispatch.

Exports are split between low-level terminal reading (``KeyEventSource``),
the event model (``KeyEvent``) and the combo dispatch table used by widgets.
"""

from .key_registry import KeyComboBinding, KeyComboRegistry
from .keys import KeyDecoder, KeyEvent, ctrl_event, decode_text, named_event, text_event
from .reader import ESC_SEQUENCE_TIMEOUT_MS, KeyEventSource

__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "KeyDecoder",
    "KeyEvent",
    "KeyEventSource",
    "ctrl_event",
    "decode_text",
    "named_event",
    "text_event",
]
