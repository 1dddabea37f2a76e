"""Incremental substring quick-search over a fixed item list.

The engine owns a query and a scrollable selection window over the filtered
items. Matching and window arithmetic are plain functions so they can be
tested without a terminal; ``QuickSearchEngine`` applies them to key events.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .input import KeyComboBinding, KeyComboRegistry, KeyEvent
from .ui_theme import DEFAULT_THEME, UITheme

CLEAR_QUERY_CHARS = frozenset({"\x15", "\x17"})  # Ctrl+U, Ctrl+W
QUERY_PREFIX = ": "
QUERY_PLACEHOLDER = "type to filter commands"
NO_MATCHES_MESSAGE = "No matches"


@dataclass(frozen=True)
class Item:
    label: str
    value: str | int | None = None


EMPTY_ITEM = Item(label="")


@dataclass(frozen=True)
class WindowIndices:
    """Selected row and first visible row, both indexes into filtered items."""

    selection: int = 0
    start: int = 0


@dataclass(frozen=True)
class QuickSearchConfig:
    """Fixed per-instance quick-search behavior.

    ``limit`` of 0 shows every match. With ``force_matching_query`` a keystroke
    that would leave no matches is rejected.
    """

    case_sensitive: bool = False
    limit: int = 0
    force_matching_query: bool = True
    clear_query_chars: frozenset[str] = CLEAR_QUERY_CHARS


def match_index(label: str, query: str, case_sensitive: bool = False) -> int:
    """Return first index of ``query`` inside ``label`` or ``-1``."""
    if case_sensitive:
        return label.find(query)
    return label.lower().find(query.lower())


def filter_items(items: Iterable[Item], query: str, case_sensitive: bool = False) -> list[Item]:
    """Return items whose label contains ``query``, in original order."""
    if query == "":
        return list(items)
    return [item for item in items if match_index(item.label, query, case_sensitive) >= 0]


def uses_limited_view(match_count: int, limit: int) -> bool:
    return limit != 0 and match_count > limit


def select_up(indices: WindowIndices, match_count: int, limit: int) -> WindowIndices:
    """Move selection up one row, wrapping from the top to the last match.

    In a limited view the window follows the selection: wrapping shows the
    last ``limit`` rows, and stepping up near the window top scrolls by one.
    """
    if match_count <= 0:
        return indices
    selection, start = indices.selection, indices.start
    limited = uses_limited_view(match_count, limit)
    if selection == 0:
        selection = match_count - 1
        if limited:
            start = match_count - limit
    else:
        selection -= 1
        if limited and indices.selection - start <= 1 and start > 0:
            start -= 1
    return WindowIndices(selection=selection, start=start)


def select_down(indices: WindowIndices, match_count: int, limit: int) -> WindowIndices:
    """Move selection down one row, wrapping from the last match to the top."""
    if match_count <= 0:
        return indices
    selection, start = indices.selection, indices.start
    if selection >= match_count - 1:
        return WindowIndices(selection=0, start=0)
    selection += 1
    if uses_limited_view(match_count, limit) and selection - start >= limit - 1:
        start += 1
    return WindowIndices(selection=selection, start=start)


def visible_bounds(start: int, item_count: int, limit: int) -> tuple[int, int]:
    """Return ``(begin, end)`` slice bounds of the rendered window.

    ``item_count`` is the size of the unfiltered list; slicing the filtered
    list with these bounds naturally stops at its own end.
    """
    begin = start
    end = item_count
    if limit != 0:
        end = min(begin + limit, item_count)
    return begin, end


def split_highlight(label: str, query: str, case_sensitive: bool = False) -> tuple[str, str, str]:
    """Split ``label`` into ``(pre_match, match, post_match)`` around ``query``."""
    index = match_index(label, query, case_sensitive)
    if index < 0:
        return label, "", ""
    end = index + len(query)
    return label[:index], label[index:end], label[end:]


class QuickSearchEngine:
    """Stateful quick-search widget driven by key events.

    ``on_select`` receives the chosen ``Item`` on Return (``EMPTY_ITEM`` when no
    item matches). State is settled before the callback runs, so a failing
    callback cannot leave the query or window half-updated.
    """

    def __init__(
        self,
        items: Iterable[Item],
        on_select: Callable[[Item], None] | None = None,
        *,
        focus: bool = True,
        config: QuickSearchConfig | None = None,
    ) -> None:
        self.items: list[Item] = list(items)
        self.on_select = on_select
        self.focus = focus
        self.config = config if config is not None else QuickSearchConfig()
        self.query = ""
        self.window = WindowIndices()
        self._filtered: list[Item] = list(self.items)
        self._bindings = KeyComboRegistry().register_bindings(
            KeyComboBinding(("return",), self._select_current),
            KeyComboBinding(("backspace",), self._remove_char),
            KeyComboBinding(("up", "shift+tab"), self.select_up),
            KeyComboBinding(("down", "tab"), self.select_down),
        )

    @property
    def filtered_items(self) -> list[Item]:
        return list(self._filtered)

    @property
    def limited_view(self) -> bool:
        return uses_limited_view(len(self._filtered), self.config.limit)

    def _filter(self, query: str) -> list[Item]:
        return filter_items(self.items, query, self.config.case_sensitive)

    def _set_query(self, query: str) -> None:
        self.query = query
        self._filtered = self._filter(query)

    def reset(self) -> None:
        """Return to the empty query with the first row selected."""
        self._set_query("")
        self.window = WindowIndices()

    def set_items(self, items: Iterable[Item]) -> bool:
        """Replace the item list; reset state only if the contents differ.

        Returns whether a reset happened. A fresh list with equal items keeps
        the current query and selection.
        """
        new_items = list(items)
        if new_items == self.items:
            return False
        self.items = new_items
        self.reset()
        return True

    def current_item(self) -> Item:
        if 0 <= self.window.selection < len(self._filtered):
            return self._filtered[self.window.selection]
        return EMPTY_ITEM

    def add_text(self, text: str) -> bool:
        """Append ``text`` to the query unless that would leave no matches.

        Returns whether the query changed.
        """
        candidate = self.query + text
        matching = self._filter(candidate)
        if not matching and self.config.force_matching_query:
            return False
        self.query = candidate
        self._filtered = matching
        self.window = WindowIndices()
        return True

    def clear_query(self) -> None:
        self._set_query("")

    def _remove_char(self) -> bool:
        if self.query:
            self._set_query(self.query[:-1])
        return True

    def select_up(self) -> bool:
        self.window = select_up(self.window, len(self._filtered), self.config.limit)
        return True

    def select_down(self) -> bool:
        self.window = select_down(self.window, len(self._filtered), self.config.limit)
        return True

    def _select_current(self) -> bool:
        item = self.current_item()
        if self.on_select is not None:
            self.on_select(item)
        return True

    def handle_key(self, event: KeyEvent) -> bool:
        """Apply one key event; return whether the engine consumed it."""
        if not self.focus:
            return False
        if event.char and event.char in self.config.clear_query_chars:
            self.clear_query()
            return True
        if event.is_text:
            self.add_text(event.char)
            return True
        handled = self._bindings.dispatch(event)
        if handled is not None:
            return bool(handled)
        # Unbound named keys and raw escape sequences are ignored.
        return False

    def visible_items(self) -> list[Item]:
        begin, end = visible_bounds(self.window.start, len(self.items), self.config.limit)
        return self._filtered[begin:end]

    def footer(self) -> str:
        """Window summary shown only while the match list exceeds the limit."""
        if not self.limited_view:
            return ""
        begin, end = visible_bounds(self.window.start, len(self.items), self.config.limit)
        return (
            f"Viewing {begin}-{end} of {len(self._filtered)} matching items "
            f"({len(self.items)} items overall)"
        )

    def render(self, theme: UITheme = DEFAULT_THEME, prefix: str = QUERY_PREFIX) -> list[str]:
        """Render header, visible rows and optional footer as text lines."""
        if self.query:
            header = f"{theme.search_prompt}{prefix}{theme.reset}{theme.search_query}{self.query}{theme.reset}"
        else:
            header = f"{theme.search_prompt}{prefix}{theme.reset}{theme.search_hint}{QUERY_PLACEHOLDER}{theme.reset}"
        lines = [header]

        visible = self.visible_items()
        if not visible:
            lines.append(f"{theme.search_hint}{NO_MATCHES_MESSAGE}{theme.reset}")
        for offset, item in enumerate(visible):
            selected = self.window.start + offset == self.window.selection
            lines.append(self._render_row(item, selected, theme))

        footer = self.footer()
        if footer:
            lines.append(f"{theme.search_footer}{footer}{theme.reset}")
        return lines

    def _render_row(self, item: Item, selected: bool, theme: UITheme) -> str:
        pre, match, post = split_highlight(item.label, self.query, self.config.case_sensitive)
        indicator = f"{theme.search_indicator}>{theme.reset} " if selected else "  "
        row_style = theme.search_selected if selected else ""
        highlighted = f"{theme.search_match}{match}{theme.reset}{row_style}" if match else ""
        return f"{indicator}{row_style}{pre}{highlighted}{post}{theme.reset if row_style else ''}"


__all__ = [
    "CLEAR_QUERY_CHARS",
    "EMPTY_ITEM",
    "Item",
    "QuickSearchConfig",
    "QuickSearchEngine",
    "WindowIndices",
    "filter_items",
    "match_index",
    "select_down",
    "select_up",
    "split_highlight",
    "uses_limited_view",
    "visible_bounds",
]
