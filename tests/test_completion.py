"""Tests for the text/search mode-switching prompt."""

from __future__ import annotations

import unittest
from dataclasses import replace

from slashline.ansi import display_width
from slashline.completion import CompletionInput, input_mode, item_buffer_value
from slashline.input import named_event, text_event
from slashline.quick_search import Item, QuickSearchConfig, WindowIndices
from slashline.ui_theme import PLAIN_THEME

BARE_THEME = replace(PLAIN_THEME, reverse="", reset="", search_match="")

COMMANDS = [
    Item("save", "save the file"),
    Item("send", "send it"),
    Item("exit", "exit"),
]


def _type(prompt: CompletionInput, text: str) -> None:
    for ch in text:
        prompt.handle_key(text_event(ch))


class InputModeTests(unittest.TestCase):
    def test_mode_follows_leading_trigger(self) -> None:
        self.assertEqual(input_mode("/save"), "search")
        self.assertEqual(input_mode("/"), "search")
        self.assertEqual(input_mode("a/b"), "text")
        self.assertEqual(input_mode(""), "text")
        self.assertEqual(input_mode("!run", "!"), "search")
        self.assertEqual(input_mode("/run", "!"), "text")

    def test_item_buffer_value(self) -> None:
        self.assertEqual(item_buffer_value(Item("a", "b")), "b")
        self.assertEqual(item_buffer_value(Item("n", 42)), "42")
        self.assertEqual(item_buffer_value(Item("empty")), "")


class CompletionInputTests(unittest.TestCase):
    def setUp(self) -> None:
        self.submitted: list[str] = []
        self.prompt = CompletionInput(COMMANDS, self.submitted.append, theme=BARE_THEME)

    def test_trigger_switches_to_search_and_pick_fills_buffer(self) -> None:
        _type(self.prompt, "/")
        self.assertEqual(self.prompt.mode, "search")

        _type(self.prompt, "s")
        self.prompt.handle_key(named_event("down"))
        self.prompt.handle_key(named_event("return"))

        self.assertEqual(self.prompt.mode, "text")
        self.assertEqual(self.prompt.value, "send it")
        self.assertEqual(self.prompt.editor.cursor_offset, len("send it"))
        self.assertEqual(self.submitted, [])

    def test_leaving_search_mode_resets_query_and_selection(self) -> None:
        _type(self.prompt, "/e")
        self.prompt.handle_key(named_event("down"))
        self.prompt.handle_key(named_event("return"))

        self.assertEqual(self.prompt.search.query, "")
        self.assertEqual(self.prompt.search.window, WindowIndices())

    def test_escape_in_search_mode_clears_buffer(self) -> None:
        _type(self.prompt, "/sa")
        self.assertTrue(self.prompt.handle_key(named_event("escape")))
        self.assertEqual((self.prompt.mode, self.prompt.value), ("text", ""))

    def test_text_mode_submits_buffer(self) -> None:
        _type(self.prompt, "hi")
        self.prompt.handle_key(named_event("return"))
        self.assertEqual(self.submitted, ["hi"])
        self.assertEqual(self.prompt.value, "hi")

    def test_text_mode_leaves_navigation_to_caller(self) -> None:
        self.assertFalse(self.prompt.handle_key(named_event("up")))

    def test_command_handler_can_intercept_selection(self) -> None:
        picked: list[Item] = []

        def on_command(item: Item, set_value) -> bool:
            picked.append(item)
            set_value("")
            return item.label == "exit"

        prompt = CompletionInput(COMMANDS, self.submitted.append, on_command, theme=BARE_THEME)
        _type(prompt, "/exi")
        prompt.handle_key(named_event("return"))
        self.assertEqual((prompt.value, prompt.mode), ("", "text"))

        _type(prompt, "/sa")
        prompt.handle_key(named_event("return"))
        self.assertEqual(prompt.value, "save the file")
        self.assertEqual(prompt.editor.cursor_offset, len("save the file"))
        self.assertEqual([item.label for item in picked], ["exit", "save"])

    def test_selected_value_starting_with_trigger_stays_in_search(self) -> None:
        prompt = CompletionInput([Item("nested", "/ne")], self.submitted.append, theme=BARE_THEME)
        _type(prompt, "/")
        prompt.handle_key(named_event("return"))
        self.assertEqual((prompt.value, prompt.mode), ("/ne", "search"))

    def test_custom_trigger(self) -> None:
        prompt = CompletionInput(COMMANDS, self.submitted.append, trigger="!", theme=BARE_THEME)
        _type(prompt, "/")
        self.assertEqual(prompt.mode, "text")
        prompt.set_value("")
        _type(prompt, "!")
        self.assertEqual(prompt.mode, "search")

    def test_set_commands_with_equal_items_keeps_query(self) -> None:
        _type(self.prompt, "/s")
        self.prompt.set_commands([Item("save", "save the file"), Item("send", "send it"), Item("exit", "exit")])
        self.assertEqual(self.prompt.search.query, "s")

    def test_search_config_is_applied(self) -> None:
        prompt = CompletionInput(
            COMMANDS,
            self.submitted.append,
            config=QuickSearchConfig(limit=1),
            theme=BARE_THEME,
        )
        _type(prompt, "/")
        lines = prompt.render()
        self.assertEqual(lines[1:], ["> save", "Viewing 0-1 of 3 matching items (3 items overall)"])

    def test_render_per_mode(self) -> None:
        _type(self.prompt, "ab")
        self.assertEqual(self.prompt.render(), ["> ab "])
        self.prompt.set_value("/")
        self.assertEqual(self.prompt.render(), [": type to filter commands", "> save", "  send", "  exit"])

    def test_long_buffer_scrolls_to_show_cursor_end(self) -> None:
        self.prompt.handle_key(text_event("x" * 30 + "TAIL"))
        (line,) = self.prompt.render(width=20)
        self.assertEqual(line, "> " + "x" * 13 + "TAIL ")

        self.prompt.handle_key(named_event("home"))
        (line,) = self.prompt.render(width=20)
        self.assertEqual(line, "> " + "x" * 18)

    def test_alt_combo_in_search_mode_keeps_search_open(self) -> None:
        _type(self.prompt, "/s")
        self.assertFalse(self.prompt.handle_key(named_event("b", alt=True, sequence="\x1bb")))
        self.assertEqual((self.prompt.mode, self.prompt.value, self.prompt.search.query), ("search", "/", "s"))

    def test_render_clips_to_width(self) -> None:
        _type(self.prompt, "x" * 50)
        (line,) = self.prompt.render(width=10)
        self.assertEqual(display_width(line), 10)


if __name__ == "__main__":
    unittest.main()
