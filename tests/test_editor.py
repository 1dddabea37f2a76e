"""Tests for the single-line editor and its cursor overlay."""

from __future__ import annotations

import unittest
from dataclasses import replace

from slashline.editor import (
    EditorState,
    LineEditor,
    clamp_to_value,
    delete_before_cursor,
    insert_text,
    move_cursor,
    render_cursor_overlay,
    visible_span,
)
from slashline.input import ctrl_event, named_event, text_event
from slashline.ui_theme import PLAIN_THEME

BRACKET_THEME = replace(PLAIN_THEME, reverse="[", reset="]")


class EditorOperationTests(unittest.TestCase):
    def test_insert_then_delete_restores_value(self) -> None:
        for value in ("", "abc", "hello world"):
            for offset in range(len(value) + 1):
                state = EditorState(cursor_offset=offset)
                inserted, after_insert = insert_text(state, value, "x")
                restored, after_delete = delete_before_cursor(after_insert, inserted)
                self.assertEqual(restored, value)
                self.assertEqual(after_delete.cursor_offset, offset)

    def test_multi_char_insert_records_width(self) -> None:
        value, state = insert_text(EditorState(cursor_offset=1), "ad", "bc")
        self.assertEqual(value, "abcd")
        self.assertEqual(state, EditorState(cursor_offset=3, cursor_width=2))

    def test_single_char_insert_has_zero_width(self) -> None:
        _value, state = insert_text(EditorState(), "", "a")
        self.assertEqual(state, EditorState(cursor_offset=1, cursor_width=0))

    def test_move_cursor_is_clamped_and_clears_width(self) -> None:
        state = EditorState(cursor_offset=3, cursor_width=3)
        self.assertEqual(move_cursor(state, "abc", 1), EditorState(cursor_offset=3))
        self.assertEqual(move_cursor(state, "abc", -5), EditorState(cursor_offset=0))

    def test_delete_at_start_changes_nothing(self) -> None:
        value, state = delete_before_cursor(EditorState(cursor_offset=0), "abc")
        self.assertEqual((value, state.cursor_offset), ("abc", 0))

    def test_clamp_after_external_overwrite(self) -> None:
        self.assertEqual(clamp_to_value(EditorState(cursor_offset=9, cursor_width=2), "ab"), EditorState(2, 0))
        kept = EditorState(cursor_offset=1)
        self.assertIs(clamp_to_value(kept, "ab"), kept)


class CursorOverlayTests(unittest.TestCase):
    def test_empty_value_renders_inverted_blank(self) -> None:
        self.assertEqual(render_cursor_overlay("", EditorState(), BRACKET_THEME), "[ ]")

    def test_cursor_inside_value_inverts_one_char(self) -> None:
        self.assertEqual(render_cursor_overlay("abc", EditorState(cursor_offset=1), BRACKET_THEME), "a[b]c")

    def test_cursor_at_end_appends_inverted_blank(self) -> None:
        self.assertEqual(render_cursor_overlay("abc", EditorState(cursor_offset=3), BRACKET_THEME), "abc[ ]")

    def test_pasted_span_is_inverted(self) -> None:
        state = EditorState(cursor_offset=3, cursor_width=2)
        self.assertEqual(render_cursor_overlay("abcd", state, BRACKET_THEME), "a[b][c][d]")


    def test_narrow_width_scrolls_to_keep_cursor_visible(self) -> None:
        self.assertEqual(render_cursor_overlay("abcdef", EditorState(cursor_offset=6), BRACKET_THEME, 4), "def[ ]")
        self.assertEqual(render_cursor_overlay("abcdef", EditorState(cursor_offset=0), BRACKET_THEME, 4), "[a]bcd")
        self.assertEqual(render_cursor_overlay("abcdef", EditorState(cursor_offset=3), BRACKET_THEME, 4), "abc[d]")


class VisibleSpanTests(unittest.TestCase):
    def test_value_that_fits_is_shown_whole(self) -> None:
        self.assertEqual(visible_span("abc", 3, 4), (0, 3))
        self.assertEqual(visible_span("abcdef", 2, 0), (0, 6))

    def test_span_follows_cursor(self) -> None:
        self.assertEqual(visible_span("abcdef", 6, 4), (3, 6))
        self.assertEqual(visible_span("abcdef", 0, 4), (0, 4))
        self.assertEqual(visible_span("abcdef", 5, 3), (3, 6))

    def test_wide_characters_count_two_columns(self) -> None:
        self.assertEqual(visible_span("日本語", 3, 4), (2, 3))


class LineEditorTests(unittest.TestCase):
    def test_modified_arrows_still_move_cursor(self) -> None:
        editor = LineEditor("hello")
        editor.handle_key(named_event("left", shift=True, sequence="\x1b[1;2D"))
        editor.handle_key(named_event("left", ctrl=True, sequence="\x1b[1;5D"))
        self.assertEqual(editor.cursor_offset, 3)
        self.assertTrue(editor.handle_key(named_event("right", alt=True)))
        self.assertEqual(editor.cursor_offset, 4)
        self.assertTrue(editor.handle_key(named_event("home", shift=True)))
        self.assertEqual(editor.cursor_offset, 0)

    def test_alt_letter_combos_are_left_to_caller(self) -> None:
        editor = LineEditor("abc")
        self.assertFalse(editor.handle_key(named_event("b", alt=True, sequence="\x1bb")))
        self.assertEqual(editor.value, "abc")

    def test_cursor_editing_scenario(self) -> None:
        editor = LineEditor("hello")
        for _ in range(3):
            editor.handle_key(named_event("left"))
        self.assertEqual(editor.cursor_offset, 2)

        editor.handle_key(named_event("backspace"))

        self.assertEqual(editor.value, "hllo")
        self.assertEqual(editor.cursor_offset, 1)

    def test_paste_width_resets_on_next_key(self) -> None:
        editor = LineEditor()
        editor.handle_key(text_event("pasted"))
        self.assertEqual(editor.state, EditorState(cursor_offset=6, cursor_width=6))
        editor.handle_key(text_event("!"))
        self.assertEqual(editor.state, EditorState(cursor_offset=7, cursor_width=0))

    def test_home_and_end(self) -> None:
        editor = LineEditor("abc")
        editor.handle_key(named_event("home"))
        self.assertEqual(editor.cursor_offset, 0)
        editor.handle_key(text_event("x"))
        self.assertEqual(editor.value, "xabc")
        editor.handle_key(named_event("end"))
        self.assertEqual(editor.cursor_offset, 4)

    def test_on_change_fires_only_when_value_changes(self) -> None:
        changes: list[str] = []
        editor = LineEditor("ab", on_change=changes.append)
        editor.handle_key(named_event("left"))
        editor.handle_key(text_event("x"))
        editor.handle_key(named_event("delete"))
        editor.handle_key(named_event("home"))
        editor.handle_key(named_event("backspace"))
        self.assertEqual(changes, ["axb", "ab"])

    def test_return_submits_without_clearing(self) -> None:
        submitted: list[str] = []
        editor = LineEditor("ls -la", on_submit=submitted.append)
        self.assertTrue(editor.handle_key(named_event("return", sequence="\r")))
        self.assertEqual(submitted, ["ls -la"])
        self.assertEqual(editor.value, "ls -la")

    def test_passthrough_and_ctrl_keys_are_not_consumed(self) -> None:
        editor = LineEditor("abc")
        for event in (
            named_event("up"),
            named_event("down"),
            named_event("tab"),
            named_event("tab", shift=True),
            named_event("escape"),
            ctrl_event("c"),
            ctrl_event("u"),
        ):
            self.assertFalse(editor.handle_key(event), event)
        self.assertEqual((editor.value, editor.cursor_offset), ("abc", 3))

    def test_unfocused_editor_ignores_keys(self) -> None:
        editor = LineEditor("abc", focus=False)
        self.assertFalse(editor.handle_key(text_event("x")))
        self.assertEqual(editor.value, "abc")

    def test_set_value_clamps_cursor_without_firing_change(self) -> None:
        changes: list[str] = []
        editor = LineEditor("hello world", on_change=changes.append)
        editor.set_value("hi")
        self.assertEqual(editor.cursor_offset, 2)
        editor.handle_key(named_event("home"))
        editor.set_value("hey")
        self.assertEqual(editor.cursor_offset, 0)
        editor.set_value("hey there", move_cursor_to_end=True)
        self.assertEqual(editor.cursor_offset, 9)
        self.assertEqual(changes, [])

    def test_render_uses_theme(self) -> None:
        editor = LineEditor("ab")
        self.assertEqual(editor.render(BRACKET_THEME), "ab[ ]")


if __name__ == "__main__":
    unittest.main()
