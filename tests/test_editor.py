from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from hecto_engine.buffer import Document, Position
from hecto_engine.config import EditorConfig
from hecto_engine.editor import NO_FILE_LABEL, UNREADABLE_FILE_LABEL, Editor
from hecto_engine.modes import CommandMode, EditorMode, KeyInput
from hecto_engine.runtime.status import StatusKind


def make_editor(
    lines: Sequence[str] = (),
    *,
    filename: Optional[str] = None,
    config: Optional[EditorConfig] = None,
) -> Editor:
    return Editor(document=Document.open(lines, filename=filename), config=config)


def press(editor: Editor, *keys: str) -> None:
    for key in keys:
        if len(key) == 1:
            editor.feed(KeyInput.char(key))
        else:
            editor.feed(KeyInput(key=key))


def type_text(editor: Editor, text: str) -> None:
    for ch in text:
        editor.feed(KeyInput.char(ch))


def test_new_editor_starts_in_normal_mode() -> None:
    editor = Editor()

    assert editor.mode is EditorMode.NORMAL
    assert editor.cursor == Position(0, 0)
    assert editor.quit_requested is False
    assert editor.status is None


def test_typing_into_empty_document_creates_first_line() -> None:
    editor = Editor()

    press(editor, "i")
    type_text(editor, "hi")

    assert editor.document.snapshot() == ("hi",)
    assert editor.cursor == Position(2, 0)

    press(editor, "ESC")
    assert editor.mode is EditorMode.NORMAL
    assert editor.cursor == Position(1, 0)


def test_combining_mark_does_not_advance_cursor() -> None:
    editor = Editor()

    press(editor, "i")
    type_text(editor, "e" + chr(0x0301) + "x")

    assert editor.document.width(0) == 2
    assert editor.cursor == Position(2, 0)


def test_enter_at_end_of_line_opens_empty_line() -> None:
    editor = make_editor(["hello", "world"])

    press(editor, "A", "ENTER")

    assert editor.document.snapshot() == ("hello", "", "world")
    assert editor.cursor == Position(0, 1)
    assert editor.mode is EditorMode.INSERT


def test_enter_in_middle_splits_line() -> None:
    editor = make_editor(["hello world"])
    editor.context.cursor.move_to(5, 0)

    press(editor, "i", "ENTER")

    assert editor.document.snapshot() == ("hello", " world")
    assert editor.cursor == Position(1, 1)


def test_enter_keeps_indentation() -> None:
    editor = make_editor(["    foo"])

    press(editor, "A", "ENTER")

    assert editor.document.snapshot() == ("    foo", "    ")
    assert editor.cursor == Position(4, 1)


def test_enter_on_unindented_line_follows_split_remainder() -> None:
    editor = make_editor(["foo   bar"])
    editor.context.cursor.move_to(3, 0)

    press(editor, "i", "ENTER")

    assert editor.document.snapshot() == ("foo", "   bar")
    assert editor.cursor == Position(3, 1)


def test_enter_skips_empty_remainder_to_find_indentation() -> None:
    editor = make_editor(["def f():", "  return 1"])

    press(editor, "A", "ENTER")

    assert editor.document.snapshot() == ("def f():", "  ", "  return 1")
    assert editor.cursor == Position(2, 1)


def test_enter_at_line_start_keeps_indentation_of_moved_text() -> None:
    editor = make_editor(["    foo"])

    press(editor, "i", "ENTER")

    assert editor.document.snapshot() == ("", "    foo")
    assert editor.cursor == Position(4, 1)


def test_backspace_at_origin_changes_nothing() -> None:
    editor = make_editor(["abc"])

    press(editor, "i", "BACKSPACE")

    assert editor.document.snapshot() == ("abc",)
    assert editor.cursor == Position(0, 0)
    assert editor.document.dirty is False


def test_backspace_joins_lines() -> None:
    editor = make_editor(["ab", "cd"])

    press(editor, "j", "i", "BACKSPACE")

    assert editor.document.snapshot() == ("abcd",)
    assert editor.cursor == Position(2, 0)


def test_backspace_deletes_left_of_cursor() -> None:
    editor = make_editor(["abc"])

    press(editor, "A", "BACKSPACE")

    assert editor.document.snapshot() == ("ab",)
    assert editor.cursor == Position(2, 0)


def test_delete_key_joins_next_line() -> None:
    editor = make_editor(["ab", "cd"])

    press(editor, "A", "DELETE")

    assert editor.document.snapshot() == ("abcd",)
    assert editor.cursor == Position(2, 0)


def test_enter_then_backspace_restores_document_and_cursor() -> None:
    editor = make_editor(["alpha"])
    editor.context.cursor.move_to(3, 0)

    press(editor, "i", "ENTER", "BACKSPACE")

    assert editor.document.snapshot() == ("alpha",)
    assert editor.cursor == Position(3, 0)


def test_tab_inserts_configured_spaces() -> None:
    editor = make_editor(["x"], config=EditorConfig(tab_width=2))

    press(editor, "i", "TAB")

    assert editor.document.snapshot() == ("  x",)
    assert editor.cursor == Position(2, 0)


def test_append_commands_position_cursor() -> None:
    editor = make_editor(["abc"])

    press(editor, "a")
    assert editor.mode is EditorMode.INSERT
    assert editor.cursor == Position(1, 0)

    press(editor, "ESC", "A")
    assert editor.cursor == Position(3, 0)

    press(editor, "ESC", "s", "a")
    assert editor.cursor == Position(3, 0)


def test_arrow_keys_move_in_insert_mode() -> None:
    editor = make_editor(["ab", "cd"])

    press(editor, "i", "RIGHT", "DOWN")
    assert editor.cursor == Position(1, 1)

    press(editor, "LEFT", "UP")
    assert editor.cursor == Position(0, 0)


def test_quit_command() -> None:
    editor = make_editor(["abc"])
    editor.context.cursor.move_to(2, 0)

    press(editor, ":")
    type_text(editor, "quit")
    press(editor, "ENTER")

    assert editor.quit_requested is True
    assert editor.mode is EditorMode.NORMAL
    assert editor.cursor == Position(2, 0)


def test_commands_are_case_insensitive() -> None:
    editor = make_editor(["abc"])

    press(editor, ":")
    type_text(editor, "QuIt")
    press(editor, "ENTER")

    assert editor.quit_requested is True


def test_invalid_command_stays_in_command_mode() -> None:
    editor = make_editor(["abc"])

    press(editor, ":")
    type_text(editor, "xyz")
    press(editor, "ENTER")

    mode = editor.manager.active_mode
    assert editor.mode is EditorMode.COMMAND
    assert isinstance(mode, CommandMode)
    assert mode.status is StatusKind.INVALID_COMMAND
    assert editor.command_text == ""
    assert editor.status is not None
    assert editor.status.kind is StatusKind.INVALID_COMMAND
    assert editor.quit_requested is False


def test_command_match_requires_exact_text() -> None:
    editor = make_editor(["abc"])

    press(editor, ":")
    type_text(editor, " quit")
    press(editor, "ENTER")

    assert editor.quit_requested is False
    assert editor.mode is EditorMode.COMMAND


def test_escape_cancels_command_and_restores_cursor() -> None:
    editor = make_editor(["abc", "def"])
    editor.context.cursor.move_to(2, 1)

    press(editor, ":")
    type_text(editor, "sav")
    press(editor, "ESC")

    assert editor.mode is EditorMode.NORMAL
    assert editor.cursor == Position(2, 1)
    assert editor.command_text == ""


def test_save_file_command_writes_document(tmp_path: Path) -> None:
    target = tmp_path / "notes.txt"
    target.write_text("one\ntwo\n", encoding="utf-8")
    editor = Editor()
    assert editor.open(str(target)) is True

    press(editor, "A")
    type_text(editor, "!")
    press(editor, "ESC", ":")
    type_text(editor, "save file")
    press(editor, "ENTER")

    assert target.read_text(encoding="utf-8") == "one!\ntwo\n"
    assert editor.mode is EditorMode.NORMAL
    assert editor.document.dirty is False
    assert editor.status is not None
    assert editor.status.kind is StatusKind.INFO
    assert editor.status.text.startswith("File written")


def test_save_without_filename_reports_status() -> None:
    editor = make_editor(["abc"])

    press(editor, ":")
    type_text(editor, "save file")
    press(editor, "ENTER")

    assert editor.mode is EditorMode.NORMAL
    assert editor.status is not None
    assert editor.status.kind is StatusKind.NO_FILENAME


def test_save_failure_reports_status(tmp_path: Path) -> None:
    editor = make_editor(["abc"], filename=str(tmp_path))

    press(editor, ":")
    type_text(editor, "save file")
    press(editor, "ENTER")

    assert editor.mode is EditorMode.NORMAL
    assert editor.status is not None
    assert editor.status.kind is StatusKind.SAVE_FAILED


def test_alt_w_saves_from_normal_mode(tmp_path: Path) -> None:
    target = tmp_path / "out.txt"
    editor = make_editor(["abc"], filename=str(target))

    editor.feed(KeyInput(key="w", modifiers=("alt",)))

    assert target.read_text(encoding="utf-8") == "abc\n"
    assert editor.mode is EditorMode.NORMAL


def test_ctrl_q_requests_quit() -> None:
    editor = make_editor(["abc"])

    editor.feed(KeyInput(key="q", modifiers=("ctrl",)))

    assert editor.quit_requested is True


def test_open_without_path_shows_placeholder() -> None:
    editor = Editor()

    assert editor.open(None) is False

    assert editor.file_label == NO_FILE_LABEL
    assert NO_FILE_LABEL in editor.status_bar()


def test_open_unreadable_file_reports_status(tmp_path: Path) -> None:
    editor = Editor()

    assert editor.open(str(tmp_path / "missing.txt")) is False

    assert editor.file_label == UNREADABLE_FILE_LABEL
    assert editor.document.is_empty
    assert editor.status is not None
    assert editor.status.kind is StatusKind.FILE_UNREADABLE

    press(editor, "i")
    type_text(editor, "ok")
    assert editor.document.snapshot() == ("ok",)


def test_open_resets_cursor(tmp_path: Path) -> None:
    target = tmp_path / "a.txt"
    target.write_text("x\ny\n", encoding="utf-8")
    editor = make_editor(["abc", "def"])
    editor.context.cursor.move_to(2, 1)

    editor.open(str(target))

    assert editor.cursor == Position(0, 0)
    assert editor.document.snapshot() == ("x", "y")


def test_status_bar_reports_mode_file_and_position() -> None:
    editor = make_editor(["a", "b", "c", "d"], filename="notes.txt")

    assert editor.status_bar() == "MODE: NORMAL | notes.txt | 1/4: 25%"

    press(editor, "j", "i")
    type_text(editor, "x")

    assert editor.status_bar() == "MODE: INSERT | notes.txt (modified) | 2/4: 50%"


def test_status_bar_on_empty_document() -> None:
    editor = Editor()

    assert editor.status_bar() == f"MODE: NORMAL | {NO_FILE_LABEL} | 0/0: 100%"


def test_viewport_scrolls_to_follow_cursor() -> None:
    editor = make_editor([f"row {n}" for n in range(30)])
    editor.resize(10, 5)

    press(editor, "G")

    mirror = editor.mirror()
    assert mirror.offset == Position(0, 25)
    assert mirror.rows == tuple(f"row {n}" for n in range(25, 30))
    assert mirror.screen_cursor == Position(0, 4)

    press(editor, "g", "g")
    assert editor.mirror().offset == Position(0, 0)


def test_viewport_scrolls_horizontally_on_grapheme_boundaries() -> None:
    editor = make_editor(["0123456789abcdef"])
    editor.resize(4, 3)

    press(editor, "s")

    mirror = editor.mirror()
    assert mirror.offset == Position(13, 0)
    assert mirror.rows == ("def",)
    assert mirror.screen_cursor == Position(3, 0)


def test_mirror_carries_command_text_and_mode() -> None:
    editor = make_editor(["abc"])

    press(editor, ":")
    type_text(editor, "qu")

    mirror = editor.mirror()
    assert mirror.mode == "command"
    assert mirror.command_text == "qu"
    assert mirror.status_bar.startswith("MODE: COMMAND")
