from __future__ import annotations

import pytest

from hecto_engine.buffer import Line

COMBINING_ACUTE = "\u0301"
FAMILY = "\U0001F468\u200d\U0001F469\u200d\U0001F467"


def test_width_counts_grapheme_clusters() -> None:
    line = Line(f"cafe{COMBINING_ACUTE} {FAMILY}!")

    assert line.width() == 7
    assert len(line) == line.length == 7
    assert line.grapheme_at(3) == f"e{COMBINING_ACUTE}"
    assert line.grapheme_at(5) == FAMILY
    assert line.grapheme_at(7) is None
    assert line.grapheme_at(-1) is None


@pytest.mark.parametrize(
    ("start", "end", "expected"),
    [
        (0, 5, "hello"),
        (1, 3, "el"),
        (3, 100, "lo"),
        (4, 2, ""),
        (-5, 2, "he"),
        (10, 20, ""),
        (-3, -1, ""),
    ],
)
def test_render_clamps_any_range(start: int, end: int, expected: str) -> None:
    assert Line("hello").render(start, end) == expected


def test_render_never_cuts_a_cluster() -> None:
    line = Line(f"ae{COMBINING_ACUTE}b")

    assert line.render(1, 2) == f"e{COMBINING_ACUTE}"


def test_insert_in_middle_and_past_end() -> None:
    line = Line("hllo")

    line.insert(1, "e")
    line.insert(99, "!")

    assert line.text == "hello!"
    assert line.length == 6


def test_insert_combining_mark_joins_previous_cluster() -> None:
    line = Line("cafe")

    line.insert(4, COMBINING_ACUTE)

    assert line.text == f"cafe{COMBINING_ACUTE}"
    assert line.width() == 4


def test_delete_removes_whole_cluster() -> None:
    line = Line(f"a{FAMILY}b")

    assert line.delete(1) is True
    assert line.text == "ab"
    assert line.length == 2


@pytest.mark.parametrize("at", [-1, 3, 10])
def test_delete_out_of_range_is_noop(at: int) -> None:
    line = Line("abc")

    assert line.delete(at) is False
    assert line.text == "abc"


@pytest.mark.parametrize("at", range(-1, 8))
def test_split_then_append_reconstructs_line(at: int) -> None:
    original = f"ab{FAMILY}e{COMBINING_ACUTE}f"
    line = Line(original)

    tail = line.split(at)

    assert line.length + tail.length == 5
    line.append(tail)
    assert line.text == original
    assert line.length == 5


def test_split_at_end_leaves_empty_remainder() -> None:
    line = Line("abc")

    tail = line.split(3)

    assert line.text == "abc"
    assert tail.text == ""
    assert tail.width() == 0


def test_leading_whitespace_and_blank_lines() -> None:
    assert Line("    def f():").leading_whitespace() == 4
    assert Line("\tx").first_non_blank() == 1
    assert Line("x  ").leading_whitespace() == 0
    assert Line("   ").is_blank()
    assert Line("   ").first_non_blank() == 3
    assert Line("").is_blank()
    assert not Line(" a").is_blank()


def test_equality_compares_clusters() -> None:
    assert Line("abc") == Line("abc")
    assert Line("abc") != Line("abd")
