import pytest

from transitplanner import strutils

SAMPLE = "Hello World"


def test_slice_basic_matches_python_slice():
    assert strutils.slice_text(SAMPLE, 0, 5) == SAMPLE[0:5]
    assert strutils.slice_text(SAMPLE, 3, 8) == SAMPLE[3:8]


def test_slice_end_zero_means_whole_length():
    assert strutils.slice_text(SAMPLE, 2, 0) == SAMPLE[2:]
    assert strutils.slice_text(SAMPLE, 0) == SAMPLE


def test_slice_negative_indices():
    assert strutils.slice_text(SAMPLE, -5, 0) == SAMPLE[-5:]
    assert strutils.slice_text(SAMPLE, 1, -2) == SAMPLE[1:-2]


def test_slice_clamps_and_empty():
    assert strutils.slice_text(SAMPLE, -100, 100) == SAMPLE
    assert strutils.slice_text(SAMPLE, 6, 3) == ""


@pytest.mark.parametrize("text", ["hello", "hELLO wORLD", "", "x"])
def test_case_functions(text):
    assert strutils.capitalize(text) == text.capitalize()
    assert strutils.upper(text) == text.upper()
    assert strutils.lower(text) == text.lower()


@pytest.mark.parametrize("text", ["  a b  ", "\t\nabc\r\f\v", "", "   ", "abc"])
def test_strip_family(text):
    ws = " \t\n\r\f\v"
    assert strutils.lstrip(text) == text.lstrip(ws)
    assert strutils.rstrip(text) == text.rstrip(ws)
    assert strutils.strip(text) == text.strip(ws)


def test_center_invariants():
    result = strutils.center("abc", 8, "*")
    assert len(result) == 8
    assert result.strip("*") == "abc"
    assert result.index("a") == (8 - 3) // 2


def test_center_default_fill_and_short_width():
    assert strutils.center("abcd", 2) == "abcd"
    assert strutils.center("ab", 6).strip(" ") == "ab"


def test_justify_matches_builtins():
    assert strutils.ljust("abc", 7, "-") == "abc".ljust(7, "-")
    assert strutils.rjust("abc", 7, "-") == "abc".rjust(7, "-")
    assert strutils.ljust("abcdef", 3) == "abcdef"
    assert strutils.rjust("abc", 5) == "abc".rjust(5)


def test_replace():
    text = "aaa bab aa"
    assert strutils.replace(text, "aa", "x") == text.replace("aa", "x")
    assert strutils.replace(text, "", "x") == text
    assert strutils.replace(text, "a", "aa") == text.replace("a", "aa")


def test_split_with_separator():
    text = "a,b,,c,"
    assert strutils.split(text, ",") == text.split(",")
    assert strutils.split("abc", "::") == ["abc"]


def test_split_whitespace():
    text = "  one\ttwo \n three  "
    assert strutils.split(text) == text.split()
    assert strutils.split("   ") == []


def test_join():
    items = ["a", "b", "c"]
    assert strutils.join(", ", items) == ", ".join(items)
    assert strutils.join("-", []) == ""


def test_expand_tabs_matches_builtin():
    text = "a\tbc\td\nx\ty\t\tz"
    assert strutils.expand_tabs(text, 4) == text.expandtabs(4)
    assert strutils.expand_tabs(text, 8) == text.expandtabs(8)


def test_expand_tabs_nonpositive_removes_tabs():
    text = "a\tb\tc"
    assert strutils.expand_tabs(text, 0) == text.replace("\t", "")
    assert strutils.expand_tabs(text, -3) == text.replace("\t", "")


def test_edit_distance_known_example():
    assert strutils.edit_distance("kitten", "sitting") == 3


def test_edit_distance_invariants():
    assert strutils.edit_distance("same", "same") == 0
    assert strutils.edit_distance("", "abcd") == len("abcd")
    assert strutils.edit_distance("abc", "xyz12") == strutils.edit_distance("xyz12", "abc")