"""String helpers with slicing, padding, splitting and edit-distance semantics."""

from __future__ import annotations

import re
from collections.abc import Iterable

_WHITESPACE = " \t\n\r\f\v"
_WORD = re.compile(r"[^ \t\n\r\f\v]+")


def slice_text(text: str, start: int, end: int = 0) -> str:
    """Return text[start:end]; negative indices count from the end and an end of 0 means the whole length."""
    length = len(text)
    if start < 0:
        start += length
    if end <= 0:
        end += length
    start = max(start, 0)
    end = min(end, length)
    if start >= end:
        return ""
    return text[start:end]


def capitalize(text: str) -> str:
    """Upper-case the first character and lower-case the rest."""
    if not text:
        return ""
    return text[0].upper() + text[1:].lower()


def upper(text: str) -> str:
    """Return the text in upper case."""
    return text.upper()


def lower(text: str) -> str:
    """Return the text in lower case."""
    return text.lower()


def lstrip(text: str) -> str:
    """Remove leading ASCII whitespace."""
    return text.lstrip(_WHITESPACE)


def rstrip(text: str) -> str:
    """Remove trailing ASCII whitespace."""
    return text.rstrip(_WHITESPACE)


def strip(text: str) -> str:
    """Remove leading and trailing ASCII whitespace."""
    return rstrip(lstrip(text))


def center(text: str, width: int, fill: str = " ") -> str:
    """Center the text in a field of the given width; extra padding goes to the right."""
    if len(text) >= width:
        return text
    total = width - len(text)
    left = total // 2
    return fill * left + text + fill * (total - left)


def ljust(text: str, width: int, fill: str = " ") -> str:
    """Left-justify the text in a field of the given width."""
    if len(text) >= width:
        return text
    return text + fill * (width - len(text))


def rjust(text: str, width: int, fill: str = " ") -> str:
    """Right-justify the text in a field of the given width."""
    if len(text) >= width:
        return text
    return fill * (width - len(text)) + text


def replace(text: str, old: str, rep: str) -> str:
    """Replace every occurrence of old with rep; an empty old leaves the text unchanged."""
    if not old:
        return text
    return text.replace(old, rep)


def split(text: str, splt: str = "") -> list[str]:
    """Split on the separator, or on runs of whitespace when the separator is empty."""
    if not splt:
        return _WORD.findall(text)
    return text.split(splt)


def join(sep: str, items: Iterable[str]) -> str:
    """Join the items with the separator."""
    return sep.join(items)


def expand_tabs(text: str, tabsize: int = 4) -> str:
    """Replace tabs with spaces up to the next tab stop; a non-positive size removes tabs."""
    parts: list[str] = []
    column = 0
    for ch in text:
        if ch == "\n":
            parts.append(ch)
            column = 0
        elif ch == "\t":
            if tabsize <= 0:
                continue
            spaces = tabsize - (column % tabsize)
            parts.append(" " * spaces)
            column += spaces
        else:
            parts.append(ch)
            column += 1
    return "".join(parts)


def edit_distance(left: str, right: str, ignorecase: bool = False) -> int:
    """Return the Levenshtein distance between two strings."""
    if ignorecase:
        left, right = left.lower(), right.lower()
    previous = list(range(len(right) + 1))
    for i, lch in enumerate(left, start=1):
        current = [i]
        for j, rch in enumerate(right, start=1):
            if lch == rch:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j], current[j - 1], previous[j - 1]))
        previous = current
    return previous[-1]