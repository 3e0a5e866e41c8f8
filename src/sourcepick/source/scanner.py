"""Lexical scanner: one state machine for strings, comments and brackets.

Every consumer (boundary extraction, call-site discovery, property
extraction) walks text through ``skip_non_code`` so that string literals,
raw strings and comments are skipped by exactly the same rules.

Scanning never raises on malformed input. Unterminated strings, comments
or bracket groups run to end-of-text and the caller is told the group did
not balance.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import NamedTuple

_QUOTES = frozenset({'"', "'"})
_OPENERS = frozenset({"(", "{", "["})
# closer → the opener it pops
_CLOSERS: dict[str, str] = {")": "(", "}": "{", "]": "["}
_RAW_PREFIX = "r"


class GroupSpan(NamedTuple):
    """End of a bracket group: ``end`` is one past the closer."""

    end: int
    balanced: bool


class CallSite(NamedTuple):
    """An ``Identifier(`` site: name start offset and ``(`` offset."""

    name: str
    start: int
    open_paren: int


def is_identifier_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def skip_string(text: str, pos: int) -> int:
    """Return the offset just past the string literal whose quote is at ``pos``.

    Triple-quoted strings close only on an unescaped triple of the same
    quote. Single-quoted strings close on the matching quote or stop *at*
    a bare newline. A backslash swallows the next character.
    """
    n = len(text)
    quote = text[pos]
    triple = text[pos + 1 : pos + 3] == quote * 2
    pos += 3 if triple else 1

    while pos < n:
        ch = text[pos]
        if ch == "\\" and pos + 1 < n:
            pos += 2
            continue
        if triple:
            if text.startswith(quote * 3, pos):
                return pos + 3
        else:
            if ch == quote:
                return pos + 1
            if ch == "\n":
                return pos
        pos += 1

    return n


def skip_line_comment(text: str, pos: int) -> int:
    """Consume ``//...`` through and including the newline."""
    newline = text.find("\n", pos)
    if newline == -1:
        return len(text)
    return newline + 1


def skip_block_comment(text: str, pos: int) -> int:
    """Consume ``/* ... */``; unterminated comments run to end-of-text."""
    close = text.find("*/", pos + 2)
    if close == -1:
        return len(text)
    return close + 2


def skip_non_code(text: str, pos: int) -> int:
    """Skip a string or comment starting at ``pos``.

    Returns ``pos`` unchanged when no string or comment starts there.
    """
    ch = text[pos]
    if ch in _QUOTES:
        return skip_string(text, pos)

    nxt = text[pos + 1] if pos + 1 < len(text) else ""
    # Raw strings share the plain-string escape rules.
    if ch == _RAW_PREFIX and nxt in _QUOTES:
        return skip_string(text, pos + 1)
    if ch == "/" and nxt == "/":
        return skip_line_comment(text, pos)
    if ch == "/" and nxt == "*":
        return skip_block_comment(text, pos)
    return pos


def match_group(text: str, open_pos: int) -> GroupSpan:
    """Find the end of the bracket group opened at ``open_pos``.

    ``(``, ``{`` and ``[`` share one stack. A closer pops only when it
    matches the top opener; a mismatched closer is ignored.
    """
    n = len(text)
    if open_pos >= n or text[open_pos] not in _OPENERS:
        return GroupSpan(open_pos, False)

    stack = [text[open_pos]]
    i = open_pos + 1
    while i < n and stack:
        skipped = skip_non_code(text, i)
        if skipped != i:
            i = skipped
            continue

        ch = text[i]
        if ch in _OPENERS:
            stack.append(ch)
        elif ch in _CLOSERS and stack[-1] == _CLOSERS[ch]:
            stack.pop()
        i += 1

    return GroupSpan(i, not stack)


def find_matching_close(text: str, open_pos: int) -> int:
    """Offset one past the closer matching ``open_pos`` (or end-of-text)."""
    return match_group(text, open_pos).end


def skip_whitespace(text: str, pos: int, limit: int | None = None) -> int:
    end = len(text) if limit is None else limit
    while pos < end and text[pos].isspace():
        pos += 1
    return pos


def iter_call_sites(
    text: str, end: int | None = None, name: str | None = None
) -> Iterator[CallSite]:
    """Yield ``Identifier(`` sites in code, left to right.

    Without ``name`` only capitalised identifiers are produced; with it,
    only identifiers equal to ``name``. Only sites whose ``(`` lies before
    ``end`` are produced. Identifiers inside strings and comments are
    ignored, as are identifiers that start mid-word.
    """
    limit = len(text) if end is None else min(end, len(text))
    i = 0
    while i < limit:
        skipped = skip_non_code(text, i)
        if skipped != i:
            i = skipped
            continue

        ch = text[i]
        if not is_identifier_char(ch):
            i += 1
            continue

        j = i + 1
        while j < limit and is_identifier_char(text[j]):
            j += 1
        wanted = text[i:j] == name if name is not None else "A" <= ch <= "Z"
        if wanted:
            k = skip_whitespace(text, j, limit)
            if k < limit and text[k] == "(":
                yield CallSite(text[i:j], i, k)
        i = j


def value_end(text: str, pos: int) -> int:
    """End of an argument value: the next top-level ``,`` or closer."""
    n = len(text)
    stack: list[str] = []
    while pos < n:
        skipped = skip_non_code(text, pos)
        if skipped != pos:
            pos = skipped
            continue

        ch = text[pos]
        if ch in _OPENERS:
            stack.append(ch)
        elif ch in _CLOSERS:
            if not stack:
                return pos
            if stack[-1] == _CLOSERS[ch]:
                stack.pop()
        elif ch == "," and not stack:
            return pos
        pos += 1
    return n
