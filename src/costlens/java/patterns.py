"""Structural patterns for Java-like source text.

This is the narrow scanner interface used by the declaration extractor and
the change classifier. It approximates a parser with regular expressions, so
it has known weak spots:

- lambda bodies and anonymous classes are scanned as plain text
- annotations with parenthesized arguments (``@Size(max = 3)``) look like calls
- a ``new Foo(...)`` statement on its own line matches the declaration shape
- nested parentheses inside a call's argument list end the occurrence early
- calls nested in another call's arguments are not detected: in
  ``log(sort(xs))`` only ``log(sort(xs)`` is reported, so ``sort`` is missed

Swapping this module for a real lexer must not require changes elsewhere.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

MODIFIERS: frozenset[str] = frozenset(
    {
        "public",
        "protected",
        "private",
        "static",
        "final",
        "native",
        "synchronized",
        "abstract",
        "transient",
    }
)

_MODIFIER_PREFIX = (
    r"(?:public|protected|private|static|final|native|synchronized|abstract|transient|\t| )*"
)

# Declaration header: modifiers, optional <T> prefix, return type, name, (params).
# The return-type lookahead rejects constructors (``public Foo(``) and
# ``return foo(`` statements; the lookbehinds reject control-flow keywords.
METHOD_DECLARATION_PATTERN = re.compile(
    r"^" + _MODIFIER_PREFIX
    + r"(?:<.*>\s+)?"
    + r"(?!(?:public|protected|private|return) )"
    + r"[\w<>\[\]?]+\s+"
    + r"([A-Za-z_$][A-Za-z0-9_]*)"
    + r"(?<!if)(?<!switch)(?<!while)(?<!for)"
    + r"\([^)]*\)",
    re.MULTILINE,
)

_CLASS_HEADER_PATTERN = re.compile(
    r"^" + _MODIFIER_PREFIX + r"class\s+[A-Za-z_$][A-Za-z0-9_]*\s*(?=<)",
    re.MULTILINE,
)

# Loop headers and call-like fragments. ``if(`` and ``switch(`` are excluded
# unless they start the text.
_OCCURRENCE_PATTERN = re.compile(
    r"while *\([^)]*\)"
    r"|for *\([^)]*\)"
    r"|[A-Za-z_$][A-Za-z0-9_]*(?<![^A-Za-z0-9_]if)(?<![^A-Za-z0-9_]switch)\([^)]*\)"
)

LOOP_KEYWORDS: frozenset[str] = frozenset({"while", "for"})


def iter_declaration_matches(text: str) -> Iterator[re.Match[str]]:
    """Yield declaration header matches in source order.

    Group 1 of each match is the method name.
    """
    return METHOD_DECLARATION_PATTERN.finditer(text)


def strip_declarations(text: str) -> str:
    """Remove every declaration header from text."""
    return METHOD_DECLARATION_PATTERN.sub("", text)


def scan_occurrences(text: str) -> list[str]:
    """Find loop headers and call-like fragments outside ``//`` comments.

    Args:
        text: Source fragment (typically one diff segment).

    Returns:
        Literal occurrence texts in order, e.g. ``["for (;;)", "baz()"]``.

    """
    occurrences: list[str] = []
    pos = 0
    while (match := _OCCURRENCE_PATTERN.search(text, pos)) is not None:
        start = match.start()
        line_start = text.rfind("\n", 0, start) + 1
        if "//" in text[line_start:start]:
            pos = start + 1
            continue
        occurrences.append(match.group(0))
        pos = match.end()
    return occurrences


def occurrence_name(occurrence: str) -> str:
    """Callee or loop keyword of an occurrence (``"baz(1)"`` → ``"baz"``)."""
    return occurrence.split("(", 1)[0].strip()


def iter_class_type_parameters(text: str) -> Iterator[str]:
    """Yield the raw type-parameter list of every generic class header.

    ``class Box<K extends Comparable<K>, V>`` yields
    ``"K extends Comparable<K>, V"``. Headers with an unbalanced ``<`` are
    skipped.
    """
    for match in _CLASS_HEADER_PATTERN.finditer(text):
        open_pos = text.index("<", match.end())
        close_pos = _find_matching_angle(text, open_pos)
        if close_pos is not None:
            yield text[open_pos + 1 : close_pos]


def split_top_level(text: str, sep: str = ",") -> list[str]:
    """Split text on sep, ignoring separators nested inside ``<...>``."""
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for ch in text:
        if ch == "<":
            depth += 1
        elif ch == ">" and depth > 0:
            depth -= 1
        elif ch == sep and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)
    parts.append("".join(current))
    return parts


def _find_matching_angle(text: str, open_pos: int) -> int | None:
    """Find the ``>`` closing the ``<`` at open_pos, on the same header."""
    depth = 0
    for i in range(open_pos, len(text)):
        ch = text[i]
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
            if depth == 0:
                return i
        elif ch in "{;":
            return None
    return None
