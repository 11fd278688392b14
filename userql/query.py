"""Classify query text and isolate the operation body."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple

_COMMENT_PATTERN = re.compile(r"#[^\n]*")

# Optional keyword, optional operation name and an optional variable
# declaration list, followed by the opening brace of the selection.
_HEADER_PATTERN = re.compile(
    r"^(?:(?P<keyword>[A-Za-z_]\w*)\s*)?"
    r"(?:[A-Za-z_]\w*\s*)?"
    r"(?:\([^)]*\)\s*)?"
    r"\{"
)

WRITE_KEYWORD = "mutation"


class OperationKind(str, Enum):
    """Whether a request reads or writes user records."""

    READ = "query"
    WRITE = "mutation"


@dataclass(frozen=True)
class OperationRequest:
    kind: OperationKind
    body: str


def strip_comments(query_text: str) -> str:
    """Remove ``#`` line comments and surrounding whitespace."""

    return _COMMENT_PATTERN.sub("", query_text).strip()


def _structural_braces(text: str, start: int, skip_strings: bool) -> Iterator[Tuple[int, str]]:
    """Yield ``(index, brace)`` for every ``{`` or ``}`` from *start* onwards.

    With *skip_strings* set, braces inside double-quoted string literals are
    not yielded.
    """

    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if skip_strings and char == '"':
            in_string = True
        elif char in "{}":
            yield index, char


def _find_closing_brace(text: str, start: int) -> Optional[int]:
    """Return the index of the ``}`` matching the ``{`` at *start*.

    Braces inside double-quoted string literals do not count. When a literal
    is left unterminated the quotes are ignored and braces are counted plainly.
    """

    for skip_strings in (True, False):
        depth = 0
        for index, brace in _structural_braces(text, start, skip_strings):
            depth += 1 if brace == "{" else -1
            if depth == 0:
                return index
    return None


def _is_balanced(text: str) -> bool:
    """Whether every brace in *text* is paired, never closing more than opened."""

    for skip_strings in (True, False):
        depth = 0
        for _, brace in _structural_braces(text, 0, skip_strings):
            depth += 1 if brace == "{" else -1
            if depth < 0:
                break
        else:
            if depth == 0:
                return True
    return False


def classify(query_text: str) -> Optional[OperationRequest]:
    """Determine the operation kind and body of *query_text*.

    Returns ``None`` when no balanced ``{ ... }`` selection can be located,
    which callers report as an invalid query. Text after the selection, such
    as a fragment definition, is ignored as long as its braces pair up. The
    body is returned verbatim (trimmed) and is not otherwise inspected.
    """

    if not isinstance(query_text, str):
        return None

    cleaned = strip_comments(query_text)
    header = _HEADER_PATTERN.match(cleaned)
    if header is None:
        return None

    opening = header.end() - 1
    closing = _find_closing_brace(cleaned, opening)
    if closing is None or not _is_balanced(cleaned[closing + 1 :]):
        return None

    keyword = header.group("keyword")
    kind = OperationKind.WRITE if keyword == WRITE_KEYWORD else OperationKind.READ
    return OperationRequest(kind=kind, body=cleaned[opening + 1 : closing].strip())


__all__ = ["OperationKind", "OperationRequest", "classify", "strip_comments"]
