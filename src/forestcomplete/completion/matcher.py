"""Decide whether the text before the cursor is a cross-reference in progress.

Three syntaxes open a completion, tried in this order:

1. ``\\transclude{``, ``\\import{``, ``\\export{`` or ``\\ref{`` with no ``}``
   after the brace;
2. a markdown link target ``[text](`` with no ``)`` after the parenthesis
   and no ``[`` inside the link text;
3. a wiki link ``[[`` with no ``]`` after it.

Only the current line is inspected. The replacement range starts right
after the opening delimiter and ends at the cursor.
"""

from __future__ import annotations

from typing import Optional

from forestcomplete.models import NO_MATCH, Match, MatchResult

COMMAND_OPENERS = ("\\transclude{", "\\import{", "\\export{", "\\ref{")


def _command_start(text: str) -> Optional[int]:
    tail_start = text.rfind("}") + 1
    positions = [
        index + len(opener)
        for opener in COMMAND_OPENERS
        if (index := text.find(opener, tail_start)) != -1
    ]
    return min(positions) if positions else None


def _markdown_link_start(text: str) -> Optional[int]:
    last_close = text.rfind(")")
    bracket = text.find("[")
    while bracket != -1:
        # Link text runs up to the next "[" at most.
        next_bracket = text.find("[", bracket + 1)
        limit = next_bracket if next_bracket != -1 else len(text)
        target = text.rfind("](", bracket + 1, limit)
        if target != -1 and target > last_close:
            return target + 2
        bracket = next_bracket
    return None


def _wiki_link_start(text: str) -> Optional[int]:
    index = text.find("[[", text.rfind("]") + 1)
    return index + 2 if index != -1 else None


SYNTAXES = (_command_start, _markdown_link_start, _wiki_link_start)


def match(prefix_text: str, cursor: int | None = None) -> MatchResult:
    """Match the text up to ``cursor`` against the trigger syntaxes.

    Offsets in the result index into ``prefix_text``.
    """
    if cursor is None:
        cursor = len(prefix_text)
    cursor = max(0, min(cursor, len(prefix_text)))
    line_start = prefix_text.rfind("\n", 0, cursor) + 1
    line = prefix_text[line_start:cursor]

    for syntax in SYNTAXES:
        start = syntax(line)
        if start is not None:
            return Match(
                start_offset=line_start + start,
                end_offset=cursor,
                partial_text=line[start:],
            )
    return NO_MATCH
