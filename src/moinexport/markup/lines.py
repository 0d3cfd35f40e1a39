"""Split attributed text into lines and lift list markers."""

import re
from collections.abc import Iterator

from ..core.changeset import RunCursor, first_char_attribs, iter_runs
from ..core.model import AttributedText, Line, ListKind, Run
from ..core.pool import AttributePool

LIST_ATTRIB = "list"

_LIST_VALUE = re.compile(r"([a-z]+)([1-8])")


def split_lines(atext: AttributedText, pool: AttributePool) -> Iterator[Line]:
    """
    Yield one Line per logical line of `atext`.

    The final newline of the document does not start an extra line. Each
    line's runs are re-based to offset 0 and include the line terminator.
    """
    text = atext.text
    if not text:
        return
    body = text[:-1] if text.endswith("\n") else text
    cursor = RunCursor(atext.runs, text)
    total = len(text)
    for line_text in body.split("\n"):
        start = cursor.pos
        span = min(len(line_text) + 1, total - start)
        yield analyze_line(text[start : start + span], cursor.take(span), pool)


def analyze_line(source: str, runs: list[Run], pool: AttributePool) -> Line:
    """Detect a leading list marker and strip it from text and runs.

    `source` is the line including its terminator, if it has one; the
    terminator is the newline counted by the line's last run.
    """
    terminator = "\n" if runs and runs[-1].lines else ""
    text = source[: len(source) - len(terminator)]
    list_value = pool.value_of(first_char_attribs(runs), LIST_ATTRIB)
    if list_value is None:
        return Line(text=text, runs=runs, terminator=terminator)

    level, kind = parse_list_value(list_value)
    total = sum(run.chars for run in runs)
    rest = list(iter_runs(runs, 1, total - 1)) if total > 1 else []
    return Line(
        text=text[1:],
        runs=rest,
        list_level=level,
        list_kind=kind,
        terminator=terminator,
    )


def parse_list_value(value: str) -> tuple[int, ListKind]:
    """Parse a list attribute value like ``bullet2`` into (level, kind)."""
    m = _LIST_VALUE.match(value)
    if not m:
        return 0, ListKind.NONE
    name, digit = m.groups()
    if name == ListKind.UNORDERED.value:
        kind = ListKind.UNORDERED
    elif name == ListKind.ORDERED.value:
        kind = ListKind.ORDERED
    else:
        kind = ListKind.OTHER
    return int(digit), kind
