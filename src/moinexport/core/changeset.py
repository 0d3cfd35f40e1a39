"""Decoding of Etherpad attribution strings into attribute runs.

An attribution string is a sequence of operations such as ``*0*3|1+5``:
``*<n>`` names a pool id active on the run, ``|<n>`` counts the newlines
inside it and ``+<n>`` is its length. All numbers are base 36.
"""

import re
from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from ..errors import MalformedAttributeRun
from .model import AttributedText, Run

_OP = re.compile(r"((?:\*[0-9a-z]+)*)(?:\|([0-9a-z]+))?([-+=])([0-9a-z]+)|(.)")
_ATTRIB_NUM = re.compile(r"\*([0-9a-z]+)")


def parse_attribs(astr: str) -> list[Run]:
    """Parse an attribution string into runs, in document order."""
    runs: list[Run] = []
    for m in _OP.finditer(astr):
        if m.group(5) is not None:
            raise MalformedAttributeRun(
                f"Unexpected character {m.group(5)!r} at offset {m.start()} in {astr!r}"
            )
        if m.group(3) != "+":
            raise MalformedAttributeRun(
                f"Attribution may only contain insertions, got {m.group(0)!r}"
            )
        attribs = frozenset(int(n, 36) for n in _ATTRIB_NUM.findall(m.group(1)))
        lines = int(m.group(2), 36) if m.group(2) else 0
        chars = int(m.group(4), 36)
        if chars:
            runs.append(Run(attribs, chars, lines))
    return runs


def atext_from_json(data: Mapping[str, Any]) -> AttributedText:
    """Build an AttributedText from ``{"text": ..., "attribs": ...}``."""
    text = data.get("text", "")
    runs = parse_attribs(data.get("attribs", "") or "")
    total = sum(run.chars for run in runs)
    if total != len(text):
        raise MalformedAttributeRun(
            f"Attribution covers {total} characters but text has {len(text)}"
        )
    pos = 0
    for run in runs:
        found = text.count("\n", pos, pos + run.chars)
        if found != run.lines:
            raise MalformedAttributeRun(
                f"Run at offset {pos} declares {run.lines} newlines but covers {found}"
            )
        pos += run.chars
    return AttributedText(text=text, runs=tuple(runs))


def iter_runs(
    runs: Sequence[Run],
    start: int,
    length: int,
    text: str | None = None,
) -> Iterator[Run]:
    """
    Return an iterator over the runs covering ``[start, start + length)``,
    clipped at both ends. The range is checked before anything is iterated.

    When `text` is given, newline counts of clipped runs are recomputed from it;
    otherwise a clipped piece only keeps the run's newlines if it contains the
    run's last character (a line-local run ends with its terminator).
    """
    total = sum(run.chars for run in runs)
    end = start + length
    if start < 0 or length < 0 or end > total:
        raise MalformedAttributeRun(
            f"Range [{start}, {end}) is outside attribution of length {total}"
        )
    return _clip(runs, start, end, text)


def _clip(runs: Sequence[Run], start: int, end: int, text: str | None) -> Iterator[Run]:
    pos = 0
    for run in runs:
        run_end = pos + run.chars
        if run_end <= start:
            pos = run_end
            continue
        if pos >= end:
            break
        lo = max(pos, start)
        hi = min(run_end, end)
        if lo == pos and hi == run_end:
            yield run
        else:
            if text is not None:
                lines = text.count("\n", lo, hi)
            else:
                lines = run.lines if hi == run_end else 0
            yield Run(run.attribs, hi - lo, lines)
        pos = run_end


def first_char_attribs(runs: Sequence[Run]) -> frozenset[int]:
    """Attribute ids of the first character, or an empty set for an empty line."""
    if not runs:
        return frozenset()
    for run in iter_runs(runs, 0, 1):
        return run.attribs
    return frozenset()


class RunCursor:
    """Forward-only reader that hands out consecutive slices of a run sequence."""

    def __init__(self, runs: Sequence[Run], text: str | None = None):
        self._runs = runs
        self._text = text
        self._index = 0
        self._offset = 0  # characters already consumed from runs[_index]
        self.pos = 0

    def take(self, n: int) -> list[Run]:
        out: list[Run] = []
        remaining = n
        while remaining > 0:
            if self._index >= len(self._runs):
                raise MalformedAttributeRun(
                    f"Attribution exhausted at offset {self.pos}, {remaining} characters short"
                )
            run = self._runs[self._index]
            available = run.chars - self._offset
            step = min(available, remaining)
            if step == run.chars:
                out.append(run)
            else:
                if self._text is not None:
                    lines = self._text.count("\n", self.pos, self.pos + step)
                else:
                    lines = run.lines if step == available else 0
                out.append(Run(run.attribs, step, lines))
            self._offset += step
            self.pos += step
            remaining -= step
            if self._offset == run.chars:
                self._index += 1
                self._offset = 0
        return out
