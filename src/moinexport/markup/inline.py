"""Inline formatting: bold, italic, underline and strikethrough spans.

Properties nest in a fixed priority order, bold outermost. When a property
starts or stops in the middle of other open properties, every property nested
inside it is closed and reopened so the emitted tags always nest correctly::

    bold "ab", bold+italic "cd", italic "ef"
    -> '''ab''cd'''''''ef''
"""

from collections.abc import Iterable, Sequence
from enum import Enum

from ..core.model import Run
from ..core.pool import AttributePool

PROPS = ("bold", "italic", "underline", "strikethrough")

TAGS = (
    ("'''", "'''"),
    ("''", "''"),
    ("__", "__"),
    ("--(", ")--"),
)

# Form feeds show up in pad text now and then and break downstream parsers
FORM_FEED = "\x0c"


class PropState(Enum):
    CLOSED = "closed"
    ENTERING = "entering"
    STAYING = "staying"  # open before and after, but closed and reopened
    LEAVING = "leaving"
    OPEN = "open"


def transition(state: PropState, present: bool) -> PropState:
    """State of a property at the start of a run, before the nesting cascade."""
    if state in (PropState.CLOSED, PropState.LEAVING):
        return PropState.ENTERING if present else PropState.CLOSED
    if state in (PropState.OPEN, PropState.ENTERING, PropState.STAYING):
        return PropState.OPEN if present else PropState.LEAVING
    raise ValueError(f"Unknown property state: {state!r}")


def cascade(states: list[PropState]) -> None:
    """Mark open properties nested inside the first changed one as STAYING."""
    changed = False
    for i, state in enumerate(states):
        if changed:
            if state is PropState.OPEN:
                states[i] = PropState.STAYING
        elif state in (PropState.ENTERING, PropState.LEAVING):
            changed = True


class InlineFormatter:
    """Renders one line's runs as text with nested inline tags."""

    def __init__(self, pool: AttributePool):
        # pool id -> property index, resolved once per document
        self._props: dict[int, int] = {}
        for i, name in enumerate(PROPS):
            num = pool.lookup(name, "true")
            if num is not None:
                self._props[num] = i

    def properties(self, attribs: Iterable[int]) -> set[int]:
        return {self._props[num] for num in attribs if num in self._props}

    def render(self, text: str, runs: Sequence[Run], strip_marker: bool = False) -> str:
        """
        Render `text` formatted according to `runs`.

        `text` may end with the line terminator; the newline a run counts in
        `lines` is not emitted. With `strip_marker`, the first visible
        character of the line is dropped.
        """
        states = [PropState.CLOSED] * len(PROPS)
        stack: list[int] = []  # open properties, innermost last
        out: list[str] = []
        idx = 0

        for run in runs:
            chunk = text[idx : idx + run.chars]
            idx += run.chars
            if run.lines and chunk.endswith("\n"):
                chunk = chunk[:-1]
            chunk = chunk.replace(FORM_FEED, "")
            if strip_marker and chunk:
                chunk = chunk[1:]
                strip_marker = False
            if not chunk:
                continue

            present = self.properties(run.attribs)
            states = [transition(s, i in present) for i, s in enumerate(states)]
            cascade(states)

            closing = {
                i for i, s in enumerate(states)
                if s in (PropState.LEAVING, PropState.STAYING)
            }
            for prop in reversed(list(stack)):
                if prop in closing:
                    out.append(TAGS[prop][1])
                    stack.remove(prop)

            for i, state in enumerate(states):
                if state in (PropState.ENTERING, PropState.STAYING):
                    out.append(TAGS[i][0])
                    stack.append(i)
                    states[i] = PropState.OPEN
                elif state is PropState.LEAVING:
                    states[i] = PropState.CLOSED

            out.append(chunk)

        while stack:
            out.append(TAGS[stack.pop()][1])

        return "".join(out)
