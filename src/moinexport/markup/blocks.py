"""Line-level heading and code-block detection."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ..core.changeset import first_char_attribs
from ..core.model import HeadingClass, LineCarryState, Run
from ..core.pool import AttributePool

HEADING_ATTRIB = "heading"

HEADING_VALUES = {
    "h1": HeadingClass.H1,
    "h2": HeadingClass.H2,
    "h3": HeadingClass.H3,
    "h4": HeadingClass.H4,
    "h5": HeadingClass.H5,
    "h6": HeadingClass.H6,
    "code": HeadingClass.CODE,
}

HEADING_TAGS = {
    HeadingClass.H1: ("= ", " ="),
    HeadingClass.H2: ("== ", " =="),
    HeadingClass.H3: ("=== ", " ==="),
    HeadingClass.H4: ("==== ", " ===="),
    HeadingClass.H5: ("===== ", " ====="),
    HeadingClass.H6: ("====== ", " ======"),
}

CODE_OPEN = "{{{\n"
CODE_CLOSE = "\n}}}"


@dataclass(frozen=True)
class BlockDecision:
    heading: HeadingClass
    open_fence: bool  # this line starts a code block
    close_fence: bool  # the code block of the previous line ends here
    state: LineCarryState

    @property
    def tags(self) -> tuple[str, str]:
        return HEADING_TAGS.get(self.heading, ("", ""))


class BlockDetector:
    """Classifies lines by the heading attribute of their first character."""

    def __init__(self, pool: AttributePool):
        self._classes: dict[int, HeadingClass] = {}
        for value, heading in HEADING_VALUES.items():
            num = pool.lookup(HEADING_ATTRIB, value)
            if num is not None:
                self._classes[num] = heading

    def classify(self, attribs: Iterable[int]) -> HeadingClass:
        heading = HeadingClass.NONE
        for num in attribs:
            heading = self._classes.get(num, heading)
        return heading

    def detect(self, runs: Sequence[Run], previous: LineCarryState) -> BlockDecision:
        heading = self.classify(first_char_attribs(runs))
        inside = heading is HeadingClass.CODE
        return BlockDecision(
            heading=heading,
            open_fence=inside and not previous.inside_code_block,
            close_fence=previous.inside_code_block and not inside,
            state=LineCarryState(inside_code_block=inside),
        )
