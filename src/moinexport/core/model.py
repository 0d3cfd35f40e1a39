from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .pool import AttributePool

PadId = str


@dataclass(frozen=True)
class Run:
    attribs: frozenset[int]
    chars: int
    lines: int = 0  # newline characters inside the run


@dataclass(frozen=True)
class AttributedText:
    text: str
    runs: tuple[Run, ...] = ()


class ListKind(Enum):
    NONE = "none"
    ORDERED = "number"
    UNORDERED = "bullet"
    OTHER = "other"  # "indent" and anything unrecognized


class HeadingClass(Enum):
    NONE = 0
    H1 = 1
    H2 = 2
    H3 = 3
    H4 = 4
    H5 = 5
    H6 = 6
    CODE = 7


@dataclass
class Line:
    text: str
    runs: list[Run] = field(default_factory=list)  # re-based to offset 0
    list_level: int = 0
    list_kind: ListKind = ListKind.NONE
    terminator: str = ""  # "\n", or empty for an unterminated last line

    @property
    def source(self) -> str:
        return self.text + self.terminator


@dataclass(frozen=True)
class LineCarryState:
    inside_code_block: bool = False


@dataclass(frozen=True)
class PadSnapshot:
    pad_id: PadId
    revision: int | None
    atext: AttributedText
    pool: "AttributePool"
