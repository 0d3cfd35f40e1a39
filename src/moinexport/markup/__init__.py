"""Line-level building blocks of the MoinMoin renderer."""

from .blocks import BlockDecision, BlockDetector
from .inline import InlineFormatter
from .lines import analyze_line, split_lines
from .lists import list_prefix

__all__ = [
    "BlockDecision",
    "BlockDetector",
    "InlineFormatter",
    "analyze_line",
    "split_lines",
    "list_prefix",
]
