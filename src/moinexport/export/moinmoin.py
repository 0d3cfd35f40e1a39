"""Render Etherpad attributed text as MoinMoin wiki markup."""

import logging
from dataclasses import dataclass

from ..core.model import AttributedText, HeadingClass, Line, LineCarryState
from ..core.pool import AttributePool
from ..markup.blocks import CODE_CLOSE, CODE_OPEN, BlockDecision, BlockDetector
from ..markup.inline import InlineFormatter
from ..markup.lines import split_lines
from ..markup.lists import list_prefix

logger = logging.getLogger(__name__)

PROJECT_URL = "https://github.com/smilix/ep_moinmoin_export"

INFO_PREFIX = (
    f"# Exported from Etherpad to MoinMoin ( {PROJECT_URL} ).\n"
    "# tip: Use <<BR>> or an extra blank line for a new line.\n"
)


@dataclass
class ExportOptions:
    """Options for MoinMoin export."""

    # Etherpad puts a "*" marker in front of heading and code lines
    strip_heading_marker: bool = True
    banner: bool = True


def render_line(
    line: Line,
    decision: BlockDecision,
    formatter: InlineFormatter,
    options: ExportOptions,
) -> str:
    """Render a single line, without its terminator."""
    strip = options.strip_heading_marker and decision.heading is not HeadingClass.NONE
    content = formatter.render(line.source, line.runs, strip_marker=strip)

    open_tag, close_tag = decision.tags
    rendered = (CODE_OPEN if decision.open_fence else "") + open_tag + content + close_tag
    if rendered:
        rendered = list_prefix(line.list_level, line.list_kind) + rendered
    return rendered


def atext_to_moinmoin(
    atext: AttributedText,
    pool: AttributePool,
    options: ExportOptions | None = None,
) -> str:
    """Convert a whole document to MoinMoin markup.

    Args:
        atext: Document text and its attribute runs
        pool: Attribute pool the runs refer to
        options: Export options

    Returns:
        The markup, one newline-terminated line per source line
    """
    if options is None:
        options = ExportOptions()

    detector = BlockDetector(pool)
    formatter = InlineFormatter(pool)

    pieces: list[str] = []
    state = LineCarryState()
    count = 0
    for line in split_lines(atext, pool):
        decision = detector.detect(line.runs, state)
        if decision.close_fence:
            # the fence closes right after the previous line's content
            pieces.insert(len(pieces) - 1, CODE_CLOSE)
        pieces.append(render_line(line, decision, formatter, options))
        pieces.append("\n")
        state = decision.state
        count += 1

    if state.inside_code_block:
        pieces.insert(len(pieces) - 1, CODE_CLOSE)

    logger.debug("Rendered %d lines to MoinMoin", count)
    prefix = INFO_PREFIX if options.banner else ""
    return prefix + "".join(pieces)
