"""Tests for the inline formatting engine."""

import re

import pytest

from moinexport.core.model import Run
from moinexport.markup.inline import (
    FORM_FEED,
    InlineFormatter,
    PropState,
    cascade,
    transition,
)

from tests.conftest import AUTHOR, BOLD, H2, ITALIC, STRIKE, UNDERLINE, build_atext


def render(pool, *spans, strip_marker=False):
    atext = build_atext(*spans)
    return InlineFormatter(pool).render(atext.text, atext.runs, strip_marker=strip_marker)


def assert_balanced(markup: str, tags: list[tuple[str, str]]) -> None:
    """Check nesting of tags whose open and close glyphs differ."""
    tokens = []
    i = 0
    while i < len(markup):
        for open_tag, close_tag in tags:
            if markup.startswith(open_tag, i):
                tokens.append(("open", open_tag))
                i += len(open_tag)
                break
            if markup.startswith(close_tag, i):
                tokens.append(("close", open_tag))
                i += len(close_tag)
                break
        else:
            i += 1
    stack = []
    for kind, tag in tokens:
        if kind == "open":
            stack.append(tag)
        else:
            assert stack and stack[-1] == tag, f"unbalanced {tag} in {markup!r}"
            stack.pop()
    assert not stack, f"unclosed {stack} in {markup!r}"


def test_plain_text(pool):
    """Test text without attributes."""
    assert render(pool, ("plain text\n", set())) == "plain text"


def test_single_property_span(pool):
    """Test a uniformly formatted span has no interior tags."""
    assert render(pool, ("bold", {BOLD}), ("\n", set())) == "'''bold'''"
    assert render(pool, ("gone", {STRIKE}), ("\n", set())) == "--(gone)--"
    assert render(pool, ("under", {UNDERLINE}), ("\n", set())) == "__under__"


def test_split_runs_with_same_attribute(pool):
    """Test that adjacent runs with the same property do not reopen it."""
    result = render(pool, ("ab", {BOLD}), ("cd", {BOLD, AUTHOR}), ("\n", set()))
    assert result == "'''abcd'''"


def test_all_properties(pool):
    """Test nesting order when every property is set."""
    result = render(pool, ("x", {BOLD, ITALIC, UNDERLINE, STRIKE}), ("\n", set()))
    assert result == "'''" + "''" + "__" + "--(" + "x" + ")--" + "__" + "''" + "'''"


def test_leaving_outer_reopens_inner(pool):
    """Test that closing bold closes and reopens italic nested inside it."""
    result = render(
        pool, ("ab", {BOLD}), ("cd", {BOLD, ITALIC}), ("ef", {ITALIC}), ("\n", set())
    )
    assert result == "'''ab" + "''cd" + "''" + "'''" + "''ef" + "''"


def test_bold_always_encloses_italic(pool):
    """Test nesting priority when italic was opened first."""
    result = render(
        pool, ("a", {ITALIC}), ("b", {BOLD, ITALIC}), ("c", {ITALIC}), ("\n", set())
    )
    assert result == (
        "''a"
        + "''" + "'''" + "''" + "b"
        + "''" + "'''" + "''" + "c"
        + "''"
    )


def test_overlapping_spans_are_well_formed(pool):
    """Test balance under overlapping underline and strikethrough."""
    result = render(
        pool, ("x", {UNDERLINE}), ("y", {UNDERLINE, STRIKE}), ("z", {STRIKE}), ("\n", set())
    )
    assert result == "__x--(y)--__--(z)--"
    assert_balanced(result, [("--(", ")--")])


def test_many_overlaps_are_balanced(pool):
    """Test balance across a long sequence of attribute changes."""
    combos = [
        {STRIKE}, {UNDERLINE, STRIKE}, {BOLD, UNDERLINE}, {STRIKE},
        set(), {UNDERLINE}, {BOLD, STRIKE}, {BOLD, UNDERLINE, STRIKE},
    ]
    spans = [(f"t{i}", ids) for i, ids in enumerate(combos)]
    result = render(pool, *spans, ("\n", set()))

    assert_balanced(result, [("--(", ")--")])
    assert result.count("--(") == result.count(")--")
    assert result.count("__") % 2 == 0
    for i in range(len(combos)):
        assert f"t{i}" in result


def test_unknown_attributes_are_ignored(pool):
    """Test that ids without a known property produce no tags."""
    assert render(pool, ("hi", {AUTHOR}), ("\n", set())) == "hi"
    assert render(pool, ("hi", {99}), ("\n", set())) == "hi"


def test_form_feed_removed(pool):
    """Test that form feed characters are stripped."""
    result = render(pool, (f"a{FORM_FEED}b{FORM_FEED}", set()), ("\n", set()))
    assert result == "ab"


def test_terminator_not_emitted(pool):
    """Test that a formatted terminator does not leak into the output."""
    assert render(pool, ("ab\n", {BOLD})) == "'''ab'''"


def test_only_counted_newline_is_dropped(pool):
    """Test that the newline a run counts is the one left out."""
    formatter = InlineFormatter(pool)
    assert formatter.render("ab\n", [Run(frozenset({BOLD}), 3, 1)]) == "'''ab'''"
    assert formatter.render("ab", [Run(frozenset({BOLD}), 2)]) == "'''ab'''"


def test_empty_runs_emit_no_tags(pool):
    """Test that a formatted newline-only run adds no empty tag pair."""
    assert render(pool, ("ab", set()), ("\n", {BOLD})) == "ab"


def test_strip_marker(pool):
    """Test dropping the leading heading marker."""
    result = render(pool, ("*", {H2}), ("Title", set()), ("\n", set()), strip_marker=True)
    assert result == "Title"


def test_strip_marker_inside_formatted_run(pool):
    """Test that the marker is dropped from the first visible run."""
    result = render(pool, ("*Big", {BOLD}), ("\n", set()), strip_marker=True)
    assert result == "'''Big'''"


@pytest.mark.parametrize(
    "state, present, expected",
    [
        (PropState.CLOSED, True, PropState.ENTERING),
        (PropState.CLOSED, False, PropState.CLOSED),
        (PropState.OPEN, True, PropState.OPEN),
        (PropState.OPEN, False, PropState.LEAVING),
        (PropState.LEAVING, True, PropState.ENTERING),
        (PropState.STAYING, False, PropState.LEAVING),
    ],
)
def test_transition(state, present, expected):
    """Test the per-property transition function."""
    assert transition(state, present) is expected


def test_cascade_marks_nested_properties():
    """Test that open properties after the first change are reopened."""
    states = [PropState.LEAVING, PropState.OPEN, PropState.CLOSED, PropState.OPEN]
    cascade(states)
    assert states == [
        PropState.LEAVING, PropState.STAYING, PropState.CLOSED, PropState.STAYING
    ]


def test_cascade_leaves_outer_properties():
    """Test that properties before the first change stay open."""
    states = [PropState.OPEN, PropState.OPEN, PropState.ENTERING, PropState.OPEN]
    cascade(states)
    assert states == [
        PropState.OPEN, PropState.OPEN, PropState.ENTERING, PropState.STAYING
    ]


def test_every_combination_nests_correctly(pool, monkeypatch):
    """Test balance and nesting for all property sets using distinct glyphs."""
    glyphs = (("<b>", "</b>"), ("<i>", "</i>"), ("<u>", "</u>"), ("<s>", "</s>"))
    monkeypatch.setattr("moinexport.markup.inline.TAGS", glyphs)

    props = [BOLD, ITALIC, UNDERLINE, STRIKE]
    combos = [{p for j, p in enumerate(props) if mask & (1 << j)} for mask in range(16)]
    # every set followed by every other set
    spans = []
    for a in combos:
        for b in combos:
            spans.append(("x", a))
            spans.append(("y", b))
    result = render(pool, *spans, ("\n", set()))

    assert_balanced(result, list(glyphs))
    # tags only ever open inside tags of higher priority
    order = [open_tag for open_tag, _ in glyphs]
    stack = []
    for tag in re.findall(r"</?[bius]>", result):
        if tag.startswith("</"):
            stack.pop()
        else:
            assert all(order.index(t) < order.index(tag) for t in stack), result
            stack.append(tag)
