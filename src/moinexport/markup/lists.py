from ..core.model import ListKind

LIST_MARKERS = {
    ListKind.ORDERED: "1. ",
    ListKind.UNORDERED: "* ",
}
DEFAULT_MARKER = " "


def list_prefix(level: int, kind: ListKind) -> str:
    """Indentation plus marker for a list item; empty when not in a list."""
    if level <= 0:
        return ""
    return " " * level + LIST_MARKERS.get(kind, DEFAULT_MARKER)
