"""Shared fixtures: a sample attribute pool and helpers to build pads."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from moinexport.core.changeset import atext_from_json
from moinexport.core.model import AttributedText
from moinexport.core.pool import AttributePool

BOLD, ITALIC, UNDERLINE, STRIKE = 0, 1, 2, 3
H2, CODE, BULLET2, NUMBER1, AUTHOR, H1, INDENT1, BLOCKQUOTE = 4, 5, 6, 7, 8, 9, 10, 11

POOL_JSON = {
    "numToAttrib": {
        "0": ["bold", "true"],
        "1": ["italic", "true"],
        "2": ["underline", "true"],
        "3": ["strikethrough", "true"],
        "4": ["heading", "h2"],
        "5": ["heading", "code"],
        "6": ["list", "bullet2"],
        "7": ["list", "number1"],
        "8": ["author", "a.Xy3kq"],
        "9": ["heading", "h1"],
        "10": ["list", "indent1"],
        "11": ["heading", "blockquote"],
    },
    "nextNum": 12,
}


def b36(n: int) -> str:
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    out = ""
    while True:
        n, r = divmod(n, 36)
        out = digits[r] + out
        if n == 0:
            return out


def attribs_for(spans: list[tuple[str, set[int]]]) -> dict[str, str]:
    """Build an atext dict from (text, attribute ids) spans."""
    text = ""
    ops = []
    for chunk, ids in spans:
        text += chunk
        op = "".join(f"*{b36(i)}" for i in sorted(ids))
        lines = chunk.count("\n")
        if lines:
            op += f"|{b36(lines)}"
        ops.append(f"{op}+{b36(len(chunk))}")
    return {"text": text, "attribs": "".join(ops)}


def build_atext(*spans: tuple[str, set[int]]) -> AttributedText:
    return atext_from_json(attribs_for(list(spans)))


def write_pad(root: Path, pad_id: str, document: dict) -> Path:
    path = root / f"{pad_id}.etherpad"
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def etherpad_export(pad_id: str, atext: dict, head: int = 0, revs: dict | None = None) -> dict:
    """A document in the shape of Etherpad's .etherpad export."""
    doc: dict = {
        f"pad:{pad_id}": {
            "atext": atext,
            "pool": POOL_JSON,
            "head": head,
            "chatHead": -1,
            "publicStatus": False,
            "savedRevisions": [],
        }
    }
    for rev, rev_atext in (revs or {}).items():
        meta: dict = {"author": "a.Xy3kq", "timestamp": 1700000000000 + rev}
        if rev_atext is not None:
            meta["atext"] = rev_atext
        doc[f"pad:{pad_id}:revs:{rev}"] = {"changeset": "Z:1>0$", "meta": meta}
    return doc


@pytest.fixture
def pool() -> AttributePool:
    return AttributePool.from_json(POOL_JSON)
