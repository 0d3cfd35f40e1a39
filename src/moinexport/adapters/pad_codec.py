"""Decode Etherpad pad documents.

Two shapes are understood. Etherpad's own ``.etherpad`` export::

    {"pad:notes": {"atext": {...}, "pool": {...}, "head": 3},
     "pad:notes:revs:0": {"changeset": "...", "meta": {"atext": {...}}}}

and a flat shape convenient for writing pads by hand::

    {"atext": {...}, "pool": {...}, "head": 3, "revisions": {"0": {...}}}

Only key revisions carry an atext snapshot in Etherpad exports; any other
revision cannot be reconstructed without replaying changesets.
"""

import re
from dataclasses import dataclass, field
from typing import Any

from ..core.changeset import atext_from_json
from ..core.model import AttributedText, PadId
from ..core.pool import AttributePool
from ..errors import NotFound, RevisionUnavailable

_PAD_KEY = re.compile(r"^pad:([^:]+)$")
_REV_KEY = re.compile(r"^pad:([^:]+):revs:(\d+)$")


@dataclass
class PadRecord:
    pad_id: PadId
    atext: dict[str, Any]
    pool: dict[str, Any]
    head: int | None = None
    revisions: dict[int, dict[str, Any]] = field(default_factory=dict)

    def atext_at(self, revision: int | None) -> AttributedText:
        if revision is None or revision == self.head:
            return atext_from_json(self.atext)
        if self.head is not None and revision > self.head:
            raise RevisionUnavailable(
                f"Pad {self.pad_id} has no revision {revision} (head is {self.head})"
            )
        snapshot = self.revisions.get(revision)
        if snapshot is None:
            raise RevisionUnavailable(
                f"Revision {revision} of pad {self.pad_id} cannot be reconstructed"
            )
        return atext_from_json(snapshot)

    def attribute_pool(self) -> AttributePool:
        return AttributePool.from_json(self.pool)


def decode_pad(data: Any, pad_id: PadId) -> PadRecord:
    """Build a PadRecord from a parsed pad document."""
    if not isinstance(data, dict):
        raise NotFound(f"Pad {pad_id} is not a pad document")
    if "atext" in data:
        return _decode_flat(data, pad_id)
    return _decode_export(data, pad_id)


def _decode_flat(data: dict[str, Any], pad_id: PadId) -> PadRecord:
    revisions = {
        int(rev): atext
        for rev, atext in (data.get("revisions") or {}).items()
        if isinstance(atext, dict)
    }
    return PadRecord(
        pad_id=pad_id,
        atext=data["atext"],
        pool=data.get("pool") or {},
        head=_head(data.get("head")),
        revisions=revisions,
    )


def _decode_export(data: dict[str, Any], pad_id: PadId) -> PadRecord:
    key = f"pad:{pad_id}"
    source_id = pad_id
    if key not in data:
        # exports are keyed by the pad's original id, which may differ from the file name
        keys = [k for k in data if _PAD_KEY.match(k)]
        if len(keys) != 1:
            raise NotFound(f"Pad {pad_id} not found in document")
        key = keys[0]
        source_id = key[len("pad:"):]
    pad = data[key]
    if not isinstance(pad, dict) or "atext" not in pad:
        raise NotFound(f"Pad {pad_id} has no text")

    revisions: dict[int, dict[str, Any]] = {}
    for k, value in data.items():
        m = _REV_KEY.match(k)
        if not m or m.group(1) != source_id or not isinstance(value, dict):
            continue
        atext = (value.get("meta") or {}).get("atext")
        if isinstance(atext, dict):
            revisions[int(m.group(2))] = atext

    return PadRecord(
        pad_id=pad_id,
        atext=pad["atext"],
        pool=pad.get("pool") or {},
        head=_head(pad.get("head")),
        revisions=revisions,
    )


def _head(value: Any) -> int | None:
    return int(value) if value is not None else None
