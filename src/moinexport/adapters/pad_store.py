import asyncio
import io
import json
import logging
from pathlib import Path
from typing import Iterable

import yaml

from ..core.model import PadId, PadSnapshot
from ..core.ports import DocumentStore
from ..errors import NotFound, RevisionUnavailable
from .pad_codec import PadRecord, decode_pad

logger = logging.getLogger(__name__)

JSON_SUFFIXES = (".etherpad", ".json")
YAML_SUFFIXES = (".yaml", ".yml")


class FsPadStore(DocumentStore):
    """
    Flat store: one directory, one file per pad named <id>.etherpad, <id>.json
    or <id>.yaml.
    """

    def __init__(self, root: Path):
        self.root = root

    def _path(self, pad_id: PadId) -> Path | None:
        if not pad_id or pad_id.startswith(".") or "/" in pad_id or "\\" in pad_id:
            return None
        for suffix in JSON_SUFFIXES + YAML_SUFFIXES:
            p = self.root / f"{pad_id}{suffix}"
            if p.is_file():
                return p
        return None

    def load(self, pad_id: PadId) -> PadRecord:
        p = self._path(pad_id)
        if p is None:
            raise NotFound(f"Pad {pad_id} not found")
        raw = p.read_text(encoding="utf-8")
        if p.suffix in YAML_SUFFIXES:
            data = yaml.safe_load(io.StringIO(raw))
        else:
            data = json.loads(raw)
        return decode_pad(data, pad_id)

    async def fetch(self, pad_id: PadId, revision: int | str | None = None) -> PadSnapshot:
        record = await asyncio.to_thread(self.load, pad_id)
        rev = parse_revision(revision)
        logger.debug("Fetched pad %s (revision %s, head %s)", pad_id, rev, record.head)
        return PadSnapshot(
            pad_id=pad_id,
            revision=rev if rev is not None else record.head,
            atext=record.atext_at(rev),
            pool=record.attribute_pool(),
        )

    def list_pads(self) -> Iterable[PadId]:
        if not self.root.exists():
            return []
        ids = set()
        for p in self.root.iterdir():
            if p.is_file() and p.suffix in JSON_SUFFIXES + YAML_SUFFIXES:
                ids.add(p.stem)
        return sorted(ids)


def parse_revision(revision: int | str | None) -> int | None:
    """Normalize a revision number given as int or string (e.g. from a URL)."""
    if revision is None or revision == "":
        return None
    if isinstance(revision, bool):
        raise RevisionUnavailable(f"Invalid revision {revision!r}")
    try:
        rev = int(revision)
    except (TypeError, ValueError):
        raise RevisionUnavailable(f"Invalid revision {revision!r}") from None
    if rev < 0:
        raise RevisionUnavailable(f"Invalid revision {revision!r}")
    return rev
